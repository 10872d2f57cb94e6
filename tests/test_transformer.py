from __future__ import annotations

import pytest

from transformer import (
    MISSING,
    Context,
    MergeValue,
    MissingIncludeHandlerError,
    MissingTransformHookError,
    Transformer,
    include_handler,
)


class StaticTransformer(Transformer):
    def __init__(self, output, **kwargs):
        super().__init__(**kwargs)
        self.output = output

    def transform(self, context, data):
        return self.output


def test_merge_value_splices_keys():
    transformer = StaticTransformer({"x": 1, "extra": MergeValue({"y": 2, "z": 3})})
    assert transformer.process(Context(), None) == {"x": 1, "y": 2, "z": 3}


def test_merge_value_later_keys_overwrite():
    transformer = StaticTransformer({"x": 1, "extra": MergeValue({"x": 5, "y": 2})})
    assert transformer.process(Context(), None) == {"x": 5, "y": 2}


def test_missing_value_drops_key():
    transformer = StaticTransformer({"x": 1, "y": MISSING})
    assert transformer.process(Context(), None) == {"x": 1}


def test_missing_value_inside_merge_is_dropped():
    transformer = StaticTransformer({"x": 1, "extra": MergeValue({"y": MISSING, "z": 3})})
    assert transformer.process(Context(), None) == {"x": 1, "z": 3}


def test_scalar_transform_result_is_returned_as_is():
    transformer = StaticTransformer("plain").set_available_includes(["a"])
    assert transformer.process(Context(includes=["whatever"], selects=["x"]), None) == "plain"


def test_available_selects_prefilter_base_fields():
    transformer = StaticTransformer({"id": 1, "secret": "s", "nested": {"a": 1, "b": 2}})
    transformer.set_available_selects(["id", "nested.a"])
    assert transformer.process(Context(), None) == {"id": 1, "nested": {"a": 1}}


def test_process_without_request_returns_base_fields(author_transformer, author):
    assert author_transformer.process(Context(), author) == {"id": 7, "name": "Ann", "role": "editor"}


def test_process_nests_dotted_includes(author_transformer, author):
    result = author_transformer.process(Context(includes=["profile", "profile.avatar"]), author)
    assert result["profile"] == {
        "bio": "Writes things.",
        "links": ["https://ann.example.test"],
        "avatar": "https://cdn.example.test/7.png",
    }


def test_process_filters_after_includes(author_transformer, author):
    context = Context(includes=["posts", "profile"], selects=["id", "posts.title"])
    assert author_transformer.process(context, author) == {
        "id": 7,
        "posts": [{"title": "Post 1"}, {"title": "Post 2"}],
    }


def test_include_keys_overwrite_base_keys():
    class Colliding(Transformer):
        def transform(self, context, data):
            return {"author": "id-only", "title": "t"}

        def include_author(self, context, data):
            return {"name": "Ann"}

    result = Colliding().process(Context(includes=["author"]), None)
    assert result == {"author": {"name": "Ann"}, "title": "t"}


def test_missing_transform_hook_is_fatal():
    class NoHook(Transformer):
        pass

    with pytest.raises(MissingTransformHookError) as excinfo:
        NoHook().process(Context(), {})
    assert "NoHook" in str(excinfo.value)


def test_missing_include_handler_is_fatal(author_transformer, author):
    with pytest.raises(MissingIncludeHandlerError) as excinfo:
        author_transformer.set_available_includes(["followers"])
        author_transformer.process(Context(includes=["followers"]), author)
    assert excinfo.value.path == "followers"
    assert excinfo.value.handler == "include_followers"
    assert excinfo.value.transformer == "AuthorTransformer"


def test_registered_handler_overrides_derived_name():
    class Registered(Transformer):
        def transform(self, context, data):
            return {}

        @include_handler("created-by")
        def creator(self, context, data):
            return "Ann"

    assert Registered().process(Context(includes=["created-by"]), None) == {"created-by": "Ann"}


def test_handlers_are_inherited():
    class Base(Transformer):
        def transform(self, context, data):
            return {"id": 1}

        def include_tags(self, context, data):
            return ["a"]

    class Child(Base):
        pass

    assert Child().process(Context(includes=["tags"]), None) == {"id": 1, "tags": ["a"]}


def test_wrap():
    assert StaticTransformer({}, wrapper="data").wrap({"a": 1}) == {"data": {"a": 1}}
    assert StaticTransformer({}).wrap({"a": 1}) == {"a": 1}


def test_wrapper_setter():
    transformer = StaticTransformer({}).set_wrapper("item")
    assert transformer.get_wrapper() == "item"
    assert transformer.wrap(1) == {"item": 1}


def test_transform_response_wraps_collection_once(author_transformer, author):
    author_transformer.set_wrapper("data")
    result = author_transformer.transform_response(Context(selects=["id"]), [author, {**author, "id": 8}])
    assert result == {"data": [{"id": 7}, {"id": 8}]}


def test_includes_are_not_wrapped(author):
    class Wrapped(Transformer):
        wrapper = "data"

        def transform(self, context, data):
            return {"id": data["id"]}

        def include_self(self, context, data):
            return self.process(Context(), data)

    result = Wrapped().transform_response(Context(includes=["self"]), author)
    assert result == {"data": {"id": 7, "self": {"id": 7}}}


def test_process_does_not_mutate_subject(author_transformer, author):
    before = dict(author)
    author_transformer.process(Context(includes=["profile"], selects=["profile.bio"]), author)
    assert author == before


def test_subclass_override_of_registered_handler_is_used():
    class Base(Transformer):
        def transform(self, context, data):
            return {}

        @include_handler("author")
        def author_handler(self, context, data):
            return "base"

    class Child(Base):
        def author_handler(self, context, data):
            return "child"

    assert Base().process(Context(includes=["author"]), None) == {"author": "base"}
    assert Child().process(Context(includes=["author"]), None) == {"author": "child"}


def test_subclass_derived_handler_replaces_registered_one():
    class Base(Transformer):
        def transform(self, context, data):
            return {}

        @include_handler("author")
        def author_handler(self, context, data):
            return "base"

    class Child(Base):
        def include_author(self, context, data):
            return "child"

    assert Child().process(Context(includes=["author"]), None) == {"author": "child"}


def test_subclass_registered_handler_replaces_derived_one():
    class Base(Transformer):
        def transform(self, context, data):
            return {}

        def include_author(self, context, data):
            return "base"

    class Child(Base):
        @include_handler("author")
        def author_handler(self, context, data):
            return "child"

    assert Child().process(Context(includes=["author"]), None) == {"author": "child"}


def test_static_and_class_method_handlers():
    class Mixed(Transformer):
        label = "mixed"

        def transform(self, context, data):
            return {}

        @staticmethod
        def include_tags(context, data):
            return ["a", "b"]

        @classmethod
        def include_kind(cls, context, data):
            return cls.label

    result = Mixed().process(Context(includes=["tags", "kind"]), None)
    assert result == {"tags": ["a", "b"], "kind": "mixed"}


def test_defaults_apply_when_nothing_is_requested():
    class Defaults(Transformer):
        available_includes = ("stats", "owner")
        default_includes = ("stats",)
        default_selects = ("id", "stats.count")

        def transform(self, context, data):
            return {"id": data["id"], "title": data["title"]}

        def include_stats(self, context, data):
            return {"count": 3, "words": 120}

        def include_owner(self, context, data):
            return {"name": "Ann"}

    transformer = Defaults()
    item = {"id": 1, "title": "t"}
    assert transformer.process(Context(), item) == {"id": 1, "stats": {"count": 3}}
    # Explicit requests replace the defaults.
    assert transformer.process(Context(includes=["owner"], selects=["owner"]), item) == {"owner": {"name": "Ann"}}
