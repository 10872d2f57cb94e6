from __future__ import annotations

import pytest

from transformer import MISSING, Context, MergeValue, Transformer


class Helpers(Transformer):
    def transform(self, context, data):
        return {}


@pytest.fixture()
def helpers():
    return Helpers()


def test_when_returns_value_or_missing(helpers):
    assert helpers.when(True, "v") == "v"
    assert helpers.when(False, "v") is MISSING
    assert helpers.when(0, "v", default=None) is None


def test_when_evaluates_only_the_chosen_branch(helpers):
    calls = []

    def expensive():
        calls.append(1)
        return "computed"

    assert helpers.when(False, expensive) is MISSING
    assert calls == []
    assert helpers.when(True, expensive) == "computed"
    assert calls == [1]


def test_when_does_not_call_classes(helpers):
    assert helpers.when(True, dict) is dict


def test_when_not_none(helpers):
    assert helpers.when_not_none(0) == 0
    assert helpers.when_not_none(None) is MISSING


def test_when_included(helpers):
    context = Context(includes=["stats"])
    assert helpers.when_included(context, "stats", lambda: 3) == 3
    assert helpers.when_included(context, "owner", lambda: 3) is MISSING


def test_merge_and_merge_when(helpers):
    assert helpers.merge({"a": 1}) == MergeValue({"a": 1})
    assert helpers.merge_when(True, lambda: {"a": 1}) == MergeValue({"a": 1})
    assert helpers.merge_when(False, {"a": 1}) is MISSING


def test_merge_value_rejects_non_mappings():
    with pytest.raises(TypeError):
        MergeValue(["a"])


def test_missing_value_is_falsy():
    assert not MISSING
    assert repr(MISSING) == "MISSING"


def test_when_included_counts_default_includes():
    class WithDefaults(Transformer):
        available_includes = ("stats", "owner")
        default_includes = ("stats",)

        def transform(self, context, data):
            return {"has_stats": self.when_included(context, "stats", True, default=False)}

        def include_stats(self, context, data):
            return {"count": 1}

        def include_owner(self, context, data):
            return None

    transformer = WithDefaults()
    assert transformer.process(Context(), None) == {"has_stats": True, "stats": {"count": 1}}
    assert transformer.process(Context(includes=["owner"]), None)["has_stats"] is False
