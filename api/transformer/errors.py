"""
Transformer errors.

Two families:
- policy violations (caller asked for something the transformer does not expose)
- configuration errors (the transformer class itself is incomplete)
"""

from __future__ import annotations


class TransformerError(RuntimeError):
    pass


class NotAllowedError(TransformerError):
    kind = ""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f'{self.kind.capitalize()} "{path}" is not allowed.')


class SelectNotAllowedError(NotAllowedError):
    kind = "select"


class IncludeNotAllowedError(NotAllowedError):
    kind = "include"


# Configuration errors point at a broken transformer class, never at the request.
class TransformerConfigError(TransformerError):
    pass


class MissingTransformHookError(TransformerConfigError):
    def __init__(self, transformer: str):
        self.transformer = transformer
        super().__init__(f'Transformer "{transformer}" does not define a transform method.')


class MissingIncludeHandlerError(TransformerConfigError):
    def __init__(self, path: str, *, handler: str, transformer: str):
        self.path = path
        self.handler = handler
        self.transformer = transformer
        super().__init__(f'Missing method "{handler}" in transformer "{transformer}" for include "{path}".')
