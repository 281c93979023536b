"""Errors raised while building plugin records from external input."""


class PluginRecordError(Exception):
    """Base class for plugin record construction errors."""


class MalformedInputError(PluginRecordError):
    """Input text or descriptor cannot be read as a record document."""


class PendingChainTooDeepError(MalformedInputError):
    """Nested pending update/delete records exceed the allowed depth."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Pending record chain deeper than {max_depth} levels")
        self.max_depth = max_depth


class IncompleteRecordError(PluginRecordError):
    """Document parsed but lacks a mandatory key or a usable name."""

    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = missing
