"""Exception hierarchy for a reconciliation run.

Every error is fatal to the run. The CLI catches ``ReconcileError`` and
renders its message; nothing inside the engine retries or downgrades.
"""


class ReconcileError(Exception):
    """Base class for all reconciliation failures."""


class InvalidInputError(ReconcileError):
    """A required run input is empty.

    Attributes:
        field: Name of the offending input.
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Input '{field}' is empty.")


class UnsupportedFormatError(ReconcileError):
    """File extension or format name has no codec."""

    def __init__(self, fmt: str) -> None:
        self.format = fmt
        super().__init__(f"Unsupported format: {fmt}")


class ContainerNotFoundError(ReconcileError):
    """The remote bucket does not exist."""

    def __init__(self, container: str) -> None:
        self.container = container
        super().__init__(f"Bucket '{container}' not exists.")


class SourceNotFoundError(ReconcileError):
    """The local desired-state file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File {path} not exists.")


class ParseError(ReconcileError):
    """Configuration text is malformed for its format."""


class SerializationError(ReconcileError):
    """Configuration cannot be represented in the target format."""


class StoreError(ReconcileError):
    """Remote store failure other than a confirmed "not found"."""
