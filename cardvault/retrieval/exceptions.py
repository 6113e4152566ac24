class RetrievalError(Exception):
    """Raised when a vector index read or write fails."""


class PartialDeleteError(RetrievalError):
    """Raised when a delete succeeded on some indexes but not on others."""

    def __init__(self, identifier: str, succeeded: list[str], failed: list[str]) -> None:
        self.identifier = identifier
        self.succeeded = succeeded
        self.failed = failed
        super().__init__(
            f"Delete of {identifier} failed on {failed}; succeeded on {succeeded or 'none'}"
        )
