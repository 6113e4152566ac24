class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class IngestError(ProcessorError):
    """Raised when the input payload is missing, malformed, disallowed or too large."""


class TerminalOutcomeAlreadySetError(ProcessorError):
    """Raised when a step tries to replace an existing terminal outcome."""
