class ExtractionError(Exception):
    """Raised when the extraction capability fails or returns an unusable response."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the extraction provider call fails due to network/infrastructure issues."""


class ExtractionIncompleteError(Exception):
    """Raised when a card is marked valid but required attributes are missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Unable to extract all required information from the label "
            f"(missing: {', '.join(missing)})"
        )
