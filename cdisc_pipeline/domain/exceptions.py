class InvalidRecordError(ValueError):
    """A record violates a data-integrity rule and cannot be derived.

    Raised for empty identifiers, negative or non-numeric ages and malformed
    dates. Missing optional fields never raise this error.
    """

    def __init__(
        self, message: str, *, field: str | None = None, subject: str | None = None
    ) -> None:
        super().__init__(message)
        self.field = field
        self.subject = subject

    def __str__(self) -> str:
        message = super().__str__()
        if self.subject:
            return f"{self.subject}: {message}"
        return message
