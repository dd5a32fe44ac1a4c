class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MemberNotFoundError(ValidationError):
    """Raised when no roster member matches an imported name."""


class AmbiguousMemberError(ValidationError):
    """Raised when several roster members share a name and no group hint settles it."""


class UnrecognizedStatusError(ValidationError):
    """Raised when a raw status token is not in the normalizer table."""


class InvalidDateError(ValidationError):
    """Raised when a date token is not a strict YYYY-MM-DD calendar date."""


class ImportFormatError(ValidationError):
    """Raised when a whole import batch has an unusable shape."""
