class DomainError(Exception):
    """Base exception for business rule violations and caller misuse."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDressingError(ValidationError):
    """Raised when a dressing classification is not formal/casual/none."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, shift or record does not exist."""


class DuplicateCheckInError(DomainError):
    """Raised on a second check-in for the same employee and calendar day."""


class NoOpenCheckInError(DomainError):
    """Raised on check-out when there is no check-in for the day."""


class AlreadyCheckedOutError(DomainError):
    """Raised on a second check-out for the same day."""


class DuplicateShiftNameError(ValidationError):
    """Raised when a shift policy name is already taken (case-insensitive)."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class UnauthorizedError(DomainError):
    """Raised when a caller lacks the role an operation requires."""


class PersistenceError(Exception):
    """Infrastructure failure in the storage layer.

    Not a DomainError: callers can tell "your request was invalid" apart from
    "the system could not complete it".
    """
