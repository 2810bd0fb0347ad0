class DomainError(Exception):
    """Base exception for business rule violations."""

    @property
    def code(self) -> str:
        return type(self).__name__


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidAction(ValidationError):
    """Raised when an attendance action token is not check-in/check-out."""


class InvalidTimeOfDay(ValidationError):
    """Raised when a wall-clock time is not HH:MM[:SS]."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class EmployeeNotFound(NotFoundError):
    pass


class RecordNotFound(NotFoundError):
    pass


class ConflictError(DomainError):
    """Raised when the current persisted state forbids the transition."""


class AlreadyCheckedIn(ConflictError):
    pass


class AlreadyCheckedOut(ConflictError):
    pass


class MustCheckInFirst(ConflictError):
    pass


class DuplicateSalaryRecord(ConflictError):
    pass


class AlreadyPaid(ConflictError):
    pass


class CannotModifyPaidRecord(ConflictError):
    pass


class CannotDeletePaidRecord(ConflictError):
    pass


class TransientStoreError(Exception):
    """Raised when the store is unreachable or times out.

    The caller owns the retry policy; nothing in the services retries.
    """
