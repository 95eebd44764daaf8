class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "DomainError"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "Validation"


class NotFoundError(DomainError):
    """Raised when a referenced rule set, shift or timesheet does not exist."""

    kind = "NotFound"


class MissingCheckInError(ValidationError):
    """The day has no check-in, so nothing can be computed."""

    kind = "MissingCheckIn"


class InvalidTimeRangeError(ValidationError):
    """Check-out precedes check-in on a shift that does not cross midnight."""

    kind = "InvalidTimeRange"


class NoAttendanceLogError(DomainError):
    """No attendance event exists for the employee and date."""

    kind = "NoAttendanceLog"


class DuplicateKeyError(DomainError):
    """A timesheet already exists for the employee and date."""

    kind = "DuplicateKey"


class InvalidTransitionError(DomainError):
    """The approval state machine does not allow the requested move."""

    kind = "InvalidTransition"
