"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Debt or simulation input is out of range (negative amounts, bad cap, unknown strategy)"""

    pass


class InsufficientDataError(DomainException):
    """Not enough financial data to run an assessment"""

    pass


class NotificationError(DomainException):
    """Notification webhook returned an error or is unavailable"""

    pass
