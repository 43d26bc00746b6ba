"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidProfileDataError(DomainException):
    """Raw profile fields are malformed (non-numeric or wrong shape)"""

    pass
