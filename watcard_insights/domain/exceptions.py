"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MalformedBatchError(DomainException):
    """Ingested payload is not a list of transaction records"""

    pass


class InvalidTransactionDataError(DomainException):
    """A single record has a missing or malformed field"""

    pass


class UnparsableAmountError(InvalidTransactionDataError):
    """A record's amount cannot be parsed to a finite number"""

    pass
