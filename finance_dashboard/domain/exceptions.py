"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidTransactionDataError(DomainException):
    """Stored transaction record is malformed or invalid"""

    pass


class MarketDataError(DomainException):
    """Market price API returned an error or is unavailable"""

    pass
