"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class NotFoundError(DomainException):
    """A requested cart, product, order or fulfillment does not exist."""


class AuthorizationError(DomainException):
    """The acting user is not allowed to perform the operation."""


class PersistenceError(DomainException):
    """The document store could not complete a read or write."""


class ConcurrencyError(PersistenceError):
    """A conditional write lost against a newer stored version."""
