# app/domain/errors.py


class DomainError(Exception):
    """Bazowy blad domeny, tlumaczony przez routery na kod HTTP."""


class NotFoundError(DomainError, LookupError):
    pass


class CartNotFoundError(NotFoundError):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class InvalidArgumentError(DomainError, ValueError):
    pass


class InvalidStateError(DomainError, RuntimeError):
    pass


class ConcurrencyConflictError(DomainError, RuntimeError):
    """Optimistic locking - rekord zmienil wersje miedzy odczytem a zapisem."""
