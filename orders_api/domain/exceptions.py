"""Order-domain exceptions.

Services raise these, routers translate them into HTTP responses.
"""


class OrderError(Exception):
    """Base class for all order workflow errors."""


class ValidationError(OrderError):
    """A request field is missing or malformed."""


class NotFoundError(OrderError):
    """A referenced order or customer does not exist."""


class EmptyOrderError(ValidationError):
    """None of the submitted items survived item-level validation."""


class StoreError(OrderError):
    """The underlying database call failed."""
