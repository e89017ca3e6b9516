"""Storefront error taxonomy.

Every error carries a stable machine-readable ``code`` and the HTTP status the
API layer answers with. Messages are meant for the caller; they never contain
stack traces or store internals.
"""


class StorefrontError(Exception):
    """Base class for errors raised by storefront operations."""

    code = "internal"
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"code": self.code, "message": self.message}


class Unauthenticated(StorefrontError):
    """No valid principal on the request."""

    code = "unauthenticated"
    status_code = 401


class Forbidden(StorefrontError):
    """Authenticated, but lacking the role or ownership the operation needs."""

    code = "forbidden"
    status_code = 403


class NotFound(StorefrontError):
    """Entity absent, or not owned by the caller.

    Both cases share one error so that existence is not leaked across
    ownership boundaries.
    """

    code = "not_found"
    status_code = 404


class InvalidAddress(NotFound):
    """Delivery address missing or not owned by the buyer."""

    code = "invalid_address"


class ValidationFailed(StorefrontError):
    """Malformed or unacceptable input."""

    code = "validation_failed"
    status_code = 400


class InsufficientStock(ValidationFailed):
    """Not enough sellable stock for the requested quantity."""

    code = "insufficient_stock"

    def __init__(self, message, product_id=None, available=None):
        super().__init__(message)
        self.product_id = product_id
        self.available = available


class OutOfStock(InsufficientStock):
    """A cart line can no longer be fulfilled at checkout."""

    code = "out_of_stock"


class EmptyCart(ValidationFailed):
    code = "empty_cart"


class UnsupportedPaymentMethod(ValidationFailed):
    code = "unsupported_payment_method"


class InvalidTransition(StorefrontError):
    """An order action was attempted from a state that does not allow it."""

    code = "invalid_transition"
    status_code = 400

    def __init__(self, message, current_status=None):
        super().__init__(message)
        self.current_status = current_status


class Internal(StorefrontError):
    """Unexpected store or collaborator failure."""
