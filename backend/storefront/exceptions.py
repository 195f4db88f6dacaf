from typing import Optional


class StorefrontError(Exception):
    """Base for every error a service surfaces to its caller."""

    kind = "error"
    status_code = 400

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ValidationError(StorefrontError):
    kind = "validation_error"
    status_code = 422


class NotFound(StorefrontError):
    kind = "not_found"
    status_code = 404


class ProductNotFound(NotFound):
    kind = "product_not_found"

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class Conflict(StorefrontError):
    kind = "conflict"
    status_code = 409


class Unauthorized(StorefrontError):
    kind = "unauthorized"
    status_code = 401


class TransactionFailure(StorefrontError):
    """The data store failed mid-operation; all partial writes were rolled back."""

    kind = "transaction_failure"
    status_code = 503
