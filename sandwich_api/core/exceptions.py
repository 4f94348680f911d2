"""
Domain errors raised by the services and mapped to HTTP responses in main
"""
from typing import Dict, Optional


class SandwichAPIError(Exception):
    """Base class for all service errors"""


class ValidationError(SandwichAPIError):
    """Caller-fixable bad input, keyed by field name"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: message})


class NotFoundError(SandwichAPIError):
    def __init__(self, resource: str, key: Optional[object] = None):
        self.resource = resource
        self.key = key
        detail = f"{resource} not found" if key is None else f"{resource} {key} not found"
        super().__init__(detail)


class ForbiddenError(SandwichAPIError):
    pass


class AuthenticationError(SandwichAPIError):
    pass


class ConflictError(SandwichAPIError):
    pass


class StoreUnavailableError(SandwichAPIError):
    """The order/catalog/user store failed or is not configured"""
