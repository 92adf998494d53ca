"""Services package."""

from restaurant_api.services.errors import (
    DependencyFailure,
    InvalidRequest,
    NotFound,
    ServiceError,
)

__all__ = [
    "DependencyFailure",
    "InvalidRequest",
    "NotFound",
    "ServiceError",
]
