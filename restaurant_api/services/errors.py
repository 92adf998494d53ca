"""Service-level error taxonomy shared by routers and background jobs."""


class ServiceError(Exception):
    """Base exception for restaurant service errors."""


class InvalidRequest(ServiceError):
    """Bad or missing parameters, malformed dates (HTTP 400)."""


class NotFound(ServiceError):
    """Referenced entity does not exist (HTTP 404)."""


class DependencyFailure(ServiceError):
    """Database, PDF rendering or mail transport failed (HTTP 500)."""
