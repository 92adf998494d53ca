"""API routers package."""

from restaurant_api.routers import (
    analytics,
    auth,
    call_waiter,
    expenses,
    feedback,
    footer,
    menu,
    report_receivers,
    reports,
    stock,
    tables,
    wastage,
)

__all__ = [
    "analytics",
    "auth",
    "call_waiter",
    "expenses",
    "feedback",
    "footer",
    "menu",
    "report_receivers",
    "reports",
    "stock",
    "tables",
    "wastage",
]
