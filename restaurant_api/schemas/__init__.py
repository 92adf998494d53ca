"""Pydantic schemas package."""

from restaurant_api.schemas.analytics import (
    CountPeriod,
    CustomerCountRow,
    ExpenseRow,
    HeatmapRow,
    HeatmapType,
    NetProfitRow,
    OrderTrendRow,
    PopularItemRow,
    RevenueRow,
    TrendGroup,
)
from restaurant_api.schemas.auth import AdminCreate, AdminResponse, AdminUpdate, LoginRequest, TokenResponse
from restaurant_api.schemas.base import BaseResponse, MessageResponse
from restaurant_api.schemas.dining import (
    CallWaiterCreate,
    CallWaiterResponse,
    FeedbackCreate,
    FeedbackResponse,
    FooterSettings,
    FooterSettingsWrite,
    TableResponse,
    TablesCreate,
)
from restaurant_api.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from restaurant_api.schemas.inventory import (
    StockCreate,
    StockLevelResponse,
    StockResponse,
    StockUpdate,
    WastageCreate,
    WastageResponse,
    WastageUpdate,
)
from restaurant_api.schemas.menu import (
    CategoryResponse,
    CategoryWrite,
    ItemBasicResponse,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
)
from restaurant_api.schemas.report import (
    ReportItem,
    ReportResponse,
    SendReportRequest,
    SendReportResponse,
)
from restaurant_api.schemas.report_receiver import ReportReceiverResponse, ReportReceiverWrite

__all__ = [
    "AdminCreate",
    "AdminResponse",
    "AdminUpdate",
    "BaseResponse",
    "CallWaiterCreate",
    "CallWaiterResponse",
    "CategoryResponse",
    "CategoryWrite",
    "CountPeriod",
    "CustomerCountRow",
    "ExpenseCreate",
    "ExpenseResponse",
    "ExpenseRow",
    "ExpenseUpdate",
    "FeedbackCreate",
    "FeedbackResponse",
    "FooterSettings",
    "FooterSettingsWrite",
    "HeatmapRow",
    "HeatmapType",
    "ItemBasicResponse",
    "ItemCreate",
    "ItemResponse",
    "ItemUpdate",
    "LoginRequest",
    "MessageResponse",
    "NetProfitRow",
    "OrderTrendRow",
    "PopularItemRow",
    "ReportItem",
    "ReportReceiverResponse",
    "ReportReceiverWrite",
    "ReportResponse",
    "RevenueRow",
    "SendReportRequest",
    "SendReportResponse",
    "StockCreate",
    "StockLevelResponse",
    "StockResponse",
    "StockUpdate",
    "TableResponse",
    "TablesCreate",
    "TokenResponse",
    "TrendGroup",
    "WastageCreate",
    "WastageResponse",
    "WastageUpdate",
]
