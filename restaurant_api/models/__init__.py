"""SQLAlchemy models package."""

from restaurant_api.models.admin import Admin
from restaurant_api.models.dining import CallWaiterRequest, DiningTable, Feedback, FooterSetting
from restaurant_api.models.expense import Expense, RecurringFrequency
from restaurant_api.models.inventory import StockEntry, Wastage
from restaurant_api.models.menu import Category, Item
from restaurant_api.models.order import Order, OrderItem, OrderStatus
from restaurant_api.models.report_receiver import ReportReceiver

__all__ = [
    "Admin",
    "CallWaiterRequest",
    "Category",
    "DiningTable",
    "Expense",
    "Feedback",
    "FooterSetting",
    "Item",
    "Order",
    "OrderItem",
    "OrderStatus",
    "RecurringFrequency",
    "ReportReceiver",
    "StockEntry",
    "Wastage",
]
