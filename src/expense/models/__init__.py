"""数据模型模块"""
from expense.models.money import Money
from expense.models.category import Category
from expense.models.payment_method import PaymentMethod
from expense.models.transaction import Transaction, SpendingRecord
from expense.models.period import PeriodKind, PeriodBoundaryConfig, Interval, InvalidConfiguration
from expense.models.user_settings import UserSettings

__all__ = [
    "Money",
    "Category",
    "PaymentMethod",
    "Transaction",
    "SpendingRecord",
    "PeriodKind",
    "PeriodBoundaryConfig",
    "Interval",
    "InvalidConfiguration",
    "UserSettings",
]
