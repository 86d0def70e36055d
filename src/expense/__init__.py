"""
Expense Tracker - 本地支出统计应用
"""
from expense.models.money import Money
from expense.models.category import Category
from expense.models.payment_method import PaymentMethod
from expense.models.transaction import Transaction
from expense.models.period import PeriodKind, PeriodBoundaryConfig, Interval, InvalidConfiguration
from expense.models.user_settings import UserSettings
from expense.db.database import Database
from expense.services.statistics_service import StatisticsService
from expense.settings import (
    VERSION, APP_NAME, CURRENCY_SYMBOL, CURRENCY_CODE,
    format_money
)

__all__ = [
    # 数据模型
    "Money",
    "Category",
    "PaymentMethod",
    "Transaction",
    "PeriodKind",
    "PeriodBoundaryConfig",
    "Interval",
    "InvalidConfiguration",
    "UserSettings",
    # 数据库
    "Database",
    # 服务
    "StatisticsService",
    # 配置
    "VERSION",
    "APP_NAME",
    "CURRENCY_SYMBOL",
    "CURRENCY_CODE",
    # 工具函数
    "format_money",
]
__version__ = VERSION
