import sys
from datetime import datetime
from pathlib import Path

import pytest

# 将 src 目录添加到 Python 路径（未安装时直接运行测试）
_src_dir = Path(__file__).resolve().parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from expense.db.database import Database
from expense.models.category import Category
from expense.models.money import Money
from expense.models.payment_method import PaymentMethod
from expense.models.period import PeriodBoundaryConfig
from expense.models.transaction import Transaction
from expense.models.user_settings import UserSettings


@pytest.fixture
def make_tx():
    """按关键字构建交易的工厂"""
    def _make(cents, when, category=Category.FOOD_DRINK, payment=PaymentMethod.CASH, title=""):
        return Transaction(
            title=title,
            amount=Money(cents),
            category=category,
            date=when,
            payment_method=payment,
        )
    return _make


@pytest.fixture
def default_config():
    return PeriodBoundaryConfig()


@pytest.fixture
def settings():
    return UserSettings()


@pytest.fixture
def sample_transactions(make_tx):
    """2024 年 1 月上旬的一组交易（2024-01-10 为星期三）"""
    return [
        make_tx(1000, datetime(2024, 1, 10, 12, 30), Category.FOOD_DRINK, PaymentMethod.OCTOPUS, "Lunch"),
        make_tx(500, datetime(2024, 1, 10, 8, 15), Category.TRANSPORTATION, PaymentMethod.OCTOPUS, "MTR"),
        make_tx(2500, datetime(2024, 1, 8, 19, 0), Category.SHOPPING, PaymentMethod.CREDIT_CARD, "Shoes"),
        make_tx(4000, datetime(2024, 1, 2, 20, 0), Category.ENTERTAINMENT, PaymentMethod.PAYME, "Cinema"),
        make_tx(8000, datetime(2023, 12, 31, 21, 0), Category.BILLS_UTILITIES, PaymentMethod.FPS, "Electricity"),
    ]


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "expense.db"))
    yield database
    database.close()
