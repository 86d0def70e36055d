"""应用程序配置模块"""
import os
from pathlib import Path
from typing import Final, Dict, List

# ==================== 路径配置 ====================
BASE_DIR: Final = Path(__file__).resolve().parent.parent.parent
DATA_DIR: Final = Path(os.environ.get("EXPENSE_DATA_DIR", BASE_DIR / "data"))
DB_PATH: Final = DATA_DIR / "expense.db"

# ==================== 应用信息 ====================
APP_NAME: Final = "Expense Tracker"
VERSION: Final = "1.0.0"

# ==================== 数据库配置 ====================
DB_SCHEMA_VERSION: Final = 2  # V2: 用户设置表

# ==================== 货币设置 ====================
CURRENCY_SYMBOL: Final = "$"
CURRENCY_CODE: Final = "HKD"

# ==================== 业务规则 ====================
MAX_AMOUNT_CENTS: Final = 100_000_000  # 金额上限：一百万

# ==================== 统计周期默认值 ====================
DEFAULT_DAILY_START_HOUR: Final = 0
DEFAULT_WEEKLY_START_DAY: Final = 0  # 0 = 星期日
DEFAULT_MONTHLY_START_DAY: Final = 1

# 趋势图默认周期数量
DEFAULT_TREND_PERIODS: Final[Dict[str, int]] = {
    "daily": 7,
    "weekly": 5,
    "monthly": 6,
}

# ==================== 预算目标默认值 ====================
# 每月目标金额（分），按分类显示名索引
DEFAULT_GOAL_AMOUNTS: Final[Dict[str, int]] = {
    "Food & Drink": 150000,
    "Transportation": 80000,
    "Shopping": 100000,
    "Entertainment": 60000,
    "Bills & Utilities": 200000,
    "Healthcare": 50000,
    "Fitness": 30000,
    "Other": 30000,
}

# 各周期默认启用的目标分类（月度默认为全部分类）
DEFAULT_DAILY_GOAL_CATEGORIES: Final[List[str]] = [
    "Food & Drink", "Transportation", "Entertainment",
]
DEFAULT_WEEKLY_GOAL_CATEGORIES: Final[List[str]] = [
    "Food & Drink", "Transportation", "Shopping", "Entertainment", "Healthcare",
]


# ==================== 工具函数 ====================
def ensure_data_dir() -> Path:
    """确保数据目录存在"""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DATA_DIR


def format_money(amount_cents: int) -> str:
    """统一的金额格式化函数，返回货币格式（如 $1,234.56），全程整数运算"""
    sign = "-" if amount_cents < 0 else ""
    dollars, cents = divmod(abs(amount_cents), 100)
    return f"{sign}{CURRENCY_SYMBOL}{dollars:,}.{cents:02d}"
