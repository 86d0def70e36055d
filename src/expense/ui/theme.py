"""UI 主题工具模块 - 提供主题适配的颜色和分类/支付方式的显示配色"""
from typing import Final, Dict

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QPalette, QColor

from expense.models.category import Category
from expense.models.payment_method import PaymentMethod


# 语义颜色常量（未超支绿色、超支红色）
COLOR_UNDER_BUDGET: Final = "#2e7d32"
COLOR_OVER_BUDGET: Final = "#c62828"
COLOR_TREND_BAR: Final = "#2196F3"

# 分类配色（展示层查找表，统计逻辑不依赖）
CATEGORY_COLORS: Final[Dict[Category, str]] = {
    Category.FOOD_DRINK: "#FF9800",
    Category.TRANSPORTATION: "#2196F3",
    Category.SHOPPING: "#9C27B0",
    Category.ENTERTAINMENT: "#00BCD4",
    Category.BILLS_UTILITIES: "#F44336",
    Category.HEALTHCARE: "#4CAF50",
    Category.FITNESS: "#26A69A",
    Category.OTHER: "#795548",
}

PAYMENT_METHOD_COLORS: Final[Dict[PaymentMethod, str]] = {
    PaymentMethod.OCTOPUS: "#FF9800",
    PaymentMethod.CREDIT_CARD: "#9E9E9E",
    PaymentMethod.ALIPAY: "#2196F3",
    PaymentMethod.ALIPAY_HK: "#9C27B0",
    PaymentMethod.PAYME: "#F44336",
    PaymentMethod.FPS: "#FFC107",
    PaymentMethod.CASH: "#4CAF50",
}


def color_for(key) -> str:
    """分类或支付方式对应的颜色"""
    if isinstance(key, Category):
        return CATEGORY_COLORS[key]
    if isinstance(key, PaymentMethod):
        return PAYMENT_METHOD_COLORS[key]
    return "#607D8B"


def get_text_color() -> QColor:
    """根据系统主题获取文字颜色"""
    palette = QApplication.palette()
    return palette.color(QPalette.WindowText)


def get_text_color_str() -> str:
    """获取文字颜色字符串"""
    return get_text_color().name()


def get_secondary_text_color() -> str:
    """获取次要文字颜色（透明度较低）"""
    palette = QApplication.palette()
    text_color = palette.color(QPalette.WindowText)
    text_color.setAlpha(180)
    return text_color.name()


def get_card_style() -> str:
    """获取卡片样式（适配系统主题）"""
    palette = QApplication.palette()
    bg_color = palette.color(QPalette.Base)
    border_color = palette.color(QPalette.Mid)
    return f"""
        SummaryCard {{
            background-color: {bg_color.name()};
            border: 1px solid {border_color.name()};
            border-radius: 8px;
            padding: 12px;
        }}
    """


def get_progress_color(is_over_budget: bool) -> str:
    """根据是否超支返回对应颜色"""
    return COLOR_OVER_BUDGET if is_over_budget else COLOR_UNDER_BUDGET
