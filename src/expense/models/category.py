"""支出分类枚举"""
from enum import Enum
from typing import List


class Category(str, Enum):
    """支出分类（值为显示名称，声明顺序即默认排序）"""
    FOOD_DRINK = "Food & Drink"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    FITNESS = "Fitness"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def sort_index(self) -> int:
        """枚举声明顺序，用作稳定排序的次要键"""
        return list(Category).index(self)

    @classmethod
    def from_names(cls, names: List[str]) -> List["Category"]:
        """从显示名称列表解析分类，忽略无法识别的名称"""
        result = []
        for name in names:
            try:
                result.append(cls(name))
            except ValueError:
                continue
        return result
