"""用户设置模型：预算目标与周期边界"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from expense.models.category import Category
from expense.models.period import PeriodKind, PeriodBoundaryConfig
from expense.settings import (
    DEFAULT_GOAL_AMOUNTS, DEFAULT_DAILY_GOAL_CATEGORIES, DEFAULT_WEEKLY_GOAL_CATEGORIES,
    DEFAULT_DAILY_START_HOUR, DEFAULT_WEEKLY_START_DAY, DEFAULT_MONTHLY_START_DAY
)


def _default_enabled() -> Dict[PeriodKind, List[Category]]:
    return {
        PeriodKind.DAILY: Category.from_names(DEFAULT_DAILY_GOAL_CATEGORIES),
        PeriodKind.WEEKLY: Category.from_names(DEFAULT_WEEKLY_GOAL_CATEGORIES),
        PeriodKind.MONTHLY: list(Category),
    }


def _default_show_goals() -> Dict[PeriodKind, bool]:
    return {kind: True for kind in PeriodKind}


@dataclass
class UserSettings:
    """
    用户设置

    统计引擎只通过以下接口读取设置：
    enabled_categories(kind)、goal_amount(category)、boundary_config
    """
    daily_start_hour: int = DEFAULT_DAILY_START_HOUR
    weekly_start_day: int = DEFAULT_WEEKLY_START_DAY
    monthly_start_day: int = DEFAULT_MONTHLY_START_DAY
    enabled_goal_categories: Dict[PeriodKind, List[Category]] = field(default_factory=_default_enabled)
    show_goals: Dict[PeriodKind, bool] = field(default_factory=_default_show_goals)
    # 未设置的分类使用默认目标金额
    goal_amounts: Dict[Category, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.boundary_config.validate()

    @property
    def boundary_config(self) -> PeriodBoundaryConfig:
        return PeriodBoundaryConfig(
            daily_start_hour=self.daily_start_hour,
            weekly_start_day=self.weekly_start_day,
            monthly_start_day=self.monthly_start_day,
        )

    def set_boundary_config(self, config: PeriodBoundaryConfig) -> None:
        config.validate()
        self.daily_start_hour = config.daily_start_hour
        self.weekly_start_day = config.weekly_start_day
        self.monthly_start_day = config.monthly_start_day

    # ==================== 目标金额 ====================

    def goal_amount(self, category: Category) -> int:
        """每月目标金额（分）"""
        amount = self.goal_amounts.get(category)
        if amount is None:
            return DEFAULT_GOAL_AMOUNTS.get(category.value, 0)
        return amount

    def set_goal_amount(self, category: Category, amount_cents: int) -> None:
        if amount_cents < 0:
            raise ValueError("Goal amount must be non-negative.")
        self.goal_amounts[category] = amount_cents

    # ==================== 启用分类 ====================

    def should_show_goals(self, kind: PeriodKind) -> bool:
        return self.show_goals.get(kind, True)

    def enabled_categories(self, kind: PeriodKind) -> List[Category]:
        return list(self.enabled_goal_categories.get(kind, []))

    def enabled_categories_count(self, kind: PeriodKind) -> int:
        return len(self.enabled_categories(kind))

    def is_category_enabled(self, category: Category, kind: PeriodKind) -> bool:
        return category in self.enabled_goal_categories.get(kind, [])

    def toggle_category(self, category: Category, kind: PeriodKind) -> None:
        """切换某周期是否追踪该分类"""
        categories = self.enabled_goal_categories.setdefault(kind, [])
        if category in categories:
            categories.remove(category)
        else:
            categories.append(category)

    # ==================== 序列化 ====================

    def to_dict(self) -> Dict:
        return {
            "daily_start_hour": self.daily_start_hour,
            "weekly_start_day": self.weekly_start_day,
            "monthly_start_day": self.monthly_start_day,
            "enabled_goal_categories": {
                kind.value: [c.value for c in cats]
                for kind, cats in self.enabled_goal_categories.items()
            },
            "show_goals": {kind.value: shown for kind, shown in self.show_goals.items()},
            "goal_amounts": {c.value: amount for c, amount in self.goal_amounts.items()},
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "UserSettings":
        """从字典恢复设置，缺失字段使用默认值"""
        if not data:
            return cls()
        settings = cls(
            daily_start_hour=data.get("daily_start_hour", DEFAULT_DAILY_START_HOUR),
            weekly_start_day=data.get("weekly_start_day", DEFAULT_WEEKLY_START_DAY),
            monthly_start_day=data.get("monthly_start_day", DEFAULT_MONTHLY_START_DAY),
        )
        for kind_value, names in data.get("enabled_goal_categories", {}).items():
            settings.enabled_goal_categories[PeriodKind(kind_value)] = Category.from_names(names)
        for kind_value, shown in data.get("show_goals", {}).items():
            settings.show_goals[PeriodKind(kind_value)] = bool(shown)
        for name, amount in data.get("goal_amounts", {}).items():
            matched = Category.from_names([name])
            if matched:
                settings.goal_amounts[matched[0]] = int(amount)
        return settings
