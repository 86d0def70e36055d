"""统计分析派生数据模型（每次查询重新计算，不持久化）"""
import math
from dataclasses import dataclass
from datetime import datetime
from fractions import Fraction
from typing import Generic, List, Optional, TypeVar, Union

from expense.models.category import Category
from expense.models.money import Money
from expense.models.payment_method import PaymentMethod
from expense.models.period import PeriodKind

K = TypeVar("K", Category, PaymentMethod)


def round_half_up(value: Union[Fraction, int]) -> int:
    """精确有理数的四舍五入（0.5 向上取整），全项目统一的取整规则"""
    return math.floor(Fraction(value) + Fraction(1, 2))


@dataclass(frozen=True)
class SpendingBreakdown(Generic[K]):
    """分组支出明细：key 为分类或支付方式"""
    key: K
    amount_cents: int
    percentage: int

    @property
    def amount(self) -> Money:
        return Money(self.amount_cents)

    @property
    def formatted_amount(self) -> str:
        return self.amount.formatted

    @property
    def formatted_percentage(self) -> str:
        return f"{self.percentage}% of total"


CategorySpending = SpendingBreakdown[Category]
PaymentMethodSpending = SpendingBreakdown[PaymentMethod]


@dataclass(frozen=True)
class TrendPoint:
    """趋势图中的单个周期"""
    interval_start: datetime
    interval_end: datetime
    amount_cents: int
    label: str

    @property
    def amount(self) -> Money:
        return Money(self.amount_cents)


@dataclass(frozen=True)
class TrendComparison:
    """最近两个周期的变化幅度"""
    percentage: int = 0
    is_increase: bool = False


@dataclass(frozen=True)
class TrendSeries:
    """连续周期的支出趋势（从旧到新）"""
    kind: PeriodKind
    points: List[TrendPoint]
    average_spending: Money
    comparison: TrendComparison

    @property
    def labels(self) -> List[str]:
        return [point.label for point in self.points]

    @property
    def total(self) -> Money:
        return Money(sum(point.amount_cents for point in self.points))

    def find_by_label(self, label: str) -> Optional[TrendPoint]:
        """根据标签查找周期（用于图表点选）"""
        for point in self.points:
            if point.label == label:
                return point
        return None


@dataclass(frozen=True)
class SpendingGoal:
    """单个分类的预算目标进度"""
    category: Category
    limit_cents: int
    current_spending_cents: int

    @property
    def progress_ratio(self) -> float:
        if self.limit_cents <= 0:
            return 0.0
        return min(self.current_spending_cents / self.limit_cents, 1.0)

    @property
    def is_over_budget(self) -> bool:
        return self.current_spending_cents > self.limit_cents

    @property
    def remaining_cents(self) -> int:
        """剩余额度，超支时为负数"""
        return self.limit_cents - self.current_spending_cents

    @property
    def over_budget_cents(self) -> int:
        """超支金额（未超支时为 0）"""
        return max(self.current_spending_cents - self.limit_cents, 0)

    @property
    def status_text(self) -> str:
        if self.is_over_budget:
            return f"Over by {Money(self.over_budget_cents).formatted}"
        return f"{Money(self.remaining_cents).formatted} left"


@dataclass(frozen=True)
class GoalSummary:
    """某周期全部启用分类的预算汇总"""
    kind: PeriodKind
    per_category: List[SpendingGoal]
    total_budget: Money
    total_spent: Money
    overall_progress: float

    @property
    def progress_percent(self) -> int:
        """显示用整数百分比（如 "45% used"）"""
        return int(self.overall_progress * 100)


@dataclass(frozen=True)
class PeriodSummary:
    """参考日期所在日/周/月的支出汇总"""
    today: Money
    this_week: Money
    this_month: Money
