"""统计分析服务模块"""
import logging
from collections import defaultdict
from datetime import datetime
from fractions import Fraction
from typing import Callable, Dict, Final, Iterable, List, Optional, Sequence, TypeVar

from expense.models.analysis import (
    SpendingBreakdown, CategorySpending, PaymentMethodSpending,
    TrendPoint, TrendSeries, TrendComparison, GoalSummary, PeriodSummary,
    round_half_up
)
from expense.models.category import Category
from expense.models.money import Money
from expense.models.payment_method import PaymentMethod
from expense.models.period import PeriodKind, PeriodBoundaryConfig, Interval
from expense.models.transaction import SpendingRecord, Transaction
from expense.services.goal_service import compute_goals
from expense.services.period_service import (
    resolve_interval, previous_interval, period_display_name, format_month_day
)
from expense.services.transaction_filter import filter_by_interval, filter_by_period

logger: Final = logging.getLogger(__name__)

K = TypeVar("K", Category, PaymentMethod)


# ==================== 分组汇总 ====================

def total_spending(transactions: Iterable[SpendingRecord]) -> Money:
    """交易金额合计"""
    return Money(sum(tx.amount_cents for tx in transactions))


def aggregate(
    transactions: Iterable[SpendingRecord],
    key_fn: Callable[[SpendingRecord], K],
    key_order: Callable[[K], int],
) -> List[SpendingBreakdown]:
    """
    按 key 分组汇总金额并计算占比

    - 只保留合计为正数的分组
    - 占比 = 分组金额 / 正数分组总额 * 100，四舍五入（0.5 向上）；总额为 0 时为 0
    - 按金额降序排列，金额相同按 key_order 升序，保证输出稳定
    """
    totals: Dict[K, int] = defaultdict(int)
    for tx in transactions:
        totals[key_fn(tx)] += tx.amount_cents

    positive = {key: amount for key, amount in totals.items() if amount > 0}
    total = sum(positive.values())

    result = [
        SpendingBreakdown(
            key=key,
            amount_cents=amount,
            percentage=round_half_up(Fraction(amount * 100, total)) if total > 0 else 0,
        )
        for key, amount in positive.items()
    ]
    result.sort(key=lambda item: (-item.amount_cents, key_order(item.key)))
    return result


def category_breakdown(transactions: Iterable[SpendingRecord]) -> List[CategorySpending]:
    """按分类汇总"""
    return aggregate(transactions, lambda tx: tx.category, lambda c: c.sort_index)


def payment_method_breakdown(transactions: Iterable[SpendingRecord]) -> List[PaymentMethodSpending]:
    """按支付方式汇总"""
    return aggregate(transactions, lambda tx: tx.payment_method, lambda p: p.sort_index)


def category_breakdown_for_period(
    transactions: Iterable[SpendingRecord],
    kind: PeriodKind,
    reference: datetime,
    config: PeriodBoundaryConfig,
) -> List[CategorySpending]:
    """参考时间所在周期的分类汇总"""
    return category_breakdown(filter_by_period(transactions, kind, reference, config))


def payment_method_breakdown_for_period(
    transactions: Iterable[SpendingRecord],
    kind: PeriodKind,
    reference: datetime,
    config: PeriodBoundaryConfig,
) -> List[PaymentMethodSpending]:
    """参考时间所在周期的支付方式汇总"""
    return payment_method_breakdown(filter_by_period(transactions, kind, reference, config))


def period_summary(
    transactions: Sequence[SpendingRecord], reference: datetime, config: PeriodBoundaryConfig
) -> PeriodSummary:
    """参考时间所在日、周、月的支出合计（使用自定义边界）"""
    return PeriodSummary(
        today=total_spending(filter_by_period(transactions, PeriodKind.DAILY, reference, config)),
        this_week=total_spending(filter_by_period(transactions, PeriodKind.WEEKLY, reference, config)),
        this_month=total_spending(filter_by_period(transactions, PeriodKind.MONTHLY, reference, config)),
    )


# ==================== 趋势序列 ====================

def format_trend_label(kind: PeriodKind, interval: Interval, with_year: bool = False) -> str:
    """
    趋势图标签

    - 日："D/M"（如 10/1）
    - 周：起始日 "MMM d"（如 Jan 8）
    - 月："MMM"（如 Jan）
    with_year 为 True 时追加两位年份，用于跨年超过一年的序列
    """
    start = interval.start
    year = start.strftime("%y")
    if kind == PeriodKind.DAILY:
        label = f"{start.day}/{start.month}"
        return f"{label}/{year}" if with_year else label
    if kind == PeriodKind.WEEKLY:
        label = format_month_day(start)
    else:
        label = start.strftime("%b")
    return f"{label} {year}" if with_year else label


def average_spending(points: Sequence[TrendPoint]) -> Money:
    """非零周期的平均支出（零支出周期不参与平均）"""
    non_zero = [point.amount_cents for point in points if point.amount_cents != 0]
    if not non_zero:
        return Money.zero()
    return Money(round_half_up(Fraction(sum(non_zero), len(non_zero))))


def trend_comparison(points: Sequence[TrendPoint]) -> TrendComparison:
    """最近两个周期（含零值）的变化百分比与方向"""
    if len(points) < 2:
        return TrendComparison()
    current = points[-1].amount_cents
    previous = points[-2].amount_cents
    if previous <= 0:
        return TrendComparison()
    change = Fraction((current - previous) * 100, previous)
    return TrendComparison(percentage=round_half_up(abs(change)), is_increase=change > 0)


def build_series(
    transactions: Sequence[SpendingRecord],
    kind: PeriodKind,
    reference: datetime,
    config: PeriodBoundaryConfig,
    period_count: Optional[int] = None,
) -> TrendSeries:
    """
    生成连续周期的支出趋势（从旧到新，长度恰为 period_count）

    每个周期汇总全部分类的支出，不做目标分类过滤。
    period_count 缺省时使用周期默认数量（7 天 / 5 周 / 6 个月）。
    """
    if period_count is None:
        period_count = kind.default_trend_periods
    if period_count < 1:
        raise ValueError(f"period_count must be positive, got {period_count}")

    intervals = [resolve_interval(kind, reference, config)]
    for _ in range(period_count - 1):
        intervals.append(previous_interval(kind, intervals[-1], config))
    intervals.reverse()

    labels = [format_trend_label(kind, interval) for interval in intervals]
    if len(set(labels)) != len(labels):
        labels = [format_trend_label(kind, interval, with_year=True) for interval in intervals]

    points = [
        TrendPoint(
            interval_start=interval.start,
            interval_end=interval.end,
            amount_cents=total_spending(filter_by_interval(transactions, interval)).cents,
            label=label,
        )
        for interval, label in zip(intervals, labels)
    ]
    logger.debug("built %s trend series with %d points", kind.value, len(points))

    return TrendSeries(
        kind=kind,
        points=points,
        average_spending=average_spending(points),
        comparison=trend_comparison(points),
    )


# ==================== 服务层 ====================

class StatisticsService:
    """
    统计分析服务层

    绑定交易数据源与用户设置，每次调用都基于最新快照重新计算
    """

    def __init__(self, db, settings=None):
        self.db = db
        self._settings = settings

    @property
    def settings(self):
        if self._settings is None:
            self._settings = self.db.load_settings()
        return self._settings

    @settings.setter
    def settings(self, value) -> None:
        self._settings = value

    @property
    def config(self) -> PeriodBoundaryConfig:
        return self.settings.boundary_config

    def _transactions(self) -> List[Transaction]:
        return self.db.get_all_transactions()

    def get_interval(self, kind: PeriodKind, reference: datetime) -> Interval:
        return resolve_interval(kind, reference, self.config)

    def get_period_transactions(self, kind: PeriodKind, reference: datetime) -> List[Transaction]:
        """周期内交易，按日期倒序"""
        return self.db.get_transactions_in_interval(self.get_interval(kind, reference))

    def get_period_total(self, kind: PeriodKind, reference: datetime) -> Money:
        return total_spending(self.get_period_transactions(kind, reference))

    def get_period_summary(self, reference: datetime) -> PeriodSummary:
        return period_summary(self._transactions(), reference, self.config)

    def get_period_display_name(self, kind: PeriodKind, reference: datetime) -> str:
        return period_display_name(kind, reference, self.config)

    def get_category_breakdown(self, kind: PeriodKind, reference: datetime) -> List[CategorySpending]:
        return category_breakdown(self.get_period_transactions(kind, reference))

    def get_payment_method_breakdown(
        self, kind: PeriodKind, reference: datetime
    ) -> List[PaymentMethodSpending]:
        return payment_method_breakdown(self.get_period_transactions(kind, reference))

    def get_trend_series(
        self, kind: PeriodKind, reference: datetime, period_count: Optional[int] = None
    ) -> TrendSeries:
        return build_series(self._transactions(), kind, reference, self.config, period_count)

    def get_goal_summary(self, kind: PeriodKind, reference: datetime) -> GoalSummary:
        return compute_goals(self._transactions(), kind, reference, self.config, self.settings)
