"""预算目标计算服务模块"""
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Protocol

from expense.models.analysis import GoalSummary, SpendingGoal, round_half_up
from expense.models.category import Category
from expense.models.money import Money
from expense.models.period import PeriodKind, PeriodBoundaryConfig
from expense.models.transaction import SpendingRecord
from expense.services.transaction_filter import filter_by_period


class GoalSettings(Protocol):
    """目标计算所需的设置接口"""

    def enabled_categories(self, kind: PeriodKind) -> Iterable[Category]: ...

    def goal_amount(self, category: Category) -> int: ...


def scaled_goal_limit(goal_cents: int, kind: PeriodKind) -> int:
    """按周期缩放每月目标：日 = 月/30，周 = 月/4，月不变（四舍五入）"""
    return round_half_up(goal_cents * kind.multiplier)


def compute_goals(
    transactions: Iterable[SpendingRecord],
    kind: PeriodKind,
    reference: datetime,
    config: PeriodBoundaryConfig,
    settings: GoalSettings,
) -> GoalSummary:
    """
    计算参考时间所在周期各启用分类的预算进度

    只统计用户为该周期启用的分类；总预算为各分类缩放后额度之和，
    总体进度 = min(总支出 / 总预算, 1.0)，总预算为 0 时为 0。
    """
    # 保持设置中的顺序并去重
    enabled: List[Category] = list(dict.fromkeys(settings.enabled_categories(kind)))
    enabled_set = set(enabled)

    spending: Dict[Category, int] = defaultdict(int)
    for tx in filter_by_period(transactions, kind, reference, config):
        if tx.category in enabled_set:
            spending[tx.category] += tx.amount_cents

    goals = [
        SpendingGoal(
            category=category,
            limit_cents=scaled_goal_limit(settings.goal_amount(category), kind),
            current_spending_cents=spending.get(category, 0),
        )
        for category in enabled
    ]
    goals.sort(key=lambda goal: (-goal.progress_ratio, goal.category.sort_index))

    total_budget = sum(goal.limit_cents for goal in goals)
    total_spent = sum(goal.current_spending_cents for goal in goals)
    overall_progress = min(total_spent / total_budget, 1.0) if total_budget > 0 else 0.0

    return GoalSummary(
        kind=kind,
        per_category=goals,
        total_budget=Money(total_budget),
        total_spent=Money(total_spent),
        overall_progress=overall_progress,
    )
