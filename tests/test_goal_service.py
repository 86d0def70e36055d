from datetime import datetime

import pytest

from expense.models.analysis import SpendingGoal
from expense.models.category import Category
from expense.models.money import Money
from expense.models.period import PeriodKind
from expense.models.user_settings import UserSettings
from expense.services.goal_service import compute_goals, scaled_goal_limit


@pytest.mark.parametrize("goal, kind, expected", [
    (150000, PeriodKind.DAILY, 5000),
    (80000, PeriodKind.DAILY, 2667),
    (45, PeriodKind.DAILY, 2),
    (1, PeriodKind.DAILY, 0),
    (150000, PeriodKind.WEEKLY, 37500),
    (6, PeriodKind.WEEKLY, 2),
    (2, PeriodKind.WEEKLY, 1),
    (150000, PeriodKind.MONTHLY, 150000),
])
def test_scaled_goal_limit(goal, kind, expected):
    assert scaled_goal_limit(goal, kind) == expected


def test_over_budget_is_strict():
    at_limit = SpendingGoal(Category.FOOD_DRINK, 5000, 5000)
    assert not at_limit.is_over_budget
    assert at_limit.progress_ratio == 1.0
    assert at_limit.status_text == "$0.00 left"

    over = SpendingGoal(Category.FOOD_DRINK, 5000, 5001)
    assert over.is_over_budget
    assert over.status_text == "Over by $0.01"


def test_zero_limit_goal():
    goal = SpendingGoal(Category.OTHER, 0, 300)
    assert goal.progress_ratio == 0.0
    assert goal.is_over_budget
    assert goal.over_budget_cents == 300


def test_weekly_food_goal_over_budget(make_tx, settings, default_config):
    transactions = [
        make_tx(40000, datetime(2024, 1, 9, 19), Category.FOOD_DRINK),
        # 每周目标未启用账单分类
        make_tx(99999, datetime(2024, 1, 9, 20), Category.BILLS_UTILITIES),
    ]
    summary = compute_goals(
        transactions, PeriodKind.WEEKLY, datetime(2024, 1, 10), default_config, settings
    )

    food = summary.per_category[0]
    assert food.category == Category.FOOD_DRINK
    assert food.limit_cents == 37500
    assert food.is_over_budget
    assert food.remaining_cents == -2500
    assert food.status_text == "Over by $25.00"

    assert [goal.category for goal in summary.per_category] == [
        Category.FOOD_DRINK, Category.TRANSPORTATION, Category.SHOPPING,
        Category.ENTERTAINMENT, Category.HEALTHCARE,
    ]
    assert summary.total_budget == Money(37500 + 20000 + 25000 + 15000 + 12500)
    assert summary.total_spent == Money(40000)
    assert summary.overall_progress == pytest.approx(40000 / 110000)
    assert summary.progress_percent == 36


def test_goals_sorted_by_progress(make_tx, settings, default_config):
    transactions = [
        make_tx(1000, datetime(2024, 1, 10, 9), Category.FOOD_DRINK),        # 1000 / 5000
        make_tx(2000, datetime(2024, 1, 10, 9), Category.ENTERTAINMENT),     # 2000 / 2000
        make_tx(2667, datetime(2024, 1, 10, 9), Category.TRANSPORTATION),    # 2667 / 2667
    ]
    summary = compute_goals(
        transactions, PeriodKind.DAILY, datetime(2024, 1, 10, 12), default_config, settings
    )
    assert [goal.category for goal in summary.per_category] == [
        Category.TRANSPORTATION, Category.ENTERTAINMENT, Category.FOOD_DRINK,
    ]
    assert summary.overall_progress == pytest.approx(5667 / 9667)


def test_custom_goal_amount_and_toggle(make_tx, default_config):
    settings = UserSettings()
    settings.set_goal_amount(Category.FITNESS, 120000)
    settings.toggle_category(Category.FITNESS, PeriodKind.WEEKLY)
    transactions = [make_tx(45000, datetime(2024, 1, 8), Category.FITNESS)]

    summary = compute_goals(
        transactions, PeriodKind.WEEKLY, datetime(2024, 1, 10), default_config, settings
    )
    fitness = summary.per_category[0]
    assert fitness.category == Category.FITNESS
    assert fitness.limit_cents == 30000
    assert fitness.status_text == "Over by $150.00"
    assert summary.overall_progress == pytest.approx(45000 / (110000 + 30000))


def test_empty_inputs_yield_zero_progress(default_config):
    settings = UserSettings(enabled_goal_categories={kind: [] for kind in PeriodKind})
    for kind in PeriodKind:
        summary = compute_goals([], kind, datetime(2024, 1, 10), default_config, settings)
        assert summary.per_category == []
        assert summary.total_budget == Money.zero()
        assert summary.overall_progress == 0.0

    summary = compute_goals([], PeriodKind.MONTHLY, datetime(2024, 1, 10), default_config, UserSettings())
    assert summary.total_spent == Money.zero()
    assert summary.overall_progress == 0.0
    assert len(summary.per_category) == len(Category)


def test_overall_progress_is_capped(make_tx, settings, default_config):
    transactions = [make_tx(10_000_000, datetime(2024, 1, 10, 9), Category.FOOD_DRINK)]
    summary = compute_goals(
        transactions, PeriodKind.DAILY, datetime(2024, 1, 10, 12), default_config, settings
    )
    assert summary.overall_progress == 1.0
    assert summary.progress_percent == 100
