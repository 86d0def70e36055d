import pytest

from expense.models.category import Category
from expense.models.period import PeriodKind, PeriodBoundaryConfig, InvalidConfiguration
from expense.models.user_settings import UserSettings


def test_defaults():
    settings = UserSettings()
    assert settings.boundary_config == PeriodBoundaryConfig(0, 0, 1)
    assert settings.enabled_categories(PeriodKind.DAILY) == [
        Category.FOOD_DRINK, Category.TRANSPORTATION, Category.ENTERTAINMENT,
    ]
    assert settings.enabled_categories_count(PeriodKind.WEEKLY) == 5
    assert settings.enabled_categories(PeriodKind.MONTHLY) == list(Category)
    assert settings.goal_amount(Category.BILLS_UTILITIES) == 200000
    assert settings.goal_amount(Category.FITNESS) == 30000
    assert all(settings.should_show_goals(kind) for kind in PeriodKind)


def test_enabled_categories_returns_copy():
    settings = UserSettings()
    settings.enabled_categories(PeriodKind.DAILY).clear()
    assert settings.enabled_categories_count(PeriodKind.DAILY) == 3


def test_toggle_category():
    settings = UserSettings()
    settings.toggle_category(Category.FOOD_DRINK, PeriodKind.DAILY)
    assert not settings.is_category_enabled(Category.FOOD_DRINK, PeriodKind.DAILY)
    settings.toggle_category(Category.FOOD_DRINK, PeriodKind.DAILY)
    assert settings.is_category_enabled(Category.FOOD_DRINK, PeriodKind.DAILY)


def test_goal_amount_must_be_non_negative():
    settings = UserSettings()
    settings.set_goal_amount(Category.OTHER, 0)
    assert settings.goal_amount(Category.OTHER) == 0
    with pytest.raises(ValueError):
        settings.set_goal_amount(Category.OTHER, -1)


def test_invalid_boundaries_are_rejected():
    with pytest.raises(InvalidConfiguration):
        UserSettings(daily_start_hour=24)

    settings = UserSettings()
    with pytest.raises(InvalidConfiguration):
        settings.set_boundary_config(PeriodBoundaryConfig(monthly_start_day=0))
    assert settings.monthly_start_day == 1


def test_from_dict_ignores_unknown_categories():
    settings = UserSettings.from_dict({
        "monthly_start_day": 31,
        "enabled_goal_categories": {"daily": ["Food & Drink", "Groceries"]},
        "goal_amounts": {"Groceries": 100, "Shopping": 4200},
    })
    assert settings.monthly_start_day == 31
    assert settings.enabled_categories(PeriodKind.DAILY) == [Category.FOOD_DRINK]
    assert settings.goal_amounts == {Category.SHOPPING: 4200}
    assert UserSettings.from_dict(settings.to_dict()) == settings
