from datetime import datetime

import pytest

from expense.db.database import Database
from expense.models.category import Category
from expense.models.money import Money
from expense.models.payment_method import PaymentMethod
from expense.models.period import PeriodKind, PeriodBoundaryConfig, Interval
from expense.models.transaction import Transaction
from expense.models.user_settings import UserSettings
from expense.services.statistics_service import StatisticsService
from expense.settings import DB_SCHEMA_VERSION


def test_schema_version_is_recorded(db):
    row = db.conn.execute("SELECT version FROM schema_version").fetchone()
    assert row[0] == DB_SCHEMA_VERSION


def test_transaction_crud(db):
    tx = Transaction(
        title="Dim sum",
        amount=Money(12850),
        category=Category.FOOD_DRINK,
        date=datetime(2024, 1, 10, 12, 30),
        payment_method=PaymentMethod.ALIPAY_HK,
        location="Central",
    )
    tx_id = db.add_transaction(tx)
    assert tx.created_at is not None

    loaded = db.get_transaction_by_id(tx_id)
    assert loaded.title == "Dim sum"
    assert loaded.amount == Money(12850)
    assert loaded.payment_method == PaymentMethod.ALIPAY_HK
    assert loaded.date == datetime(2024, 1, 10, 12, 30)
    assert loaded.location == "Central"
    assert loaded.address is None

    loaded.title = "Yum cha"
    loaded.amount = Money(9900)
    db.update_transaction(loaded)
    updated = db.get_transaction_by_id(str(tx_id))
    assert (updated.title, updated.amount_cents) == ("Yum cha", 9900)
    assert updated.created_at == loaded.created_at

    db.delete_transaction(tx_id)
    assert db.get_transaction_by_id(tx_id) is None
    assert db.count_transactions() == 0


def test_transactions_are_returned_newest_first(db, sample_transactions):
    for tx in sample_transactions:
        db.add_transaction(tx)
    dates = [tx.date for tx in db.get_all_transactions()]
    assert dates == sorted(dates, reverse=True)
    assert db.count_transactions() == len(sample_transactions)


def test_interval_query_is_half_open(db, make_tx):
    for moment in (datetime(2024, 1, 10), datetime(2024, 1, 10, 23, 59, 59, 500000), datetime(2024, 1, 11)):
        db.add_transaction(make_tx(100, moment))
    rows = db.get_transactions_in_interval(Interval(datetime(2024, 1, 10), datetime(2024, 1, 11)))
    assert [tx.date for tx in rows] == [datetime(2024, 1, 10, 23, 59, 59, 500000), datetime(2024, 1, 10)]


def test_settings_default_and_round_trip(db):
    assert db.load_settings() == UserSettings()

    settings = UserSettings(daily_start_hour=6, weekly_start_day=1, monthly_start_day=25)
    settings.set_goal_amount(Category.SHOPPING, 50000)
    settings.toggle_category(Category.FOOD_DRINK, PeriodKind.DAILY)
    settings.show_goals[PeriodKind.MONTHLY] = False
    db.save_settings(settings)
    db.save_settings(settings)

    loaded = db.load_settings()
    assert loaded == settings
    assert loaded.boundary_config == PeriodBoundaryConfig(6, 1, 25)
    assert loaded.goal_amount(Category.SHOPPING) == 50000
    assert not loaded.is_category_enabled(Category.FOOD_DRINK, PeriodKind.DAILY)
    assert not loaded.should_show_goals(PeriodKind.MONTHLY)


def test_reopen_keeps_data(tmp_path, make_tx):
    path = str(tmp_path / "reopen.db")
    with Database(path) as first:
        first.add_transaction(make_tx(700, datetime(2024, 1, 10)))
    with Database(path) as second:
        assert second.count_transactions() == 1
        assert second.conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0] == 1
    assert second.conn is None


def test_unknown_category_value_fails_to_load(db):
    db.conn.execute(
        "INSERT INTO transactions (id, title, amount_cents, category, payment_method, date, created_at) "
        "VALUES ('x', 't', 1, 'Groceries', 'Cash', '2024-01-10T00:00:00', '2024-01-10T00:00:00')"
    )
    with pytest.raises(ValueError):
        db.get_all_transactions()


def test_statistics_service_reads_from_database(db, sample_transactions):
    for tx in sample_transactions:
        db.add_transaction(tx)
    db.save_settings(UserSettings(weekly_start_day=1))
    service = StatisticsService(db)
    reference = datetime(2024, 1, 10, 12)

    assert service.config.weekly_start_day == 1
    assert service.get_interval(PeriodKind.WEEKLY, reference).start == datetime(2024, 1, 8)
    assert service.get_period_total(PeriodKind.WEEKLY, reference) == Money(4000)
    assert [tx.title for tx in service.get_period_transactions(PeriodKind.DAILY, reference)] == ["Lunch", "MTR"]
    assert service.get_period_display_name(PeriodKind.WEEKLY, reference) == "Jan 8 - Jan 14"

    breakdown = service.get_category_breakdown(PeriodKind.MONTHLY, reference)
    assert [item.key for item in breakdown] == [
        Category.ENTERTAINMENT, Category.SHOPPING, Category.FOOD_DRINK, Category.TRANSPORTATION,
    ]
    methods = service.get_payment_method_breakdown(PeriodKind.MONTHLY, reference)
    assert [item.key for item in methods] == [
        PaymentMethod.PAYME, PaymentMethod.CREDIT_CARD, PaymentMethod.OCTOPUS,
    ]

    series = service.get_trend_series(PeriodKind.MONTHLY, reference, 2)
    assert [point.amount_cents for point in series.points] == [8000, 8000]
    assert series.comparison.percentage == 0

    summary = service.get_period_summary(reference)
    assert (summary.today, summary.this_week, summary.this_month) == (Money(1500), Money(4000), Money(8000))

    goals = service.get_goal_summary(PeriodKind.MONTHLY, reference)
    assert goals.total_spent == Money(8000)

    service.settings = UserSettings(monthly_start_day=5)
    assert service.get_interval(PeriodKind.MONTHLY, reference).start == datetime(2024, 1, 5)
