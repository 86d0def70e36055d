from datetime import datetime

from expense.models.category import Category
from expense.models.payment_method import PaymentMethod
from expense.models.period import PeriodKind, PeriodBoundaryConfig
from expense.services.period_service import resolve_interval
from expense.services.transaction_filter import (
    TransactionFilter, filter_by_interval, filter_by_period, filter_by_predicate
)


def test_filter_by_interval_matches_half_open_membership(make_tx, default_config):
    moments = [
        datetime(2024, 1, 9, 23, 59, 59),
        datetime(2024, 1, 10, 0, 0),
        datetime(2024, 1, 10, 13, 45),
        datetime(2024, 1, 10, 23, 59, 59, 999999),
        datetime(2024, 1, 11, 0, 0),
    ]
    transactions = [make_tx(100, moment) for moment in moments]
    interval = resolve_interval(PeriodKind.DAILY, datetime(2024, 1, 10, 12), default_config)

    selected = filter_by_interval(transactions, interval)

    for tx in transactions:
        assert (tx in selected) == (interval.start <= tx.date < interval.end)
    assert [tx.date for tx in selected] == moments[1:4]


def test_filter_by_period_preserves_order(sample_transactions):
    config = PeriodBoundaryConfig(monthly_start_day=1)
    selected = filter_by_period(sample_transactions, PeriodKind.MONTHLY, datetime(2024, 1, 15), config)
    assert [tx.title for tx in selected] == ["Lunch", "MTR", "Shoes", "Cinema"]


def test_inactive_filter_matches_everything(sample_transactions):
    tx_filter = TransactionFilter()
    assert not tx_filter.is_active
    assert tx_filter.active_filter_count == 0
    assert filter_by_predicate(sample_transactions, tx_filter) == sample_transactions


def test_search_is_case_insensitive_across_fields(sample_transactions):
    by_title = filter_by_predicate(sample_transactions, TransactionFilter(search_text="lUnCh"))
    assert [tx.title for tx in by_title] == ["Lunch"]

    by_category = filter_by_predicate(sample_transactions, TransactionFilter(search_text="bills"))
    assert [tx.title for tx in by_category] == ["Electricity"]

    by_payment = filter_by_predicate(sample_transactions, TransactionFilter(search_text="octopus"))
    assert [tx.title for tx in by_payment] == ["Lunch", "MTR"]


def test_predicates_combine_with_and(sample_transactions):
    tx_filter = TransactionFilter(
        categories=frozenset({Category.FOOD_DRINK, Category.TRANSPORTATION, Category.SHOPPING}),
        payment_methods=frozenset({PaymentMethod.OCTOPUS}),
        date_range=(datetime(2024, 1, 10, 9), datetime(2024, 1, 31)),
    )
    assert tx_filter.is_active
    assert tx_filter.active_filter_count == 3
    assert [tx.title for tx in filter_by_predicate(sample_transactions, tx_filter)] == ["Lunch"]


def test_date_range_is_inclusive(make_tx):
    start, end = datetime(2024, 1, 1), datetime(2024, 1, 31)
    transactions = [make_tx(1, start), make_tx(2, end), make_tx(3, datetime(2024, 2, 1))]
    selected = filter_by_predicate(transactions, TransactionFilter(date_range=(start, end)))
    assert [tx.amount_cents for tx in selected] == [1, 2]


def test_with_search_and_cleared():
    tx_filter = TransactionFilter(categories=frozenset({Category.OTHER})).with_search("taxi")
    assert tx_filter.search_text == "taxi"
    assert tx_filter.categories == frozenset({Category.OTHER})
    assert tx_filter.cleared() == TransactionFilter()


def test_plain_callable_predicate(sample_transactions):
    large = filter_by_predicate(sample_transactions, lambda tx: tx.amount_cents >= 4000)
    assert [tx.title for tx in large] == ["Cinema", "Electricity"]
