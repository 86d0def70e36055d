import os
from datetime import datetime

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
pytest.importorskip("PySide6")

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication

from expense.models.category import Category
from expense.models.money import Money
from expense.models.period import PeriodKind, PeriodBoundaryConfig
from expense.models.user_settings import UserSettings
from expense.services.goal_service import compute_goals
from expense.services.statistics_service import StatisticsService
from expense.ui.overview_widget import OverviewWidget, GoalProgressWidget, SummaryCard
from expense.ui.settings_dialog import SettingsDialog
from expense.ui.transaction_dialog import TransactionDialog
from expense.ui.transaction_model import TransactionTableModel, TransactionColumn


@pytest.fixture(scope="module")
def qapp():
    return QApplication.instance() or QApplication([])


def test_transaction_model_display(qapp, sample_transactions):
    model = TransactionTableModel()
    model.set_transactions(sample_transactions)

    assert model.rowCount() == len(sample_transactions)
    first = model.index(0, TransactionColumn.AMOUNT)
    assert model.data(first, Qt.DisplayRole) == "$10.00"
    assert model.data(model.index(0, TransactionColumn.DATE), Qt.DisplayRole) == "2024-01-10 12:30"
    assert model.data(model.index(0, TransactionColumn.CATEGORY), Qt.DisplayRole) == "Food & Drink"
    assert model.data(first, Qt.UserRole) is sample_transactions[0]
    assert model.get_transaction(99) is None


def test_summary_card(qapp):
    card = SummaryCard("今日支出")
    card.set_value(Money(123456))
    assert card.value_label.text() == "$1,234.56"


def test_goal_progress_widget(qapp, make_tx):
    transactions = [make_tx(40000, datetime(2024, 1, 9), Category.FOOD_DRINK)]
    summary = compute_goals(
        transactions, PeriodKind.WEEKLY, datetime(2024, 1, 10), PeriodBoundaryConfig(), UserSettings()
    )
    widget = GoalProgressWidget()
    widget.set_summary(summary)
    assert widget.status_labels[0].text() == "Over by $25.00"

    widget.set_summary(None)
    assert widget.status_labels == []


def test_overview_refresh(qapp, db, make_tx):
    db.add_transaction(make_tx(2500, datetime.now(), Category.SHOPPING))
    overview = OverviewWidget(StatisticsService(db))

    assert overview.today_card.value_label.text() == "$25.00"
    for index in range(overview.period_combo.count()):
        overview.period_combo.setCurrentIndex(index)
        assert overview.breakdown_table.rowCount() == 1
    overview.breakdown_combo.setCurrentIndex(1)
    assert overview.breakdown_table.item(0, 0).text() == "Cash"


def test_transaction_dialog_builds_transaction(qapp):
    dialog = TransactionDialog()
    dialog.title_input.setText("Taxi")
    dialog.amount_input.setText("88.5")
    dialog._on_save()

    result = dialog.get_result()
    assert result.title == "Taxi"
    assert result.amount == Money(8850)


def test_settings_dialog_saves(qapp, db):
    settings = db.load_settings()
    dialog = SettingsDialog(db, settings)
    dialog.boundary_widget.month_day_spin.setValue(25)
    dialog.goal_widget.amount_inputs[Category.FITNESS].setText("450.00")
    dialog._on_save()

    loaded = db.load_settings()
    assert loaded.monthly_start_day == 25
    assert loaded.goal_amount(Category.FITNESS) == 45000
