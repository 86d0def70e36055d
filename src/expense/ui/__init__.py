"""用户界面模块"""
from expense.ui.main_window import MainWindow
from expense.ui.transaction_dialog import TransactionDialog
from expense.ui.transaction_model import TransactionTableModel
from expense.ui.overview_widget import (
    OverviewWidget, SummaryCard, PieChartWidget, TrendChartWidget, GoalProgressWidget
)
from expense.ui.settings_dialog import SettingsDialog, BoundarySettingsWidget, GoalSettingsWidget

__all__ = [
    "MainWindow",
    "TransactionDialog",
    "TransactionTableModel",
    "OverviewWidget",
    "SummaryCard",
    "PieChartWidget",
    "TrendChartWidget",
    "GoalProgressWidget",
    "SettingsDialog",
    "BoundarySettingsWidget",
    "GoalSettingsWidget",
]
