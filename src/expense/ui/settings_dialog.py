"""用户设置对话框模块（周期边界与预算目标）"""
import logging
import sqlite3
from typing import Dict, Final

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QComboBox, QSpinBox, QLineEdit, QPushButton, QCheckBox,
    QMessageBox, QTabWidget, QWidget, QGridLayout, QLabel
)

from expense.db.database import Database
from expense.models.category import Category
from expense.models.money import Money, sanitize_amount_input
from expense.models.period import PeriodKind, PeriodBoundaryConfig, InvalidConfiguration
from expense.models.user_settings import UserSettings

logger: Final = logging.getLogger(__name__)

WEEKDAY_NAMES: Final = ["周日", "周一", "周二", "周三", "周四", "周五", "周六"]


class SettingsDialog(QDialog):
    """设置对话框（包含周期边界和预算目标）"""

    def __init__(self, db: Database, settings: UserSettings, parent=None):
        super().__init__(parent)
        self.db = db
        self.settings = settings
        self.setWindowTitle("设置")
        self.setMinimumSize(600, 450)
        self._init_ui()

    def _init_ui(self) -> None:
        layout = QVBoxLayout(self)

        tab_widget = QTabWidget()
        self.boundary_widget = BoundarySettingsWidget(self.settings)
        tab_widget.addTab(self.boundary_widget, "周期边界")
        self.goal_widget = GoalSettingsWidget(self.settings)
        tab_widget.addTab(self.goal_widget, "预算目标")
        layout.addWidget(tab_widget)

        btn_layout = QHBoxLayout()
        btn_layout.addStretch()
        cancel_btn = QPushButton("取消")
        cancel_btn.clicked.connect(self.reject)
        btn_layout.addWidget(cancel_btn)
        save_btn = QPushButton("保存")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self._on_save)
        btn_layout.addWidget(save_btn)
        layout.addLayout(btn_layout)

    def _on_save(self) -> None:
        try:
            # 先完成全部输入校验，再写回设置
            config = self.boundary_widget.current_config()
            amounts = self.goal_widget.goal_amounts()
            self.settings.set_boundary_config(config)
            for category, cents in amounts.items():
                self.settings.set_goal_amount(category, cents)
            self.goal_widget.apply_toggles()
            self.db.save_settings(self.settings)
            self.accept()
        except (InvalidConfiguration, ValueError) as e:
            QMessageBox.warning(self, "输入错误", str(e))
        except sqlite3.Error as e:
            logger.exception("保存设置失败")
            QMessageBox.critical(self, "错误", f"保存设置失败：{e}")


class BoundarySettingsWidget(QWidget):
    """日/周/月起始边界设置"""

    def __init__(self, settings: UserSettings, parent=None):
        super().__init__(parent)
        form_layout = QFormLayout(self)

        self.hour_spin = QSpinBox()
        self.hour_spin.setRange(0, 23)
        self.hour_spin.setSuffix(":00")
        self.hour_spin.setValue(settings.daily_start_hour)
        form_layout.addRow("每日起始时间:", self.hour_spin)

        self.weekday_combo = QComboBox()
        for index, name in enumerate(WEEKDAY_NAMES):
            self.weekday_combo.addItem(name, index)
        self.weekday_combo.setCurrentIndex(settings.weekly_start_day)
        form_layout.addRow("每周起始日:", self.weekday_combo)

        # 超过当月天数时按当月最后一天处理
        self.month_day_spin = QSpinBox()
        self.month_day_spin.setRange(1, 31)
        self.month_day_spin.setValue(settings.monthly_start_day)
        form_layout.addRow("每月起始日:", self.month_day_spin)

    def current_config(self) -> PeriodBoundaryConfig:
        return PeriodBoundaryConfig(
            daily_start_hour=self.hour_spin.value(),
            weekly_start_day=self.weekday_combo.currentData(),
            monthly_start_day=self.month_day_spin.value(),
        ).validate()


class GoalSettingsWidget(QWidget):
    """每月目标金额与各周期追踪分类"""

    def __init__(self, settings: UserSettings, parent=None):
        super().__init__(parent)
        self.settings = settings
        self.amount_inputs: Dict[Category, QLineEdit] = {}
        self.checkboxes: Dict[PeriodKind, Dict[Category, QCheckBox]] = {}
        self._init_ui()

    def _init_ui(self) -> None:
        grid = QGridLayout(self)
        grid.addWidget(QLabel("分类"), 0, 0)
        grid.addWidget(QLabel("每月目标"), 0, 1)
        for col, kind in enumerate(PeriodKind, start=2):
            grid.addWidget(QLabel(kind.display_name), 0, col)
            self.checkboxes[kind] = {}

        for row, category in enumerate(Category, start=1):
            grid.addWidget(QLabel(category.value), row, 0)

            amount_input = QLineEdit(Money(self.settings.goal_amount(category)).dollars_and_cents)
            amount_input.textEdited.connect(
                lambda text, edit=amount_input: edit.setText(sanitize_amount_input(text))
            )
            grid.addWidget(amount_input, row, 1)
            self.amount_inputs[category] = amount_input

            for col, kind in enumerate(PeriodKind, start=2):
                checkbox = QCheckBox()
                checkbox.setChecked(self.settings.is_category_enabled(category, kind))
                grid.addWidget(checkbox, row, col)
                self.checkboxes[kind][category] = checkbox

    def goal_amounts(self) -> Dict[Category, int]:
        """读取输入的目标金额（分）"""
        return {
            category: Money.from_string(edit.text() or "0").cents
            for category, edit in self.amount_inputs.items()
        }

    def apply_toggles(self) -> None:
        """把勾选状态写回设置"""
        for kind, boxes in self.checkboxes.items():
            for category, checkbox in boxes.items():
                if checkbox.isChecked() != self.settings.is_category_enabled(category, kind):
                    self.settings.toggle_category(category, kind)
