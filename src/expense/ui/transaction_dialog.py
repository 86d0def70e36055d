"""交易编辑对话框模块"""
import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Final

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLineEdit, QComboBox, QDateTimeEdit,
    QPushButton, QMessageBox
)
from PySide6.QtCore import QDate, QDateTime, QTime

from expense.models.category import Category
from expense.models.money import Money, sanitize_amount_input
from expense.models.payment_method import PaymentMethod
from expense.models.transaction import Transaction
from expense.settings import MAX_AMOUNT_CENTS, CURRENCY_SYMBOL, format_money

logger: Final = logging.getLogger(__name__)


class TransactionDialog(QDialog):
    """交易编辑对话框（新增/编辑）"""

    def __init__(
        self,
        parent=None,
        transaction: Optional[Transaction] = None,
        last_category: Optional[Category] = None,
        last_payment_method: Optional[PaymentMethod] = None
    ):
        super().__init__(parent)
        self.transaction = transaction
        self.last_category = last_category
        self.last_payment_method = last_payment_method
        self.result_transaction: Optional[Transaction] = None

        self._is_edit_mode = transaction is not None
        self._init_ui()

        if self._is_edit_mode:
            self._load_transaction_data()

    def _init_ui(self) -> None:
        title = "编辑交易" if self._is_edit_mode else "新增交易"
        self.setWindowTitle(title)
        self.setMinimumWidth(400)

        layout = QVBoxLayout(self)
        form_layout = QFormLayout()
        form_layout.setSpacing(12)

        # 标题
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("如：午餐")
        form_layout.addRow("标题:", self.title_input)

        # 金额（输入时即时清理非法字符）
        self.amount_input = QLineEdit()
        self.amount_input.setPlaceholderText(f"请输入金额 ({CURRENCY_SYMBOL})")
        self.amount_input.textEdited.connect(self._on_amount_edited)
        form_layout.addRow(f"金额 ({CURRENCY_SYMBOL}):", self.amount_input)

        # 日期时间
        self.date_input = QDateTimeEdit()
        self.date_input.setCalendarPopup(True)
        self.date_input.setDisplayFormat("yyyy-MM-dd HH:mm")
        self.date_input.setDateTime(QDateTime.currentDateTime())
        form_layout.addRow("时间:", self.date_input)

        self.category_combo = QComboBox()
        for category in Category:
            self.category_combo.addItem(category.value, category)
        form_layout.addRow("分类:", self.category_combo)

        self.payment_combo = QComboBox()
        for method in PaymentMethod:
            self.payment_combo.addItem(method.value, method)
        form_layout.addRow("支付方式:", self.payment_combo)

        # 地点
        self.location_input = QLineEdit()
        self.location_input.setPlaceholderText("可选")
        form_layout.addRow("地点:", self.location_input)

        layout.addLayout(form_layout)

        # 按钮
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

        # 新增模式沿用上次的分类/支付方式
        if not self._is_edit_mode:
            if self.last_category is not None:
                self.category_combo.setCurrentIndex(self.category_combo.findData(self.last_category))
            if self.last_payment_method is not None:
                self.payment_combo.setCurrentIndex(self.payment_combo.findData(self.last_payment_method))

    def _on_amount_edited(self, text: str) -> None:
        cleaned = sanitize_amount_input(text)
        if cleaned != text:
            self.amount_input.setText(cleaned)

    def _load_transaction_data(self) -> None:
        """加载交易数据到表单"""
        tx = self.transaction
        self.title_input.setText(tx.title)
        self.amount_input.setText(tx.amount.dollars_and_cents)
        self.date_input.setDateTime(QDateTime(
            QDate(tx.date.year, tx.date.month, tx.date.day), QTime(tx.date.hour, tx.date.minute)
        ))
        self.category_combo.setCurrentIndex(self.category_combo.findData(tx.category))
        self.payment_combo.setCurrentIndex(self.payment_combo.findData(tx.payment_method))
        self.location_input.setText(tx.location or "")

    def _on_save(self) -> None:
        """保存按钮点击"""
        try:
            amount_str = self.amount_input.text().strip()
            if not amount_str:
                raise ValueError("请输入金额")

            try:
                amount = Money.from_string(amount_str)
            except ValueError:
                raise ValueError("金额格式不正确")

            if amount.cents <= 0:
                raise ValueError("金额必须为正数")
            if amount.cents > MAX_AMOUNT_CENTS:
                raise ValueError(f"金额过大（上限：{format_money(MAX_AMOUNT_CENTS)}）")

            title = self.title_input.text().strip()
            if not title:
                raise ValueError("请输入标题")

            fields = dict(
                title=title,
                amount=amount,
                category=Category(self.category_combo.currentData()),
                payment_method=PaymentMethod(self.payment_combo.currentData()),
                date=self._selected_datetime(),
                location=self.location_input.text().strip() or None,
            )
            if self._is_edit_mode:
                self.result_transaction = replace(self.transaction, **fields)
            else:
                self.result_transaction = Transaction(**fields)

            self.accept()

        except ValueError as e:
            logger.debug("交易输入校验失败: %s", e)
            QMessageBox.warning(self, "输入错误", str(e))

    def _selected_datetime(self) -> datetime:
        """所选时间（精确到分钟）"""
        qdate = self.date_input.date()
        qtime = self.date_input.time()
        return datetime(qdate.year(), qdate.month(), qdate.day(), qtime.hour(), qtime.minute())

    def get_result(self) -> Optional[Transaction]:
        """获取编辑结果"""
        return self.result_transaction
