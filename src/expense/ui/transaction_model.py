"""交易表格数据模型模块"""
from typing import List, Optional, Any, Final
from enum import IntEnum

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor

from expense.models.transaction import Transaction
from expense.ui.theme import color_for


class TransactionColumn(IntEnum):
    """交易表格列定义"""
    DATE = 0
    TITLE = 1
    AMOUNT = 2
    CATEGORY = 3
    PAYMENT_METHOD = 4
    LOCATION = 5


COLUMN_HEADERS: Final = ["日期", "标题", "金额", "分类", "支付方式", "地点"]


class TransactionTableModel(QAbstractTableModel):
    """交易表格数据模型（Model/View架构）"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._transactions: List[Transaction] = []

    def set_transactions(self, transactions: List[Transaction]) -> None:
        self.beginResetModel()
        self._transactions = transactions
        self.endResetModel()

    def get_transaction(self, row: int) -> Optional[Transaction]:
        """根据行号获取交易对象"""
        if 0 <= row < len(self._transactions):
            return self._transactions[row]
        return None

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._transactions)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(TransactionColumn)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._transactions)):
            return None

        tx = self._transactions[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == TransactionColumn.DATE:
                return tx.date.strftime("%Y-%m-%d %H:%M")
            elif col == TransactionColumn.TITLE:
                return tx.title
            elif col == TransactionColumn.AMOUNT:
                return tx.amount.formatted
            elif col == TransactionColumn.CATEGORY:
                return tx.category.value
            elif col == TransactionColumn.PAYMENT_METHOD:
                return tx.payment_method.value
            elif col == TransactionColumn.LOCATION:
                return tx.location or ""

        elif role == Qt.TextAlignmentRole:
            return Qt.AlignCenter

        elif role == Qt.ForegroundRole:
            if col == TransactionColumn.CATEGORY:
                return QColor(color_for(tx.category))

        elif role == Qt.UserRole:
            return tx

        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole) -> Any:
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            if 0 <= section < len(COLUMN_HEADERS):
                return COLUMN_HEADERS[section]
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlags:
        return Qt.ItemIsEnabled | Qt.ItemIsSelectable
