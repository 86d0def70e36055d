import logging
import sqlite3
from typing import Optional, Final

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QTableView, QHeaderView, QLineEdit, QComboBox,
    QMessageBox, QTabWidget, QStatusBar
)
from PySide6.QtGui import QCloseEvent, QAction, QKeySequence, QShortcut

from expense.db.database import Database
from expense.models.category import Category
from expense.models.transaction import Transaction
from expense.services.statistics_service import StatisticsService
from expense.services.transaction_filter import TransactionFilter, filter_by_predicate
from expense.settings import APP_NAME
from expense.ui.overview_widget import OverviewWidget
from expense.ui.settings_dialog import SettingsDialog
from expense.ui.transaction_dialog import TransactionDialog
from expense.ui.transaction_model import TransactionTableModel

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger: Final = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """主窗口"""

    def __init__(self, db: Optional[Database] = None):
        super().__init__()
        self.db = db or Database()
        self.stats_service = StatisticsService(self.db)
        self.filter = TransactionFilter()

        # 记忆上一次使用的分类/支付方式
        self._last_category = None
        self._last_payment_method = None

        self.setWindowTitle(f"{APP_NAME} - 本地记账软件")
        self.resize(1100, 760)

        self._init_menu()
        self._init_ui()
        self._init_shortcuts()
        self._init_statusbar()

        self._refresh_all()

    def _init_menu(self) -> None:
        """初始化菜单栏"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("文件")

        new_action = QAction("新增交易", self)
        new_action.setShortcut(QKeySequence.New)
        new_action.triggered.connect(self._on_new_transaction)
        file_menu.addAction(new_action)

        file_menu.addSeparator()

        exit_action = QAction("退出", self)
        exit_action.setShortcut(QKeySequence.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menubar.addMenu("编辑")

        edit_action = QAction("编辑交易", self)
        edit_action.triggered.connect(self._on_edit_transaction)
        edit_menu.addAction(edit_action)

        delete_action = QAction("删除交易", self)
        delete_action.triggered.connect(self._on_delete_transaction)
        edit_menu.addAction(delete_action)

        settings_menu = menubar.addMenu("设置")

        settings_action = QAction("周期与预算目标", self)
        settings_action.triggered.connect(self._on_open_settings)
        settings_menu.addAction(settings_action)

    def _init_ui(self) -> None:
        """初始化界面"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)

        self.tab_widget = QTabWidget()

        # Tab 1: 支出总览
        self.overview = OverviewWidget(self.stats_service)
        self.tab_widget.addTab(self.overview, "📊 总览")

        # Tab 2: 交易记录
        transactions_widget = QWidget()
        transactions_layout = QVBoxLayout(transactions_widget)
        transactions_layout.setContentsMargins(10, 10, 10, 10)

        toolbar_layout = QHBoxLayout()

        new_btn = QPushButton("➕ 新增交易")
        new_btn.clicked.connect(self._on_new_transaction)
        toolbar_layout.addWidget(new_btn)

        edit_btn = QPushButton("✏️ 编辑")
        edit_btn.clicked.connect(self._on_edit_transaction)
        toolbar_layout.addWidget(edit_btn)

        delete_btn = QPushButton("🗑️ 删除")
        delete_btn.clicked.connect(self._on_delete_transaction)
        toolbar_layout.addWidget(delete_btn)

        toolbar_layout.addStretch()

        # 搜索与分类筛选
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("搜索标题、分类或支付方式")
        self.search_input.textChanged.connect(self._on_filter_changed)
        toolbar_layout.addWidget(self.search_input)

        self.category_filter = QComboBox()
        self.category_filter.addItem("全部分类", None)
        for category in Category:
            self.category_filter.addItem(category.value, category)
        self.category_filter.currentIndexChanged.connect(self._on_filter_changed)
        toolbar_layout.addWidget(self.category_filter)

        refresh_btn = QPushButton("🔄 刷新")
        refresh_btn.clicked.connect(self._refresh_all)
        toolbar_layout.addWidget(refresh_btn)

        transactions_layout.addLayout(toolbar_layout)

        self.transaction_model = TransactionTableModel()
        self.transaction_view = QTableView()
        self.transaction_view.setModel(self.transaction_model)
        self.transaction_view.setSelectionBehavior(QTableView.SelectRows)
        self.transaction_view.setSelectionMode(QTableView.SingleSelection)
        self.transaction_view.setAlternatingRowColors(True)
        self.transaction_view.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.transaction_view.doubleClicked.connect(self._on_edit_transaction)

        transactions_layout.addWidget(self.transaction_view)

        self.tab_widget.addTab(transactions_widget, "📝 交易记录")

        self.tab_widget.currentChanged.connect(self._on_tab_changed)

        layout.addWidget(self.tab_widget)

    def _init_shortcuts(self) -> None:
        """初始化键盘快捷键"""
        delete_shortcut = QShortcut(QKeySequence.Delete, self.transaction_view)
        delete_shortcut.activated.connect(self._on_delete_transaction)

        enter_shortcut = QShortcut(QKeySequence("Return"), self.transaction_view)
        enter_shortcut.activated.connect(self._on_edit_transaction)

    def _init_statusbar(self) -> None:
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)
        self.statusbar.showMessage("就绪")

    def _on_tab_changed(self, index: int) -> None:
        if index == 0:
            self.overview.refresh()

    def _on_filter_changed(self) -> None:
        category = self.category_filter.currentData()
        self.filter = TransactionFilter(
            search_text=self.search_input.text().strip(),
            categories=frozenset([Category(category)]) if category is not None else frozenset(),
        )
        self._refresh_transactions()

    def _refresh_transactions(self) -> int:
        transactions = filter_by_predicate(self.db.get_all_transactions(), self.filter)
        self.transaction_model.set_transactions(transactions)
        return len(transactions)

    def _refresh_all(self) -> None:
        """刷新所有数据"""
        try:
            count = self._refresh_transactions()
            self.overview.refresh()
            self.statusbar.showMessage(f"已加载 {count} 条交易记录", 3000)
        except sqlite3.Error as e:
            logger.exception("刷新数据失败")
            QMessageBox.critical(self, "错误", f"加载数据失败: {e}")

    def _get_selected_transaction(self) -> Optional[Transaction]:
        """获取当前选中的交易"""
        indexes = self.transaction_view.selectedIndexes()
        if not indexes:
            return None
        return self.transaction_model.get_transaction(indexes[0].row())

    def _on_new_transaction(self) -> None:
        dialog = TransactionDialog(
            self,
            last_category=self._last_category,
            last_payment_method=self._last_payment_method
        )

        if dialog.exec() == TransactionDialog.Accepted:
            tx = dialog.get_result()
            if tx:
                try:
                    self.db.add_transaction(tx)
                    self._last_category = tx.category
                    self._last_payment_method = tx.payment_method
                    self._refresh_all()
                    self.statusbar.showMessage("交易已保存", 3000)
                except sqlite3.Error as e:
                    logger.exception("保存交易失败")
                    QMessageBox.critical(self, "保存失败", f"数据库错误: {e}")

    def _on_edit_transaction(self) -> None:
        tx = self._get_selected_transaction()
        if not tx:
            QMessageBox.information(self, "提示", "请先选择要编辑的交易")
            return

        dialog = TransactionDialog(self, transaction=tx)

        if dialog.exec() == TransactionDialog.Accepted:
            updated_tx = dialog.get_result()
            if updated_tx:
                try:
                    self.db.update_transaction(updated_tx)
                    self._refresh_all()
                    self.statusbar.showMessage("交易已更新", 3000)
                except sqlite3.Error as e:
                    logger.exception("更新交易失败")
                    QMessageBox.critical(self, "更新失败", f"数据库错误: {e}")

    def _on_delete_transaction(self) -> None:
        tx = self._get_selected_transaction()
        if not tx:
            QMessageBox.information(self, "提示", "请先选择要删除的交易")
            return

        # 二次确认
        reply = QMessageBox.question(
            self,
            "确认删除",
            f"确定要删除这笔交易吗？\n\n"
            f"时间: {tx.date:%Y-%m-%d %H:%M}\n"
            f"标题: {tx.title}\n"
            f"金额: {tx.amount.formatted}\n"
            f"分类: {tx.category.value}\n\n"
            f"此操作无法撤销！",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No
        )

        if reply == QMessageBox.Yes:
            try:
                self.db.delete_transaction(tx.id)
                self._refresh_all()
                self.statusbar.showMessage("交易已删除", 3000)
            except sqlite3.Error as e:
                logger.exception("删除交易失败")
                QMessageBox.critical(self, "删除失败", f"数据库错误: {e}")

    def _on_open_settings(self) -> None:
        """打开设置对话框"""
        dialog = SettingsDialog(self.db, self.stats_service.settings, self)
        if dialog.exec() == SettingsDialog.Accepted:
            logger.info("用户设置已更新")
            self.overview.refresh()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.db.close()
        event.accept()
