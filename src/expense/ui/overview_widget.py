"""支出总览页面组件模块"""
from datetime import datetime, time
from typing import List, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame,
    QComboBox, QDateEdit, QPushButton, QTableWidget,
    QTableWidgetItem, QHeaderView, QGroupBox, QGridLayout, QProgressBar
)
from PySide6.QtCore import Qt, QDate, QRectF
from PySide6.QtGui import QPainter, QColor, QPen, QBrush

from expense.models.analysis import SpendingBreakdown, TrendSeries, GoalSummary
from expense.models.money import Money
from expense.models.period import PeriodKind
from expense.services.statistics_service import StatisticsService
from expense.ui.theme import (
    COLOR_OVER_BUDGET, COLOR_UNDER_BUDGET, COLOR_TREND_BAR,
    color_for, get_text_color, get_text_color_str, get_secondary_text_color,
    get_card_style, get_progress_color
)


class SummaryCard(QFrame):
    """数据卡片组件"""

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setFrameStyle(QFrame.StyledPanel | QFrame.Raised)
        self.setStyleSheet(get_card_style())

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(8)

        self.title_label = QLabel(title)
        self.title_label.setStyleSheet(f"color: {get_secondary_text_color()}; font-size: 13px;")
        layout.addWidget(self.title_label)

        self.value_label = QLabel(Money.zero().formatted)
        layout.addWidget(self.value_label)
        self.set_value(Money.zero())

    def set_value(self, value: Money, color: Optional[str] = None) -> None:
        """设置主数值"""
        if color is None:
            color = get_text_color_str()
        self.value_label.setText(value.formatted)
        self.value_label.setStyleSheet(f"color: {color}; font-size: 24px; font-weight: bold;")


class PieChartWidget(QWidget):
    """饼状图组件"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._data: List[SpendingBreakdown] = []
        self._total = 0
        self.setMinimumHeight(220)

    def set_data(self, data: List[SpendingBreakdown]) -> None:
        """设置数据（汇总结果已排除零值分组）"""
        self._data = data
        self._total = sum(item.amount_cents for item in data)
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        text_color = get_text_color()

        if not self._data or self._total == 0:
            painter.setPen(text_color)
            painter.drawText(self.rect(), Qt.AlignCenter, "该周期没有支出记录")
            return

        margin = 20
        legend_width = 170
        chart_size = min(self.width() - legend_width - margin * 3, self.height() - margin * 2)
        if chart_size < 50:
            return

        radius = chart_size / 2
        rect = QRectF(margin, margin, radius * 2, radius * 2)

        # 从顶部开始（Qt使用1/16度）
        start_angle = 90 * 16
        for item in self._data:
            span_angle = int(item.amount_cents / self._total * 360 * 16)
            color = QColor(color_for(item.key))
            painter.setBrush(QBrush(color))
            painter.setPen(QPen(color.darker(110), 1))
            painter.drawPie(rect, start_angle, -span_angle)
            start_angle -= span_angle

        legend_x = self.width() - legend_width - margin
        line_height = 22
        for i, item in enumerate(self._data):
            y = margin + i * line_height
            if y > self.height() - margin:
                break
            painter.setBrush(QBrush(QColor(color_for(item.key))))
            painter.setPen(Qt.NoPen)
            painter.drawRect(int(legend_x), int(y), 12, 12)
            painter.setPen(text_color)
            painter.drawText(int(legend_x + 18), int(y + 11), f"{item.key.value} ({item.percentage}%)")


class TrendChartWidget(QWidget):
    """支出趋势柱状图组件"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._series: Optional[TrendSeries] = None
        self.setMinimumHeight(220)
        self.setMinimumWidth(300)

    def set_series(self, series: TrendSeries) -> None:
        self._series = series
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        text_color = get_text_color()

        if self._series is None or self._series.total.cents == 0:
            painter.setPen(text_color)
            painter.drawText(self.rect(), Qt.AlignCenter, "该时间段没有支出记录")
            return

        margin_left = 60
        margin_right = 20
        margin_top = 20
        margin_bottom = 30
        chart_width = self.width() - margin_left - margin_right
        chart_height = self.height() - margin_top - margin_bottom
        if chart_width <= 0 or chart_height <= 0:
            return

        points = self._series.points
        max_value = max(max(point.amount_cents for point in points), 1) * 1.1
        slot = chart_width / len(points)
        bar_width = slot * 0.6

        # Y轴网格线和标签
        for i in range(5):
            y = margin_top + chart_height - (i / 4 * chart_height)
            grid_color = QColor(text_color)
            grid_color.setAlpha(30)
            painter.setPen(QPen(grid_color, 1, Qt.DashLine))
            painter.drawLine(margin_left, int(y), self.width() - margin_right, int(y))
            painter.setPen(text_color)
            painter.drawText(5, int(y + 4), Money(int(max_value * i / 4)).formatted.split(".")[0])

        bar_color = QColor(COLOR_TREND_BAR)
        for i, point in enumerate(points):
            x = margin_left + i * slot + (slot - bar_width) / 2
            height = point.amount_cents / max_value * chart_height
            painter.setBrush(QBrush(bar_color))
            painter.setPen(Qt.NoPen)
            painter.drawRoundedRect(QRectF(x, margin_top + chart_height - height, bar_width, height), 4, 4)
            painter.setPen(text_color)
            painter.drawText(
                QRectF(margin_left + i * slot, margin_top + chart_height + 4, slot, margin_bottom - 4),
                Qt.AlignHCenter | Qt.AlignTop, point.label
            )


class GoalProgressWidget(QWidget):
    """预算目标进度列表"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._layout = QGridLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self.total_label = QLabel("")
        self.status_labels: List[QLabel] = []

    def set_summary(self, summary: Optional[GoalSummary]) -> None:
        while self._layout.count() > 0:
            item = self._layout.takeAt(0)
            if item.widget() and item.widget() is not self.total_label:
                item.widget().deleteLater()
        self.status_labels = []

        if summary is None:
            self.total_label.setText("该周期未开启预算目标")
            self._layout.addWidget(self.total_label, 0, 0, 1, 3)
            return

        self.total_label.setText(
            f"{summary.total_spent.formatted} / {summary.total_budget.formatted}"
            f"（已用 {summary.progress_percent}%）"
        )
        color = COLOR_OVER_BUDGET if summary.overall_progress > 0.8 else get_text_color_str()
        self.total_label.setStyleSheet(f"font-weight: bold; color: {color};")
        self._layout.addWidget(self.total_label, 0, 0, 1, 3)

        for row, goal in enumerate(summary.per_category, start=1):
            self._layout.addWidget(QLabel(goal.category.value), row, 0)

            bar = QProgressBar()
            bar.setRange(0, 1000)
            bar.setValue(int(goal.progress_ratio * 1000))
            bar.setTextVisible(False)
            bar.setStyleSheet(
                f"QProgressBar::chunk {{ background-color: {get_progress_color(goal.is_over_budget)}; }}"
            )
            self._layout.addWidget(bar, row, 1)

            status = QLabel(goal.status_text)
            status.setStyleSheet(
                f"color: {COLOR_OVER_BUDGET if goal.is_over_budget else COLOR_UNDER_BUDGET};"
            )
            self._layout.addWidget(status, row, 2)
            self.status_labels.append(status)


class OverviewWidget(QWidget):
    """支出总览页面"""

    def __init__(self, stats_service: StatisticsService, parent=None):
        super().__init__(parent)
        self.stats_service = stats_service
        self._init_ui()
        self.refresh()

    def _init_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)

        # 周期与参考日期
        filter_layout = QHBoxLayout()
        filter_layout.addWidget(QLabel("周期:"))
        self.period_combo = QComboBox()
        for kind in PeriodKind:
            self.period_combo.addItem(kind.display_name, kind)
        self.period_combo.currentIndexChanged.connect(self.refresh)
        filter_layout.addWidget(self.period_combo)

        filter_layout.addWidget(QLabel("日期:"))
        self.reference_date = QDateEdit()
        self.reference_date.setCalendarPopup(True)
        self.reference_date.setDate(QDate.currentDate())
        self.reference_date.dateChanged.connect(self.refresh)
        filter_layout.addWidget(self.reference_date)

        refresh_btn = QPushButton("刷新")
        refresh_btn.clicked.connect(self.refresh)
        filter_layout.addWidget(refresh_btn)
        filter_layout.addStretch()

        self.period_label = QLabel("")
        self.period_label.setStyleSheet(f"font-size: 16px; font-weight: bold; color: {get_text_color_str()};")
        filter_layout.addWidget(self.period_label)
        layout.addLayout(filter_layout)

        # 今日/本周/本月卡片
        cards_layout = QHBoxLayout()
        cards_layout.setSpacing(16)
        self.today_card = SummaryCard("今日支出")
        self.week_card = SummaryCard("本周支出")
        self.month_card = SummaryCard("本月支出")
        for card in (self.today_card, self.week_card, self.month_card):
            cards_layout.addWidget(card)
        layout.addLayout(cards_layout)

        charts_layout = QHBoxLayout()

        # 分组明细
        breakdown_group = QGroupBox("支出明细")
        breakdown_layout = QVBoxLayout(breakdown_group)
        self.breakdown_combo = QComboBox()
        self.breakdown_combo.addItem("按分类", "category")
        self.breakdown_combo.addItem("按支付方式", "payment_method")
        self.breakdown_combo.currentIndexChanged.connect(self.refresh)
        breakdown_layout.addWidget(self.breakdown_combo)
        self.breakdown_chart = PieChartWidget()
        breakdown_layout.addWidget(self.breakdown_chart)
        self.breakdown_table = QTableWidget()
        self.breakdown_table.setColumnCount(3)
        self.breakdown_table.setHorizontalHeaderLabels(["名称", "金额", "占比"])
        self.breakdown_table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.breakdown_table.setMaximumHeight(160)
        breakdown_layout.addWidget(self.breakdown_table)
        charts_layout.addWidget(breakdown_group, 1)

        # 趋势图
        trend_group = QGroupBox("支出趋势")
        trend_layout = QVBoxLayout(trend_group)
        self.trend_info_label = QLabel("")
        trend_layout.addWidget(self.trend_info_label)
        self.trend_chart = TrendChartWidget()
        trend_layout.addWidget(self.trend_chart)
        charts_layout.addWidget(trend_group, 1)

        layout.addLayout(charts_layout)

        # 预算目标
        goal_group = QGroupBox("预算目标")
        goal_layout = QVBoxLayout(goal_group)
        self.goal_widget = GoalProgressWidget()
        goal_layout.addWidget(self.goal_widget)
        layout.addWidget(goal_group)

    def selected_kind(self) -> PeriodKind:
        return PeriodKind(self.period_combo.currentData() or PeriodKind.DAILY)

    def selected_reference(self) -> datetime:
        """参考时间：所选日期的当前时刻（非今天则取当天中午）"""
        qdate = self.reference_date.date()
        day = datetime(qdate.year(), qdate.month(), qdate.day())
        now = datetime.now()
        if day.date() == now.date():
            return now
        return datetime.combine(day.date(), time(12))

    def refresh(self) -> None:
        """刷新总览数据"""
        kind = self.selected_kind()
        reference = self.selected_reference()
        service = self.stats_service

        self.period_label.setText(service.get_period_display_name(kind, reference))

        summary = service.get_period_summary(reference)
        self.today_card.set_value(summary.today)
        self.week_card.set_value(summary.this_week)
        self.month_card.set_value(summary.this_month)

        if self.breakdown_combo.currentData() == "payment_method":
            breakdown = service.get_payment_method_breakdown(kind, reference)
        else:
            breakdown = service.get_category_breakdown(kind, reference)
        self.breakdown_chart.set_data(breakdown)
        self.breakdown_table.setRowCount(len(breakdown))
        for i, item in enumerate(breakdown):
            self.breakdown_table.setItem(i, 0, QTableWidgetItem(item.key.value))
            self.breakdown_table.setItem(i, 1, QTableWidgetItem(item.formatted_amount))
            self.breakdown_table.setItem(i, 2, QTableWidgetItem(f"{item.percentage}%"))

        series = service.get_trend_series(kind, reference)
        arrow = "▲" if series.comparison.is_increase else "▼"
        self.trend_info_label.setText(
            f"平均: {series.average_spending.formatted}    {arrow} {series.comparison.percentage}%"
        )
        self.trend_chart.set_series(series)

        if service.settings.should_show_goals(kind):
            self.goal_widget.set_summary(service.get_goal_summary(kind, reference))
        else:
            self.goal_widget.set_summary(None)
