"""交易筛选模块"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple, TypeVar, Union

from expense.models.category import Category
from expense.models.payment_method import PaymentMethod
from expense.models.period import PeriodKind, PeriodBoundaryConfig, Interval
from expense.models.transaction import SpendingRecord
from expense.services.period_service import resolve_interval

T = TypeVar("T", bound=SpendingRecord)


def filter_by_interval(transactions: Iterable[T], interval: Interval) -> List[T]:
    """选出日期落在 [start, end) 内的交易，保持原有顺序"""
    return [tx for tx in transactions if interval.contains(tx.date)]


def filter_by_period(
    transactions: Iterable[T],
    kind: PeriodKind,
    reference: datetime,
    config: PeriodBoundaryConfig,
) -> List[T]:
    """选出参考时间所在周期内的交易"""
    return filter_by_interval(transactions, resolve_interval(kind, reference, config))


@dataclass(frozen=True)
class TransactionFilter:
    """
    交易列表筛选条件

    各条件之间为“与”关系；空字符串、空集合、None 表示该条件不生效。
    date_range 两端均包含。
    """
    search_text: str = ""
    categories: FrozenSet[Category] = field(default_factory=frozenset)
    payment_methods: FrozenSet[PaymentMethod] = field(default_factory=frozenset)
    date_range: Optional[Tuple[datetime, datetime]] = None

    @property
    def is_active(self) -> bool:
        return bool(
            self.search_text
            or self.categories
            or self.payment_methods
            or self.date_range is not None
        )

    @property
    def active_filter_count(self) -> int:
        """生效的筛选项数量（不含搜索文本）"""
        return sum([
            bool(self.categories),
            bool(self.payment_methods),
            self.date_range is not None,
        ])

    def matches(self, transaction) -> bool:
        if self.search_text:
            needle = self.search_text.lower()
            haystacks = (
                getattr(transaction, "title", "") or "",
                transaction.category.value,
                transaction.payment_method.value,
            )
            if not any(needle in text.lower() for text in haystacks):
                return False

        if self.categories and transaction.category not in self.categories:
            return False

        if self.payment_methods and transaction.payment_method not in self.payment_methods:
            return False

        if self.date_range is not None:
            start, end = self.date_range
            if transaction.date < start or transaction.date > end:
                return False

        return True

    def __call__(self, transaction) -> bool:
        return self.matches(transaction)

    def with_search(self, text: str) -> "TransactionFilter":
        return replace(self, search_text=text)

    def cleared(self) -> "TransactionFilter":
        return TransactionFilter()


def filter_by_predicate(
    transactions: Iterable[T],
    predicate: Union[TransactionFilter, Callable[[T], bool]],
) -> List[T]:
    """按筛选条件选出交易，保持原有顺序"""
    return [tx for tx in transactions if predicate(tx)]
