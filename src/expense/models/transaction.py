"""交易数据模型"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple, Protocol

from expense.models.category import Category
from expense.models.money import Money
from expense.models.payment_method import PaymentMethod


class SpendingRecord(Protocol):
    """统计引擎读取的最小字段集合"""

    @property
    def date(self) -> datetime: ...

    @property
    def amount_cents(self) -> int: ...

    @property
    def category(self) -> Category: ...

    @property
    def payment_method(self) -> PaymentMethod: ...


@dataclass(slots=True)
class Transaction:
    """记账交易数据模型（日期为本地时间的 naive datetime）"""
    title: str = ""
    amount: Money = field(default_factory=Money.zero)
    category: Category = Category.OTHER
    date: datetime = field(default_factory=datetime.now)
    payment_method: PaymentMethod = PaymentMethod.CASH
    location: Optional[str] = None
    address: Optional[str] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: Optional[str] = None

    @property
    def amount_cents(self) -> int:
        return self.amount.cents

    @classmethod
    def from_row(cls, row: Tuple) -> "Transaction":
        """从数据库行创建Transaction对象"""
        return cls(
            id=uuid.UUID(row[0]),
            title=row[1] or "",
            amount=Money(row[2]),
            category=Category(row[3]),
            payment_method=PaymentMethod(row[4]),
            date=datetime.fromisoformat(row[5]),
            location=row[6],
            address=row[7],
            created_at=row[8] if len(row) > 8 else None,
        )

    def to_row(self) -> Tuple:
        """转换为数据库行（不含created_at）"""
        return (
            str(self.id),
            self.title,
            self.amount.cents,
            self.category.value,
            self.payment_method.value,
            self.date.isoformat(),
            self.location,
            self.address,
        )
