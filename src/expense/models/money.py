"""金额值类型"""
from dataclasses import dataclass

from expense.settings import format_money


@dataclass(frozen=True, order=True)
class Money:
    """以分为单位的不可变金额，不使用浮点数"""
    cents: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise TypeError(f"Money cents must be int, got {type(self.cents).__name__}")

    @classmethod
    def zero(cls) -> "Money":
        return cls(0)

    @classmethod
    def from_string(cls, text: str) -> "Money":
        """
        从十进制字符串构建金额

        小数部分缺省为 "00"，不足两位补零，超过两位直接截断：
        "12.5" -> 1250，"12.345" -> 1234，"7" -> 700
        """
        value = text.strip()
        negative = value.startswith("-")
        if negative or value.startswith("+"):
            value = value[1:]

        whole, _, fraction = value.partition(".")
        whole = whole or "0"
        fraction = (fraction[:2]).ljust(2, "0")
        if not whole.isdigit() or not fraction.isdigit():
            raise ValueError(f"Invalid amount: {text!r}")

        cents = int(whole) * 100 + int(fraction)
        return cls(-cents if negative else cents)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents + other.cents)

    def __radd__(self, other):
        # 支持 sum() 的默认起始值 0
        if other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents - other.cents)

    def __neg__(self) -> "Money":
        return Money(-self.cents)

    def __abs__(self) -> "Money":
        return Money(abs(self.cents))

    def __bool__(self) -> bool:
        return self.cents != 0

    @property
    def formatted(self) -> str:
        """货币格式（如 $1,234.56）"""
        return format_money(self.cents)

    @property
    def dollars_only(self) -> str:
        sign = "-" if self.cents < 0 else ""
        return f"{sign}{abs(self.cents) // 100}"

    @property
    def dollars_and_cents(self) -> str:
        sign = "-" if self.cents < 0 else ""
        dollars, cents = divmod(abs(self.cents), 100)
        return f"{sign}{dollars}.{cents:02d}"

    def __str__(self) -> str:
        return self.formatted


def sanitize_amount_input(value: str) -> str:
    """清理金额输入：只保留数字和小数点，最多一个小数点、两位小数"""
    filtered = "".join(ch for ch in value if ch.isdigit() or ch == ".")
    parts = filtered.split(".")

    if len(parts) > 2:
        return parts[0] + "." + parts[1][:2]
    if len(parts) == 2:
        return parts[0] + "." + parts[1][:2]
    return filtered
