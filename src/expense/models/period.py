"""统计周期相关模型"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from fractions import Fraction

from expense.settings import (
    DEFAULT_DAILY_START_HOUR, DEFAULT_WEEKLY_START_DAY, DEFAULT_MONTHLY_START_DAY,
    DEFAULT_TREND_PERIODS
)


class InvalidConfiguration(ValueError):
    """周期边界设置超出有效范围"""


class PeriodKind(str, Enum):
    """统计周期粒度"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def multiplier(self) -> Fraction:
        """相对月度基准的目标缩放系数：日 = 1/30，周 = 1/4，月 = 1"""
        return _MULTIPLIERS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def default_trend_periods(self) -> int:
        return DEFAULT_TREND_PERIODS[self.value]


_MULTIPLIERS = {
    PeriodKind.DAILY: Fraction(1, 30),
    PeriodKind.WEEKLY: Fraction(1, 4),
    PeriodKind.MONTHLY: Fraction(1),
}


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise InvalidConfiguration(f"{name} must be an integer in [{low}, {high}], got {value!r}")


@dataclass(frozen=True)
class PeriodBoundaryConfig:
    """
    周期边界设置

    - daily_start_hour: 每日起始小时 0..23
    - weekly_start_day: 每周起始日 0..6（0 = 星期日）
    - monthly_start_day: 每月起始日 1..31，超过当月天数时取当月最后一天
    """
    daily_start_hour: int = DEFAULT_DAILY_START_HOUR
    weekly_start_day: int = DEFAULT_WEEKLY_START_DAY
    monthly_start_day: int = DEFAULT_MONTHLY_START_DAY

    def validate(self) -> "PeriodBoundaryConfig":
        """校验取值范围，非法时抛出 InvalidConfiguration"""
        _check_range("daily_start_hour", self.daily_start_hour, 0, 23)
        _check_range("weekly_start_day", self.weekly_start_day, 0, 6)
        _check_range("monthly_start_day", self.monthly_start_day, 1, 31)
        return self


@dataclass(frozen=True)
class Interval:
    """半开区间 [start, end)"""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    def __contains__(self, moment: datetime) -> bool:
        return self.contains(moment)
