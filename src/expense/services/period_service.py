"""周期边界计算服务模块"""
import logging
from calendar import monthrange
from datetime import datetime, time, timedelta
from typing import Final, Tuple

from expense.models.period import PeriodKind, PeriodBoundaryConfig, Interval

logger: Final = logging.getLogger(__name__)


def days_in_month(year: int, month: int) -> int:
    """某月的天数"""
    _, last_day = monthrange(year, month)
    return last_day


def add_months(year: int, month: int, n: int) -> Tuple[int, int]:
    """月份加减，正确处理跨年"""
    index = year * 12 + (month - 1) + n
    return index // 12, index % 12 + 1


def month_start(year: int, month: int, start_day: int, tzinfo=None) -> datetime:
    """某月的周期起点：起始日超过当月天数时取当月最后一天"""
    day = min(start_day, days_in_month(year, month))
    return datetime(year, month, day, tzinfo=tzinfo)


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time(0), tzinfo=moment.tzinfo)


def _weekday_from_sunday(moment: datetime) -> int:
    """星期几，0 = 星期日 .. 6 = 星期六"""
    return (moment.weekday() + 1) % 7


def resolve_interval(kind: PeriodKind, reference: datetime, config: PeriodBoundaryConfig) -> Interval:
    """
    计算包含参考时间的周期区间 [start, end)

    规则：
    - 日：参考日期当天 daily_start_hour 点起算 24 小时；
      参考时间早于起始小时则属于前一天的周期
    - 周：参考日期零点往前退 (weekday - weekly_start_day + 7) % 7 天，共 7 天
    - 月：当月 monthly_start_day（超出天数取月末）零点不晚于参考时间则为起点，
      否则取上月同一构造；终点为起点下一个月的同一构造

    示例（monthly_start_day=15）：
    - 参考 2024-03-10 -> [2024-02-15, 2024-03-15)
    - 参考 2024-03-20 -> [2024-03-15, 2024-04-15)

    Raises:
        InvalidConfiguration: 边界设置超出有效范围
    """
    config.validate()

    if kind == PeriodKind.DAILY:
        start = _start_of_day(reference) + timedelta(hours=config.daily_start_hour)
        if reference < start:
            start -= timedelta(days=1)
        interval = Interval(start, start + timedelta(days=1))
    elif kind == PeriodKind.WEEKLY:
        diff = (_weekday_from_sunday(reference) - config.weekly_start_day + 7) % 7
        start = _start_of_day(reference) - timedelta(days=diff)
        interval = Interval(start, start + timedelta(days=7))
    elif kind == PeriodKind.MONTHLY:
        tz = reference.tzinfo
        start = month_start(reference.year, reference.month, config.monthly_start_day, tz)
        if start > reference:
            year, month = add_months(reference.year, reference.month, -1)
            start = month_start(year, month, config.monthly_start_day, tz)
        end_year, end_month = add_months(start.year, start.month, 1)
        interval = Interval(start, month_start(end_year, end_month, config.monthly_start_day, tz))
    else:
        raise ValueError(f"Unknown period kind: {kind!r}")

    logger.debug("resolve %s %s -> [%s, %s)", kind.value, reference, interval.start, interval.end)
    return interval


def shift_interval(
    kind: PeriodKind, interval: Interval, config: PeriodBoundaryConfig, steps: int
) -> Interval:
    """
    将周期区间平移 steps 个周期单位（负数向前）

    月度平移对每个月重新应用起始日截断规则，而不是简单加减 30 天
    """
    if kind == PeriodKind.DAILY:
        start = interval.start + timedelta(days=steps)
        return Interval(start, start + timedelta(days=1))
    if kind == PeriodKind.WEEKLY:
        start = interval.start + timedelta(days=7 * steps)
        return Interval(start, start + timedelta(days=7))
    if kind == PeriodKind.MONTHLY:
        config.validate()
        tz = interval.start.tzinfo
        # 以区间起点所在月为基准（起点总在该月的截断起始日）
        year, month = add_months(interval.start.year, interval.start.month, steps)
        end_year, end_month = add_months(year, month, 1)
        return Interval(
            month_start(year, month, config.monthly_start_day, tz),
            month_start(end_year, end_month, config.monthly_start_day, tz),
        )
    raise ValueError(f"Unknown period kind: {kind!r}")


def previous_interval(kind: PeriodKind, interval: Interval, config: PeriodBoundaryConfig) -> Interval:
    """上一个周期"""
    return shift_interval(kind, interval, config, -1)


def next_interval(kind: PeriodKind, interval: Interval, config: PeriodBoundaryConfig) -> Interval:
    """下一个周期"""
    return shift_interval(kind, interval, config, 1)


def format_month_day(moment: datetime) -> str:
    """如 "Jan 8" """
    return f"{moment.strftime('%b')} {moment.day}"


def period_display_name(kind: PeriodKind, reference: datetime, config: PeriodBoundaryConfig) -> str:
    """
    周期显示名称

    - 日："Jan 10, 2024"
    - 周："Jan 8 - Jan 14"（结束日为区间内最后一天）
    - 月："January 2024"（以区间起点所在月命名）
    """
    interval = resolve_interval(kind, reference, config)
    if kind == PeriodKind.DAILY:
        return f"{format_month_day(interval.start)}, {interval.start.year}"
    if kind == PeriodKind.WEEKLY:
        last_day = interval.end - timedelta(days=1)
        return f"{format_month_day(interval.start)} - {format_month_day(last_day)}"
    return interval.start.strftime("%B %Y")
