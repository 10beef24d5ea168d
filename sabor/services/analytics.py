"""
Finance Analytics

Turns the flat financial record log into the admin finance dashboard:
period-filtered records, revenue/expense totals and four chart series.

The daily (last 7 days) and monthly (last 12 months) series use their own
fixed windows, but only see records that already passed the period
filter. A ``semana`` filter therefore leaves the older months of the
monthly chart empty.

Payment method and size are inferred from the record description, not
from the order itself. Order revenue descriptions look like
``"Marmita media (Salada) - Ana"``, so the size buckets fill up while the
payment buckets usually fall into ``Outros``.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Union

from sabor.schemas import (
    ChartData,
    DailyPoint,
    FinancePeriod,
    FinancesReport,
    FinancialRecord,
    MonthlyPoint,
    PaymentMethodSlice,
    RecordType,
    SizeSlice,
)

PT_MONTHS = ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"]

# First match wins.
PAYMENT_METHOD_TOKENS = [("PIX", "PIX"), ("Cartão", "Cartão"), ("Dinheiro", "Dinheiro")]
SIZE_TOKENS = [("pequena", "Pequena"), ("media", "Média"), ("grande", "Grande")]
FALLBACK_BUCKET = "Outros"


def normalize_period(period: Union[FinancePeriod, str, None]) -> FinancePeriod:
    """Unknown or missing periods behave like mes."""
    try:
        return FinancePeriod(period)
    except ValueError:
        return FinancePeriod.MES


def resolve_period_start(period: Union[FinancePeriod, str], now: datetime) -> datetime:
    """
    Lower bound of the period filter.

    semana: now minus 7 days; mes: first day of the month; ano: first day
    of the year.
    """
    period = normalize_period(period)

    if period == FinancePeriod.SEMANA:
        return now - timedelta(days=7)
    if period == FinancePeriod.ANO:
        return datetime(now.year, 1, 1)
    return datetime(now.year, now.month, 1)


def _month_start(year: int, month: int, back: int) -> datetime:
    """First day of the month ``back`` months before year/month."""
    y, m = divmod(year * 12 + (month - 1) - back, 12)
    return datetime(y, m + 1, 1)


def _bucket(description: str, tokens: list[tuple[str, str]]) -> str:
    for token, label in tokens:
        if token in description:
            return label
    return FALLBACK_BUCKET


def build_chart_data(records: list[FinancialRecord], now: datetime) -> ChartData:
    """Aggregate already period-filtered records into the four chart series."""
    revenue = [r for r in records if r.type == RecordType.ENTRADA]

    daily = []
    for i in range(6, -1, -1):
        day = (now - timedelta(days=i)).date()
        day_records = [r for r in revenue if r.date.date() == day]
        daily.append(DailyPoint(
            date=day.strftime("%d/%m"),
            revenue=sum(r.amount for r in day_records),
            orders=len(day_records),
        ))

    monthly = []
    for i in range(11, -1, -1):
        month_start = _month_start(now.year, now.month, i)
        next_start = _month_start(now.year, now.month, i - 1)
        month_records = [r for r in revenue if month_start <= r.date < next_start]
        monthly.append(MonthlyPoint(
            month=f"{PT_MONTHS[month_start.month - 1]}/{month_start.year % 100:02d}",
            revenue=sum(r.amount for r in month_records),
            orders=len(month_records),
        ))

    # dicts keep first-seen order
    methods: dict[str, PaymentMethodSlice] = {}
    sizes: dict[str, SizeSlice] = {}
    for record in revenue:
        method = _bucket(record.description, PAYMENT_METHOD_TOKENS)
        slot = methods.setdefault(method, PaymentMethodSlice(method=method, amount=0.0, count=0))
        slot.amount += record.amount
        slot.count += 1

        size = _bucket(record.description, SIZE_TOKENS)
        size_slot = sizes.setdefault(size, SizeSlice(size=size, count=0, revenue=0.0))
        size_slot.count += 1
        size_slot.revenue += record.amount

    return ChartData(
        daily=daily,
        monthly=monthly,
        payment_methods=list(methods.values()),
        sizes=list(sizes.values()),
    )


def get_finances(
    period: Union[FinancePeriod, str],
    records: Iterable[FinancialRecord],
    now: Optional[datetime] = None,
) -> FinancesReport:
    """
    Build the finance report for a period.

    Args:
        period: semana, mes or ano
        records: Full financial record log
        now: Reference time (defaults to the current local time)

    Returns:
        FinancesReport with records newest first, totals and chart data.
        Net profit is total_revenue - total_expenses, left to the caller.
    """
    now = now or datetime.now()
    start = resolve_period_start(period, now)

    filtered = [r for r in records if start <= r.date <= now]
    filtered.sort(key=lambda r: r.date, reverse=True)

    total_revenue = sum(r.amount for r in filtered if r.type == RecordType.ENTRADA)
    total_expenses = sum(r.amount for r in filtered if r.type == RecordType.SAIDA)

    return FinancesReport(
        records=filtered,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        chart_data=build_chart_data(filtered, now),
    )
