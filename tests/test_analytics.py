"""
Testes do painel financeiro
===========================
Filtro por período, totais e séries dos gráficos.
"""

from datetime import datetime, timedelta

import pytest

from sabor.schemas import FinancePeriod, FinancialRecord, RecordType
from sabor.services.analytics import (
    FALLBACK_BUCKET,
    build_chart_data,
    get_finances,
    normalize_period,
    resolve_period_start,
)

NOW = datetime(2024, 5, 15, 12, 0, 0)


def record(amount, date, type=RecordType.ENTRADA, description="Marmita media - Ana", id=None):
    return FinancialRecord(
        id=id or f"finance_{date:%Y%m%d%H%M%S}_{amount}",
        order_id="order_x",
        amount=amount,
        type=type,
        description=description,
        date=date,
    )


# ═══════════════════════════════════════════════════════════
# PERÍODO
# ═══════════════════════════════════════════════════════════

def test_period_start():
    assert resolve_period_start("semana", NOW) == NOW - timedelta(days=7)
    assert resolve_period_start("mes", NOW) == datetime(2024, 5, 1)
    assert resolve_period_start("ano", NOW) == datetime(2024, 1, 1)


@pytest.mark.parametrize("period", ["trimestre", "", None, "MES"])
def test_unknown_period_is_month(period):
    assert normalize_period(period) == FinancePeriod.MES
    assert resolve_period_start(period, NOW) == datetime(2024, 5, 1)


def test_month_excludes_previous_month():
    records = [
        record(30.0, datetime(2024, 4, 30, 23, 59)),
        record(15.0, datetime(2024, 5, 1, 0, 0)),
        record(18.0, datetime(2024, 5, 10, 9, 0)),
    ]
    report = get_finances("mes", records, now=NOW)
    assert [r.amount for r in report.records] == [18.0, 15.0]
    assert report.total_revenue == 33.0


def test_future_records_are_excluded():
    installment = record(100.0, datetime(2024, 6, 15), type=RecordType.SAIDA)
    report = get_finances("ano", [installment], now=NOW)
    assert report.records == []
    assert report.total_expenses == 0


def test_totals_and_newest_first():
    records = [
        record(15.0, datetime(2024, 5, 2)),
        record(50.0, datetime(2024, 5, 3), type=RecordType.SAIDA, description="Luz"),
        record(12.0, datetime(2024, 5, 14)),
    ]
    report = get_finances(FinancePeriod.MES, records, now=NOW)
    assert report.total_revenue == 27.0
    assert report.total_expenses == 50.0
    assert [r.date.day for r in report.records] == [14, 3, 2]


def test_empty_ledger():
    report = get_finances("semana", [], now=NOW)
    assert report.total_revenue == 0
    assert report.total_expenses == 0
    assert len(report.chart_data.daily) == 7
    assert len(report.chart_data.monthly) == 12
    assert report.chart_data.payment_methods == []
    assert report.chart_data.sizes == []


# ═══════════════════════════════════════════════════════════
# GRÁFICOS
# ═══════════════════════════════════════════════════════════

def test_daily_series_last_seven_days():
    records = [
        record(15.0, datetime(2024, 5, 15, 9, 0)),
        record(12.0, datetime(2024, 5, 15, 10, 0)),
        record(18.0, datetime(2024, 5, 9, 10, 0)),
        record(99.0, datetime(2024, 5, 14), type=RecordType.SAIDA, description="Gás"),
    ]
    daily = build_chart_data(records, NOW).daily

    assert [p.date for p in daily] == [
        "09/05", "10/05", "11/05", "12/05", "13/05", "14/05", "15/05",
    ]
    assert daily[-1].revenue == 27.0
    assert daily[-1].orders == 2
    assert daily[0].orders == 1
    assert daily[5].revenue == 0


def test_monthly_series_labels_and_bounds():
    records = [
        record(10.0, datetime(2023, 6, 1, 0, 0)),
        record(20.0, datetime(2024, 4, 30, 23, 59)),
        record(30.0, datetime(2024, 5, 1)),
    ]
    monthly = build_chart_data(records, NOW).monthly

    assert monthly[0].month == "jun/23"
    assert monthly[-1].month == "mai/24"
    assert monthly[0].revenue == 10.0
    assert monthly[-2].revenue == 20.0
    assert monthly[-1].revenue == 30.0


def test_monthly_chart_only_sees_filtered_records():
    records = [record(20.0, datetime(2024, 3, 10)), record(30.0, datetime(2024, 5, 2))]
    monthly = get_finances("semana", records, now=NOW).chart_data.monthly
    assert sum(p.revenue for p in monthly) == 0

    monthly = get_finances("ano", records, now=NOW).chart_data.monthly
    assert sum(p.revenue for p in monthly) == 50.0


def test_size_buckets_from_description():
    records = [
        record(15.0, datetime(2024, 5, 14), description="Marmita media (Salada) - Ana"),
        record(12.0, datetime(2024, 5, 14), description="Marmita pequena - Bruno"),
        record(30.0, datetime(2024, 5, 14), description="Marmita media - Carla"),
    ]
    sizes = build_chart_data(records, NOW).sizes

    assert [(s.size, s.count, s.revenue) for s in sizes] == [
        ("Média", 2, 45.0),
        ("Pequena", 1, 12.0),
    ]


def test_payment_bucket_first_match_and_fallback():
    records = [
        record(10.0, datetime(2024, 5, 14), description="Pagamento PIX e Cartão"),
        record(5.0, datetime(2024, 5, 14), description="Marmita grande - Dinheiro Silva"),
        record(7.0, datetime(2024, 5, 14), description="Marmita grande - Ana"),
    ]
    methods = build_chart_data(records, NOW).payment_methods

    assert [(m.method, m.count, m.amount) for m in methods] == [
        ("PIX", 1, 10.0),
        ("Dinheiro", 1, 5.0),
        (FALLBACK_BUCKET, 1, 7.0),
    ]


def test_expenses_stay_out_of_charts():
    records = [record(80.0, datetime(2024, 5, 14), type=RecordType.SAIDA, description="Aluguel")]
    chart = build_chart_data(records, NOW)
    assert chart.sizes == []
    assert chart.payment_methods == []
    assert all(p.revenue == 0 for p in chart.daily)
