import datetime as dt
from decimal import Decimal

from app.services.reports.aggregation import (
    FinancialRecord,
    UNSPECIFIED,
    extracts_by_project,
    invoice_status_summary,
    project_financials,
)


def test_project_financials_counts_sold_units_only():
    projects = [{"id": 1, "name": "Tower B"}, {"id": 2, "name": "Armonia"}]
    sales = [
        FinancialRecord(amount=500000, project_id=1, status="مباع"),
        FinancialRecord(amount=300000, project_id=1, status="متاح"),
        FinancialRecord(amount=250000, project_id=1, status="sold"),
        FinancialRecord(amount=100000, project_id=None, status="مباع"),
    ]
    invoices = [FinancialRecord(amount=1000, project_id=1)]
    extracts = [FinancialRecord(amount="2000.50", project_id=1)]
    orders = [FinancialRecord(amount=500, project_id=2)]
    res = project_financials(projects, sales, invoices, extracts, orders)

    assert [p.project_name for p in res.data] == ["Armonia", "Tower B"]
    armonia, tower = res.data
    assert tower.total_sales == Decimal("750000.00")
    assert tower.total_expenses == Decimal("3000.50")
    assert tower.net == Decimal("746999.50")
    assert armonia.total_sales == 0
    assert armonia.net == Decimal("-500.00")
    assert res.unassigned == 1


def test_extracts_by_project_completion():
    extracts = [
        FinancialRecord(amount=1000, project_name="Tower A", paid_amount=250),
        FinancialRecord(amount=1000, project_name=" tower  a", paid_amount=None),
        FinancialRecord(amount=300, project_name="Villas", paid_amount=200),
        FinancialRecord(amount=0, project_name="Empty", paid_amount=0),
        FinancialRecord(amount=50, project_name=None),
    ]
    res = extracts_by_project(extracts)
    by_name = {s.project_name.casefold(): s for s in res.data}

    tower = by_name["tower a"]
    assert tower.extracts_count == 2
    assert tower.total_amount == Decimal("2000.00")
    assert tower.paid_amount == Decimal("250.00")
    assert tower.pending_amount == Decimal("1750.00")
    assert tower.completion_pct == 13

    assert by_name["villas"].completion_pct == 67
    assert by_name["empty"].completion_pct == 0
    assert res.unassigned == 1
    assert [s.project_name for s in res.data] == ["Empty", "Tower A", "Villas"]


def test_invoice_status_summary():
    today = dt.date(2025, 5, 10)
    invoices = [
        FinancialRecord(amount=100, status="مدفوع", due_date=dt.date(2025, 1, 1)),
        FinancialRecord(amount=200, status="معلق", due_date=dt.date(2025, 5, 1)),
        FinancialRecord(amount=300, status="معلق", due_date=dt.date(2025, 6, 1)),
        FinancialRecord(amount=50, status=None, due_date=dt.datetime(2025, 5, 9, 12, 0)),
        FinancialRecord(amount="bad", status="paid"),
    ]
    res = invoice_status_summary(invoices, today=today)
    s = res.data
    assert s.invoice_count == 5
    assert s.total_amount == Decimal("650.00")
    assert s.paid_amount == Decimal("100.00")
    assert s.unpaid_amount == Decimal("550.00")
    assert s.overdue_count == 2
    assert res.skipped == 1

    buckets = {b.status: (b.count, b.amount) for b in s.by_status}
    assert buckets["معلق"] == (2, Decimal("500.00"))
    assert buckets[UNSPECIFIED] == (1, Decimal("50.00"))


def test_invoice_totals_do_not_depend_on_today():
    invoices = [FinancialRecord(amount=10, status="pending", due_date=dt.date(2025, 1, 1))]
    a = invoice_status_summary(invoices, today=dt.date(2024, 1, 1)).data
    b = invoice_status_summary(invoices, today=dt.date(2026, 1, 1)).data
    c = invoice_status_summary(invoices).data
    assert a.total_amount == b.total_amount == c.total_amount
    assert (a.overdue_count, b.overdue_count, c.overdue_count) == (0, 1, 0)


def test_project_financials_blank_project_id_is_unassigned():
    projects = [{"id": 1, "name": "Tower B"}]
    sales = [FinancialRecord(amount=1000, project_id="", status="sold")]
    invoices = [FinancialRecord(amount=10, project_id=""), FinancialRecord(amount=20, project_id=1)]
    res = project_financials(projects, sales, invoices, [])
    assert res.unassigned == 2
    assert res.data[0].total_expenses == Decimal("20.00")
    assert res.data[0].total_sales == 0


def test_extract_with_bad_amount_and_paid_counts_once():
    extracts = [
        FinancialRecord(amount="n/a", project_name="Tower A", paid_amount="??"),
        FinancialRecord(amount=100, project_name="Tower A", paid_amount="??"),
        FinancialRecord(amount=-5, project_name="Tower A", paid_amount=-1),
    ]
    res = extracts_by_project(extracts)
    assert res.skipped == 2
    assert res.rejected_negative == 1
    assert res.data[0].extracts_count == 3
    assert res.data[0].total_amount == Decimal("100.00")
    assert res.data[0].paid_amount == 0
