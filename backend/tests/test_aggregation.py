from decimal import Decimal

from app.services.reports.aggregation import (
    FinancialRecord,
    aggregate_by_counterpart,
    aggregate_by_project,
    normalize_name,
    sorted_project_summaries,
    to_amount,
)


def _name(r):
    return r.counterpart_name


def _project(r):
    return r.project_name


def test_normalize_name():
    assert normalize_name(" Ahmed   Co. ") == normalize_name("ahmed co.")
    assert normalize_name("شركة\tالبناء  المتقدم") == "شركة البناء المتقدم"
    n = normalize_name("  MiXeD  Case ")
    assert normalize_name(n) == n
    assert normalize_name(None) == ""


def test_to_amount():
    assert to_amount(100) == Decimal("100.00")
    assert to_amount("1,250.5") == Decimal("1250.50")
    assert to_amount(0.1) == Decimal("0.10")
    assert to_amount(None) is None
    assert to_amount("abc") is None
    assert to_amount(float("nan")) is None
    assert to_amount(True) is None


def test_project_totals():
    invoices = [
        FinancialRecord(amount=100, project_id=1),
        FinancialRecord(amount="50.25", project_id=1),
        FinancialRecord(amount=70, project_id=2),
    ]
    extracts = [FinancialRecord(amount=300, project_id=1)]
    res = aggregate_by_project(invoices, extracts)
    p1 = res.data[1]
    assert p1.invoice_total == Decimal("150.25")
    assert p1.extract_total == Decimal("300.00")
    assert p1.total_cost == Decimal("450.25")
    assert (p1.invoice_count, p1.extract_count) == (2, 1)
    assert res.data[2].total_cost == Decimal("70.00")


def test_project_records_without_project_are_excluded():
    res = aggregate_by_project(
        [FinancialRecord(amount=10, project_id=None), {"amount": 5, "project_id": ""}],
        [FinancialRecord(amount=20, project_id=3)],
    )
    assert list(res.data) == [3]
    assert res.unassigned == 2


def test_project_aggregation_is_additive():
    a = [FinancialRecord(amount="0.10", project_id=9), FinancialRecord(amount="0.20", project_id=9)]
    b = [FinancialRecord(amount="0.30", project_id=9)]
    ext = [FinancialRecord(amount="1.10", project_id=9)]
    left = aggregate_by_project(a + b, ext).data[9].total_cost
    right = aggregate_by_project(a, ext).data[9].total_cost + aggregate_by_project(b, []).data[9].total_cost
    assert left == right == Decimal("1.70")


def test_project_seed_rows_and_stable_order():
    res = aggregate_by_project([FinancialRecord(amount=1, project_id=2)], [], project_ids=[1, 2, 3])
    assert res.data[1].total_cost == 0
    names = {1: "Zeta", 2: "alpha", 3: "Beta"}
    ordered = [s.project_id for s in sorted_project_summaries(res.data, names)]
    assert ordered == [2, 3, 1]
    assert ordered == [s.project_id for s in sorted_project_summaries(res.data, names)]


def test_malformed_records_contribute_zero():
    rows = [
        FinancialRecord(amount=100, project_id=1),
        FinancialRecord(amount=None, project_id=1),
        {"project_id": 1},
        FinancialRecord(amount=50, project_id=1),
    ]
    res = aggregate_by_project(rows, [])
    assert res.data[1].invoice_total == Decimal("150.00")
    assert res.skipped == 2


def test_negative_amount_rejected():
    res = aggregate_by_project([FinancialRecord(amount=100, project_id=1), FinancialRecord(amount=-40, project_id=1)], [])
    assert res.data[1].invoice_total == Decimal("100.00")
    assert res.rejected_negative == 1


def test_inputs_are_not_mutated():
    rows = [{"amount": "10", "project_id": 1}]
    aggregate_by_project(rows, rows)
    assert rows == [{"amount": "10", "project_id": 1}]


def test_counterpart_name_variants_merge():
    records = [
        FinancialRecord(amount=100, counterpart_name=" Ahmed   Co. ", project_name="Tower A", status="pending"),
        FinancialRecord(amount=40, counterpart_name="ahmed co.", project_name="tower a ", status="paid"),
    ]
    res = aggregate_by_counterpart(records, _name, _project)
    assert list(res.data) == ["ahmed co."]
    s = res.data["ahmed co."]
    assert s.linked_record_count == 2
    assert s.total_amount == Decimal("140.00")
    assert s.outstanding_amount == Decimal("100.00")
    assert s.distinct_project_count == 1


def test_outstanding_balance():
    records = [
        FinancialRecord(amount=100, counterpart_name="Builder", status="paid"),
        FinancialRecord(amount=50, counterpart_name="Builder", status="in-review"),
        FinancialRecord(amount=200, counterpart_name="Builder", status="paid"),
    ]
    s = aggregate_by_counterpart(records, _name, _project).data["builder"]
    assert s.outstanding_amount == Decimal("50.00")
    assert s.total_amount == Decimal("350.00")
    assert s.settled_amount == Decimal("300.00")


def test_arabic_settled_statuses():
    records = [
        FinancialRecord(amount=10, counterpart_name="مقاول", status="مدفوع"),
        FinancialRecord(amount=20, counterpart_name="مقاول", status="مكتمل"),
        FinancialRecord(amount=30, counterpart_name="مقاول", status="معتمد"),
        FinancialRecord(amount=5, counterpart_name="مقاول", status="مرفوض"),
    ]
    s = aggregate_by_counterpart(records, _name, _project).data["مقاول"]
    assert s.outstanding_amount == Decimal("35.00")


def test_known_entity_without_records_is_present():
    known = [{"id": 1, "name": "Idle Supplier"}, {"id": 2, "name": "Busy Supplier"}]
    records = [FinancialRecord(amount=5, counterpart_name="busy supplier", project_name="P1")]
    res = aggregate_by_counterpart(records, _name, _project, known_entities=known)
    idle = res.data["idle supplier"]
    assert idle.entity_id == 1
    assert idle.linked_record_count == 0
    assert idle.total_amount == 0
    assert idle.outstanding_amount == 0
    assert idle.project_names == ()
    assert res.data["busy supplier"].entity_id == 2


def test_id_match_preferred_over_name():
    known = [{"id": 1, "name": "Old Name Contracting"}]
    records = [
        FinancialRecord(amount=10, counterpart_name="Renamed Contracting", counterpart_id=1, project_name="P1"),
        FinancialRecord(amount=20, counterpart_name="old name contracting", project_name="P2"),
    ]
    res = aggregate_by_counterpart(
        records, _name, _project, known_entities=known, counterpart_id_of=lambda r: r.counterpart_id
    )
    s = res.data["old name contracting"]
    assert s.linked_record_count == 2
    assert s.total_amount == Decimal("30.00")
    assert s.project_names == ("P1", "P2")
    assert "renamed contracting" not in res.data
    assert res.name_only_matches == 1


def test_counterpart_malformed_and_unnamed():
    records = [
        FinancialRecord(amount=100, counterpart_name="X"),
        FinancialRecord(amount="n/a", counterpart_name="X"),
        FinancialRecord(amount=50, counterpart_name="x"),
        FinancialRecord(amount=10, counterpart_name="   "),
    ]
    res = aggregate_by_counterpart(records, _name, _project)
    assert res.data["x"].total_amount == Decimal("150.00")
    assert res.data["x"].linked_record_count == 3
    assert res.skipped == 1
    assert res.unassigned == 1


def test_empty_input_yields_empty_mapping():
    res = aggregate_by_counterpart([], _name, _project)
    assert res.data == {}
    assert res.diagnostics == {"skipped": 0, "rejected_negative": 0, "unassigned": 0, "name_only_matches": 0}


def test_to_amount_out_of_range_is_none():
    assert to_amount(1e30) is None
    assert to_amount("9" * 30) is None
    assert to_amount(Decimal("1E+40")) is None
    assert to_amount(10**40) is None
    assert to_amount("9" * 20) == Decimal("9" * 20 + ".00")


def test_oversized_amounts_do_not_abort_reports():
    rows = [
        FinancialRecord(amount=100, project_id=1),
        FinancialRecord(amount=1e30, project_id=1),
        FinancialRecord(amount=50, project_id=1),
    ]
    res = aggregate_by_project(rows, [])
    assert res.data[1].invoice_total == Decimal("150.00")
    assert res.data[1].invoice_count == 3
    assert res.skipped == 1

    res = aggregate_by_counterpart(
        [FinancialRecord(amount="9" * 30, counterpart_name="X"), FinancialRecord(amount=5, counterpart_name="x")],
        _name,
        _project,
    )
    assert res.data["x"].total_amount == Decimal("5.00")
    assert res.data["x"].linked_record_count == 2
    assert res.skipped == 1
