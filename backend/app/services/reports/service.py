import datetime as dt

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.models.finance import Invoice, Extract, AssignmentOrder
from app.db.models.parties import Contractor, Supplier
from app.db.models.project import Project
from app.db.models.sales import Sale
from app.services.reports.aggregation import (
    ZERO,
    FinancialRecord,
    aggregate_by_counterpart,
    aggregate_by_project,
    extracts_by_project,
    invoice_status_summary,
    project_financials,
    sorted_project_summaries,
)


def invoice_record(inv: Invoice) -> FinancialRecord:
    return FinancialRecord(
        amount=inv.amount,
        counterpart_name=inv.supplier_name,
        counterpart_id=inv.supplier_id,
        project_id=inv.project_id,
        project_name=inv.project_name,
        status=inv.status,
        date=inv.invoice_date,
        due_date=inv.due_date,
        reference=inv.invoice_number,
    )


def extract_record(e: Extract) -> FinancialRecord:
    return FinancialRecord(
        amount=e.amount,
        counterpart_name=e.contractor_name,
        counterpart_id=e.contractor_id,
        project_id=e.project_id,
        project_name=e.project_name,
        status=e.status,
        date=e.extract_date,
        paid_amount=e.current_amount,
        reference=e.extract_number,
    )


def order_record(o: AssignmentOrder) -> FinancialRecord:
    return FinancialRecord(
        amount=o.amount,
        counterpart_name=o.contractor_name,
        counterpart_id=o.contractor_id,
        project_id=o.project_id,
        project_name=o.project_name,
        status=o.status,
        date=o.order_date,
        reference=o.order_number,
    )


def sale_record(s: Sale) -> FinancialRecord:
    return FinancialRecord(
        amount=s.price,
        counterpart_name=s.customer_name,
        project_id=s.project_id,
        project_name=s.project_name,
        status=s.status,
        date=s.sale_date,
        reference=s.unit_number,
    )


def _rows(db: Session, model, date_col, project_id: int | None, date_from: dt.date | None, date_to: dt.date | None):
    q = db.query(model)
    if project_id is not None:
        q = q.filter(model.project_id == project_id)
    if date_from is not None:
        q = q.filter(date_col >= date_from)
    if date_to is not None:
        q = q.filter(date_col <= date_to)
    return q.order_by(model.id).all()


def _invoices(db, project_id=None, date_from=None, date_to=None) -> list[FinancialRecord]:
    return [invoice_record(i) for i in _rows(db, Invoice, Invoice.invoice_date, project_id, date_from, date_to)]


def _extracts(db, project_id=None, date_from=None, date_to=None) -> list[FinancialRecord]:
    return [extract_record(e) for e in _rows(db, Extract, Extract.extract_date, project_id, date_from, date_to)]


def _project_names(db: Session) -> dict[int, str]:
    return {pid: name for pid, name in db.query(Project.id, Project.name).all()}


def project_costs(
    db: Session,
    project_id: int | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
):
    names = _project_names(db)
    seed = [project_id] if project_id is not None else list(names)
    res = aggregate_by_project(
        _invoices(db, project_id, date_from, date_to),
        _extracts(db, project_id, date_from, date_to),
        project_ids=seed,
    )
    rows = [
        dict(
            project_id=s.project_id,
            project_name=names.get(s.project_id),
            invoice_total=s.invoice_total,
            extract_total=s.extract_total,
            total_cost=s.total_cost,
            invoice_count=s.invoice_count,
            extract_count=s.extract_count,
        )
        for s in sorted_project_summaries(res.data, names)
    ]
    invoice_total = sum((r["invoice_total"] for r in rows), ZERO)
    extract_total = sum((r["extract_total"] for r in rows), ZERO)
    return dict(
        rows=rows,
        invoice_total=invoice_total,
        extract_total=extract_total,
        total_cost=invoice_total + extract_total,
        diagnostics=res.diagnostics,
    )


def _counterpart_rows(res):
    return [
        dict(
            key=s.key,
            display_name=s.display_name,
            entity_id=s.entity_id,
            linked_record_count=s.linked_record_count,
            total_amount=s.total_amount,
            outstanding_amount=s.outstanding_amount,
            settled_amount=s.settled_amount,
            distinct_project_count=s.distinct_project_count,
            project_names=list(s.project_names),
        )
        for s in sorted(res.data.values(), key=lambda s: s.key)
    ]


def contractor_stats(
    db: Session,
    project_id: int | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
):
    res = aggregate_by_counterpart(
        _extracts(db, project_id, date_from, date_to),
        lambda r: r.counterpart_name,
        lambda r: r.project_name,
        known_entities=db.query(Contractor).order_by(Contractor.id).all(),
        counterpart_id_of=lambda r: r.counterpart_id,
        settled_statuses=settings.settled_statuses,
    )
    return dict(rows=_counterpart_rows(res), diagnostics=res.diagnostics)


def supplier_stats(
    db: Session,
    project_id: int | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
):
    names = _project_names(db)
    res = aggregate_by_counterpart(
        _invoices(db, project_id, date_from, date_to),
        lambda r: r.counterpart_name,
        # invoices may only carry the FK
        lambda r: r.project_name or names.get(r.project_id),
        known_entities=db.query(Supplier).order_by(Supplier.id).all(),
        counterpart_id_of=lambda r: r.counterpart_id,
        settled_statuses=settings.settled_statuses,
    )
    return dict(rows=_counterpart_rows(res), diagnostics=res.diagnostics)


def financials(db: Session):
    res = project_financials(
        db.query(Project).all(),
        [sale_record(s) for s in db.query(Sale).all()],
        [invoice_record(i) for i in db.query(Invoice).all()],
        [extract_record(e) for e in db.query(Extract).all()],
        [order_record(o) for o in db.query(AssignmentOrder).all()],
        sold_statuses=settings.sold_statuses,
    )
    rows = [
        dict(
            project_id=p.project_id,
            project_name=p.project_name,
            total_sales=p.total_sales,
            total_expenses=p.total_expenses,
            net=p.net,
        )
        for p in res.data
    ]
    return dict(rows=rows, diagnostics=res.diagnostics)


def extracts_summary(
    db: Session,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
):
    res = extracts_by_project(_extracts(db, None, date_from, date_to))
    rows = [
        dict(
            project_name=s.project_name,
            extracts_count=s.extracts_count,
            total_amount=s.total_amount,
            paid_amount=s.paid_amount,
            pending_amount=s.pending_amount,
            completion_pct=s.completion_pct,
        )
        for s in res.data
    ]
    return dict(rows=rows, diagnostics=res.diagnostics)


def invoices_summary(
    db: Session,
    today: dt.date,
    project_id: int | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
):
    res = invoice_status_summary(
        _invoices(db, project_id, date_from, date_to),
        today=today,
        settled_statuses=settings.settled_statuses,
    )
    s = res.data
    return dict(
        invoice_count=s.invoice_count,
        total_amount=s.total_amount,
        paid_amount=s.paid_amount,
        unpaid_amount=s.unpaid_amount,
        overdue_count=s.overdue_count,
        by_status=[dict(status=b.status, count=b.count, amount=b.amount) for b in s.by_status],
        diagnostics=res.diagnostics,
    )
