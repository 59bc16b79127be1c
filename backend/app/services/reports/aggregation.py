"""
In-memory roll-ups of invoices, extracts, sales and assignment orders.

Nothing here touches the database or module-level settings; callers pass
collections and business constants in. Amounts are summed as Decimal
quantized to cents. A bad amount never aborts a report: it contributes zero
and is counted in the result diagnostics.
"""
from __future__ import annotations

import datetime as dt
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Generic, TypeVar

from app.core.logging import logger

T = TypeVar("T")

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

DEFAULT_SETTLED_STATUSES = ("مدفوع", "مكتمل", "paid", "completed")
DEFAULT_SOLD_STATUSES = ("مباع", "sold")
UNSPECIFIED = "غير محدد"

_WS_RE = re.compile(r"\s+")


def normalize_name(v: Any) -> str:
    if v is None:
        return ""
    return _WS_RE.sub(" ", str(v)).strip().casefold()


def _display_name(v: Any) -> str:
    if v is None:
        return ""
    return _WS_RE.sub(" ", str(v)).strip()


def to_amount(v: Any) -> Decimal | None:
    """Parse a money value; None when it is missing or not a number."""
    if v is None or isinstance(v, bool):
        return None
    try:
        if isinstance(v, Decimal):
            d = v
        elif isinstance(v, int):
            d = Decimal(v)
        elif isinstance(v, float):
            d = Decimal(str(v))
        elif isinstance(v, str):
            s = v.strip().replace(" ", "").replace(",", "")
            if not s:
                return None
            d = Decimal(s)
        else:
            return None
        if not d.is_finite():
            return None
        # raises InvalidOperation past the context precision (about 26 integer digits)
        return d.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return None


def field_of(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from a mapping row or an object (ORM instance, dataclass)."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


@dataclass(frozen=True)
class FinancialRecord:
    amount: Any
    counterpart_name: str | None = None
    counterpart_id: Any = None
    project_id: Any = None
    project_name: str | None = None
    status: str | None = None
    date: dt.date | None = None
    due_date: dt.date | None = None
    paid_amount: Any = None
    reference: str | None = None


@dataclass
class AggregationResult(Generic[T]):
    data: T
    skipped: int = 0
    rejected_negative: int = 0
    unassigned: int = 0
    name_only_matches: int = 0

    @property
    def diagnostics(self) -> dict[str, int]:
        return {
            "skipped": self.skipped,
            "rejected_negative": self.rejected_negative,
            "unassigned": self.unassigned,
            "name_only_matches": self.name_only_matches,
        }


class _Diagnostics:
    def __init__(self) -> None:
        self.skipped = 0
        self.rejected_negative = 0
        self.unassigned = 0
        self.name_only_matches = 0

    def contribution(
        self,
        record: Any,
        value: Any = None,
        *,
        use_value: bool = False,
        tally: bool = True,
    ) -> Decimal:
        """``tally=False`` when the record was already counted for another field."""
        raw = value if use_value else field_of(record, "amount")
        amount = to_amount(raw)
        if amount is None:
            if tally:
                self.skipped += 1
            return ZERO
        if amount < 0:
            if tally:
                self.rejected_negative += 1
            logger.warning("negative_amount_rejected", amount=str(amount), reference=field_of(record, "reference"))
            return ZERO
        return amount

    def counted(self) -> int:
        return self.skipped + self.rejected_negative

    def wrap(self, data: T) -> AggregationResult[T]:
        if self.skipped:
            logger.debug("malformed_records_skipped", count=self.skipped)
        return AggregationResult(
            data=data,
            skipped=self.skipped,
            rejected_negative=self.rejected_negative,
            unassigned=self.unassigned,
            name_only_matches=self.name_only_matches,
        )


def _no_project(pid: Any) -> bool:
    return pid is None or pid == ""


def _status_set(statuses: Iterable[str]) -> frozenset[str]:
    return frozenset(normalize_name(s) for s in statuses if normalize_name(s))


def is_settled(status: Any, settled_statuses: Iterable[str] = DEFAULT_SETTLED_STATUSES) -> bool:
    return normalize_name(status) in _status_set(settled_statuses)


# -----------------------------
# Per-project cost centre
# -----------------------------
@dataclass
class ProjectCostSummary:
    project_id: Any
    invoice_total: Decimal = ZERO
    extract_total: Decimal = ZERO
    invoice_count: int = 0
    extract_count: int = 0

    @property
    def total_cost(self) -> Decimal:
        return self.invoice_total + self.extract_total


def aggregate_by_project(
    invoices: Iterable[Any],
    extracts: Iterable[Any],
    project_ids: Iterable[Any] = (),
) -> AggregationResult[dict[Any, ProjectCostSummary]]:
    """
    Group invoices and extracts by explicit project_id. Records without a
    project id are left out (counted as unassigned). ``project_ids`` seeds
    zero rows for projects that have no records yet.
    """
    diag = _Diagnostics()
    out: dict[Any, ProjectCostSummary] = {pid: ProjectCostSummary(project_id=pid) for pid in project_ids}

    for kind, rows in (("invoice", invoices), ("extract", extracts)):
        for r in rows:
            pid = field_of(r, "project_id")
            if _no_project(pid):
                diag.unassigned += 1
                continue
            amount = diag.contribution(r)
            s = out.get(pid)
            if s is None:
                s = out[pid] = ProjectCostSummary(project_id=pid)
            if kind == "invoice":
                s.invoice_total += amount
                s.invoice_count += 1
            else:
                s.extract_total += amount
                s.extract_count += 1

    return diag.wrap(out)


def sorted_project_summaries(
    summaries: Mapping[Any, ProjectCostSummary],
    project_names: Mapping[Any, str] | None = None,
) -> list[ProjectCostSummary]:
    names = project_names or {}
    return sorted(
        summaries.values(),
        key=lambda s: (normalize_name(names.get(s.project_id)), str(s.project_id)),
    )


# -----------------------------
# Per-counterpart (contractor / supplier / customer)
# -----------------------------
@dataclass(frozen=True)
class CounterpartStats:
    key: str
    display_name: str
    entity_id: Any = None
    linked_record_count: int = 0
    total_amount: Decimal = ZERO
    outstanding_amount: Decimal = ZERO
    project_names: tuple[str, ...] = ()

    @property
    def distinct_project_count(self) -> int:
        return len(self.project_names)

    @property
    def settled_amount(self) -> Decimal:
        return self.total_amount - self.outstanding_amount


@dataclass
class _CounterpartTally:
    key: str
    display_name: str
    entity_id: Any = None
    count: int = 0
    total: Decimal = ZERO
    outstanding: Decimal = ZERO
    projects: dict[str, str] = field(default_factory=dict)

    def freeze(self) -> CounterpartStats:
        return CounterpartStats(
            key=self.key,
            display_name=self.display_name,
            entity_id=self.entity_id,
            linked_record_count=self.count,
            total_amount=self.total,
            outstanding_amount=self.outstanding,
            project_names=tuple(sorted(self.projects.values(), key=normalize_name)),
        )


def aggregate_by_counterpart(
    records: Iterable[Any],
    counterpart_name_of: Callable[[Any], Any],
    project_name_of: Callable[[Any], Any],
    *,
    known_entities: Iterable[Any] = (),
    counterpart_id_of: Callable[[Any], Any] | None = None,
    settled_statuses: Iterable[str] = DEFAULT_SETTLED_STATUSES,
) -> AggregationResult[dict[str, CounterpartStats]]:
    """
    Roll records up per counterpart, keyed by normalized name.

    A record is attached by explicit id when it carries one that matches a
    known entity; otherwise by normalized name, and that fallback is counted
    in ``name_only_matches``. Every known entity (objects or mappings with
    ``id`` and ``name``) gets a row, all zero when nothing matched it.
    """
    diag = _Diagnostics()
    settled = _status_set(settled_statuses)
    tallies: dict[str, _CounterpartTally] = {}
    by_id: dict[Any, str] = {}

    for e in known_entities:
        eid = field_of(e, "id")
        name = field_of(e, "name")
        key = normalize_name(name) or f"#{eid}"
        if key not in tallies:
            tallies[key] = _CounterpartTally(key=key, display_name=_display_name(name) or key, entity_id=eid)
        if eid is not None:
            by_id[eid] = key

    for r in records:
        key = None
        cid = counterpart_id_of(r) if counterpart_id_of is not None else None
        if cid is not None and cid in by_id:
            key = by_id[cid]
        else:
            raw_name = counterpart_name_of(r)
            key = normalize_name(raw_name)
            if not key:
                diag.unassigned += 1
                continue
            diag.name_only_matches += 1
            if key not in tallies:
                tallies[key] = _CounterpartTally(key=key, display_name=_display_name(raw_name))

        t = tallies[key]
        amount = diag.contribution(r)
        t.count += 1
        t.total += amount
        if normalize_name(field_of(r, "status")) not in settled:
            t.outstanding += amount
        project = project_name_of(r)
        pkey = normalize_name(project)
        if pkey and pkey not in t.projects:
            t.projects[pkey] = _display_name(project)

    return diag.wrap({k: t.freeze() for k, t in tallies.items()})


# -----------------------------
# Project financials (dashboard cards)
# -----------------------------
@dataclass(frozen=True)
class ProjectFinancials:
    project_id: Any
    project_name: str
    total_sales: Decimal
    total_expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.total_sales - self.total_expenses


def project_financials(
    projects: Iterable[Any],
    sales: Iterable[Any],
    invoices: Iterable[Any],
    extracts: Iterable[Any],
    assignment_orders: Iterable[Any] = (),
    sold_statuses: Iterable[str] = DEFAULT_SOLD_STATUSES,
) -> AggregationResult[list[ProjectFinancials]]:
    """Sales revenue (sold units only) against invoices + extracts + assignment orders."""
    diag = _Diagnostics()
    sold = _status_set(sold_statuses)
    sales_by: dict[Any, Decimal] = {}
    expenses_by: dict[Any, Decimal] = {}

    for s in sales:
        pid = field_of(s, "project_id")
        if _no_project(pid):
            diag.unassigned += 1
            continue
        if normalize_name(field_of(s, "status")) not in sold:
            continue
        sales_by[pid] = sales_by.get(pid, ZERO) + diag.contribution(s)

    for rows in (extracts, invoices, assignment_orders):
        for r in rows:
            pid = field_of(r, "project_id")
            if _no_project(pid):
                diag.unassigned += 1
                continue
            expenses_by[pid] = expenses_by.get(pid, ZERO) + diag.contribution(r)

    out = [
        ProjectFinancials(
            project_id=field_of(p, "id"),
            project_name=_display_name(field_of(p, "name")),
            total_sales=sales_by.get(field_of(p, "id"), ZERO),
            total_expenses=expenses_by.get(field_of(p, "id"), ZERO),
        )
        for p in projects
    ]
    out.sort(key=lambda x: (normalize_name(x.project_name), str(x.project_id)))
    return diag.wrap(out)


# -----------------------------
# Extracts grouped by project name
# -----------------------------
@dataclass(frozen=True)
class ExtractProjectSummary:
    project_name: str
    extracts_count: int
    total_amount: Decimal
    paid_amount: Decimal

    @property
    def pending_amount(self) -> Decimal:
        return self.total_amount - self.paid_amount

    @property
    def completion_pct(self) -> int:
        if self.total_amount <= 0:
            return 0
        pct = self.paid_amount / self.total_amount * 100
        return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def extracts_by_project(extracts: Iterable[Any]) -> AggregationResult[list[ExtractProjectSummary]]:
    """Paid part of each extract is its ``paid_amount`` (current amount of the claim)."""
    diag = _Diagnostics()
    groups: dict[str, dict[str, Any]] = {}

    for e in extracts:
        raw = field_of(e, "project_name")
        key = normalize_name(raw)
        if not key:
            diag.unassigned += 1
            continue
        g = groups.setdefault(key, {"name": _display_name(raw), "count": 0, "total": ZERO, "paid": ZERO})
        g["count"] += 1
        before = diag.counted()
        g["total"] += diag.contribution(e)
        paid = field_of(e, "paid_amount")
        if paid is not None:
            # diagnostics count records, not fields
            g["paid"] += diag.contribution(e, paid, use_value=True, tally=diag.counted() == before)

    out = [
        ExtractProjectSummary(
            project_name=g["name"],
            extracts_count=g["count"],
            total_amount=g["total"],
            paid_amount=g["paid"],
        )
        for _, g in sorted(groups.items())
    ]
    return diag.wrap(out)


# -----------------------------
# Invoices by status
# -----------------------------
@dataclass(frozen=True)
class StatusBucket:
    status: str
    count: int
    amount: Decimal


@dataclass(frozen=True)
class InvoiceStatusSummary:
    invoice_count: int
    total_amount: Decimal
    paid_amount: Decimal
    overdue_count: int
    by_status: tuple[StatusBucket, ...]

    @property
    def unpaid_amount(self) -> Decimal:
        return self.total_amount - self.paid_amount


def invoice_status_summary(
    invoices: Iterable[Any],
    today: dt.date | None = None,
    settled_statuses: Iterable[str] = DEFAULT_SETTLED_STATUSES,
) -> AggregationResult[InvoiceStatusSummary]:
    """
    ``today`` only feeds the overdue counter (display); totals never depend on it.
    An invoice is overdue when it is not settled and its due date is before ``today``.
    """
    diag = _Diagnostics()
    settled = _status_set(settled_statuses)
    count = 0
    total = ZERO
    paid = ZERO
    overdue = 0
    buckets: dict[str, list] = {}

    for inv in invoices:
        count += 1
        amount = diag.contribution(inv)
        total += amount
        status_raw = field_of(inv, "status")
        status_key = normalize_name(status_raw)
        is_paid = status_key in settled
        if is_paid:
            paid += amount
        b = buckets.setdefault(status_key, [_display_name(status_raw) or UNSPECIFIED, 0, ZERO])
        b[1] += 1
        b[2] += amount
        due = field_of(inv, "due_date")
        if isinstance(due, dt.datetime):
            due = due.date()
        if today is not None and not is_paid and isinstance(due, dt.date) and due < today:
            overdue += 1

    summary = InvoiceStatusSummary(
        invoice_count=count,
        total_amount=total,
        paid_amount=paid,
        overdue_count=overdue,
        by_status=tuple(StatusBucket(status=b[0], count=b[1], amount=b[2]) for _, b in sorted(buckets.items())),
    )
    return diag.wrap(summary)
