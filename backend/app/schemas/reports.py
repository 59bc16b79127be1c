from decimal import Decimal
from pydantic import BaseModel, ConfigDict


class DiagnosticsOut(BaseModel):
    skipped: int = 0
    rejected_negative: int = 0
    unassigned: int = 0
    name_only_matches: int = 0


class ProjectCostRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_id: int
    project_name: str | None = None
    invoice_total: Decimal
    extract_total: Decimal
    total_cost: Decimal
    invoice_count: int
    extract_count: int


class ProjectCostOut(BaseModel):
    rows: list[ProjectCostRow]
    invoice_total: Decimal
    extract_total: Decimal
    total_cost: Decimal
    diagnostics: DiagnosticsOut


class CounterpartRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    display_name: str
    entity_id: int | None = None
    linked_record_count: int
    total_amount: Decimal
    outstanding_amount: Decimal
    settled_amount: Decimal
    distinct_project_count: int
    project_names: list[str]


class CounterpartStatsOut(BaseModel):
    rows: list[CounterpartRow]
    diagnostics: DiagnosticsOut


class ProjectFinancialsRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_id: int
    project_name: str
    total_sales: Decimal
    total_expenses: Decimal
    net: Decimal


class ProjectFinancialsOut(BaseModel):
    rows: list[ProjectFinancialsRow]
    diagnostics: DiagnosticsOut


class ExtractProjectRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_name: str
    extracts_count: int
    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
    completion_pct: int


class ExtractsByProjectOut(BaseModel):
    rows: list[ExtractProjectRow]
    diagnostics: DiagnosticsOut


class StatusBucketOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    count: int
    amount: Decimal


class InvoiceSummaryOut(BaseModel):
    invoice_count: int
    total_amount: Decimal
    paid_amount: Decimal
    unpaid_amount: Decimal
    overdue_count: int
    by_status: list[StatusBucketOut]
    diagnostics: DiagnosticsOut
