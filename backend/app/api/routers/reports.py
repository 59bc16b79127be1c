import datetime as dt
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_page
from app.schemas.reports import (
    CounterpartStatsOut,
    ExtractsByProjectOut,
    InvoiceSummaryOut,
    ProjectCostOut,
    ProjectFinancialsOut,
)
from app.services.access.permissions import Page
from app.services.reports.service import (
    project_costs as project_costs_calc,
    contractor_stats as contractor_stats_calc,
    supplier_stats as supplier_stats_calc,
    financials as financials_calc,
    extracts_summary as extracts_summary_calc,
    invoices_summary as invoices_summary_calc,
)

router = APIRouter()

@router.get("/project-costs", response_model=ProjectCostOut)
def project_costs(
    project_id: int | None = Query(None),
    date_from: dt.date | None = Query(None),
    date_to: dt.date | None = Query(None),
    db: Session = Depends(get_db),
    _ctx=Depends(require_page(Page.reports)),
):
    return project_costs_calc(db, project_id, date_from, date_to)

@router.get("/contractors", response_model=CounterpartStatsOut)
def contractors(
    project_id: int | None = Query(None),
    date_from: dt.date | None = Query(None),
    date_to: dt.date | None = Query(None),
    db: Session = Depends(get_db),
    _ctx=Depends(require_page(Page.contractors)),
):
    return contractor_stats_calc(db, project_id, date_from, date_to)

@router.get("/suppliers", response_model=CounterpartStatsOut)
def suppliers(
    project_id: int | None = Query(None),
    date_from: dt.date | None = Query(None),
    date_to: dt.date | None = Query(None),
    db: Session = Depends(get_db),
    _ctx=Depends(require_page(Page.suppliers)),
):
    return supplier_stats_calc(db, project_id, date_from, date_to)

@router.get("/project-financials", response_model=ProjectFinancialsOut)
def project_financials(db: Session = Depends(get_db), _ctx=Depends(require_page(Page.dashboard))):
    return financials_calc(db)

@router.get("/extracts-by-project", response_model=ExtractsByProjectOut)
def extracts_by_project(
    date_from: dt.date | None = Query(None),
    date_to: dt.date | None = Query(None),
    db: Session = Depends(get_db),
    _ctx=Depends(require_page(Page.reports)),
):
    return extracts_summary_calc(db, date_from, date_to)

@router.get("/invoices/summary", response_model=InvoiceSummaryOut)
def invoices_summary(
    project_id: int | None = Query(None),
    date_from: dt.date | None = Query(None),
    date_to: dt.date | None = Query(None),
    today: dt.date | None = Query(None),
    db: Session = Depends(get_db),
    _ctx=Depends(require_page(Page.reports)),
):
    return invoices_summary_calc(db, today or dt.date.today(), project_id, date_from, date_to)
