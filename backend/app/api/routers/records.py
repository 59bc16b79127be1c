from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_page
from app.crud.records import create_row, delete_row, get_row, list_rows, update_row
from app.db.models.finance import Invoice, Extract, AssignmentOrder
from app.db.models.parties import Contractor, Supplier
from app.db.models.sales import Sale
from app.schemas.records import (
    AssignmentOrderIn,
    AssignmentOrderOut,
    ContractorIn,
    ContractorOut,
    ExtractIn,
    ExtractOut,
    InvoiceIn,
    InvoiceOut,
    SaleIn,
    SaleOut,
    SupplierIn,
    SupplierOut,
)
from app.services.access.permissions import Action, Page


def _mount(router: APIRouter, prefix: str, model, schema_in, schema_out, page: Page, label: str):
    """List/get/create/update/delete for one record kind, each guarded by its page grant."""

    @router.get(prefix, response_model=list[schema_out], name=f"list_{label}")
    def _list(
        project_id: int | None = Query(None),
        db: Session = Depends(get_db),
        _ctx=Depends(require_page(page)),
    ):
        return list_rows(db, model, project_id=project_id)

    @router.get(prefix + "/{row_id}", response_model=schema_out, name=f"get_{label}")
    def _get(row_id: int, db: Session = Depends(get_db), _ctx=Depends(require_page(page))):
        obj = get_row(db, model, row_id)
        if not obj:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return obj

    @router.post(prefix, response_model=schema_out, name=f"create_{label}")
    def _create(data: schema_in, db: Session = Depends(get_db), _ctx=Depends(require_page(page, Action.create))):
        return create_row(db, model, data)

    @router.put(prefix + "/{row_id}", response_model=schema_out, name=f"update_{label}")
    def _update(
        row_id: int,
        data: schema_in,
        db: Session = Depends(get_db),
        _ctx=Depends(require_page(page, Action.edit)),
    ):
        obj = get_row(db, model, row_id)
        if not obj:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return update_row(db, obj, data)

    @router.delete(prefix + "/{row_id}", name=f"delete_{label}")
    def _delete(row_id: int, db: Session = Depends(get_db), _ctx=Depends(require_page(page, Action.delete))):
        obj = get_row(db, model, row_id)
        if not obj:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        delete_row(db, obj)
        return {"status": "ok"}


router = APIRouter()

_mount(router, "/invoices", Invoice, InvoiceIn, InvoiceOut, Page.invoices, "invoice")
_mount(router, "/extracts", Extract, ExtractIn, ExtractOut, Page.extracts, "extract")
_mount(router, "/assignment-orders", AssignmentOrder, AssignmentOrderIn, AssignmentOrderOut, Page.assignment_orders, "assignment_order")
_mount(router, "/sales", Sale, SaleIn, SaleOut, Page.sales, "sale")
_mount(router, "/contractors", Contractor, ContractorIn, ContractorOut, Page.contractors, "contractor")
_mount(router, "/suppliers", Supplier, SupplierIn, SupplierOut, Page.suppliers, "supplier")
