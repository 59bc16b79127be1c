from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.db.models.finance import Invoice, Extract, AssignmentOrder
from app.db.models.parties import Contractor, Supplier
from app.db.models.sales import Sale

# newest first, as the list screens show them
ORDERING = {
    Invoice: (Invoice.invoice_date.desc(), Invoice.id.desc()),
    Extract: (Extract.extract_date.desc(), Extract.id.desc()),
    AssignmentOrder: (AssignmentOrder.order_date.desc(), AssignmentOrder.id.desc()),
    Sale: (Sale.created_at.desc(), Sale.id.desc()),
    Contractor: (Contractor.name, Contractor.id),
    Supplier: (Supplier.name, Supplier.id),
}

def list_rows(db: Session, model, project_id: int | None = None):
    q = db.query(model)
    if project_id is not None and hasattr(model, "project_id"):
        q = q.filter(model.project_id == project_id)
    return q.order_by(*ORDERING.get(model, (model.id,))).all()

def get_row(db: Session, model, row_id: int) -> Any | None:
    return db.query(model).filter(model.id == row_id).one_or_none()

def create_row(db: Session, model, data: BaseModel):
    obj = model(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def update_row(db: Session, obj, data: BaseModel):
    for k, v in data.model_dump().items():
        setattr(obj, k, v)
    db.commit()
    db.refresh(obj)
    return obj

def delete_row(db: Session, obj) -> None:
    db.delete(obj)
    db.commit()
