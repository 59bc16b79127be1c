from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_page
from app.schemas.project import ProjectCreate, ProjectOut, ProjectUpdate, ProjectWithTotalsOut
from app.crud.projects import create_project, delete_project, get_project, list_projects, update_project
from app.services.access.permissions import Action, Page
from app.services.reports.service import financials

router = APIRouter()

@router.get("", response_model=list[ProjectWithTotalsOut])
def get_projects(db: Session = Depends(get_db), _ctx=Depends(require_page(Page.projects))):
    totals = {r["project_id"]: r for r in financials(db)["rows"]}
    out = []
    for p in list_projects(db):
        t = totals[p.id]
        out.append(ProjectWithTotalsOut(
            **ProjectOut.model_validate(p).model_dump(),
            total_sales=t["total_sales"],
            total_expenses=t["total_expenses"],
        ))
    return out

@router.get("/{project_id}", response_model=ProjectOut)
def get_one(project_id: int, db: Session = Depends(get_db), _ctx=Depends(require_page(Page.projects))):
    p = get_project(db, project_id)
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    return p

@router.post("", response_model=ProjectOut)
def post_project(data: ProjectCreate, db: Session = Depends(get_db), _ctx=Depends(require_page(Page.projects, Action.create))):
    return create_project(db, data)


@router.put("/{project_id}", response_model=ProjectOut)
def put_project(
    project_id: int,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    _ctx=Depends(require_page(Page.projects, Action.edit)),
):
    p = get_project(db, project_id)
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    return update_project(db, p, data)


@router.delete("/{project_id}")
def remove_project(
    project_id: int,
    db: Session = Depends(get_db),
    _ctx=Depends(require_page(Page.projects, Action.delete)),
):
    p = get_project(db, project_id)
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    delete_project(db, p)
    return {"status": "ok"}
