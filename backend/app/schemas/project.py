import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, ConfigDict

class ProjectCreate(BaseModel):
    code: str
    name: str
    description: str | None = None
    location: str | None = None
    type: str | None = None
    status: str = "قيد التنفيذ"
    total_units: int = 0
    start_date: dt.date | None = None
    expected_completion: dt.date | None = None


class ProjectUpdate(BaseModel):
    code: str | None = None
    name: str | None = None
    description: str | None = None
    location: str | None = None
    type: str | None = None
    status: str | None = None
    total_units: int | None = None
    start_date: dt.date | None = None
    expected_completion: dt.date | None = None

class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    description: str | None = None
    location: str | None = None
    type: str | None = None
    status: str
    total_units: int
    start_date: dt.date | None = None
    expected_completion: dt.date | None = None

class ProjectWithTotalsOut(ProjectOut):
    total_sales: Decimal
    total_expenses: Decimal
