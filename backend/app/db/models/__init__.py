# import all models for Alembic
from app.db.models.user import User, UserPermission
from app.db.models.project import Project
from app.db.models.parties import Contractor, Supplier
from app.db.models.finance import Invoice, Extract, AssignmentOrder
from app.db.models.sales import Sale
