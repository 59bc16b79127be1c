import datetime as dt
from decimal import Decimal
from sqlalchemy import ForeignKey, Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models._mixins import TimestampMixin

# Counterpart and project are kept both as FK and as free text: older rows
# only have the names, reports match on either.

class Invoice(Base, TimestampMixin):
    __tablename__ = "invoice"

    id: Mapped[int] = mapped_column(primary_key=True)
    invoice_number: Mapped[str] = mapped_column(String(64), index=True)

    supplier_id: Mapped[int | None] = mapped_column(ForeignKey("supplier.id", ondelete="SET NULL"), nullable=True, index=True)
    supplier_name: Mapped[str] = mapped_column(String(256))
    project_id: Mapped[int | None] = mapped_column(ForeignKey("project.id", ondelete="SET NULL"), nullable=True, index=True)
    project_name: Mapped[str | None] = mapped_column(String(256), nullable=True)

    amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    invoice_date: Mapped[dt.date] = mapped_column(Date, index=True)
    due_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(32), default="غير مدفوع")  # مدفوع|غير مدفوع|مدفوع جزئياً
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class Extract(Base, TimestampMixin):
    __tablename__ = "extract"

    id: Mapped[int] = mapped_column(primary_key=True)
    extract_number: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    contractor_id: Mapped[int | None] = mapped_column(ForeignKey("contractor.id", ondelete="SET NULL"), nullable=True, index=True)
    contractor_name: Mapped[str] = mapped_column(String(256))
    project_id: Mapped[int | None] = mapped_column(ForeignKey("project.id", ondelete="SET NULL"), nullable=True, index=True)
    project_name: Mapped[str] = mapped_column(String(256))

    amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    current_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    previous_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    percentage_completed: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    extract_date: Mapped[dt.date] = mapped_column(Date, index=True)
    status: Mapped[str] = mapped_column(String(32), default="قيد المراجعة")  # قيد المراجعة|معتمد|مرفوض|مدفوع
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class AssignmentOrder(Base, TimestampMixin):
    __tablename__ = "assignment_order"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_number: Mapped[str] = mapped_column(String(64), index=True)

    contractor_id: Mapped[int | None] = mapped_column(ForeignKey("contractor.id", ondelete="SET NULL"), nullable=True, index=True)
    contractor_name: Mapped[str] = mapped_column(String(256))
    project_id: Mapped[int | None] = mapped_column(ForeignKey("project.id", ondelete="SET NULL"), nullable=True, index=True)
    project_name: Mapped[str | None] = mapped_column(String(256), nullable=True)

    amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    order_date: Mapped[dt.date] = mapped_column(Date, index=True)
    status: Mapped[str] = mapped_column(String(32), default="جديد")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
