import datetime as dt
from decimal import Decimal
from sqlalchemy import ForeignKey, Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models._mixins import TimestampMixin


class Sale(Base, TimestampMixin):
    __tablename__ = "sale"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int | None] = mapped_column(ForeignKey("project.id", ondelete="SET NULL"), nullable=True, index=True)
    project_name: Mapped[str] = mapped_column(String(256))

    unit_number: Mapped[str] = mapped_column(String(64))
    unit_type: Mapped[str] = mapped_column(String(64))
    area: Mapped[Decimal] = mapped_column(Numeric(12, 2))

    customer_name: Mapped[str] = mapped_column(String(256))
    customer_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    price: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    remaining_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="متاح")  # متاح|محجوز|مباع
    sale_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True, index=True)
    installment_plan: Mapped[str | None] = mapped_column(Text, nullable=True)
