import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_AMOUNT = Decimal("1000000000")


class PartyIn(BaseModel):
    name: str = Field(..., min_length=2, max_length=256)
    company: str | None = None
    phone: str | None = None
    email: str | None = None
    status: str = "نشط"


class ContractorIn(PartyIn):
    specialization: str | None = None


class SupplierIn(PartyIn):
    category: str | None = None


class ContractorOut(ContractorIn):
    model_config = ConfigDict(from_attributes=True)
    id: int


class SupplierOut(SupplierIn):
    model_config = ConfigDict(from_attributes=True)
    id: int


class InvoiceIn(BaseModel):
    invoice_number: str = Field(..., min_length=1, max_length=50)
    supplier_id: int | None = None
    supplier_name: str = Field(..., min_length=2, max_length=255)
    project_id: int | None = None
    project_name: str | None = None
    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT, decimal_places=2)
    invoice_date: dt.date
    due_date: dt.date | None = None
    status: str = Field("غير مدفوع", pattern="^(مدفوع|غير مدفوع|مدفوع جزئياً)$")
    description: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def _due_after_issue(self):
        if self.due_date is not None and self.due_date < self.invoice_date:
            raise ValueError("تاريخ الاستحقاق يجب أن يكون بعد أو يساوي تاريخ الفاتورة")
        return self


class InvoiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    supplier_id: int | None = None
    supplier_name: str
    project_id: int | None = None
    project_name: str | None = None
    amount: Decimal | None = None
    invoice_date: dt.date
    due_date: dt.date | None = None
    status: str
    description: str | None = None


class ExtractIn(BaseModel):
    extract_number: str | None = Field(None, max_length=50)
    contractor_id: int | None = None
    contractor_name: str = Field(..., min_length=2, max_length=255)
    project_id: int | None = None
    project_name: str = Field(..., min_length=2, max_length=255)
    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT, decimal_places=2)
    current_amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    previous_amount: Decimal | None = Field(None, ge=0, decimal_places=2)
    percentage_completed: Decimal | None = Field(None, ge=0, le=100)
    extract_date: dt.date
    status: str = Field("قيد المراجعة", pattern="^(قيد المراجعة|معتمد|مرفوض|مدفوع)$")
    description: str | None = Field(None, max_length=1000)


class ExtractOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    extract_number: str | None = None
    contractor_id: int | None = None
    contractor_name: str
    project_id: int | None = None
    project_name: str
    amount: Decimal | None = None
    current_amount: Decimal | None = None
    previous_amount: Decimal | None = None
    percentage_completed: Decimal | None = None
    extract_date: dt.date
    status: str
    description: str | None = None


class AssignmentOrderIn(BaseModel):
    order_number: str = Field(..., min_length=1, max_length=50)
    contractor_id: int | None = None
    contractor_name: str = Field(..., min_length=2, max_length=255)
    project_id: int | None = None
    project_name: str | None = None
    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT, decimal_places=2)
    order_date: dt.date
    status: str = "جديد"
    description: str | None = Field(None, max_length=1000)


class AssignmentOrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_number: str
    contractor_id: int | None = None
    contractor_name: str
    project_id: int | None = None
    project_name: str | None = None
    amount: Decimal | None = None
    order_date: dt.date
    status: str
    description: str | None = None


class SaleIn(BaseModel):
    project_id: int | None = None
    project_name: str = Field(..., min_length=2, max_length=255)
    unit_number: str = Field(..., min_length=1, max_length=64)
    unit_type: str
    area: Decimal = Field(..., gt=0, le=100000)
    customer_name: str = Field(..., min_length=2, max_length=255)
    customer_phone: str | None = None
    price: Decimal = Field(..., gt=0, le=MAX_AMOUNT, decimal_places=2)
    remaining_amount: Decimal | None = Field(None, ge=0)
    status: str = Field("متاح", pattern="^(متاح|محجوز|مباع)$")
    sale_date: dt.date | None = None
    installment_plan: str | None = Field(None, max_length=500)


class SaleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int | None = None
    project_name: str
    unit_number: str
    unit_type: str
    area: Decimal
    customer_name: str
    customer_phone: str | None = None
    price: Decimal | None = None
    remaining_amount: Decimal | None = None
    status: str
    sale_date: dt.date | None = None
    installment_plan: str | None = None
