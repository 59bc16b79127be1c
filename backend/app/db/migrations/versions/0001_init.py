"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    ]


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("login", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=256), nullable=True),
        sa.Column("full_name", sa.String(length=256), nullable=True),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_user_login", "user", ["login"], unique=True)

    op.create_table(
        "user_permission",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), nullable=False),
        sa.Column("page_name", sa.String(length=64), nullable=False),
        sa.Column("can_view", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("can_create", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("can_edit", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("can_delete", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "page_name", name="uq_user_permission_user_page"),
    )
    op.create_index("ix_user_permission_user_id", "user_permission", ["user_id"])

    op.create_table(
        "project",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=256), nullable=True),
        sa.Column("type", sa.String(length=64), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("total_units", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("expected_completion", sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_project_code", "project", ["code"], unique=True)
    op.create_index("ix_project_name", "project", ["name"])

    for table, extra in (
        ("contractor", sa.Column("specialization", sa.String(length=128), nullable=True)),
        ("supplier", sa.Column("category", sa.String(length=128), nullable=True)),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(length=256), nullable=False),
            extra,
            sa.Column("company", sa.String(length=256), nullable=True),
            sa.Column("phone", sa.String(length=32), nullable=True),
            sa.Column("email", sa.String(length=256), nullable=True),
            sa.Column("status", sa.String(length=32), nullable=False),
            *_timestamps(),
        )
        op.create_index(f"ix_{table}_name", table, ["name"])

    op.create_table(
        "invoice",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("invoice_number", sa.String(length=64), nullable=False),
        sa.Column("supplier_id", sa.Integer(), sa.ForeignKey("supplier.id", ondelete="SET NULL"), nullable=True),
        sa.Column("supplier_name", sa.String(length=256), nullable=False),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="SET NULL"), nullable=True),
        sa.Column("project_name", sa.String(length=256), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("invoice_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_invoice_invoice_number", "invoice", ["invoice_number"])
    op.create_index("ix_invoice_supplier_id", "invoice", ["supplier_id"])
    op.create_index("ix_invoice_project_id", "invoice", ["project_id"])
    op.create_index("ix_invoice_invoice_date", "invoice", ["invoice_date"])

    op.create_table(
        "extract",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("extract_number", sa.String(length=64), nullable=True),
        sa.Column("contractor_id", sa.Integer(), sa.ForeignKey("contractor.id", ondelete="SET NULL"), nullable=True),
        sa.Column("contractor_name", sa.String(length=256), nullable=False),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="SET NULL"), nullable=True),
        sa.Column("project_name", sa.String(length=256), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("current_amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("previous_amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("percentage_completed", sa.Numeric(5, 2), nullable=True),
        sa.Column("extract_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_extract_extract_number", "extract", ["extract_number"])
    op.create_index("ix_extract_contractor_id", "extract", ["contractor_id"])
    op.create_index("ix_extract_project_id", "extract", ["project_id"])
    op.create_index("ix_extract_extract_date", "extract", ["extract_date"])

    op.create_table(
        "assignment_order",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_number", sa.String(length=64), nullable=False),
        sa.Column("contractor_id", sa.Integer(), sa.ForeignKey("contractor.id", ondelete="SET NULL"), nullable=True),
        sa.Column("contractor_name", sa.String(length=256), nullable=False),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="SET NULL"), nullable=True),
        sa.Column("project_name", sa.String(length=256), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_assignment_order_order_number", "assignment_order", ["order_number"])
    op.create_index("ix_assignment_order_contractor_id", "assignment_order", ["contractor_id"])
    op.create_index("ix_assignment_order_project_id", "assignment_order", ["project_id"])
    op.create_index("ix_assignment_order_order_date", "assignment_order", ["order_date"])

    op.create_table(
        "sale",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("project.id", ondelete="SET NULL"), nullable=True),
        sa.Column("project_name", sa.String(length=256), nullable=False),
        sa.Column("unit_number", sa.String(length=64), nullable=False),
        sa.Column("unit_type", sa.String(length=64), nullable=False),
        sa.Column("area", sa.Numeric(12, 2), nullable=False),
        sa.Column("customer_name", sa.String(length=256), nullable=False),
        sa.Column("customer_phone", sa.String(length=32), nullable=True),
        sa.Column("price", sa.Numeric(14, 2), nullable=True),
        sa.Column("remaining_amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("sale_date", sa.Date(), nullable=True),
        sa.Column("installment_plan", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_sale_project_id", "sale", ["project_id"])
    op.create_index("ix_sale_sale_date", "sale", ["sale_date"])


def downgrade():
    op.drop_table("sale")
    op.drop_table("assignment_order")
    op.drop_table("extract")
    op.drop_table("invoice")
    op.drop_table("supplier")
    op.drop_table("contractor")
    op.drop_table("project")
    op.drop_table("user_permission")
    op.drop_table("user")
