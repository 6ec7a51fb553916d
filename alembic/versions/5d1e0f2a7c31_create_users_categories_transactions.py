"""Create users, categories and transactions; seed the system roots.

Revision ID: 5d1e0f2a7c31
Revises:
Create Date: 2026-02-02
"""

from datetime import datetime, timezone
from typing import Sequence, Union
from uuid import uuid4

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5d1e0f2a7c31"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    root_kind = sa.Enum("income", "expense", name="root_kind")
    categories = op.create_table(
        "categories",
        sa.Column("owner_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("parent_id", sa.Uuid(), nullable=True),
        sa.Column("color", sa.String(length=20), nullable=False),
        sa.Column("icon", sa.String(length=50), nullable=False),
        sa.Column("root_kind", root_kind, nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["categories.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("root_kind"),
        # Roots have neither owner nor parent; every other category has both.
        sa.CheckConstraint(
            "(root_kind IS NULL AND owner_id IS NOT NULL AND parent_id IS NOT NULL)"
            " OR (root_kind IS NOT NULL AND owner_id IS NULL AND parent_id IS NULL)",
            name="ck_categories_root_shape",
        ),
    )
    op.create_index("ix_categories_owner_id", "categories", ["owner_id"])
    op.create_index("ix_categories_parent_id", "categories", ["parent_id"])

    op.create_table(
        "transactions",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("txn_date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False, server_default=""),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])
    op.create_index("ix_transactions_category_id", "transactions", ["category_id"])
    op.create_index("ix_transactions_txn_date", "transactions", ["txn_date"])
    op.create_index(
        "ix_transactions_user_id_txn_date", "transactions", ["user_id", "txn_date"]
    )

    now = datetime.now(timezone.utc)
    op.bulk_insert(
        categories,
        [
            {
                "id": uuid4(),
                "owner_id": None,
                "parent_id": None,
                "name": "Income",
                "color": "#22c55e",
                "icon": "trending-up",
                "root_kind": "income",
                "created_at": now,
                "updated_at": now,
            },
            {
                "id": uuid4(),
                "owner_id": None,
                "parent_id": None,
                "name": "Expense",
                "color": "#ef4444",
                "icon": "trending-down",
                "root_kind": "expense",
                "created_at": now,
                "updated_at": now,
            },
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_transactions_user_id_txn_date", table_name="transactions")
    op.drop_index("ix_transactions_txn_date", table_name="transactions")
    op.drop_index("ix_transactions_category_id", table_name="transactions")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_categories_parent_id", table_name="categories")
    op.drop_index("ix_categories_owner_id", table_name="categories")
    op.drop_table("categories")
    sa.Enum(name="root_kind").drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
