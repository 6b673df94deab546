"""Initial schema - entity and entity_property.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "entity",
        sa.Column("kind", sa.String(255), primary_key=True),
        sa.Column("parent", sa.String(1024), primary_key=True, server_default=""),
        sa.Column("name", sa.String(1024), primary_key=True),
    )

    # One typed row per property; exactly one *_value column is set per row.
    op.create_table(
        "entity_property",
        sa.Column("kind", sa.String(255), primary_key=True),
        sa.Column("parent", sa.String(1024), primary_key=True),
        sa.Column("name", sa.String(1024), primary_key=True),
        sa.Column("key", sa.String(1024), primary_key=True),
        sa.Column("property_type", sa.String(20), nullable=False),
        sa.Column("str_value", sa.Text(), nullable=True),
        sa.Column("int_value", sa.BigInteger(), nullable=True),
        sa.Column("float_value", sa.Float(), nullable=True),
        sa.Column("bool_value", sa.Boolean(), nullable=True),
        sa.Column("time_value", sa.DateTime(timezone=True), nullable=True),
        sa.Column("bytes_value", sa.LargeBinary(), nullable=True),
        sa.ForeignKeyConstraint(
            ["kind", "parent", "name"],
            ["entity.kind", "entity.parent", "entity.name"],
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "property_type IN ('text', 'str', 'int', 'float', 'bool', "
            "'datetime', 'naive_datetime', 'bytes')",
            name="ck_entity_property_type",
        ),
    )
    op.create_index(
        "ix_entity_property_key_type",
        "entity_property",
        ["kind", "parent", "key", "property_type"],
    )


def downgrade() -> None:
    op.drop_index("ix_entity_property_key_type", table_name="entity_property")
    op.drop_table("entity_property")
    op.drop_table("entity")
