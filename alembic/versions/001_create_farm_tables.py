"""Create users, fields and device_controllers tables

Revision ID: 001
Revises: None
Create Date: 2025-01-15 00:00:00.000000+00:00

What:  Initial schema: users own fields, fields host device controllers.
How:   Integer identity keys. fields.user_id is a cascading foreign key;
       device_controllers.field_id is a plain column. Both are indexed for
       the per-parent listing queries.

Rollback: downgrade() drops the three tables, children first.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False,
                  comment="Identity key assigned by the database"),
        sa.Column("name", sa.String(200), nullable=False, comment="Full name of the user"),
        sa.Column("phone_number", sa.String(32), nullable=False,
                  comment="Phone number used for notifications"),
        sa.Column("email", sa.String(320), nullable=False, comment="Email address used for updates"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "fields",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False, comment="Name of the field"),
        sa.Column("user_id", sa.Integer(), nullable=False, comment="Owning user"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    # "Fields of user X" is the listing behind GET /users/{id}/fields
    op.create_index("ix_fields_user_id", "fields", ["user_id"])

    op.create_table(
        "device_controllers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("type", sa.String(100), nullable=False,
                  comment="Kind of device, e.g. Irrigation or Sensor"),
        sa.Column("field_id", sa.Integer(), nullable=False,
                  comment="Field the device is installed on (not enforced)"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_device_controllers_field_id", "device_controllers", ["field_id"])


def downgrade() -> None:
    """Drop all three tables. Destructive: every user, field and device is lost."""
    op.drop_index("ix_device_controllers_field_id", table_name="device_controllers")
    op.drop_table("device_controllers")
    op.drop_index("ix_fields_user_id", table_name="fields")
    op.drop_table("fields")
    op.drop_table("users")
