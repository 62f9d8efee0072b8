"""Add project access scope to workspace members.

Revision ID: 002
Revises: 001
Create Date: 2026-03-02

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column(
        "workspace_member",
        sa.Column("project_access_scope", sa.String(20), nullable=False, server_default="all"),
    )
    op.create_check_constraint(
        "ck_workspace_member_project_access_scope",
        "workspace_member",
        "project_access_scope IN ('all', 'restricted')",
    )


def downgrade() -> None:
    op.drop_constraint("ck_workspace_member_project_access_scope", "workspace_member", type_="check")
    op.drop_column("workspace_member", "project_access_scope")
