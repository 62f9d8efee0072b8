"""Initial schema - workspaces, memberships, projects, roles and permissions.

Revision ID: 001
Revises:
Create Date: 2026-01-12

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# resource -> actions seeded into the permission catalog
PERMISSION_CATALOG = {
    "clients": ["read", "create", "update", "delete"],
    "projects": ["read", "create", "update", "delete"],
    "tasks": ["read", "write", "create", "update", "delete"],
    "time_entries": ["read", "create", "update", "delete"],
    "costs": ["read", "create", "update", "delete"],
    "invoices": ["read", "create", "update", "delete"],
    "financial": ["view_prices", "view_costs"],
    "pages": ["view_dashboard", "view_invoices", "view_reports"],
    "roles": ["read", "create", "update", "delete", "assign"],
}

# Default grants of the system roles. owner never needs grants (ownership
# always allows); admin gets the whole catalog.
MEMBER_DEFAULTS = [("tasks", "read"), ("tasks", "write")]


def upgrade() -> None:
    op.create_table(
        "profile",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("is_global_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        "workspace",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("owner_id", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_workspace_owner_id", "workspace", ["owner_id"])

    op.create_table(
        "workspace_member",
        sa.Column("workspace_id", sa.UUID(), sa.ForeignKey("workspace.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("role", sa.String(50), nullable=False, server_default="member"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_workspace_member_user_id", "workspace_member", ["user_id"])

    op.create_table(
        "project",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("workspace_id", sa.UUID(), sa.ForeignKey("workspace.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
    )
    op.create_index("ix_project_workspace_id", "project", ["workspace_id"])

    op.create_table(
        "project_member",
        sa.Column("project_id", sa.UUID(), sa.ForeignKey("project.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.String(255), primary_key=True),
    )
    op.create_index("ix_project_member_user_id", "project_member", ["user_id"])

    op.create_table(
        "role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_system_role", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_role_name", "role", ["name"], unique=True)

    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("resource", sa.String(100), nullable=False),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
    )
    op.create_index("ix_permission_resource_action", "permission", ["resource", "action"], unique=True)

    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_id", sa.UUID(), sa.ForeignKey("permission.id", ondelete="CASCADE"), primary_key=True),
    )

    # No cascade from role: deleting an assigned role must fail.
    op.create_table(
        "user_role",
        sa.Column("workspace_id", sa.UUID(), sa.ForeignKey("workspace.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id"), nullable=False),
    )
    op.create_index("ix_user_role_role_id", "user_role", ["role_id"])

    op.execute("""
        INSERT INTO role (id, name, description, is_system_role) VALUES
        (gen_random_uuid(), 'owner', 'Workspace owner', true),
        (gen_random_uuid(), 'admin', 'Workspace administrator', true),
        (gen_random_uuid(), 'member', 'Workspace member', true)
    """)

    permission = sa.table(
        "permission",
        sa.column("id", sa.UUID()),
        sa.column("resource", sa.String()),
        sa.column("action", sa.String()),
    )
    for resource, actions in PERMISSION_CATALOG.items():
        for action in actions:
            op.execute(
                permission.insert().values(
                    id=sa.func.gen_random_uuid(), resource=resource, action=action
                )
            )

    op.execute("""
        INSERT INTO role_permission (role_id, permission_id)
        SELECT r.id, p.id FROM role r CROSS JOIN permission p WHERE r.name = 'admin'
    """)
    for resource, action in MEMBER_DEFAULTS:
        op.execute(
            sa.text(
                "INSERT INTO role_permission (role_id, permission_id) "
                "SELECT r.id, p.id FROM role r, permission p "
                "WHERE r.name = 'member' AND p.resource = :resource AND p.action = :action"
            ).bindparams(resource=resource, action=action)
        )


def downgrade() -> None:
    op.drop_table("user_role")
    op.drop_table("role_permission")
    op.drop_table("permission")
    op.drop_table("role")
    op.drop_table("project_member")
    op.drop_table("project")
    op.drop_table("workspace_member")
    op.drop_table("workspace")
    op.drop_table("profile")
