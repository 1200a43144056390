"""Add permissions and hook registry tables.

Revision ID: a1b2c3d4e501
Revises:
Create Date: 2026-10-18

Adds the hook registry schema:
- permissions catalog (source of subscribable events)
- hook_templates and hook_schema_fields (declared configuration per template)
- hooks with hook_registered_events and hook_configuration
"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "a1b2c3d4e501"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("grouping", sa.String(64), nullable=False),
        sa.Column("code", sa.String(128), nullable=False),
        sa.Column("entity_name", sa.String(128), nullable=True),
        sa.Column("action_name", sa.String(128), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index(
        "idx_permissions_grouping_entity", "permissions", ["grouping", "entity_name"]
    )

    op.create_table(
        "hook_templates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_hook_templates_name", "hook_templates", ["name"])

    op.create_table(
        "hook_schema_fields",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("hook_template_id", sa.Integer(), nullable=False),
        sa.Column("field_type", sa.String(45), nullable=False),
        sa.Column("field_name", sa.String(100), nullable=False),
        sa.Column("placeholder", sa.String(100), nullable=True),
        sa.Column("optional", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.ForeignKeyConstraint(["hook_template_id"], ["hook_templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "hook_template_id", "field_name", name="uq_hook_schema_template_field"
        ),
    )

    op.create_table(
        "hooks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column(
            "created_date", sa.Date(), server_default=sa.text("CURRENT_DATE"), nullable=False
        ),
        sa.Column(
            "lastmodified_date", sa.Date(), server_default=sa.text("CURRENT_DATE"), nullable=False
        ),
        sa.ForeignKeyConstraint(["template_id"], ["hook_templates.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_hooks_name", "hooks", ["name"])

    op.create_table(
        "hook_registered_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("hook_id", sa.Integer(), nullable=False),
        sa.Column("entity_name", sa.String(45), nullable=False),
        sa.Column("action_name", sa.String(45), nullable=False),
        sa.ForeignKeyConstraint(["hook_id"], ["hooks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_hook_events_hook", "hook_registered_events", ["hook_id"])

    op.create_table(
        "hook_configuration",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("hook_id", sa.Integer(), nullable=False),
        sa.Column("field_type", sa.String(45), server_default="string", nullable=False),
        sa.Column("field_name", sa.String(100), nullable=False),
        sa.Column("field_value", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["hook_id"], ["hooks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_hook_configuration_hook", "hook_configuration", ["hook_id"])


def downgrade() -> None:
    op.drop_index("idx_hook_configuration_hook", table_name="hook_configuration")
    op.drop_table("hook_configuration")

    op.drop_index("idx_hook_events_hook", table_name="hook_registered_events")
    op.drop_table("hook_registered_events")

    op.drop_index("idx_hooks_name", table_name="hooks")
    op.drop_table("hooks")

    op.drop_table("hook_schema_fields")

    op.drop_index("idx_hook_templates_name", table_name="hook_templates")
    op.drop_table("hook_templates")

    op.drop_index("idx_permissions_grouping_entity", table_name="permissions")
    op.drop_table("permissions")
