"""Initial schema for PromptFrame-AI

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

Creates every table of the PromptFrame-AI service:
- Accounts and login sessions
- Image styles, generation jobs and generated images
- Project sessions and concept lists
- Prompt configuration (user preferences, system prompts, media adapters)

Default styles, media adapters and demo users are inserted by the server
on startup (PROMPTFRAME_AI_SEED_DEFAULTS), not by this migration.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("role", sa.String(16), nullable=False, server_default="user"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_email", "email", unique=True),
    )

    # Create auth_sessions table
    op.create_table(
        "auth_sessions",
        sa.Column("id", sa.String(128), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_auth_sessions_user_id", "user_id"),
        sa.Index("ix_auth_sessions_expires_at", "expires_at"),
    )

    # Create image_styles table
    op.create_table(
        "image_styles",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("style_prompt", sa.Text(), nullable=True),
        sa.Column("reference_image_url", sa.Text(), nullable=True),
        sa.Column("is_ai_extracted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("composition_prompt", sa.Text(), nullable=True),
        sa.Column("concept_prompt", sa.Text(), nullable=True),
        sa.Column("preview_image_url", sa.Text(), nullable=True),
        sa.Column("ai_style_data", JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_image_styles_created_by", "created_by"),
    )

    # Create generation_jobs table
    op.create_table(
        "generation_jobs",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("session_id", sa.String(36), nullable=True),
        sa.Column("style_id", sa.String(36), sa.ForeignKey("image_styles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("visual_concepts", JSONB(), nullable=False, server_default="[]"),
        sa.Column("settings", JSONB(), nullable=False, server_default="{}"),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_generation_jobs_user_id", "user_id"),
        sa.Index("ix_generation_jobs_session_id", "session_id"),
        sa.Index("ix_generation_jobs_created_at", "created_at"),
    )

    # Create generated_images table
    op.create_table(
        "generated_images",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("job_id", sa.String(36), sa.ForeignKey("generation_jobs.id", ondelete="CASCADE"), nullable=True),
        sa.Column("source_image_id", sa.String(36), nullable=True),
        sa.Column("visual_concept", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("regeneration_instruction", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="generating"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_generated_images_user_id", "user_id"),
        sa.Index("ix_generated_images_job_id", "job_id"),
        sa.Index("ix_generated_images_created_at", "created_at"),
    )

    # Create project_sessions table
    op.create_table(
        "project_sessions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("style_id", sa.String(36), sa.ForeignKey("image_styles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("visual_concepts", JSONB(), nullable=False, server_default="[]"),
        sa.Column("settings", JSONB(), nullable=False, server_default="{}"),
        sa.Column("is_temporary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_unsaved_changes", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_project_sessions_user_id", "user_id"),
        sa.Index("ix_project_sessions_updated_at", "updated_at"),
    )

    # Create user_preferences table
    op.create_table(
        "user_preferences",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("default_extraction_prompt", sa.Text(), nullable=False),
        sa.Column("default_concept_prompt", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_user_preferences_user_id", "user_id", unique=True),
    )

    # Create system_prompts table
    op.create_table(
        "system_prompts",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("prompt_text", sa.Text(), nullable=False),
        sa.Column("prompt_type", sa.String(64), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_system_prompts_prompt_type", "prompt_type"),
    )

    # Create media_adapters table
    op.create_table(
        "media_adapters",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("vocabulary_adjustments", sa.Text(), nullable=True),
        sa.Column("lighting_adjustments", sa.Text(), nullable=True),
        sa.Column("surface_adjustments", sa.Text(), nullable=True),
        sa.Column("conceptual_adjustments", sa.Text(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # Create concept_lists table
    op.create_table(
        "concept_lists",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("company_name", sa.Text(), nullable=False),
        sa.Column("reference_image_url", sa.Text(), nullable=True),
        sa.Column("marketing_content", sa.Text(), nullable=False),
        sa.Column("prompt_id", sa.String(36), nullable=True),
        sa.Column("prompt_text", sa.Text(), nullable=True),
        sa.Column("temperature", sa.Float(), nullable=False, server_default="0.7"),
        sa.Column("literal_metaphorical", sa.Float(), nullable=False, server_default="0"),
        sa.Column("simple_complex", sa.Float(), nullable=False, server_default="0"),
        sa.Column("concepts", JSONB(), nullable=False, server_default="[]"),
        sa.Column("conversation_history", JSONB(), nullable=False, server_default="[]"),
        sa.Column("previous_state", JSONB(), nullable=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_concept_lists_user_id", "user_id"),
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("concept_lists")
    op.drop_table("media_adapters")
    op.drop_table("system_prompts")
    op.drop_table("user_preferences")
    op.drop_table("project_sessions")
    op.drop_table("generated_images")
    op.drop_table("generation_jobs")
    op.drop_table("image_styles")
    op.drop_table("auth_sessions")
    op.drop_table("users")
