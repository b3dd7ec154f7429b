"""Initial schema

Revision ID: 3f9c2a71d4e0
Revises:
Create Date: 2026-10-17 09:30:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c2a71d4e0"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("favorite_team", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_email"), ["email"], unique=True)
        batch_op.create_index(batch_op.f("ix_users_username"), ["username"], unique=True)

    op.create_table(
        "dynasties",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("current_year", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("dynasties", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_dynasties_owner_id"), ["owner_id"], unique=False)

    op.create_table(
        "dynasty_shared_users",
        sa.Column("dynasty_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["dynasty_id"], ["dynasties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("dynasty_id", "user_id"),
    )

    op.create_table(
        "coaches",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("dynasty_id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("college", sa.String(length=100), nullable=False),
        sa.Column("position", sa.String(length=2), nullable=False),
        sa.Column("current_year", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["dynasty_id"], ["dynasties.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("coaches", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_coaches_dynasty_id"), ["dynasty_id"], unique=False)

    op.create_table(
        "seasons",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("coach_id", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("wins", sa.Integer(), nullable=False),
        sa.Column("losses", sa.Integer(), nullable=False),
        sa.Column("is_editable", sa.Boolean(), nullable=False),
        sa.Column("college", sa.String(length=100), nullable=False),
        sa.Column("position", sa.String(length=2), nullable=False),
        sa.Column("conf_champ", sa.Boolean(), nullable=False),
        sa.Column("post_season", sa.String(length=10), nullable=False),
        sa.Column("bowl_game", sa.String(length=100), nullable=False),
        sa.Column("bowl_opponent", sa.String(length=100), nullable=False),
        sa.Column("bowl_result", sa.Boolean(), nullable=False),
        sa.Column("playoff_seed", sa.Integer(), nullable=True),
        sa.Column("playoff_result", sa.String(length=20), nullable=False),
        sa.CheckConstraint("wins >= 0", name="ck_season_wins_non_negative"),
        sa.CheckConstraint("losses >= 0", name="ck_season_losses_non_negative"),
        sa.CheckConstraint(
            "playoff_seed IS NULL OR playoff_seed BETWEEN 1 AND 12",
            name="ck_season_playoff_seed_range",
        ),
        sa.ForeignKeyConstraint(["coach_id"], ["coaches.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("coach_id", "year", name="uq_coach_season_year"),
    )
    with op.batch_alter_table("seasons", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_seasons_coach_id"), ["coach_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("seasons", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_seasons_coach_id"))
    op.drop_table("seasons")

    with op.batch_alter_table("coaches", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_coaches_dynasty_id"))
    op.drop_table("coaches")

    op.drop_table("dynasty_shared_users")

    with op.batch_alter_table("dynasties", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_dynasties_owner_id"))
    op.drop_table("dynasties")

    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_users_username"))
        batch_op.drop_index(batch_op.f("ix_users_email"))
    op.drop_table("users")
