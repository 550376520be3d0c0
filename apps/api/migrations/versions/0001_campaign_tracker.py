"""campaign tracker v1: campaigns / locations / entries / statuses / characters / saves

- unique (campaign_id, number) on locations, (location_id, number) on entries
- unique (campaign_id, character_type) on characters
- unique (campaign_id, status_id) on campaign_statuses, unique statuses.name
- campaign children ON DELETE CASCADE

Revision ID: 0001_campaign_tracker
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_campaign_tracker"
down_revision = None
branch_labels = None
depends_on = None


def _counters() -> list:
    return [
        sa.Column(name, sa.Integer(), nullable=False, server_default="0")
        for name in ("food", "wealth", "experience", "magic", "energy", "health", "terror")
    ]


def upgrade() -> None:
    op.create_table(
        "campaigns",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_campaigns_updated_at", "campaigns", ["updated_at"])

    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("dream", sa.Text(), nullable=True),
        sa.Column("nightmare", sa.Text(), nullable=True),
        sa.Column("has_menhir", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("menhir_note", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
        sa.UniqueConstraint("campaign_id", "number", name="uq_locations_campaign_id_number"),
    )
    op.create_index("ix_locations_campaign_id", "locations", ["campaign_id"])

    op.create_table(
        "entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("location_id", sa.Integer(), sa.ForeignKey("locations.id", ondelete="CASCADE"), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("info", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=True),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
        sa.UniqueConstraint("location_id", "number", name="uq_entries_location_id_number"),
    )
    op.create_index("ix_entries_location_id", "entries", ["location_id"])

    op.create_table(
        "statuses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False, unique=True),
        sa.Column("checkbox_count", sa.Integer(), nullable=False),
        sa.CheckConstraint("checkbox_count >= 1", name="ck_statuses_checkbox_count"),
    )

    op.create_table(
        "campaign_statuses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status_id", sa.Integer(), sa.ForeignKey("statuses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("checked_boxes", sa.Text(), nullable=False, server_default=""),
        sa.Column("updated_at", sa.Text(), nullable=False),
        sa.UniqueConstraint("campaign_id", "status_id", name="uq_campaign_statuses_campaign_id_status_id"),
    )
    op.create_index("ix_campaign_statuses_campaign_id", "campaign_statuses", ["campaign_id"])

    op.create_table(
        "characters",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False),
        sa.Column("character_type", sa.Text(), nullable=False),  # Iunis|Gerdwyn|Elgan|Osbert
        sa.Column("player_name", sa.Text(), nullable=False),
        *_counters(),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
        sa.UniqueConstraint("campaign_id", "character_type", name="uq_characters_campaign_id_character_type"),
    )
    op.create_index("ix_characters_campaign_id", "characters", ["campaign_id"])

    # saves + saved_characters are immutable snapshots (delete only)
    op.create_table(
        "saves",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_saves_campaign_id", "saves", ["campaign_id"])

    op.create_table(
        "saved_characters",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("save_id", sa.Integer(), sa.ForeignKey("saves.id", ondelete="CASCADE"), nullable=False),
        sa.Column("character_type", sa.Text(), nullable=False),
        sa.Column("player_name", sa.Text(), nullable=False),
        *_counters(),
        sa.Column("location_number", sa.Integer(), nullable=True),
    )
    op.create_index("ix_saved_characters_save_id", "saved_characters", ["save_id"])

    op.execute("""
    CREATE TRIGGER IF NOT EXISTS trg_saved_characters_no_update
    BEFORE UPDATE ON saved_characters
    BEGIN
      SELECT RAISE(ABORT, 'immutable: saved_characters cannot be updated');
    END;
    """)


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS trg_saved_characters_no_update;")

    op.drop_index("ix_saved_characters_save_id", table_name="saved_characters")
    op.drop_table("saved_characters")

    op.drop_index("ix_saves_campaign_id", table_name="saves")
    op.drop_table("saves")

    op.drop_index("ix_characters_campaign_id", table_name="characters")
    op.drop_table("characters")

    op.drop_index("ix_campaign_statuses_campaign_id", table_name="campaign_statuses")
    op.drop_table("campaign_statuses")

    op.drop_table("statuses")

    op.drop_index("ix_entries_location_id", table_name="entries")
    op.drop_table("entries")

    op.drop_index("ix_locations_campaign_id", table_name="locations")
    op.drop_table("locations")

    op.drop_index("ix_campaigns_updated_at", table_name="campaigns")
    op.drop_table("campaigns")
