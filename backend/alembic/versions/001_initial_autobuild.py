"""Initial migration: jobs, divisions, teams, fields, schedule and game link tables

Revision ID: 001_initial_autobuild
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial_autobuild"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "job",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("path", sa.String(), nullable=False),
        sa.Column("year", sa.String(), nullable=True),
        sa.Column("season", sa.String(), nullable=True),
        sa.Column("league_id", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_job_customer_id", "job", ["customer_id"])
    op.create_index("ix_job_league_id", "job", ["league_id"])

    op.create_table(
        "agegroup",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("league_id", sa.Integer(), nullable=True),
        sa.Column("season", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_agegroup_league_id", "agegroup", ["league_id"])

    op.create_table(
        "division",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("agegroup_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agegroup_id"], ["agegroup.id"]),
    )
    op.create_index("ix_division_agegroup_id", "division", ["agegroup_id"])

    op.create_table(
        "clubregistration",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("club_name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "team",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("job_id", sa.Integer(), nullable=False),
        sa.Column("agegroup_id", sa.Integer(), nullable=True),
        sa.Column("div_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("div_rank", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean(), nullable=True),
        sa.Column("club_registration_id", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["job_id"], ["job.id"]),
        sa.ForeignKeyConstraint(["agegroup_id"], ["agegroup.id"]),
        sa.ForeignKeyConstraint(["div_id"], ["division.id"]),
        sa.ForeignKeyConstraint(["club_registration_id"], ["clubregistration.id"]),
    )
    op.create_index("ix_team_job_id", "team", ["job_id"])
    op.create_index("ix_team_div_id", "team", ["div_id"])

    op.create_table(
        "field",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "fieldleagueseason",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("field_id", sa.Integer(), nullable=False),
        sa.Column("league_id", sa.Integer(), nullable=False),
        sa.Column("season", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["field_id"], ["field.id"]),
        sa.UniqueConstraint("field_id", "league_id", "season", name="uq_field_league_season"),
    )
    op.create_index("ix_fieldleagueseason_league_id", "fieldleagueseason", ["league_id"])

    op.create_table(
        "game",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("job_id", sa.Integer(), nullable=False),
        sa.Column("league_id", sa.Integer(), nullable=True),
        sa.Column("season", sa.String(), nullable=True),
        sa.Column("year", sa.String(), nullable=True),
        sa.Column("agegroup_id", sa.Integer(), nullable=True),
        sa.Column("agegroup_name", sa.String(), nullable=True),
        sa.Column("div_id", sa.Integer(), nullable=True),
        sa.Column("div_name", sa.String(), nullable=True),
        sa.Column("round", sa.Integer(), nullable=True),
        sa.Column("game_number", sa.Integer(), nullable=True),
        sa.Column("field_id", sa.Integer(), nullable=True),
        sa.Column("field_name", sa.String(), nullable=True),
        sa.Column("game_date", sa.DateTime(), nullable=True),
        sa.Column("status_code", sa.Integer(), nullable=True),
        sa.Column("t1_id", sa.Integer(), nullable=True),
        sa.Column("t1_name", sa.String(), nullable=True),
        sa.Column("t1_type", sa.String(), nullable=True),
        sa.Column("t1_no", sa.Integer(), nullable=True),
        sa.Column("t1_annotation", sa.String(), nullable=True),
        sa.Column("t2_id", sa.Integer(), nullable=True),
        sa.Column("t2_name", sa.String(), nullable=True),
        sa.Column("t2_type", sa.String(), nullable=True),
        sa.Column("t2_no", sa.Integer(), nullable=True),
        sa.Column("t2_annotation", sa.String(), nullable=True),
        sa.Column("modified", sa.DateTime(), nullable=True),
        sa.Column("modified_by", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["job_id"], ["job.id"]),
        sa.ForeignKeyConstraint(["agegroup_id"], ["agegroup.id"]),
        sa.ForeignKeyConstraint(["div_id"], ["division.id"]),
        sa.ForeignKeyConstraint(["field_id"], ["field.id"]),
        sa.ForeignKeyConstraint(["t1_id"], ["team.id"]),
        sa.ForeignKeyConstraint(["t2_id"], ["team.id"]),
    )
    op.create_index("ix_game_job_id", "game", ["job_id"])
    op.create_index("ix_game_div_id", "game", ["div_id"])
    op.create_index("ix_game_game_date", "game", ["game_date"])

    # Rows referencing a game (removed before the game on delete)
    op.create_table(
        "devicegame",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("game_id", sa.Integer(), nullable=False),
        sa.Column("device_token", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["game_id"], ["game.id"]),
    )
    op.create_index("ix_devicegame_game_id", "devicegame", ["game_id"])

    op.create_table(
        "bracketseed",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("game_id", sa.Integer(), nullable=False),
        sa.Column("div_id", sa.Integer(), nullable=True),
        sa.Column("t1_seed_rank", sa.Integer(), nullable=True),
        sa.Column("t2_seed_rank", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["game_id"], ["game.id"]),
    )
    op.create_index("ix_bracketseed_game_id", "bracketseed", ["game_id"])

    op.create_table(
        "refgameassignment",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("game_id", sa.Integer(), nullable=False),
        sa.Column("referee_user_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["game_id"], ["game.id"]),
    )
    op.create_index("ix_refgameassignment_game_id", "refgameassignment", ["game_id"])

    op.create_table(
        "pairing",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("league_id", sa.Integer(), nullable=False),
        sa.Column("season", sa.String(), nullable=False),
        sa.Column("team_count", sa.Integer(), nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("game_number", sa.Integer(), nullable=False),
        sa.Column("t1", sa.Integer(), nullable=False),
        sa.Column("t2", sa.Integer(), nullable=False),
        sa.Column("t1_type", sa.String(), nullable=False, server_default="T"),
        sa.Column("t2_type", sa.String(), nullable=False, server_default="T"),
        sa.Column("t1_annotation", sa.String(), nullable=True),
        sa.Column("t2_annotation", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pairing_league_id", "pairing", ["league_id"])
    op.create_index("ix_pairing_team_count", "pairing", ["team_count"])

    op.create_table(
        "timeslotdate",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("agegroup_id", sa.Integer(), nullable=False),
        sa.Column("div_id", sa.Integer(), nullable=True),
        sa.Column("game_date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agegroup_id"], ["agegroup.id"]),
        sa.ForeignKeyConstraint(["div_id"], ["division.id"]),
    )
    op.create_index("ix_timeslotdate_agegroup_id", "timeslotdate", ["agegroup_id"])

    op.create_table(
        "timeslotfield",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("agegroup_id", sa.Integer(), nullable=False),
        sa.Column("div_id", sa.Integer(), nullable=True),
        sa.Column("field_id", sa.Integer(), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("gamestart_interval", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("max_games_per_field", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agegroup_id"], ["agegroup.id"]),
        sa.ForeignKeyConstraint(["div_id"], ["division.id"]),
        sa.ForeignKeyConstraint(["field_id"], ["field.id"]),
    )
    op.create_index("ix_timeslotfield_agegroup_id", "timeslotfield", ["agegroup_id"])


def downgrade() -> None:
    op.drop_table("timeslotfield")
    op.drop_table("timeslotdate")
    op.drop_table("pairing")
    op.drop_table("refgameassignment")
    op.drop_table("bracketseed")
    op.drop_table("devicegame")
    op.drop_table("game")
    op.drop_table("fieldleagueseason")
    op.drop_table("field")
    op.drop_table("team")
    op.drop_table("clubregistration")
    op.drop_table("division")
    op.drop_table("agegroup")
    op.drop_table("job")
