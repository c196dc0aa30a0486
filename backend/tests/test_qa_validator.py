"""
Tests for the 14 post-build QA checks.
"""
from datetime import datetime

import pytest
from sqlmodel import Session

from autobuild.services.qa_validator import (
    BACK_TO_BACK_MAX_MINUTES,
    expected_round_robin_games,
    fan_out_team_occurrences,
    load_qa_snapshot,
    run_qa_validation,
)
from tests.helpers import make_agegroup, make_division, make_field, make_game, make_job, make_team, make_team_game

LABELS = {"agegroup_name": "2025 Boys", "div_name": "Gold"}


@pytest.fixture
def league(session: Session):
    """One job, one 4-team division, two fields."""
    job = make_job(session)
    boys = make_agegroup(session, "2025 Boys")
    gold = make_division(session, boys, "Gold")
    teams = [make_team(session, job, gold, rank, name=f"Team {rank}") for rank in range(1, 5)]
    park_a = make_field(session, "Park A")
    park_b = make_field(session, "Park B")
    return job, gold, teams, park_a, park_b


def _at(hour, minute=0, day=5):
    return datetime(2025, 4, day, hour, minute)


def test_empty_job_returns_every_list(session: Session):
    result = run_qa_validation(session, 777)

    assert result.total_games == 0
    for name, value in result:
        if name != "total_games":
            assert value == [], name


def test_fan_out_skips_sides_without_team(session: Session, league):
    job, gold, teams, park_a, _ = league
    make_team_game(session, job, _at(8), teams[0], teams[1], park_a, **LABELS)
    make_game(session, job, _at(9), t1_type="S", t2_type="S", t1_id=None, t2_id=None)

    snapshot = load_qa_snapshot(session, job.id)
    occurrences = fan_out_team_occurrences(snapshot.games)

    assert [o.team_id for o in occurrences] == [teams[0].id, teams[1].id]
    assert occurrences[0].game.game_id == occurrences[1].game.game_id


# ============================================================================
# Critical
# ============================================================================


def test_unscheduled_teams(session: Session, league):
    job, gold, teams, park_a, _ = league
    make_team_game(session, job, _at(8), teams[0], teams[1], park_a, **LABELS)
    make_team(session, job, gold, 5, name="Team 5", active=False)

    result = run_qa_validation(session, job.id)

    assert [(t.team_name, t.div_rank) for t in result.unscheduled_teams] == [("Team 3", 3), ("Team 4", 4)]
    assert result.unscheduled_teams[0].agegroup_name == "2025 Boys"


def test_field_double_booking_single_group(session: Session, league):
    job, gold, teams, park_a, park_b = league
    make_team_game(session, job, _at(8), teams[0], teams[1], park_a, **LABELS)
    make_team_game(session, job, _at(8), teams[2], teams[3], park_a, **LABELS)
    make_game(session, job, _at(8), field_id=park_a.id, field_name="Park A", t1_type="S", t2_type="S")
    make_team_game(session, job, _at(8), teams[0], teams[2], park_b, **LABELS)

    result = run_qa_validation(session, job.id)

    assert len(result.field_double_bookings) == 1
    booking = result.field_double_bookings[0]
    assert (booking.label, booking.game_date, booking.count) == ("Park A", _at(8), 3)


def test_field_double_booking_label_falls_back_to_id(session: Session, league):
    job, gold, teams, park_a, _ = league
    make_game(session, job, _at(8), field_id=park_a.id, field_name=None)
    make_game(session, job, _at(8), field_id=park_a.id, field_name=None)

    (booking,) = run_qa_validation(session, job.id).field_double_bookings
    assert booking.label == str(park_a.id)


def test_team_double_booking_isolates_shared_team(session: Session, league):
    job, gold, teams, park_a, park_b = league
    make_team_game(session, job, _at(8), teams[0], teams[1], park_a, **LABELS)
    make_team_game(session, job, _at(8), teams[0], teams[2], park_b, **LABELS)
    make_team_game(session, job, _at(9), teams[1], teams[3], park_a, **LABELS)

    result = run_qa_validation(session, job.id)

    assert [(d.label, d.count) for d in result.team_double_bookings] == [("Team 1", 2)]


def test_rank_mismatch_only_for_wrong_side(session: Session, league):
    job, gold, teams, park_a, _ = league
    # Team 3 recorded as rank 2; Team 1 correct
    make_team_game(session, job, _at(8), teams[0], teams[2], park_a, t2_no=2, **LABELS)

    result = run_qa_validation(session, job.id)

    assert len(result.rank_mismatches) == 1
    mismatch = result.rank_mismatches[0]
    assert (mismatch.team_name, mismatch.schedule_no, mismatch.actual_div_rank) == ("Team 3", 2, 3)
    assert mismatch.field_name == "Park A"


def test_rank_mismatch_ignores_bracket_games(session: Session, league):
    job, gold, teams, park_a, _ = league
    make_team_game(session, job, _at(8), teams[0], teams[2], park_a, t1_type="S", t2_no=2, **LABELS)

    assert run_qa_validation(session, job.id).rank_mismatches == []


# ============================================================================
# Warnings
# ============================================================================


@pytest.mark.parametrize(
    "second_start, flagged",
    [
        (_at(9, 30), True),  # 90 minutes
        (_at(9, 31), False),  # 91 minutes
        (_at(8, 0), False),  # same start: a double booking, not a back-to-back
        (_at(8, 30, day=6), False),  # next day
    ],
)
def test_back_to_back_boundaries(session: Session, league, second_start, flagged):
    job, gold, teams, park_a, park_b = league
    make_team_game(session, job, _at(8), teams[0], teams[1], park_a, **LABELS)
    make_team_game(session, job, second_start, teams[0], teams[2], park_b, **LABELS)

    result = run_qa_validation(session, job.id)

    if flagged:
        assert [(b.team_name, b.minutes_since_previous) for b in result.back_to_back_games] == [
            ("Team 1", BACK_TO_BACK_MAX_MINUTES)
        ]
        assert result.back_to_back_games[0].field_name == "Park B"
    else:
        assert result.back_to_back_games == []


def test_repeated_matchup_is_order_independent(session: Session, league):
    job, gold, teams, park_a, _ = league
    make_team_game(session, job, _at(8), teams[1], teams[0], park_a, **LABELS)
    make_team_game(session, job, _at(8, day=12), teams[0], teams[1], park_a, **LABELS)
    make_team_game(session, job, _at(9), teams[2], teams[3], park_a, **LABELS)

    result = run_qa_validation(session, job.id)

    assert len(result.repeated_matchups) == 1
    matchup = result.repeated_matchups[0]
    assert (matchup.team1_name, matchup.team2_name, matchup.game_count) == ("Team 1", "Team 2", 2)


def test_inactive_teams_in_games(session: Session, league):
    job, gold, teams, park_a, _ = league
    dropped = make_team(session, job, gold, 5, name="Dropped", active=False)
    make_team_game(session, job, _at(8), teams[0], dropped, park_a, **LABELS)

    result = run_qa_validation(session, job.id)

    assert [(t.team_name, t.active) for t in result.inactive_teams_in_games] == [("Dropped", False)]


# ============================================================================
# Informational
# ============================================================================


def test_daily_counts_and_spreads(session: Session, league):
    job, gold, teams, park_a, park_b = league
    make_team_game(session, job, _at(8), teams[0], teams[1], park_a, **LABELS)
    make_team_game(session, job, _at(13), teams[0], teams[2], park_b, **LABELS)
    make_team_game(session, job, _at(8, day=12), teams[0], teams[3], park_a, **LABELS)

    result = run_qa_validation(session, job.id)

    assert [(d.game_day, d.game_count) for d in result.games_per_date] == [("2025-04-05", 2), ("2025-04-12", 1)]
    assert [(t.team_name, t.game_count) for t in result.games_per_team] == [
        ("Team 1", 3),
        ("Team 2", 1),
        ("Team 3", 1),
        ("Team 4", 1),
    ]
    assert [(f.field_name, f.game_day, f.game_count) for f in result.games_per_field_per_day] == [
        ("Park A", "2025-04-05", 1),
        ("Park A", "2025-04-12", 1),
        ("Park B", "2025-04-05", 1),
    ]
    assert [(s.team_name, s.game_day, s.spread_minutes, s.game_count) for s in result.game_spreads] == [
        ("Team 1", "2025-04-05", 300, 2)
    ]


def test_games_per_team_per_day_club_name(session: Session, league):
    job, gold, teams, park_a, _ = league
    clubbed = make_team(session, job, gold, 5, name="Club Team", club_name="Riverside FC")
    make_team_game(session, job, _at(8), clubbed, teams[0], park_a, **LABELS)

    rows = {r.team_name: r for r in run_qa_validation(session, job.id).games_per_team_per_day}

    assert rows["Club Team"].club_name == "Riverside FC"
    assert rows["Team 1"].club_name == ""
    assert rows["Team 1"].game_day == "2025-04-05"


def test_expected_round_robin_games():
    assert [expected_round_robin_games(n) for n in (0, 1, 2, 4, 5)] == [0, 0, 1, 6, 10]


def test_rr_games_per_division(session: Session, league):
    job, gold, teams, park_a, _ = league
    pairs = [(0, 1), (2, 3), (0, 2)]
    for hour, (a, b) in enumerate(pairs, start=8):
        make_team_game(session, job, _at(hour), teams[a], teams[b], park_a, **LABELS)

    (row,) = run_qa_validation(session, job.id).rr_games_per_division

    assert (row.pool_size, row.game_count, row.expected_game_count) == (4, 3, 6)
    assert row.completeness_ratio == pytest.approx(0.5)


def test_bracket_games_listed(session: Session, league):
    job, gold, teams, park_a, _ = league
    make_team_game(session, job, _at(8), teams[0], teams[1], park_a, **LABELS)
    make_game(session, job, _at(10), field_name="Park A", t1_type="S", t1_no=1, t2_type="W", t2_no=3,
              agegroup_name="2025 Boys")

    result = run_qa_validation(session, job.id)

    assert result.total_games == 2
    assert [(b.t1_type, b.t1_no, b.t2_type, b.t2_no) for b in result.bracket_games] == [("S", 1, "W", 3)]
