"""
Tests for source/current division summaries.
"""
from datetime import datetime

from sqlmodel import Session

from autobuild.services.division_summary import (
    count_active_teams,
    get_current_division_summaries,
    get_existing_game_counts_by_division,
    get_source_division_summaries,
)
from tests.helpers import make_agegroup, make_division, make_game, make_job, make_team, make_teams


def test_source_summary_team_count_from_max_rank(session: Session):
    job = make_job(session, name="Spring 2024", year="2024")
    labels = {"agegroup_name": "2014 Boys", "div_name": "Gold"}
    make_game(session, job, datetime(2024, 4, 6, 8, 0), t1_no=1, t2_no=4, **labels)
    make_game(session, job, datetime(2024, 4, 6, 9, 0), t1_no=2, t2_no=3, **labels)
    make_game(session, job, datetime(2024, 4, 6, 10, 0), t1_no=5, t2_no=None, **labels)
    # Bracket and unscheduled games are ignored
    make_game(session, job, datetime(2024, 4, 7, 8, 0), t1_type="S", t1_no=8, t2_no=1, **labels)
    make_game(session, job, None, t1_no=9, t2_no=1, **labels)

    (summary,) = get_source_division_summaries(session, job.id)

    assert summary.agegroup_name == "2014 Boys"
    assert summary.div_name == "Gold"
    assert summary.team_count == 5
    assert summary.game_count == 3


def test_source_summaries_sorted(session: Session):
    job = make_job(session, name="Spring 2024", year="2024")
    make_game(session, job, datetime(2024, 4, 6, 8, 0), agegroup_name="2015 Girls", div_name="Blue", t1_no=1, t2_no=2)
    make_game(session, job, datetime(2024, 4, 6, 8, 0), agegroup_name="2014 Boys", div_name="Red", t1_no=1, t2_no=2)
    make_game(session, job, datetime(2024, 4, 6, 8, 0), agegroup_name="2014 Boys", div_name="Blue", t1_no=1, t2_no=2)

    keys = [(s.agegroup_name, s.div_name) for s in get_source_division_summaries(session, job.id)]
    assert keys == [("2014 Boys", "Blue"), ("2014 Boys", "Red"), ("2015 Girls", "Blue")]


def test_current_summary_counts_active_teams(session: Session):
    job = make_job(session)
    boys = make_agegroup(session, "2015 Boys")
    gold = make_division(session, boys, "Gold")
    blue = make_division(session, boys, "Blue")
    make_teams(session, job, gold, 4)
    make_team(session, job, gold, 5, active=False)
    make_teams(session, job, blue, 3)

    summaries = get_current_division_summaries(session, job.id)

    assert [(s.div_name, s.team_count) for s in summaries] == [("Blue", 3), ("Gold", 4)]
    assert summaries[1].div_id == gold.id
    assert summaries[1].agegroup_id == boys.id
    assert count_active_teams(session, job.id, gold.id) == 4


def test_existing_game_counts_by_division(session: Session):
    job = make_job(session)
    boys = make_agegroup(session, "2015 Boys")
    gold = make_division(session, boys, "Gold")
    make_game(session, job, datetime(2025, 4, 5, 8, 0), div_id=gold.id)
    make_game(session, job, datetime(2025, 4, 5, 9, 0), div_id=gold.id)
    make_game(session, job, None, div_id=gold.id)
    make_game(session, job, datetime(2025, 4, 5, 9, 0), div_id=None)

    assert get_existing_game_counts_by_division(session, job.id) == {gold.id: 2}
