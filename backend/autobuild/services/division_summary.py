"""
Division Summaries - per-division team/game counts for source and target jobs.

Source jobs: the team count is inferred from the schedule itself. Round-robin
rank numbers are dense 1..N, so the largest rank seen on either side of a
real-team game is the pool size.

Target jobs: the team count is a direct count of active teams.
"""

from collections import defaultdict
from typing import Dict, List, Tuple

from sqlmodel import Session, func, select

from autobuild.models.agegroup import Agegroup
from autobuild.models.division import Division
from autobuild.models.game import Game
from autobuild.models.team import Team
from autobuild.utils.autobuild_models import (
    REAL_TEAM_TYPE,
    CurrentDivisionSummary,
    SourceDivisionSummary,
)


def get_source_division_summaries(session: Session, source_job_id: int) -> List[SourceDivisionSummary]:
    """Summarize the real-team games of a source job by (agegroup, division)."""
    games = session.exec(
        select(Game).where(
            Game.job_id == source_job_id,
            Game.game_date.is_not(None),
            func.coalesce(Game.t1_type, REAL_TEAM_TYPE) == REAL_TEAM_TYPE,
            func.coalesce(Game.t2_type, REAL_TEAM_TYPE) == REAL_TEAM_TYPE,
        )
    ).all()

    max_rank: Dict[Tuple[str, str], int] = defaultdict(int)
    game_count: Dict[Tuple[str, str], int] = defaultdict(int)
    for g in games:
        key = (g.agegroup_name or "", g.div_name or "")
        max_rank[key] = max(max_rank[key], g.t1_no or 0, g.t2_no or 0)
        game_count[key] += 1

    return [
        SourceDivisionSummary(
            agegroup_name=agegroup_name,
            div_name=div_name,
            team_count=max_rank[(agegroup_name, div_name)],
            game_count=game_count[(agegroup_name, div_name)],
        )
        for agegroup_name, div_name in sorted(game_count)
    ]


def get_current_division_summaries(session: Session, job_id: int) -> List[CurrentDivisionSummary]:
    """Count active teams per division of a job (teams without a division are ignored)."""
    rows = session.exec(
        select(
            Agegroup.id,
            Agegroup.name,
            Division.id,
            Division.name,
            func.count(Team.id),
        )
        .select_from(Team)
        .join(Division, Division.id == Team.div_id)
        .join(Agegroup, Agegroup.id == Team.agegroup_id)
        .where(Team.job_id == job_id, Team.active == True)  # noqa: E712
        .group_by(Agegroup.id, Agegroup.name, Division.id, Division.name)
    ).all()

    summaries = [
        CurrentDivisionSummary(
            agegroup_id=agegroup_id,
            agegroup_name=agegroup_name or "",
            div_id=div_id,
            div_name=div_name or "",
            team_count=team_count,
        )
        for agegroup_id, agegroup_name, div_id, div_name, team_count in rows
    ]
    summaries.sort(key=lambda d: (d.agegroup_name, d.div_name, d.div_id))
    return summaries


def get_existing_game_counts_by_division(session: Session, job_id: int) -> Dict[int, int]:
    """Scheduled game count per division id, for divisions that already have games."""
    rows = session.exec(
        select(Game.div_id, func.count(Game.id))
        .where(Game.job_id == job_id, Game.div_id.is_not(None), Game.game_date.is_not(None))
        .group_by(Game.div_id)
    ).all()
    return {div_id: count for div_id, count in rows}


def count_active_teams(session: Session, job_id: int, div_id: int) -> int:
    return session.exec(
        select(func.count(Team.id)).where(
            Team.job_id == job_id, Team.div_id == div_id, Team.active == True  # noqa: E712
        )
    ).one()
