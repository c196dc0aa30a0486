"""
Pattern Extractor - reduces a prior season's schedule to placement patterns.

Each scheduled game becomes a GamePlacementPattern: the calendar date is
replaced by a day ordinal (0-based index among the schedule's distinct
dates) plus weekday and time of day, so the pattern can be replayed onto
any future set of dates.

Read-only. A job with no scheduled games yields an empty pattern.
"""

import logging
from datetime import date
from typing import Dict, List

from sqlmodel import Session, select

from autobuild.models.game import Game
from autobuild.services.field_resolver import is_system_field
from autobuild.utils.autobuild_models import REAL_TEAM_TYPE, GamePlacementPattern

logger = logging.getLogger(__name__)


def build_day_ordinals(dates: List[date]) -> Dict[date, int]:
    """Map each distinct calendar date to its 0-based position in ascending order."""
    return {d: i for i, d in enumerate(sorted(set(dates)))}


def extract_pattern(session: Session, source_job_id: int) -> List[GamePlacementPattern]:
    """Extract the placement pattern of every scheduled game in a job."""
    games = session.exec(
        select(Game)
        .where(Game.job_id == source_job_id, Game.game_date.is_not(None))
        .order_by(Game.game_date, Game.id)
    ).all()

    if not games:
        return []

    day_ordinals = build_day_ordinals([g.game_date.date() for g in games])

    pattern = [
        GamePlacementPattern(
            agegroup_name=g.agegroup_name or "",
            div_name=g.div_name or "",
            round=g.round or 0,
            game_number=g.game_number or 0,
            field_name=g.field_name or "",
            field_id=g.field_id or 0,
            day_of_week=g.game_date.weekday(),
            time_of_day=g.game_date.time(),
            day_ordinal=day_ordinals[g.game_date.date()],
            t1_type=g.t1_type or REAL_TEAM_TYPE,
            t2_type=g.t2_type or REAL_TEAM_TYPE,
        )
        for g in games
    ]

    logger.debug(
        "Extracted %d placements over %d days from job %d", len(pattern), len(day_ordinals), source_job_id
    )
    return pattern


def get_source_field_names(session: Session, source_job_id: int) -> List[str]:
    """Distinct non-system field names used by the scheduled games of a job, sorted."""
    names = session.exec(
        select(Game.field_name)
        .where(
            Game.job_id == source_job_id,
            Game.game_date.is_not(None),
            Game.field_name.is_not(None),
        )
        .distinct()
    ).all()
    return sorted(name for name in names if not is_system_field(name))
