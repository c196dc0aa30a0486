"""
Schedule Replayer - writes a division's games into the target job.

Two placement modes:
1. Pattern replay: each prior-season placement keeps its day ordinal, time
   of day and field name; its teams come from the current pairing table.
2. Auto-schedule: current pairings in (round, game number) order, each in
   the next free timeslot.

Both modes share the occupied (field, datetime) set of the whole job and
never commit; the caller owns the transaction. Deleting games before a
rebuild goes through delete_games_cascade so that rows referencing a game
are removed first.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Set, Tuple

from sqlmodel import Session, select

from autobuild.models.agegroup import Agegroup
from autobuild.models.division import Division
from autobuild.models.game import Game
from autobuild.models.game_links import BracketSeed, DeviceGame, RefGameAssignment
from autobuild.models.pairing import Pairing
from autobuild.models.team import Team
from autobuild.models.timeslot import TimeslotDate, TimeslotField
from autobuild.services.division_summary import count_active_teams
from autobuild.utils.autobuild_models import REAL_TEAM_TYPE, GamePlacementPattern
from autobuild.utils.job_guards import SchedulingContext

logger = logging.getLogger(__name__)

STATUS_SCHEDULED = 1

Slot = Tuple[int, datetime]


# ============================================================================
# Cascade Delete
# ============================================================================


@dataclass(frozen=True)
class CascadeStep:
    """Rows of `model` whose `game_column` points at a game being deleted."""

    model: Any
    game_column: Any

    def delete(self, session: Session, game_ids: List[int]) -> int:
        rows = session.exec(select(self.model).where(self.game_column.in_(game_ids))).all()
        for row in rows:
            session.delete(row)
        session.flush()
        return len(rows)


# Dependents first; schedule rows are deleted after every step has run
CASCADE_DELETE_STEPS: List[CascadeStep] = [
    CascadeStep(DeviceGame, DeviceGame.game_id),
    CascadeStep(BracketSeed, BracketSeed.game_id),
    CascadeStep(RefGameAssignment, RefGameAssignment.game_id),
]


def delete_games_cascade(session: Session, *criteria: Any, commit: bool = True) -> int:
    """
    Delete the games matching `criteria` and every row that references them.

    All-or-nothing: any failure rolls the session back and re-raises.
    With commit=False the deletes are only flushed, leaving the commit to an
    enclosing unit of work.

    Returns:
        Number of schedule rows removed (0 when nothing matched)
    """
    game_ids = list(session.exec(select(Game.id).where(*criteria)).all())
    if not game_ids:
        return 0

    try:
        for step in CASCADE_DELETE_STEPS:
            step.delete(session, game_ids)

        for game in session.exec(select(Game).where(Game.id.in_(game_ids))).all():
            session.delete(game)
        session.flush()

        if commit:
            session.commit()
    except Exception:
        session.rollback()
        logger.exception("Cascade delete of %d games failed, transaction rolled back", len(game_ids))
        raise

    return len(game_ids)


def delete_all_games_for_job(session: Session, job_id: int, commit: bool = True) -> int:
    return delete_games_cascade(session, Game.job_id == job_id, commit=commit)


def delete_division_games(session: Session, job_id: int, div_id: int, commit: bool = True) -> int:
    return delete_games_cascade(session, Game.job_id == job_id, Game.div_id == div_id, commit=commit)


# ============================================================================
# Timeslots
# ============================================================================


@dataclass
class DivisionTimeslots:
    """Dates and field windows a division plays in, ascending dates."""

    dates: List[date]
    fields: List[TimeslotField]


def load_division_timeslots(session: Session, agegroup_id: int, div_id: int) -> DivisionTimeslots:
    """Division-specific timeslot rows win; otherwise the agegroup-wide ones (div_id NULL) apply."""
    date_rows = session.exec(select(TimeslotDate).where(TimeslotDate.agegroup_id == agegroup_id)).all()
    div_dates = [d for d in date_rows if d.div_id == div_id]
    effective_dates = div_dates or [d for d in date_rows if d.div_id is None]

    field_rows = session.exec(select(TimeslotField).where(TimeslotField.agegroup_id == agegroup_id)).all()
    div_fields = [f for f in field_rows if f.div_id == div_id]
    effective_fields = div_fields or [f for f in field_rows if f.div_id is None]

    return DivisionTimeslots(
        dates=sorted({d.game_date for d in effective_dates}),
        fields=list(effective_fields),
    )


def find_next_available_timeslot(
    dates: List[date],
    fields: List[TimeslotField],
    occupied: Set[Slot],
) -> Optional[Slot]:
    """
    First free (field id, start) walking dates ascending, then the fields
    open on that weekday by field id, then each field's game starts.
    """
    for game_day in sorted(dates):
        day_fields = sorted(
            (f for f in fields if f.day_of_week == game_day.weekday()),
            key=lambda f: f.field_id,
        )
        for ft in day_fields:
            first_start = datetime.combine(game_day, ft.start_time)
            for k in range(ft.max_games_per_field):
                start = first_start + timedelta(minutes=k * ft.gamestart_interval)
                if (ft.field_id, start) not in occupied:
                    return (ft.field_id, start)
    return None


def load_occupied_slots(session: Session, job_id: int) -> Set[Slot]:
    rows = session.exec(
        select(Game.field_id, Game.game_date).where(
            Game.job_id == job_id,
            Game.field_id.is_not(None),
            Game.game_date.is_not(None),
        )
    ).all()
    return {(field_id, game_date) for field_id, game_date in rows}


# ============================================================================
# Game Placement
# ============================================================================


@dataclass
class ReplayContext:
    """State shared by every division placed during one build."""

    scheduling: SchedulingContext
    field_index: Dict[str, int]  # lower-cased field name -> field id
    field_names: Dict[int, str]
    occupied: Set[Slot] = field(default_factory=set)
    user_id: Optional[str] = None


@dataclass
class DivisionPlacement:
    """Current-season division being placed, with its labels and pairing scope."""

    agegroup_id: int
    div_id: int
    agegroup_name: str
    div_name: str
    league_id: Optional[int]
    season: str
    team_count: int


def load_division_placement(
    session: Session, ctx: ReplayContext, agegroup_id: int, div_id: int
) -> DivisionPlacement:
    agegroup = session.get(Agegroup, agegroup_id)
    division = session.get(Division, div_id)
    league_id = agegroup.league_id if agegroup and agegroup.league_id is not None else ctx.scheduling.league_id
    season = agegroup.season if agegroup and agegroup.season else ctx.scheduling.season

    return DivisionPlacement(
        agegroup_id=agegroup_id,
        div_id=div_id,
        agegroup_name=(agegroup.name if agegroup else None) or "",
        div_name=(division.name if division else None) or "",
        league_id=league_id,
        season=season,
        team_count=count_active_teams(session, ctx.scheduling.job_id, div_id),
    )


def load_round_robin_pairings(session: Session, target: DivisionPlacement) -> List[Pairing]:
    """Real-team pairings for the division's pool size, in (round, game number) order."""
    if target.league_id is None:
        return []
    pairings = session.exec(
        select(Pairing)
        .where(
            Pairing.league_id == target.league_id,
            Pairing.season == target.season,
            Pairing.team_count == target.team_count,
        )
        .order_by(Pairing.round, Pairing.game_number)
    ).all()
    return [p for p in pairings if p.t1_type == REAL_TEAM_TYPE and p.t2_type == REAL_TEAM_TYPE]


def _add_game(
    session: Session,
    ctx: ReplayContext,
    target: DivisionPlacement,
    slot: Slot,
    pairing: Optional[Pairing],
    placement: Optional[GamePlacementPattern] = None,
) -> Game:
    field_id, game_date = slot
    game = Game(
        job_id=ctx.scheduling.job_id,
        league_id=target.league_id,
        season=target.season,
        year=ctx.scheduling.year,
        agegroup_id=target.agegroup_id,
        agegroup_name=target.agegroup_name,
        div_id=target.div_id,
        div_name=target.div_name,
        round=pairing.round if pairing else placement.round,
        game_number=pairing.game_number if pairing else placement.game_number,
        field_id=field_id,
        field_name=ctx.field_names.get(field_id, ""),
        game_date=game_date,
        status_code=STATUS_SCHEDULED,
        t1_type=pairing.t1_type if pairing else placement.t1_type,
        t1_no=pairing.t1 if pairing else 0,
        t1_annotation=pairing.t1_annotation if pairing else None,
        t2_type=pairing.t2_type if pairing else placement.t2_type,
        t2_no=pairing.t2 if pairing else 0,
        t2_annotation=pairing.t2_annotation if pairing else None,
        modified=datetime.utcnow(),
        modified_by=ctx.user_id,
    )
    session.add(game)
    ctx.occupied.add(slot)
    return game


def replay_pattern_for_division(
    session: Session,
    ctx: ReplayContext,
    target: DivisionPlacement,
    placements: List[GamePlacementPattern],
    include_bracket_games: bool = False,
) -> Tuple[int, int]:
    """
    Replay a prior-season pattern onto the division's current dates and fields.

    A placement whose day ordinal has no current date, whose field name is
    unknown, or whose slot is already taken moves to the next free timeslot.

    Returns:
        (placed, failed)
    """
    if not include_bracket_games:
        placements = [p for p in placements if p.is_real_team_game]
    if not placements:
        return 0, 0

    timeslots = load_division_timeslots(session, target.agegroup_id, target.div_id)
    pairing_lookup = {(p.round, p.game_number): p for p in load_round_robin_pairings(session, target)}

    placed = 0
    failed = 0
    for placement in placements:
        pairing = None
        if placement.is_real_team_game:
            pairing = pairing_lookup.get((placement.round, placement.game_number))
            if pairing is None:
                failed += 1
                continue

        slot = _resolve_replay_slot(ctx, timeslots, placement)
        if slot is None:
            failed += 1
            continue

        _add_game(session, ctx, target, slot, pairing, placement)
        placed += 1

    session.flush()
    sync_team_assignments_for_division(session, ctx.scheduling.job_id, target.div_id)

    logger.debug(
        "Replayed %s/%s: placed=%d failed=%d", target.agegroup_name, target.div_name, placed, failed
    )
    return placed, failed


def _resolve_replay_slot(
    ctx: ReplayContext, timeslots: DivisionTimeslots, placement: GamePlacementPattern
) -> Optional[Slot]:
    if placement.day_ordinal < len(timeslots.dates):
        target_day = timeslots.dates[placement.day_ordinal]
    else:
        fallback = find_next_available_timeslot(timeslots.dates, timeslots.fields, ctx.occupied)
        if fallback is None:
            return None
        target_day = fallback[1].date()

    field_id = ctx.field_index.get(placement.field_name.lower())
    if field_id is None:
        return find_next_available_timeslot(timeslots.dates, timeslots.fields, ctx.occupied)

    slot = (field_id, datetime.combine(target_day, placement.time_of_day))
    if slot in ctx.occupied:
        return find_next_available_timeslot(timeslots.dates, timeslots.fields, ctx.occupied)
    return slot


def auto_schedule_division(session: Session, ctx: ReplayContext, target: DivisionPlacement) -> Tuple[int, int]:
    """Place every current real-team pairing of the division in the next free timeslot."""
    timeslots = load_division_timeslots(session, target.agegroup_id, target.div_id)

    placed = 0
    failed = 0
    for pairing in load_round_robin_pairings(session, target):
        slot = find_next_available_timeslot(timeslots.dates, timeslots.fields, ctx.occupied)
        if slot is None:
            failed += 1
            continue
        _add_game(session, ctx, target, slot, pairing)
        placed += 1

    session.flush()
    sync_team_assignments_for_division(session, ctx.scheduling.job_id, target.div_id)
    return placed, failed


# ============================================================================
# Team Assignment Sync
# ============================================================================


def sync_team_assignments_for_division(session: Session, job_id: int, div_id: int) -> int:
    """
    Point each real-team side of the division's games at the active team
    holding that pool rank. Sides with no such team are cleared.

    Returns:
        Number of games updated
    """
    teams = session.exec(
        select(Team).where(Team.job_id == job_id, Team.div_id == div_id, Team.active == True)  # noqa: E712
    ).all()
    by_rank: Dict[int, Team] = {}
    for team in sorted(teams, key=lambda t: t.id):
        by_rank.setdefault(team.div_rank, team)

    games = session.exec(select(Game).where(Game.job_id == job_id, Game.div_id == div_id)).all()

    updated = 0
    for game in games:
        changed = False
        if (game.t1_type or REAL_TEAM_TYPE) == REAL_TEAM_TYPE:
            changed |= _assign_side(game, "t1", by_rank.get(game.t1_no or 0))
        if (game.t2_type or REAL_TEAM_TYPE) == REAL_TEAM_TYPE:
            changed |= _assign_side(game, "t2", by_rank.get(game.t2_no or 0))
        if changed:
            session.add(game)
            updated += 1

    session.flush()
    return updated


def _assign_side(game: Game, side: str, team: Optional[Team]) -> bool:
    team_id = team.id if team else None
    team_name = team.name if team else None
    if getattr(game, f"{side}_id") == team_id and getattr(game, f"{side}_name") == team_name:
        return False
    setattr(game, f"{side}_id", team_id)
    setattr(game, f"{side}_name", team_name)
    return True
