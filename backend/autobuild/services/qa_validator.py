"""
Post-Build QA Validator - 14 read-only checks over a job's final schedule.

Critical:
1. Unscheduled teams: active teams without any dated game
2. Field double-booking: same field, same start, more than one game
3. Team double-booking: same team, same start, more than one game
4. Rank mismatches: scheduled pool rank differs from the team's div_rank

Warnings:
5. Back-to-back games: same team, same day, 1-90 minutes apart
6. Repeated matchups: the same two teams meeting more than once
7. Inactive teams still placed in real-team games

Informational:
8-12. Game counts per date / team / team-day / field-day, daily spreads
13. Round-robin completeness per division
14. Bracket (placeholder) games

The schedule and roster are fetched once into a QaSnapshot; every check is a
pure function of it, so the checks are independent of each other.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlmodel import Session, select

from autobuild.models.agegroup import Agegroup
from autobuild.models.club_registration import ClubRegistration
from autobuild.models.division import Division
from autobuild.models.game import Game
from autobuild.models.team import Team
from autobuild.utils.autobuild_models import REAL_TEAM_TYPE
from autobuild.utils.qa_report import (
    AutoBuildQaResult,
    QaBackToBack,
    QaBracketGame,
    QaDoubleBooking,
    QaGameSpread,
    QaGamesPerDate,
    QaGamesPerFieldPerDay,
    QaGamesPerTeam,
    QaGamesPerTeamPerDay,
    QaInactiveTeamInGame,
    QaRankMismatch,
    QaRepeatedMatchup,
    QaRrGamesPerDiv,
    QaUnscheduledTeam,
)

logger = logging.getLogger(__name__)

BACK_TO_BACK_MAX_MINUTES = 90


# ============================================================================
# Snapshot
# ============================================================================


@dataclass
class ScheduledGame:
    """A dated game with every optional column defaulted."""

    game_id: int
    agegroup_id: Optional[int]
    agegroup_name: str
    div_id: Optional[int]
    div_name: str
    field_id: Optional[int]
    field_name: str
    game_date: datetime
    t1_id: Optional[int]
    t1_name: str
    t1_type: str
    t1_no: int
    t2_id: Optional[int]
    t2_name: str
    t2_type: str
    t2_no: int

    @property
    def game_day(self) -> str:
        return self.game_date.date().isoformat()

    @property
    def is_real_team_game(self) -> bool:
        return self.t1_type == REAL_TEAM_TYPE and self.t2_type == REAL_TEAM_TYPE

    @classmethod
    def from_row(cls, game: Game) -> "ScheduledGame":
        return cls(
            game_id=game.id,
            agegroup_id=game.agegroup_id,
            agegroup_name=game.agegroup_name or "",
            div_id=game.div_id,
            div_name=game.div_name or "",
            field_id=game.field_id,
            field_name=game.field_name or "",
            game_date=game.game_date,
            t1_id=game.t1_id,
            t1_name=game.t1_name or "",
            t1_type=game.t1_type or REAL_TEAM_TYPE,
            t1_no=game.t1_no or 0,
            t2_id=game.t2_id,
            t2_name=game.t2_name or "",
            t2_type=game.t2_type or REAL_TEAM_TYPE,
            t2_no=game.t2_no or 0,
        )


@dataclass
class RosterTeam:
    team_id: int
    div_id: Optional[int]
    agegroup_name: str
    div_name: str
    team_name: str
    div_rank: int
    active: bool
    club_name: str
    has_division: bool  # division and agegroup rows both exist


@dataclass
class TeamOccurrence:
    """One side of a game, with a back-reference to the game."""

    team_id: int
    team_name: str
    scheduled_no: int
    game: ScheduledGame


@dataclass
class QaSnapshot:
    games: List[ScheduledGame]
    teams: Dict[int, RosterTeam]
    occurrences: List[TeamOccurrence] = field(default_factory=list)
    real_team_occurrences: List[TeamOccurrence] = field(default_factory=list)

    @property
    def real_team_games(self) -> List[ScheduledGame]:
        return [g for g in self.games if g.is_real_team_game]


def fan_out_team_occurrences(games: List[ScheduledGame]) -> List[TeamOccurrence]:
    """Turn each game into one occurrence per side that has a team id."""
    occurrences = []
    for g in games:
        if g.t1_id is not None:
            occurrences.append(TeamOccurrence(g.t1_id, g.t1_name, g.t1_no, g))
        if g.t2_id is not None:
            occurrences.append(TeamOccurrence(g.t2_id, g.t2_name, g.t2_no, g))
    return occurrences


def load_qa_snapshot(session: Session, job_id: int) -> QaSnapshot:
    rows = session.exec(
        select(Game)
        .where(Game.job_id == job_id, Game.game_date.is_not(None))
        .order_by(Game.game_date, Game.id)
    ).all()
    games = [ScheduledGame.from_row(g) for g in rows]

    team_rows = session.exec(
        select(Team, Agegroup, Division, ClubRegistration)
        .select_from(Team)
        .outerjoin(Agegroup, Agegroup.id == Team.agegroup_id)
        .outerjoin(Division, Division.id == Team.div_id)
        .outerjoin(ClubRegistration, ClubRegistration.id == Team.club_registration_id)
        .where(Team.job_id == job_id)
    ).all()
    teams = {
        team.id: RosterTeam(
            team_id=team.id,
            div_id=team.div_id,
            agegroup_name=(agegroup.name if agegroup else None) or "",
            div_name=(division.name if division else None) or "",
            team_name=team.name or "",
            div_rank=team.div_rank or 0,
            active=team.active is True,
            club_name=(club.club_name if club else None) or "",
            has_division=agegroup is not None and division is not None,
        )
        for team, agegroup, division, club in team_rows
    }

    occurrences = fan_out_team_occurrences(games)
    return QaSnapshot(
        games=games,
        teams=teams,
        occurrences=occurrences,
        real_team_occurrences=[o for o in occurrences if o.game.is_real_team_game],
    )


# ============================================================================
# Critical Checks
# ============================================================================


def check_unscheduled_teams(snapshot: QaSnapshot) -> List[QaUnscheduledTeam]:
    scheduled_ids = {o.team_id for o in snapshot.occurrences}
    result = [
        QaUnscheduledTeam(
            agegroup_name=t.agegroup_name,
            div_name=t.div_name,
            team_name=t.team_name,
            div_rank=t.div_rank,
        )
        for t in snapshot.teams.values()
        if t.active and t.has_division and t.team_id not in scheduled_ids
    ]
    result.sort(key=lambda r: (r.agegroup_name, r.div_name, r.team_name))
    return result


def check_field_double_bookings(snapshot: QaSnapshot) -> List[QaDoubleBooking]:
    groups: Dict[Tuple[datetime, int], List[ScheduledGame]] = defaultdict(list)
    for g in snapshot.games:
        if g.field_id is not None:
            groups[(g.game_date, g.field_id)].append(g)

    result = [
        QaDoubleBooking(label=games[0].field_name or str(field_id), game_date=game_date, count=len(games))
        for (game_date, field_id), games in groups.items()
        if len(games) > 1
    ]
    result.sort(key=lambda d: (d.game_date, d.label))
    return result


def check_team_double_bookings(snapshot: QaSnapshot) -> List[QaDoubleBooking]:
    groups: Dict[Tuple[int, datetime], List[TeamOccurrence]] = defaultdict(list)
    for o in snapshot.occurrences:
        groups[(o.team_id, o.game.game_date)].append(o)

    result = [
        QaDoubleBooking(label=occ[0].team_name, game_date=game_date, count=len(occ))
        for (_, game_date), occ in groups.items()
        if len(occ) > 1
    ]
    result.sort(key=lambda d: (d.game_date, d.label))
    return result


def check_rank_mismatches(snapshot: QaSnapshot) -> List[QaRankMismatch]:
    """One record per mismatching side of a real-team game."""
    result = []
    for o in snapshot.real_team_occurrences:
        team = snapshot.teams.get(o.team_id)
        if team is None or o.scheduled_no == team.div_rank:
            continue
        result.append(
            QaRankMismatch(
                agegroup_name=o.game.agegroup_name,
                div_name=o.game.div_name,
                field_name=o.game.field_name,
                game_date=o.game.game_date,
                team_name=o.team_name,
                schedule_no=o.scheduled_no,
                actual_div_rank=team.div_rank,
            )
        )
    result.sort(key=lambda m: (m.agegroup_name, m.div_name, m.game_date))
    return result


# ============================================================================
# Warnings
# ============================================================================


def check_back_to_back_games(snapshot: QaSnapshot) -> List[QaBackToBack]:
    ordered = sorted(snapshot.real_team_occurrences, key=lambda o: (o.team_id, o.game.game_date))

    result = []
    for prev, curr in zip(ordered, ordered[1:]):
        if prev.team_id != curr.team_id:
            continue
        if prev.game.game_date.date() != curr.game.game_date.date():
            continue
        minutes = int((curr.game.game_date - prev.game.game_date).total_seconds() // 60)
        if 0 < minutes <= BACK_TO_BACK_MAX_MINUTES:
            result.append(
                QaBackToBack(
                    agegroup_name=curr.game.agegroup_name,
                    div_name=curr.game.div_name,
                    team_name=curr.team_name,
                    field_name=curr.game.field_name,
                    game_date=curr.game.game_date,
                    minutes_since_previous=minutes,
                )
            )
    result.sort(key=lambda b: (b.game_date, b.team_name))
    return result


def check_repeated_matchups(snapshot: QaSnapshot) -> List[QaRepeatedMatchup]:
    """Group on the unordered pair (smaller id, larger id); the smaller id is team1."""
    groups: Dict[Tuple[int, int], List[ScheduledGame]] = defaultdict(list)
    for g in snapshot.real_team_games:
        if g.t1_id is None or g.t2_id is None:
            continue
        groups[(min(g.t1_id, g.t2_id), max(g.t1_id, g.t2_id))].append(g)

    result = []
    for (low_id, _), games in groups.items():
        if len(games) < 2:
            continue
        first = games[0]
        if first.t1_id == low_id:
            team1_name, team2_name = first.t1_name, first.t2_name
        else:
            team1_name, team2_name = first.t2_name, first.t1_name
        result.append(
            QaRepeatedMatchup(
                agegroup_name=first.agegroup_name,
                div_name=first.div_name,
                team1_name=team1_name,
                team2_name=team2_name,
                game_count=len(games),
            )
        )
    result.sort(key=lambda m: (m.agegroup_name, m.div_name, m.team1_name, m.team2_name))
    return result


def check_inactive_teams_in_games(snapshot: QaSnapshot) -> List[QaInactiveTeamInGame]:
    placed_ids = {o.team_id for o in snapshot.real_team_occurrences}
    result = [
        QaInactiveTeamInGame(
            agegroup_name=t.agegroup_name,
            div_name=t.div_name,
            team_name=t.team_name,
            div_rank=t.div_rank,
            active=t.active,
        )
        for t in snapshot.teams.values()
        if not t.active and t.has_division and t.team_id in placed_ids
    ]
    result.sort(key=lambda r: (r.agegroup_name, r.div_name, r.team_name))
    return result


# ============================================================================
# Informational
# ============================================================================


def check_games_per_date(snapshot: QaSnapshot) -> List[QaGamesPerDate]:
    counts: Dict[str, int] = defaultdict(int)
    for g in snapshot.games:
        counts[g.game_day] += 1
    return [QaGamesPerDate(game_day=day, game_count=counts[day]) for day in sorted(counts)]


def check_games_per_team(snapshot: QaSnapshot) -> List[QaGamesPerTeam]:
    counts: Dict[Tuple[int, str, str, str], int] = defaultdict(int)
    for o in snapshot.real_team_occurrences:
        counts[(o.team_id, o.team_name, o.game.agegroup_name, o.game.div_name)] += 1

    result = [
        QaGamesPerTeam(agegroup_name=agegroup_name, div_name=div_name, team_name=team_name, game_count=n)
        for (_, team_name, agegroup_name, div_name), n in counts.items()
    ]
    result.sort(key=lambda t: (t.agegroup_name, t.div_name, t.team_name))
    return result


def check_games_per_team_per_day(snapshot: QaSnapshot) -> List[QaGamesPerTeamPerDay]:
    counts: Dict[Tuple[int, str, str, str, str], int] = defaultdict(int)
    for o in snapshot.real_team_occurrences:
        counts[(o.team_id, o.team_name, o.game.agegroup_name, o.game.div_name, o.game.game_day)] += 1

    result = []
    for (team_id, team_name, agegroup_name, div_name, game_day), n in counts.items():
        team = snapshot.teams.get(team_id)
        result.append(
            QaGamesPerTeamPerDay(
                agegroup_name=agegroup_name,
                div_name=div_name,
                club_name=team.club_name if team else "",
                team_name=team_name,
                game_day=game_day,
                game_count=n,
            )
        )
    result.sort(key=lambda t: (t.agegroup_name, t.div_name, t.club_name, t.team_name, t.game_day))
    return result


def check_games_per_field_per_day(snapshot: QaSnapshot) -> List[QaGamesPerFieldPerDay]:
    counts: Dict[Tuple[str, str], int] = defaultdict(int)
    for g in snapshot.games:
        if g.field_id is not None:
            counts[(g.field_name, g.game_day)] += 1
    return [
        QaGamesPerFieldPerDay(field_name=field_name, game_day=game_day, game_count=counts[(field_name, game_day)])
        for field_name, game_day in sorted(counts)
    ]


def check_game_spreads(snapshot: QaSnapshot) -> List[QaGameSpread]:
    starts: Dict[Tuple[int, str, str, str, str], List[datetime]] = defaultdict(list)
    for o in snapshot.real_team_occurrences:
        key = (o.team_id, o.team_name, o.game.agegroup_name, o.game.div_name, o.game.game_day)
        starts[key].append(o.game.game_date)

    result = [
        QaGameSpread(
            agegroup_name=agegroup_name,
            div_name=div_name,
            team_name=team_name,
            game_day=game_day,
            spread_minutes=int((max(times) - min(times)).total_seconds() // 60),
            game_count=len(times),
        )
        for (_, team_name, agegroup_name, div_name, game_day), times in starts.items()
        if len(times) > 1
    ]
    result.sort(key=lambda s: (s.agegroup_name, s.div_name, s.team_name, s.game_day))
    return result


def expected_round_robin_games(pool_size: int) -> int:
    """Single round robin: every pair of teams meets once."""
    return pool_size * (pool_size - 1) // 2


def check_rr_games_per_division(snapshot: QaSnapshot) -> List[QaRrGamesPerDiv]:
    game_ids: Dict[Tuple[int, str, str], set] = defaultdict(set)
    for g in snapshot.real_team_games:
        if g.div_id is None or g.agegroup_id is None:
            continue
        game_ids[(g.div_id, g.agegroup_name, g.div_name)].add(g.game_id)

    pool_sizes: Dict[int, int] = defaultdict(int)
    for t in snapshot.teams.values():
        if t.active and t.div_id is not None:
            pool_sizes[t.div_id] += 1

    result = []
    for (div_id, agegroup_name, div_name), ids in game_ids.items():
        pool_size = pool_sizes.get(div_id, 0)
        expected = expected_round_robin_games(pool_size)
        result.append(
            QaRrGamesPerDiv(
                agegroup_name=agegroup_name,
                div_name=div_name,
                pool_size=pool_size,
                game_count=len(ids),
                expected_game_count=expected,
                completeness_ratio=len(ids) / expected if expected else 0.0,
            )
        )
    result.sort(key=lambda d: (d.pool_size, d.game_count, d.agegroup_name, d.div_name))
    return result


def check_bracket_games(snapshot: QaSnapshot) -> List[QaBracketGame]:
    result = [
        QaBracketGame(
            agegroup_name=g.agegroup_name,
            field_name=g.field_name,
            game_date=g.game_date,
            t1_type=g.t1_type,
            t1_no=g.t1_no,
            t2_type=g.t2_type,
            t2_no=g.t2_no,
        )
        for g in snapshot.games
        if not g.is_real_team_game
    ]
    result.sort(key=lambda b: (b.agegroup_name, b.game_date))
    return result


# ============================================================================
# Aggregate
# ============================================================================


def run_qa_validation(session: Session, job_id: int) -> AutoBuildQaResult:
    """Run all 14 checks against one snapshot of the job's schedule."""
    snapshot = load_qa_snapshot(session, job_id)

    result = AutoBuildQaResult(
        total_games=len(snapshot.games),
        unscheduled_teams=check_unscheduled_teams(snapshot),
        field_double_bookings=check_field_double_bookings(snapshot),
        team_double_bookings=check_team_double_bookings(snapshot),
        rank_mismatches=check_rank_mismatches(snapshot),
        back_to_back_games=check_back_to_back_games(snapshot),
        repeated_matchups=check_repeated_matchups(snapshot),
        inactive_teams_in_games=check_inactive_teams_in_games(snapshot),
        games_per_date=check_games_per_date(snapshot),
        games_per_team=check_games_per_team(snapshot),
        games_per_team_per_day=check_games_per_team_per_day(snapshot),
        games_per_field_per_day=check_games_per_field_per_day(snapshot),
        game_spreads=check_game_spreads(snapshot),
        rr_games_per_division=check_rr_games_per_division(snapshot),
        bracket_games=check_bracket_games(snapshot),
    )

    logger.info(
        "QA job=%d games=%d unscheduled=%d field_double=%d team_double=%d rank_mismatch=%d",
        job_id,
        result.total_games,
        len(result.unscheduled_teams),
        len(result.field_double_bookings),
        len(result.team_double_bookings),
        len(result.rank_mismatches),
    )
    return result
