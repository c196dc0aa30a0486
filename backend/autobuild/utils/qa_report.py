"""
Post-Build QA Response Models

One model per QA check plus the AutoBuildQaResult aggregate returned by
services.qa_validator.run_qa_validation. Calendar days are ISO strings
(YYYY-MM-DD) so that string order matches date order.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel


class QaUnscheduledTeam(BaseModel):
    """An active team with zero scheduled games"""

    agegroup_name: str
    div_name: str
    team_name: str
    div_rank: int


class QaDoubleBooking(BaseModel):
    """A field or team used by more than one game at the same date-time"""

    label: str
    game_date: datetime
    count: int


class QaRankMismatch(BaseModel):
    """Schedule rank number differs from the team's current division rank"""

    agegroup_name: str
    div_name: str
    field_name: str
    game_date: datetime
    team_name: str
    schedule_no: int
    actual_div_rank: int


class QaBackToBack(BaseModel):
    agegroup_name: str
    div_name: str
    team_name: str
    field_name: str
    game_date: datetime
    minutes_since_previous: int


class QaRepeatedMatchup(BaseModel):
    """Two teams meeting more than once; team1 is the one with the smaller id"""

    agegroup_name: str
    div_name: str
    team1_name: str
    team2_name: str
    game_count: int


class QaInactiveTeamInGame(BaseModel):
    agegroup_name: str
    div_name: str
    team_name: str
    div_rank: int
    active: bool


class QaGamesPerDate(BaseModel):
    game_day: str
    game_count: int


class QaGamesPerTeam(BaseModel):
    agegroup_name: str
    div_name: str
    team_name: str
    game_count: int


class QaGamesPerTeamPerDay(BaseModel):
    agegroup_name: str
    div_name: str
    club_name: str
    team_name: str
    game_day: str
    game_count: int


class QaGamesPerFieldPerDay(BaseModel):
    field_name: str
    game_day: str
    game_count: int


class QaGameSpread(BaseModel):
    """First-to-last game start window for a team on one day"""

    agegroup_name: str
    div_name: str
    team_name: str
    game_day: str
    spread_minutes: int
    game_count: int


class QaRrGamesPerDiv(BaseModel):
    """Round-robin completeness: distinct games vs. active pool size"""

    agegroup_name: str
    div_name: str
    pool_size: int
    game_count: int
    expected_game_count: int
    completeness_ratio: float


class QaBracketGame(BaseModel):
    agegroup_name: str
    field_name: str
    game_date: datetime
    t1_type: str
    t1_no: int
    t2_type: str
    t2_no: int


class AutoBuildQaResult(BaseModel):
    total_games: int

    # Critical
    unscheduled_teams: List[QaUnscheduledTeam]
    field_double_bookings: List[QaDoubleBooking]
    team_double_bookings: List[QaDoubleBooking]
    rank_mismatches: List[QaRankMismatch]

    # Warnings
    back_to_back_games: List[QaBackToBack]
    repeated_matchups: List[QaRepeatedMatchup]
    inactive_teams_in_games: List[QaInactiveTeamInGame]

    # Informational
    games_per_date: List[QaGamesPerDate]
    games_per_team: List[QaGamesPerTeam]
    games_per_team_per_day: List[QaGamesPerTeamPerDay]
    games_per_field_per_day: List[QaGamesPerFieldPerDay]
    game_spreads: List[QaGameSpread]
    rr_games_per_division: List[QaRrGamesPerDiv]
    bracket_games: List[QaBracketGame]
