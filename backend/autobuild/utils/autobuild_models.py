"""
Auto-Build Response Models

Pydantic models shared by the auto-build services and route handlers:
- Source job candidates and extracted placement patterns
- Division / field summaries used for matching
- Analysis (division matching + feasibility) and build request/result
"""

from datetime import time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

REAL_TEAM_TYPE = "T"


# ============================================================================
# Source Job Selection
# ============================================================================


class AutoBuildSourceJob(BaseModel):
    """A sibling job whose schedule can be used as a template."""

    job_id: int
    job_name: str
    job_path: str
    year: Optional[str] = None
    season: Optional[str] = None
    scheduled_game_count: int


# ============================================================================
# Pattern Extraction
# ============================================================================


class GamePlacementPattern(BaseModel):
    """A single game placement abstracted from its calendar date.

    day_ordinal is the 0-based index of the game's date among the distinct
    dates of the source schedule, so the pattern replays from any start date.
    """

    agegroup_name: str
    div_name: str
    round: int
    game_number: int
    field_name: str
    field_id: int
    day_of_week: int  # 0=Monday, 6=Sunday
    time_of_day: time
    day_ordinal: int
    t1_type: str
    t2_type: str

    @property
    def is_real_team_game(self) -> bool:
        return self.t1_type == REAL_TEAM_TYPE and self.t2_type == REAL_TEAM_TYPE


# ============================================================================
# Division / Field Summaries
# ============================================================================


class SourceDivisionSummary(BaseModel):
    agegroup_name: str
    div_name: str
    team_count: int
    game_count: int


class CurrentDivisionSummary(BaseModel):
    agegroup_id: int
    agegroup_name: str
    div_id: int
    div_name: str
    team_count: int


class FieldNameMapping(BaseModel):
    field_id: int
    field_name: str


# ============================================================================
# Division Matching & Feasibility
# ============================================================================


class DivisionMatchType(str, Enum):
    EXACT_MATCH = "exact-match"
    SIZE_MISMATCH = "size-mismatch"
    NEW_DIVISION = "new-division"
    REMOVED_DIVISION = "removed-division"


class DivisionMatch(BaseModel):
    """A current-season division paired with its prior-season counterpart."""

    agegroup_name: str  # year-incremented source name, or the current name
    div_name: str
    current_div_id: Optional[int] = None  # None for removed divisions
    current_agegroup_id: Optional[int] = None
    source_team_count: int
    current_team_count: Optional[int] = None
    match_type: DivisionMatchType
    source_game_count: int


class AutoBuildFeasibility(BaseModel):
    total_current_divisions: int
    exact_matches: int
    size_mismatches: int
    new_divisions: int
    removed_divisions: int
    confidence_level: str  # "green" (>80%), "yellow" (>50%), "red"
    confidence_percent: int
    field_mismatches: List[str]
    warnings: List[str]


class AutoBuildAnalysis(BaseModel):
    source_job_id: int
    source_job_name: str
    source_year: str
    source_total_games: int
    division_matches: List[DivisionMatch]
    feasibility: AutoBuildFeasibility


# ============================================================================
# Build Request / Result
# ============================================================================


class MismatchStrategy(str, Enum):
    USE_CURRENT_PAIRINGS = "use-current-pairings"
    AUTO_SCHEDULE = "auto-schedule"
    SKIP = "skip"


class SizeMismatchResolution(BaseModel):
    div_id: int
    strategy: MismatchStrategy


class AutoBuildAnalyzeRequest(BaseModel):
    source_job_id: int


class AutoBuildRequest(BaseModel):
    source_job_id: int
    skip_division_ids: List[int] = Field(default_factory=list)
    mismatch_resolutions: List[SizeMismatchResolution] = Field(default_factory=list)
    include_bracket_games: bool = False
    skip_already_scheduled: bool = False


class AutoBuildDivisionResult(BaseModel):
    agegroup_name: str
    div_name: str
    div_id: int
    games_placed: int
    games_failed: int
    status: str  # "pattern-replay" | "auto-schedule" | "skipped" | "already-scheduled"


class AutoBuildResult(BaseModel):
    total_divisions: int
    divisions_scheduled: int
    divisions_skipped: int
    total_games_placed: int
    games_failed_to_place: int
    division_results: List[AutoBuildDivisionResult]


class AutoBuildUndoResponse(BaseModel):
    games_deleted: int
