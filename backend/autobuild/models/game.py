from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Game(SQLModel, table=True):
    """One schedule row. A game is "scheduled" once game_date is set."""

    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="job.id", index=True)
    league_id: Optional[int] = Field(default=None)
    season: Optional[str] = None
    year: Optional[str] = None

    # Denormalized agegroup/division labels (kept as written at schedule time)
    agegroup_id: Optional[int] = Field(default=None, foreign_key="agegroup.id")
    agegroup_name: Optional[str] = None
    div_id: Optional[int] = Field(default=None, foreign_key="division.id", index=True)
    div_name: Optional[str] = None

    round: Optional[int] = Field(default=None)
    game_number: Optional[int] = Field(default=None)
    field_id: Optional[int] = Field(default=None, foreign_key="field.id")
    field_name: Optional[str] = None
    game_date: Optional[datetime] = Field(default=None, index=True)
    status_code: Optional[int] = Field(default=None)  # 1 = scheduled

    # Sides: type "T" is a real team (no = pool rank); anything else is a bracket placeholder
    t1_id: Optional[int] = Field(default=None, foreign_key="team.id")
    t1_name: Optional[str] = None
    t1_type: Optional[str] = None
    t1_no: Optional[int] = Field(default=None)
    t1_annotation: Optional[str] = None
    t2_id: Optional[int] = Field(default=None, foreign_key="team.id")
    t2_name: Optional[str] = None
    t2_type: Optional[str] = None
    t2_no: Optional[int] = Field(default=None)
    t2_annotation: Optional[str] = None

    modified: Optional[datetime] = Field(default=None)
    modified_by: Optional[str] = None
