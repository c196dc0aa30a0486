from datetime import date, time
from typing import Optional

from sqlmodel import Field, SQLModel


class TimeslotDate(SQLModel, table=True):
    """A calendar date an agegroup (or one of its divisions) plays on."""

    id: Optional[int] = Field(default=None, primary_key=True)
    agegroup_id: int = Field(foreign_key="agegroup.id", index=True)
    div_id: Optional[int] = Field(default=None, foreign_key="division.id")  # None = whole agegroup
    game_date: date


class TimeslotField(SQLModel, table=True):
    """Field availability window for one weekday."""

    id: Optional[int] = Field(default=None, primary_key=True)
    agegroup_id: int = Field(foreign_key="agegroup.id", index=True)
    div_id: Optional[int] = Field(default=None, foreign_key="division.id")  # None = whole agegroup
    field_id: int = Field(foreign_key="field.id")
    day_of_week: int  # 0=Monday, 6=Sunday
    start_time: time
    gamestart_interval: int = Field(default=60)  # minutes between game starts
    max_games_per_field: int = Field(default=1)
