from typing import Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, SQLModel


class FieldLeagueSeason(SQLModel, table=True):
    """Assignment of a field to a league-season."""

    __table_args__ = (
        SAUniqueConstraint("field_id", "league_id", "season", name="uq_field_league_season"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    field_id: int = Field(foreign_key="field.id")
    league_id: int = Field(index=True)
    season: str
