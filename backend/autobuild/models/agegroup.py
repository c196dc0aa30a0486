from typing import Optional

from sqlmodel import Field, SQLModel


class Agegroup(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    league_id: Optional[int] = Field(default=None, index=True)
    season: Optional[str] = None
    name: Optional[str] = None
