from typing import Optional

from sqlmodel import Field, SQLModel


class Pairing(SQLModel, table=True):
    """Pre-computed pairing table row for a league-season and pool size.

    t1/t2 are pool ranks when the type is "T", otherwise seed or
    winner-of-game references.
    """

    id: Optional[int] = Field(default=None, primary_key=True)
    league_id: int = Field(index=True)
    season: str
    team_count: int = Field(index=True)
    round: int
    game_number: int
    t1: int
    t2: int
    t1_type: str = Field(default="T")
    t2_type: str = Field(default="T")
    t1_annotation: Optional[str] = None
    t2_annotation: Optional[str] = None
