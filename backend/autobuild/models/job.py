from typing import Optional

from sqlmodel import Field, SQLModel


class Job(SQLModel, table=True):
    """A customer's league-season registration site (one schedule per job)."""

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_id: int = Field(index=True)
    name: Optional[str] = None
    path: str
    year: Optional[str] = None
    season: Optional[str] = None
    league_id: Optional[int] = Field(default=None, index=True)
