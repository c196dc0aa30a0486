from typing import Optional

from sqlmodel import Field, SQLModel


class ClubRegistration(SQLModel, table=True):
    """Club-rep registration a team was entered under."""

    id: Optional[int] = Field(default=None, primary_key=True)
    club_name: Optional[str] = None
