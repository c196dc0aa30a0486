from typing import Optional

from sqlmodel import Field, SQLModel


class Team(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="job.id", index=True)
    agegroup_id: Optional[int] = Field(default=None, foreign_key="agegroup.id")
    div_id: Optional[int] = Field(default=None, foreign_key="division.id", index=True)
    name: Optional[str] = None
    div_rank: int = Field(default=0)  # 1-based pool position within the division
    active: Optional[bool] = Field(default=None)
    club_registration_id: Optional[int] = Field(default=None, foreign_key="clubregistration.id")
