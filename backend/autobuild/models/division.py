from typing import Optional

from sqlmodel import Field, SQLModel


class Division(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    agegroup_id: int = Field(foreign_key="agegroup.id", index=True)
    name: Optional[str] = None
