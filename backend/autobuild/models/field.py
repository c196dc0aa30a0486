from typing import Optional

from sqlmodel import Field, SQLModel


class PlayField(SQLModel, table=True):
    """A playing field. Names starting with "*" are system placeholders."""

    __tablename__ = "field"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = None
