"""Rows that reference a game and must be removed before the game itself."""

from typing import Optional

from sqlmodel import Field, SQLModel


class DeviceGame(SQLModel, table=True):
    """A device subscribed to notifications for a game."""

    id: Optional[int] = Field(default=None, primary_key=True)
    game_id: int = Field(foreign_key="game.id", index=True)
    device_token: str


class BracketSeed(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    game_id: int = Field(foreign_key="game.id", index=True)
    div_id: Optional[int] = Field(default=None)
    t1_seed_rank: Optional[int] = Field(default=None)
    t2_seed_rank: Optional[int] = Field(default=None)


class RefGameAssignment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    game_id: int = Field(foreign_key="game.id", index=True)
    referee_user_id: str
