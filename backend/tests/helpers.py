"""
Seed helpers shared by the auto-build tests.

ROUND_ROBIN_5 is the 5-team single round robin used throughout:
10 games over 5 rounds, two games per round (one team sits out).
"""

from datetime import date, datetime, time
from typing import List, Optional

from sqlmodel import Session

from autobuild.models import (
    Agegroup,
    ClubRegistration,
    Division,
    FieldLeagueSeason,
    Game,
    Job,
    Pairing,
    PlayField,
    Team,
    TimeslotDate,
    TimeslotField,
)

LEAGUE_ID = 10
SEASON = "Spring"

# (round, game_number, t1 rank, t2 rank)
ROUND_ROBIN_5 = [
    (1, 1, 1, 2),
    (1, 2, 3, 4),
    (2, 3, 1, 3),
    (2, 4, 2, 5),
    (3, 5, 1, 4),
    (3, 6, 3, 5),
    (4, 7, 1, 5),
    (4, 8, 2, 4),
    (5, 9, 2, 3),
    (5, 10, 4, 5),
]


def _save(session: Session, obj):
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


def make_job(
    session: Session,
    name: str = "Spring 2025",
    year: Optional[str] = "2025",
    customer_id: int = 1,
    league_id: Optional[int] = LEAGUE_ID,
    season: Optional[str] = SEASON,
) -> Job:
    path = name.lower().replace(" ", "-")
    return _save(
        session,
        Job(customer_id=customer_id, name=name, path=path, year=year, season=season, league_id=league_id),
    )


def make_agegroup(session: Session, name: str, league_id: int = LEAGUE_ID, season: str = SEASON) -> Agegroup:
    return _save(session, Agegroup(name=name, league_id=league_id, season=season))


def make_division(session: Session, agegroup: Agegroup, name: str) -> Division:
    return _save(session, Division(agegroup_id=agegroup.id, name=name))


def make_team(
    session: Session,
    job: Job,
    division: Division,
    div_rank: int,
    name: Optional[str] = None,
    active: Optional[bool] = True,
    club_name: Optional[str] = None,
) -> Team:
    club_id = None
    if club_name is not None:
        club_id = _save(session, ClubRegistration(club_name=club_name)).id
    return _save(
        session,
        Team(
            job_id=job.id,
            agegroup_id=division.agegroup_id,
            div_id=division.id,
            name=name or f"{division.name} {div_rank}",
            div_rank=div_rank,
            active=active,
            club_registration_id=club_id,
        ),
    )


def make_teams(session: Session, job: Job, division: Division, count: int) -> List[Team]:
    return [make_team(session, job, division, rank) for rank in range(1, count + 1)]


def make_field(
    session: Session, name: str, league_id: Optional[int] = LEAGUE_ID, season: Optional[str] = SEASON
) -> PlayField:
    play_field = _save(session, PlayField(name=name))
    if league_id is not None:
        _save(session, FieldLeagueSeason(field_id=play_field.id, league_id=league_id, season=season))
    return play_field


def make_game(session: Session, job: Job, game_date: Optional[datetime], **kwargs) -> Game:
    kwargs.setdefault("t1_type", "T")
    kwargs.setdefault("t2_type", "T")
    return _save(session, Game(job_id=job.id, game_date=game_date, **kwargs))


def make_team_game(
    session: Session,
    job: Job,
    game_date: datetime,
    team1: Team,
    team2: Team,
    play_field: Optional[PlayField] = None,
    **kwargs,
) -> Game:
    """A real-team game with ids, names and ranks copied from the teams."""
    kwargs.setdefault("t1_no", team1.div_rank)
    kwargs.setdefault("t2_no", team2.div_rank)
    return make_game(
        session,
        job,
        game_date,
        div_id=team1.div_id,
        agegroup_id=team1.agegroup_id,
        field_id=play_field.id if play_field else None,
        field_name=play_field.name if play_field else None,
        t1_id=team1.id,
        t1_name=team1.name,
        t2_id=team2.id,
        t2_name=team2.name,
        **kwargs,
    )


def add_round_robin_pairings(
    session: Session, team_count: int = 5, league_id: int = LEAGUE_ID, season: str = SEASON
) -> None:
    assert team_count == 5, "only the 5-team table is seeded"
    for rnd, game_number, t1, t2 in ROUND_ROBIN_5:
        session.add(
            Pairing(
                league_id=league_id,
                season=season,
                team_count=team_count,
                round=rnd,
                game_number=game_number,
                t1=t1,
                t2=t2,
            )
        )
    session.commit()


def add_timeslots(
    session: Session,
    agegroup: Agegroup,
    dates: List[date],
    fields: List[PlayField],
    start_time: time = time(8, 0),
    interval: int = 60,
    max_games: int = 4,
    division: Optional[Division] = None,
) -> None:
    """Open every field on every given date's weekday."""
    div_id = division.id if division else None
    for d in dates:
        session.add(TimeslotDate(agegroup_id=agegroup.id, div_id=div_id, game_date=d))
    for weekday in sorted({d.weekday() for d in dates}):
        for f in fields:
            session.add(
                TimeslotField(
                    agegroup_id=agegroup.id,
                    div_id=div_id,
                    field_id=f.id,
                    day_of_week=weekday,
                    start_time=start_time,
                    gamestart_interval=interval,
                    max_games_per_field=max_games,
                )
            )
    session.commit()
