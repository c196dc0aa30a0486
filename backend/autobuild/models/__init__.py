from autobuild.models.agegroup import Agegroup
from autobuild.models.club_registration import ClubRegistration
from autobuild.models.division import Division
from autobuild.models.field import PlayField
from autobuild.models.field_league_season import FieldLeagueSeason
from autobuild.models.game import Game
from autobuild.models.game_links import BracketSeed, DeviceGame, RefGameAssignment
from autobuild.models.job import Job
from autobuild.models.pairing import Pairing
from autobuild.models.team import Team
from autobuild.models.timeslot import TimeslotDate, TimeslotField

__all__ = [
    "Agegroup",
    "BracketSeed",
    "ClubRegistration",
    "DeviceGame",
    "Division",
    "PlayField",
    "FieldLeagueSeason",
    "Game",
    "Job",
    "Pairing",
    "RefGameAssignment",
    "Team",
    "TimeslotDate",
    "TimeslotField",
]
