"""
Field Name Resolver - fields assigned to a league-season, by name.

Pattern placements carry the source season's field names; replay matches
them against the fields currently assigned to the target league-season.
System/placeholder fields (names starting with SYSTEM_FIELD_PREFIX) are
never resolution targets.
"""

from typing import Dict, List, Optional

from sqlmodel import Session, select

from autobuild.models.field import PlayField
from autobuild.models.field_league_season import FieldLeagueSeason
from autobuild.utils.autobuild_models import FieldNameMapping

SYSTEM_FIELD_PREFIX = "*"


def is_system_field(name: Optional[str]) -> bool:
    return bool(name) and name.startswith(SYSTEM_FIELD_PREFIX)


def get_current_fields(session: Session, league_id: int, season: str) -> List[FieldNameMapping]:
    """Non-system fields assigned to a league-season, deduplicated and sorted by name."""
    rows = session.exec(
        select(PlayField.id, PlayField.name)
        .join(FieldLeagueSeason, FieldLeagueSeason.field_id == PlayField.id)
        .where(FieldLeagueSeason.league_id == league_id, FieldLeagueSeason.season == season)
        .distinct()
    ).all()

    mappings = [
        FieldNameMapping(field_id=field_id, field_name=name or "")
        for field_id, name in rows
        if not is_system_field(name)
    ]
    mappings.sort(key=lambda f: (f.field_name, f.field_id))
    return mappings


def build_field_name_index(fields: List[FieldNameMapping]) -> Dict[str, int]:
    """Case-insensitive field name -> id; the first field wins on duplicate names."""
    index: Dict[str, int] = {}
    for f in fields:
        index.setdefault(f.field_name.lower(), f.field_id)
    return index
