"""
Division Matching - pairs current-season divisions with prior-season ones.

Agegroup names usually embed a birth/grad year ("2014 Boys"). A cloned
season bumps every such year by one, so a source agegroup is matched on its
year-incremented name.
"""

import re
from typing import Dict, List, Optional, Tuple

from autobuild.utils.autobuild_models import (
    AutoBuildFeasibility,
    CurrentDivisionSummary,
    DivisionMatch,
    DivisionMatchType,
    GamePlacementPattern,
    SourceDivisionSummary,
)

YEAR_IN_NAME = re.compile(r"\b(20[2-3]\d)\b")

CONFIDENCE_GREEN_ABOVE = 80
CONFIDENCE_YELLOW_ABOVE = 50

PatternKey = Tuple[str, str]


def increment_years_in_name(name: str) -> str:
    """Shift every 4-digit year 2020-2039 in a name forward by one."""
    return YEAR_IN_NAME.sub(lambda m: str(int(m.group(1)) + 1), name)


def decrement_years_in_name(name: str) -> str:
    return YEAR_IN_NAME.sub(lambda m: str(int(m.group(1)) - 1), name)


def match_divisions(
    source_divisions: List[SourceDivisionSummary],
    current_divisions: List[CurrentDivisionSummary],
) -> List[DivisionMatch]:
    """
    Match source divisions to current ones by (incremented agegroup name, division name).

    Every source division yields one match (exact, size mismatch or removed);
    current divisions left unmatched are reported as new.
    """
    current_lookup: Dict[PatternKey, CurrentDivisionSummary] = {}
    for c in current_divisions:
        current_lookup.setdefault((c.agegroup_name, c.div_name), c)

    matches: List[DivisionMatch] = []
    matched_current_ids = set()

    for source in source_divisions:
        normalized_name = increment_years_in_name(source.agegroup_name)
        current = current_lookup.get((normalized_name, source.div_name))

        if current is None:
            matches.append(
                DivisionMatch(
                    agegroup_name=normalized_name,
                    div_name=source.div_name,
                    source_team_count=source.team_count,
                    match_type=DivisionMatchType.REMOVED_DIVISION,
                    source_game_count=source.game_count,
                )
            )
            continue

        matched_current_ids.add(current.div_id)
        match_type = (
            DivisionMatchType.EXACT_MATCH
            if source.team_count == current.team_count
            else DivisionMatchType.SIZE_MISMATCH
        )
        matches.append(
            DivisionMatch(
                agegroup_name=normalized_name,
                div_name=source.div_name,
                current_div_id=current.div_id,
                current_agegroup_id=current.agegroup_id,
                source_team_count=source.team_count,
                current_team_count=current.team_count,
                match_type=match_type,
                source_game_count=source.game_count,
            )
        )

    for current in current_divisions:
        if current.div_id in matched_current_ids:
            continue
        matches.append(
            DivisionMatch(
                agegroup_name=current.agegroup_name,
                div_name=current.div_name,
                current_div_id=current.div_id,
                current_agegroup_id=current.agegroup_id,
                source_team_count=0,
                current_team_count=current.team_count,
                match_type=DivisionMatchType.NEW_DIVISION,
                source_game_count=0,
            )
        )

    return matches


def find_pattern_key(
    agegroup_name: str,
    div_name: str,
    pattern_by_div: Dict[PatternKey, List[GamePlacementPattern]],
) -> Optional[PatternKey]:
    """Find the pattern for a division under its current name or its prior-year name."""
    if (agegroup_name, div_name) in pattern_by_div:
        return (agegroup_name, div_name)

    decremented = decrement_years_in_name(agegroup_name)
    if (decremented, div_name) in pattern_by_div:
        return (decremented, div_name)

    return None


def compute_feasibility(matches: List[DivisionMatch], field_mismatches: List[str]) -> AutoBuildFeasibility:
    """Summarize how much of the current season a pattern replay can cover."""
    counts = {t: 0 for t in DivisionMatchType}
    for m in matches:
        counts[m.match_type] += 1

    removed = counts[DivisionMatchType.REMOVED_DIVISION]
    exact = counts[DivisionMatchType.EXACT_MATCH]
    size_mismatches = counts[DivisionMatchType.SIZE_MISMATCH]
    new_divisions = counts[DivisionMatchType.NEW_DIVISION]
    total_current = len(matches) - removed

    confidence_percent = round(100.0 * exact / total_current) if total_current > 0 else 0
    if confidence_percent > CONFIDENCE_GREEN_ABOVE:
        confidence_level = "green"
    elif confidence_percent > CONFIDENCE_YELLOW_ABOVE:
        confidence_level = "yellow"
    else:
        confidence_level = "red"

    warnings: List[str] = []
    if field_mismatches:
        warnings.append(
            f"{len(field_mismatches)} field(s) from prior season not found in current setup: "
            f"{', '.join(field_mismatches)}"
        )
    if new_divisions:
        warnings.append(f"{new_divisions} new division(s) will use standard auto-schedule (no prior pattern).")
    if size_mismatches:
        warnings.append(
            f"{size_mismatches} division(s) have different team counts; choose how to handle each."
        )

    return AutoBuildFeasibility(
        total_current_divisions=total_current,
        exact_matches=exact,
        size_mismatches=size_mismatches,
        new_divisions=new_divisions,
        removed_divisions=removed,
        confidence_level=confidence_level,
        confidence_percent=confidence_percent,
        field_mismatches=field_mismatches,
        warnings=warnings,
    )
