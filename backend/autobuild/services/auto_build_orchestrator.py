"""
Auto-Build Orchestrator - analyze, build and undo for a target job.

Build pipeline:
1. Extract the source pattern and group it by (agegroup, division)
2. Match source divisions to the target job's current divisions
3. Resolve current fields by name for the target league-season
4. Per division: skip, keep existing games, or delete and rebuild by
   pattern replay or auto-schedule
5. Single commit

The build is one transaction: any failure rolls back every division.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from sqlmodel import Session

from autobuild.models.job import Job
from autobuild.services.division_matching import compute_feasibility, find_pattern_key, match_divisions
from autobuild.services.division_summary import (
    get_current_division_summaries,
    get_existing_game_counts_by_division,
    get_source_division_summaries,
)
from autobuild.services.field_resolver import build_field_name_index, get_current_fields
from autobuild.services.pattern_extractor import extract_pattern, get_source_field_names
from autobuild.services.schedule_replayer import (
    ReplayContext,
    auto_schedule_division,
    delete_all_games_for_job,
    delete_division_games,
    load_division_placement,
    load_occupied_slots,
    replay_pattern_for_division,
)
from autobuild.utils.autobuild_models import (
    AutoBuildAnalysis,
    AutoBuildDivisionResult,
    AutoBuildRequest,
    AutoBuildResult,
    DivisionMatch,
    DivisionMatchType,
    MismatchStrategy,
)
from autobuild.utils.job_guards import SchedulingContext

logger = logging.getLogger(__name__)

STATUS_PATTERN_REPLAY = "pattern-replay"
STATUS_AUTO_SCHEDULE = "auto-schedule"
STATUS_SKIPPED = "skipped"
STATUS_ALREADY_SCHEDULED = "already-scheduled"


def analyze_auto_build(session: Session, ctx: SchedulingContext, source_job_id: int) -> AutoBuildAnalysis:
    """Preview how a source job's pattern maps onto the target job, without writing anything."""
    source_job = session.get(Job, source_job_id)
    pattern = extract_pattern(session, source_job_id)

    matches = match_divisions(
        get_source_division_summaries(session, source_job_id),
        get_current_division_summaries(session, ctx.job_id),
    )

    current_field_names = set()
    if ctx.league_id is not None:
        current_field_names = {f.field_name.lower() for f in get_current_fields(session, ctx.league_id, ctx.season)}
    field_mismatches = [
        name for name in get_source_field_names(session, source_job_id) if name.lower() not in current_field_names
    ]

    return AutoBuildAnalysis(
        source_job_id=source_job_id,
        source_job_name=(source_job.name if source_job else None) or "",
        source_year=(source_job.year if source_job else None) or "",
        source_total_games=len(pattern),
        division_matches=matches,
        feasibility=compute_feasibility(matches, field_mismatches),
    )


def _resolve_strategy(match: DivisionMatch, resolutions: Dict[int, MismatchStrategy]) -> Optional[str]:
    """Build status for a division, or None when it is skipped."""
    if match.match_type == DivisionMatchType.EXACT_MATCH:
        return STATUS_PATTERN_REPLAY
    if match.match_type == DivisionMatchType.NEW_DIVISION:
        return STATUS_AUTO_SCHEDULE
    if match.match_type == DivisionMatchType.SIZE_MISMATCH:
        strategy = resolutions.get(match.current_div_id, MismatchStrategy.AUTO_SCHEDULE)
        if strategy == MismatchStrategy.SKIP:
            return None
        if strategy == MismatchStrategy.USE_CURRENT_PAIRINGS:
            return STATUS_PATTERN_REPLAY
        return STATUS_AUTO_SCHEDULE
    return None


def build_auto_schedule(
    session: Session,
    ctx: SchedulingContext,
    request: AutoBuildRequest,
    user_id: Optional[str] = None,
) -> AutoBuildResult:
    """
    Build the target job's schedule from a source job's pattern.

    Raises:
        Exception: any database error, after the whole build is rolled back
    """
    pattern_by_div = defaultdict(list)
    for placement in extract_pattern(session, request.source_job_id):
        pattern_by_div[(placement.agegroup_name, placement.div_name)].append(placement)

    matches = match_divisions(
        get_source_division_summaries(session, request.source_job_id),
        get_current_division_summaries(session, ctx.job_id),
    )

    current_fields = (
        get_current_fields(session, ctx.league_id, ctx.season) if ctx.league_id is not None else []
    )
    skip_ids = set(request.skip_division_ids)
    resolutions = {r.div_id: r.strategy for r in request.mismatch_resolutions}
    existing_counts = get_existing_game_counts_by_division(session, ctx.job_id)

    replay_ctx = ReplayContext(
        scheduling=ctx,
        field_index=build_field_name_index(current_fields),
        field_names={f.field_id: f.field_name for f in current_fields},
        occupied=load_occupied_slots(session, ctx.job_id),
        user_id=user_id,
    )

    actionable = sorted(
        (
            m
            for m in matches
            if m.match_type != DivisionMatchType.REMOVED_DIVISION and m.current_div_id is not None
        ),
        key=lambda m: (m.agegroup_name, m.div_name),
    )

    division_results: List[AutoBuildDivisionResult] = []
    total_placed = 0
    total_failed = 0

    try:
        for match in actionable:
            div_id = match.current_div_id

            if div_id in skip_ids:
                status = STATUS_SKIPPED
            elif request.skip_already_scheduled and existing_counts.get(div_id, 0) > 0:
                status = STATUS_ALREADY_SCHEDULED
            else:
                status = _resolve_strategy(match, resolutions) or STATUS_SKIPPED

            placed = failed = 0
            if status in (STATUS_PATTERN_REPLAY, STATUS_AUTO_SCHEDULE):
                if existing_counts.get(div_id, 0) > 0:
                    delete_division_games(session, ctx.job_id, div_id, commit=False)
                    replay_ctx.occupied = load_occupied_slots(session, ctx.job_id)

                target = load_division_placement(session, replay_ctx, match.current_agegroup_id, div_id)
                if status == STATUS_PATTERN_REPLAY:
                    key = find_pattern_key(match.agegroup_name, match.div_name, pattern_by_div)
                    if key is None:
                        logger.warning("No pattern found for %s/%s", match.agegroup_name, match.div_name)
                    else:
                        placed, failed = replay_pattern_for_division(
                            session, replay_ctx, target, pattern_by_div[key], request.include_bracket_games
                        )
                else:
                    placed, failed = auto_schedule_division(session, replay_ctx, target)

            division_results.append(
                AutoBuildDivisionResult(
                    agegroup_name=match.agegroup_name,
                    div_name=match.div_name,
                    div_id=div_id,
                    games_placed=placed,
                    games_failed=failed,
                    status=status,
                )
            )
            total_placed += placed
            total_failed += failed

        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Auto-build for job %d failed, transaction rolled back", ctx.job_id)
        raise

    skipped = sum(1 for r in division_results if r.status in (STATUS_SKIPPED, STATUS_ALREADY_SCHEDULED))
    scheduled = len(division_results) - skipped

    logger.info(
        "Auto-build job=%d source=%d divisions=%d scheduled=%d skipped=%d placed=%d failed=%d",
        ctx.job_id,
        request.source_job_id,
        len(actionable),
        scheduled,
        skipped,
        total_placed,
        total_failed,
    )

    return AutoBuildResult(
        total_divisions=len(actionable),
        divisions_scheduled=scheduled,
        divisions_skipped=skipped,
        total_games_placed=total_placed,
        games_failed_to_place=total_failed,
        division_results=division_results,
    )


def undo_auto_build(session: Session, job_id: int) -> int:
    """Remove every game of the job (and the rows referencing them)."""
    count = delete_all_games_for_job(session, job_id)
    logger.info("Auto-build undo job=%d games_deleted=%d", job_id, count)
    return count
