"""
Source Candidate Finder - sibling jobs that can donate a schedule pattern.
"""

from typing import List

from sqlmodel import Session, func, select

from autobuild.models.game import Game
from autobuild.models.job import Job
from autobuild.utils.autobuild_models import AutoBuildSourceJob


def get_source_job_candidates(session: Session, target_job_id: int) -> List[AutoBuildSourceJob]:
    """
    List the other jobs of the target job's customer that have scheduled games.

    Ordered by year descending, then scheduled game count descending: the most
    recent season with the richest schedule comes first. An unknown target
    job yields an empty list.
    """
    target = session.get(Job, target_job_id)
    if not target:
        return []

    scheduled_counts = (
        select(Game.job_id, func.count(Game.id).label("scheduled_game_count"))
        .where(Game.game_date.is_not(None))
        .group_by(Game.job_id)
        .subquery()
    )

    rows = session.exec(
        select(Job, scheduled_counts.c.scheduled_game_count)
        .join(scheduled_counts, scheduled_counts.c.job_id == Job.id)
        .where(Job.customer_id == target.customer_id, Job.id != target_job_id)
    ).all()

    candidates = [
        AutoBuildSourceJob(
            job_id=job.id,
            job_name=job.name or "",
            job_path=job.path,
            year=job.year,
            season=job.season,
            scheduled_game_count=count,
        )
        for job, count in rows
        if count > 0
    ]

    # Year desc (missing years last), then richest schedule, then id for stable output
    candidates.sort(key=lambda c: (-c.scheduled_game_count, c.job_id))
    candidates.sort(key=lambda c: c.year or "", reverse=True)
    return candidates
