"""
Job Context Guards

Resolves the scheduling context (league, season, year) of a job for the
endpoints that cannot run without one.
"""

from typing import NamedTuple, Optional

from fastapi import HTTPException
from sqlmodel import Session

from autobuild.models.job import Job


class SchedulingContext(NamedTuple):
    job_id: int
    league_id: Optional[int]
    season: str
    year: str


def require_job(session: Session, job_id: int) -> Job:
    """
    Require that a job exists, otherwise raise 404.

    Raises:
        HTTPException 404: Job not found
    """
    job = session.get(Job, job_id)
    if not job:
        raise HTTPException(status_code=404, detail=f"Job {job_id} not found")
    return job


def resolve_scheduling_context(session: Session, job_id: int) -> SchedulingContext:
    job = require_job(session, job_id)
    return SchedulingContext(
        job_id=job.id,
        league_id=job.league_id,
        season=job.season or "",
        year=job.year or "",
    )
