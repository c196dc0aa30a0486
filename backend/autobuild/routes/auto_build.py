"""
Auto-Build Endpoints - rebuild a job's schedule from a prior season.

Flow for the scheduler UI:
  1. GET  /jobs/{job_id}/auto-build/source-jobs   pick a source season
  2. POST /jobs/{job_id}/auto-build/analyze       preview division matches
  3. POST /jobs/{job_id}/auto-build/execute       build (single transaction)
  4. GET  /jobs/{job_id}/auto-build/validate      post-build QA
  5. POST /jobs/{job_id}/auto-build/undo          remove every game of the job
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Header
from sqlmodel import Session

from autobuild.database import get_session
from autobuild.services.auto_build_orchestrator import analyze_auto_build, build_auto_schedule, undo_auto_build
from autobuild.services.division_summary import get_current_division_summaries
from autobuild.services.pattern_extractor import extract_pattern
from autobuild.services.qa_validator import run_qa_validation
from autobuild.services.source_candidates import get_source_job_candidates
from autobuild.utils.autobuild_models import (
    AutoBuildAnalysis,
    AutoBuildAnalyzeRequest,
    AutoBuildRequest,
    AutoBuildResult,
    AutoBuildSourceJob,
    AutoBuildUndoResponse,
    CurrentDivisionSummary,
    GamePlacementPattern,
)
from autobuild.utils.job_guards import require_job, resolve_scheduling_context
from autobuild.utils.qa_report import AutoBuildQaResult

router = APIRouter()


@router.get("/jobs/{job_id}/auto-build/source-jobs", response_model=List[AutoBuildSourceJob])
def list_source_jobs(job_id: int, session: Session = Depends(get_session)):
    """Sibling jobs (same customer) with scheduled games, newest season first."""
    return get_source_job_candidates(session, job_id)


@router.get("/jobs/{job_id}/auto-build/pattern", response_model=List[GamePlacementPattern])
def get_pattern(job_id: int, session: Session = Depends(get_session)):
    return extract_pattern(session, job_id)


@router.get("/jobs/{job_id}/auto-build/divisions", response_model=List[CurrentDivisionSummary])
def list_current_divisions(job_id: int, session: Session = Depends(get_session)):
    return get_current_division_summaries(session, job_id)


@router.post("/jobs/{job_id}/auto-build/analyze", response_model=AutoBuildAnalysis)
def analyze(
    job_id: int,
    body: AutoBuildAnalyzeRequest,
    session: Session = Depends(get_session),
) -> AutoBuildAnalysis:
    """
    Preview a build without writing anything.

    Returns division matches (exact / size mismatch / new / removed) and a
    green / yellow / red feasibility rating.
    """
    ctx = resolve_scheduling_context(session, job_id)
    require_job(session, body.source_job_id)
    return analyze_auto_build(session, ctx, body.source_job_id)


@router.post("/jobs/{job_id}/auto-build/execute", response_model=AutoBuildResult)
def execute(
    job_id: int,
    body: AutoBuildRequest,
    session: Session = Depends(get_session),
    x_user_id: Optional[str] = Header(default=None),
) -> AutoBuildResult:
    """
    Build the job's schedule from the source job's pattern.

    Divisions that already have games are deleted and rebuilt unless
    skip_already_scheduled is set. Everything runs in one transaction.
    """
    ctx = resolve_scheduling_context(session, job_id)
    require_job(session, body.source_job_id)
    return build_auto_schedule(session, ctx, body, user_id=x_user_id)


@router.post("/jobs/{job_id}/auto-build/undo", response_model=AutoBuildUndoResponse)
def undo(job_id: int, session: Session = Depends(get_session)) -> AutoBuildUndoResponse:
    """Delete every game of the job along with device, bracket seed and referee links."""
    return AutoBuildUndoResponse(games_deleted=undo_auto_build(session, job_id))


@router.get("/jobs/{job_id}/auto-build/validate", response_model=AutoBuildQaResult)
def validate(job_id: int, session: Session = Depends(get_session)) -> AutoBuildQaResult:
    return run_qa_validation(session, job_id)
