"""
API routes for resolving candidate pipeline stages
"""
from fastapi import APIRouter
from typing import List

from recruitflow.schemas.workflow_schema import StageInfo, WorkflowResolveRequest, WorkflowSnapshot
from recruitflow.services.workflow_service import build_workflow_snapshot, get_stage_catalogue


router = APIRouter(
    prefix="/workflow",
    tags=["workflow"],
)


@router.post("/resolve", response_model=WorkflowSnapshot)
async def resolve_workflow(request: WorkflowResolveRequest):
    """
    Resolve the pipeline stage for caller supplied records

    Nothing is read from or written to the data store. An omitted
    candidate yields the default application review snapshot.
    """
    return build_workflow_snapshot(
        request.candidate,
        request.testAssignments,
        request.interviewAssignments,
    )


@router.get("/stages", response_model=List[StageInfo])
async def list_stages():
    """
    List every pipeline stage with its label, next action, progress and colour hint
    """
    return get_stage_catalogue()
