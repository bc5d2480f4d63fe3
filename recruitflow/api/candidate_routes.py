from fastapi import APIRouter, HTTPException, status, Query, Path
from typing import List, Optional

from recruitflow.services.candidate_service import CandidateService
from recruitflow.schemas.workflow_schema import CandidateStatus
from recruitflow.schemas.candidate_schema import (
    BulkStatusResponse,
    BulkStatusUpdate,
    CandidateCreate,
    CandidateStatusUpdate,
    CandidateWorkflowResponse,
    FinalDecisionCreate,
    StageOverview,
)

router = APIRouter(
    prefix="/candidates",
    tags=["candidates"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[CandidateWorkflowResponse])
async def get_all_candidates(
    stage: Optional[str] = Query(None, description="Filter candidates by pipeline stage")
):
    """
    Get all candidates with their workflow snapshot, optionally filtered by stage
    """
    try:
        return CandidateService.get_all_candidates(stage=stage)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown pipeline stage: {stage}"
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get candidates: {str(e)}"
        )


@router.post("/", response_model=CandidateWorkflowResponse, status_code=status.HTTP_201_CREATED)
async def create_candidate(candidate_data: CandidateCreate):
    """
    Create a candidate record and return it with its workflow snapshot
    """
    try:
        candidate_dict = candidate_data.model_dump(mode="json", exclude_none=True)
        candidate_id = CandidateService.create_candidate(candidate_dict)
        return CandidateService.get_candidate(candidate_id)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create candidate: {str(e)}"
        )


@router.put("/bulk/status", response_model=BulkStatusResponse)
async def bulk_update_status(update_data: BulkStatusUpdate):
    """
    Update the raw status of several candidates at once

    Unknown candidate IDs are skipped and not counted.
    """
    try:
        modified = CandidateService.bulk_update_status(update_data.candidateIds, update_data.status)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update candidates: {str(e)}"
        )
    return {"message": f"Updated {modified} candidates", "modifiedCount": modified}


@router.get("/status/{candidate_status}", response_model=List[CandidateWorkflowResponse])
async def get_candidates_by_status(
    candidate_status: CandidateStatus = Path(..., description="Raw candidate status to filter by")
):
    """
    Get candidates with the given raw status
    """
    try:
        return CandidateService.get_candidates_by_status(candidate_status)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get candidates: {str(e)}"
        )


@router.get("/stats/overview", response_model=StageOverview)
async def get_stage_overview():
    """
    Get the number of candidates in each pipeline stage
    """
    try:
        return CandidateService.get_stage_overview()
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get stage overview: {str(e)}"
        )


@router.get("/{candidate_id}", response_model=CandidateWorkflowResponse)
async def get_candidate(
    candidate_id: str = Path(..., description="ID of the candidate to get")
):
    """
    Get a single candidate by ID with its workflow snapshot
    """
    candidate = CandidateService.get_candidate(candidate_id)
    if not candidate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Candidate with ID {candidate_id} not found"
        )
    return candidate


@router.put("/{candidate_id}/status", response_model=CandidateWorkflowResponse)
async def update_candidate_status(
    update_data: CandidateStatusUpdate,
    candidate_id: str = Path(..., description="ID of the candidate to update")
):
    """
    Update the raw status of a candidate
    """
    try:
        updated = CandidateService.update_status(candidate_id, update_data.status)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update candidate status: {str(e)}"
        )
    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Candidate with ID {candidate_id} not found"
        )
    return updated


@router.put("/{candidate_id}/final-decision", response_model=CandidateWorkflowResponse)
async def record_final_decision(
    decision_data: FinalDecisionCreate,
    candidate_id: str = Path(..., description="ID of the candidate")
):
    """
    Record the final decision for a candidate

    The candidate status follows the decision (selected, rejected or on_hold).
    """
    try:
        updated = CandidateService.record_final_decision(
            candidate_id,
            decision_data.decision,
            notes=decision_data.notes,
            decided_by=decision_data.decidedBy,
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to record final decision: {str(e)}"
        )
    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Candidate with ID {candidate_id} not found"
        )
    return updated
