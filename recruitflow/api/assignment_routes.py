"""
API routes for tests, interviews and the candidates assigned to them
"""
from fastapi import APIRouter, HTTPException, status, Path

from recruitflow.services.assignment_service import AssignmentService
from recruitflow.schemas.assignment_schema import (
    AssessmentCreate,
    AssessmentEntryStatusUpdate,
    AssessmentResultCreate,
    AssignCandidatesRequest,
    AssignmentResponse,
    CreatedResponse,
    InterviewCreate,
    InterviewEntryStatusUpdate,
    MessageResponse,
)
from recruitflow.schemas.workflow_schema import TestResult


router = APIRouter(
    prefix="/assignments",
    tags=["assignments"],
    responses={404: {"description": "Not found"}},
)


@router.post("/tests", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_test(test_data: AssessmentCreate):
    """
    Create a test that candidates can be invited to
    """
    try:
        test_id = AssignmentService.create_test(test_data.model_dump(exclude_none=True))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create test: {str(e)}"
        )
    return {"id": test_id}


@router.post("/tests/{test_id}/assign", response_model=AssignmentResponse)
async def assign_test(
    request: AssignCandidatesRequest,
    test_id: str = Path(..., description="ID of the test")
):
    """
    Invite candidates to a test and optionally set its schedule
    """
    assigned = AssignmentService.assign_test(
        test_id,
        request.candidateIds,
        scheduled_date=request.scheduledDate,
        scheduled_time=request.scheduledTime,
    )
    if assigned is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Test with ID {test_id} not found"
        )
    return {"message": "Test assigned to candidates successfully", "assignedCount": assigned}


@router.put("/tests/{test_id}/candidate/{candidate_id}/status", response_model=MessageResponse)
async def update_test_status(
    update_data: AssessmentEntryStatusUpdate,
    test_id: str = Path(..., description="ID of the test"),
    candidate_id: str = Path(..., description="ID of the candidate")
):
    """
    Move a candidate's test entry to invited, started, completed or expired
    """
    if not AssignmentService.update_test_status(test_id, candidate_id, update_data.status):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Candidate {candidate_id} not found on test {test_id}"
        )
    return {"message": "Test candidate status updated successfully"}


@router.post("/tests/{test_id}/candidate/{candidate_id}/result", response_model=TestResult)
async def record_test_result(
    result_data: AssessmentResultCreate,
    test_id: str = Path(..., description="ID of the test"),
    candidate_id: str = Path(..., description="ID of the candidate")
):
    """
    Complete a candidate's test and store a passed or failed result on the candidate
    """
    result = AssignmentService.record_test_result(
        test_id,
        candidate_id,
        result_data.percentage,
        score=result_data.score,
    )
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Candidate {candidate_id} not found on test {test_id}"
        )
    return result


@router.post("/interviews", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_interview(interview_data: InterviewCreate):
    """
    Create an interview that candidates can be added to
    """
    try:
        interview_id = AssignmentService.create_interview(interview_data.model_dump(exclude_none=True))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create interview: {str(e)}"
        )
    return {"id": interview_id}


@router.post("/interviews/{interview_id}/assign-candidates", response_model=AssignmentResponse)
async def assign_interview(
    request: AssignCandidatesRequest,
    interview_id: str = Path(..., description="ID of the interview")
):
    """
    Add candidates to an interview; they start as scheduled
    """
    assigned = AssignmentService.assign_interview(interview_id, request.candidateIds)
    if assigned is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Interview with ID {interview_id} not found"
        )
    return {"message": "Candidates assigned to interview successfully", "assignedCount": assigned}


@router.put("/interviews/{interview_id}/candidate/{candidate_id}/status", response_model=MessageResponse)
async def update_interview_status(
    update_data: InterviewEntryStatusUpdate,
    interview_id: str = Path(..., description="ID of the interview"),
    candidate_id: str = Path(..., description="ID of the candidate")
):
    """
    Move a candidate's interview entry to scheduled, completed, cancelled or no_show
    """
    if not AssignmentService.update_interview_status(interview_id, candidate_id, update_data.status, update_data.notes):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Candidate {candidate_id} not found on interview {interview_id}"
        )
    return {"message": "Interview candidate status updated successfully"}
