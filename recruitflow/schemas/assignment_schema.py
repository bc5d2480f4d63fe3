"""
Schemas for tests, interviews and candidate assignments
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from recruitflow.schemas.workflow_schema import InterviewAssignmentStatus, TestAssignmentStatus


class AssessmentCreate(BaseModel):
    """Schema for creating a test"""
    id: Optional[str] = Field(None, description="ID of the test, generated when omitted")
    title: str = Field(..., description="Title of the test")
    passingPercentage: Optional[float] = Field(None, description="Percentage needed to pass (default 50)", ge=0, le=100)
    scheduledDate: Optional[str] = Field(None, description="Date the test is scheduled for")
    scheduledTime: Optional[str] = Field(None, description="Time the test is scheduled for")


class InterviewCreate(BaseModel):
    """Schema for creating an interview"""
    id: Optional[str] = Field(None, description="ID of the interview, generated when omitted")
    title: str = Field(..., description="Title of the interview")
    round: int = Field(1, description="Interview round", ge=1)
    type: Optional[str] = Field(None, description="Interview type (technical, hr, ...)")


class CreatedResponse(BaseModel):
    id: str


class AssignCandidatesRequest(BaseModel):
    """Schema for assigning candidates to a test or interview"""
    candidateIds: List[str] = Field(..., description="IDs of the candidates to assign", min_length=1)
    scheduledDate: Optional[str] = Field(None, description="Test date (tests only)")
    scheduledTime: Optional[str] = Field(None, description="Test time (tests only)")


class AssignmentResponse(BaseModel):
    message: str
    assignedCount: int


class AssessmentEntryStatusUpdate(BaseModel):
    """Schema for moving a candidate's entry on a test"""
    status: TestAssignmentStatus = Field(..., description="invited, started, completed or expired")


class AssessmentResultCreate(BaseModel):
    """Schema for recording a candidate's test result"""
    percentage: float = Field(..., description="Score as a percentage", ge=0, le=100)
    score: Optional[float] = Field(None, description="Raw score")


class InterviewEntryStatusUpdate(BaseModel):
    """Schema for moving a candidate's entry on an interview"""
    status: InterviewAssignmentStatus = Field(..., description="scheduled, completed, cancelled or no_show")
    notes: Optional[str] = Field(None, description="Interviewer notes")


class MessageResponse(BaseModel):
    message: str
