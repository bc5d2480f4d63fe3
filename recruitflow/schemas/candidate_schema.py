"""
Candidate data schemas
"""
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from recruitflow.schemas.workflow_schema import (
    CandidateStatus,
    FinalDecisionKind,
    InterviewAssignmentSummary,
    TestAssignmentSummary,
    WorkflowSnapshot,
)


class CandidateAssignments(BaseModel):
    """Tests and interviews a candidate has been added to"""
    tests: List[TestAssignmentSummary] = Field(default_factory=list)
    interviews: List[InterviewAssignmentSummary] = Field(default_factory=list)


class CandidateWorkflowResponse(BaseModel):
    """Model for a candidate enriched with its workflow snapshot"""
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="ID of the candidate record")
    status: Optional[str] = Field(None, description="Raw candidate status")
    finalDecision: Optional[Dict[str, Any]] = Field(None, description="Final decision, when recorded")
    testResults: List[Dict[str, Any]] = Field(default_factory=list, description="Embedded test results")
    createdAt: Optional[str] = Field(None, description="Record creation timestamp")
    workflow: WorkflowSnapshot = Field(..., description="Derived pipeline snapshot")
    assignments: CandidateAssignments = Field(default_factory=CandidateAssignments)


class CandidateStatusUpdate(BaseModel):
    """Model for updating the raw candidate status"""
    status: CandidateStatus = Field(..., description="New candidate status")


class FinalDecisionCreate(BaseModel):
    """Model for recording a final decision"""
    decision: FinalDecisionKind = Field(..., description="selected, rejected or on_hold")
    notes: Optional[str] = Field(None, description="Notes explaining the decision")
    decidedBy: Optional[str] = Field(None, description="ID of the user recording the decision")


class CandidateCreate(BaseModel):
    """Model for creating a candidate record"""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="ID of the candidate, generated when omitted")
    name: str = Field(..., description="Name of the candidate")
    email: Optional[str] = Field(None, description="Email of the candidate")
    phone: Optional[str] = Field(None, description="Phone number of the candidate")
    status: CandidateStatus = Field(CandidateStatus.PENDING, description="Initial candidate status")


class BulkStatusUpdate(BaseModel):
    """Model for updating the status of several candidates"""
    candidateIds: List[str] = Field(..., description="IDs of the candidates to update", min_length=1)
    status: CandidateStatus = Field(..., description="New candidate status")


class BulkStatusResponse(BaseModel):
    message: str
    modifiedCount: int


class StageOverview(BaseModel):
    """Candidate counts per pipeline stage and per raw status"""
    total: int = Field(0, description="Total number of candidates")
    stages: Dict[str, int] = Field(default_factory=dict, description="Number of candidates in each stage")
    statusBreakdown: Dict[str, int] = Field(default_factory=dict, description="Number of candidates with each raw status")
