"""
Schemas for the candidate hiring pipeline and its workflow snapshot
"""
from enum import Enum
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CandidateStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SHORTLISTED = "shortlisted"
    SELECTED = "selected"
    ON_HOLD = "on_hold"


class FinalDecisionKind(str, Enum):
    SELECTED = "selected"
    REJECTED = "rejected"
    ON_HOLD = "on_hold"


class TestAssignmentStatus(str, Enum):
    INVITED = "invited"
    STARTED = "started"
    COMPLETED = "completed"
    EXPIRED = "expired"


class InterviewAssignmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class TestResultStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"


class PipelineStage(str, Enum):
    APPLICATION_REVIEW = "application_review"
    AWAITING_TEST_ASSIGNMENT = "awaiting_test_assignment"
    TEST_ASSIGNED = "test_assigned"
    TEST_IN_PROGRESS = "test_in_progress"
    AWAITING_INTERVIEW = "awaiting_interview"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    AWAITING_DECISION = "awaiting_decision"
    SELECTED = "selected"
    ON_HOLD = "on_hold"
    REJECTED = "rejected"


class FinalDecision(BaseModel):
    """Schema for a recorded final decision"""
    decision: Optional[FinalDecisionKind] = Field(None, description="Final verdict on the candidate")
    notes: Optional[str] = Field(None, description="Notes captured with the decision")
    decidedBy: Optional[str] = Field(None, description="ID of the user who recorded the decision")
    decidedAt: Optional[str] = Field(None, description="ISO timestamp of the decision")


class TestResult(BaseModel):
    """Schema for a test result embedded in a candidate record"""
    model_config = ConfigDict(extra="allow")

    test: Optional[str] = Field(None, description="ID of the test")
    status: Optional[str] = Field(None, description="Result status (passed, failed, ...)")
    score: Optional[float] = Field(None, description="Raw score")
    percentage: Optional[float] = Field(None, description="Score as a percentage")


class CandidateSnapshot(BaseModel):
    """The candidate fields the stage resolver reads"""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="ID of the candidate")
    status: Optional[CandidateStatus] = Field(None, description="Raw candidate status")
    finalDecision: Optional[FinalDecision] = Field(None, description="Final decision, when recorded")
    testResults: List[TestResult] = Field(default_factory=list, description="Embedded test results")


class TestAssignmentSummary(BaseModel):
    """Denormalized view of a candidate's entry on a test"""
    model_config = ConfigDict(extra="allow")

    testId: Optional[str] = None
    title: Optional[str] = None
    status: Optional[TestAssignmentStatus] = None
    invitedAt: Optional[str] = None
    startedAt: Optional[str] = None
    completedAt: Optional[str] = None
    score: Optional[float] = None
    percentage: Optional[float] = None
    scheduledDate: Optional[str] = None
    scheduledTime: Optional[str] = None
    createdAt: Optional[str] = None


class InterviewAssignmentSummary(BaseModel):
    """Denormalized view of a candidate's entry on an interview"""
    model_config = ConfigDict(extra="allow")

    interviewId: Optional[str] = None
    title: Optional[str] = None
    round: Optional[int] = None
    type: Optional[str] = None
    status: Optional[InterviewAssignmentStatus] = None
    scheduledDate: Optional[str] = None
    scheduledTime: Optional[str] = None
    notes: Optional[str] = None
    createdAt: Optional[str] = None


class TestCounts(BaseModel):
    assigned: int = 0
    pending: int = 0
    completed: int = 0
    expired: int = 0
    passed: int = 0
    failed: int = 0


class InterviewCounts(BaseModel):
    # a completed interview is also counted as scheduled
    scheduled: int = 0
    completed: int = 0
    cancelled: int = 0


class WorkflowSnapshot(BaseModel):
    """Where a candidate sits in the hiring pipeline, derived on every read"""
    stage: PipelineStage = Field(..., description="Current pipeline stage")
    label: str = Field(..., description="Human readable stage label")
    nextAction: str = Field(..., description="Recommended next step")
    tests: TestCounts = Field(default_factory=TestCounts)
    interviews: InterviewCounts = Field(default_factory=InterviewCounts)
    finalDecision: Optional[Dict[str, Any]] = Field(None, description="Final decision passed through from the candidate")
    progress: int = Field(0, description="Pipeline progress percentage (0-100)")
    variant: str = Field("secondary", description="Colour hint for badges and progress bars")


class WorkflowResolveRequest(BaseModel):
    """Schema for resolving a snapshot from caller supplied records"""
    candidate: Optional[CandidateSnapshot] = None
    testAssignments: List[TestAssignmentSummary] = Field(default_factory=list)
    interviewAssignments: List[InterviewAssignmentSummary] = Field(default_factory=list)


class StageInfo(BaseModel):
    """Catalogue entry describing one pipeline stage"""
    stage: PipelineStage
    label: str
    nextAction: str
    progress: int
    variant: str
