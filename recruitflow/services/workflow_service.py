"""
Candidate pipeline stage resolution

Derives where a candidate sits in the hiring pipeline from the candidate
record and its denormalized test and interview assignments. Nothing here
touches the data store; every function is a pure projection of its inputs.
"""
import copy
import logging
import math
from collections.abc import Mapping
from typing import Dict, Any, Iterable, List, Optional, Union

from recruitflow.schemas.workflow_schema import (
    CandidateStatus,
    FinalDecisionKind,
    InterviewAssignmentStatus,
    InterviewCounts,
    PipelineStage,
    StageInfo,
    TestAssignmentStatus,
    TestCounts,
    TestResultStatus,
    WorkflowSnapshot,
)

logger = logging.getLogger(__name__)

# (label, next action) shown for each stage
STAGE_COPY = {
    PipelineStage.REJECTED: ("Application Rejected", "Notify candidate of decision"),
    PipelineStage.SELECTED: ("Candidate Selected", "Proceed with onboarding"),
    PipelineStage.ON_HOLD: ("Candidate On Hold", "Review hold status regularly"),
    PipelineStage.AWAITING_DECISION: ("Awaiting Final Decision", "Record final decision"),
    PipelineStage.INTERVIEW_SCHEDULED: ("Interview Scheduled", "Conduct interview and capture feedback"),
    PipelineStage.AWAITING_INTERVIEW: ("Awaiting Interview Scheduling", "Schedule next interview round"),
    PipelineStage.TEST_IN_PROGRESS: ("Test In Progress", "Monitor test completion"),
    PipelineStage.TEST_ASSIGNED: ("Test Assigned", "Ensure candidate starts the test"),
    PipelineStage.AWAITING_TEST_ASSIGNMENT: ("Awaiting Test Assignment", "Assign appropriate assessment"),
    PipelineStage.APPLICATION_REVIEW: ("Application in Review", "Review application details"),
}

PIPELINE_SEQUENCE = [
    PipelineStage.APPLICATION_REVIEW,
    PipelineStage.AWAITING_TEST_ASSIGNMENT,
    PipelineStage.TEST_ASSIGNED,
    PipelineStage.TEST_IN_PROGRESS,
    PipelineStage.AWAITING_INTERVIEW,
    PipelineStage.INTERVIEW_SCHEDULED,
    PipelineStage.AWAITING_DECISION,
    PipelineStage.SELECTED,
]

# stages that sit outside the linear pipeline
FIXED_PROGRESS = {
    PipelineStage.ON_HOLD: 55,
    PipelineStage.REJECTED: 0,
}

STAGE_VARIANTS = {
    PipelineStage.APPLICATION_REVIEW: "secondary",
    PipelineStage.AWAITING_TEST_ASSIGNMENT: "info",
    PipelineStage.TEST_ASSIGNED: "info",
    PipelineStage.TEST_IN_PROGRESS: "primary",
    PipelineStage.AWAITING_INTERVIEW: "primary",
    PipelineStage.INTERVIEW_SCHEDULED: "primary",
    PipelineStage.AWAITING_DECISION: "warning",
    PipelineStage.SELECTED: "success",
    PipelineStage.ON_HOLD: "warning",
    PipelineStage.REJECTED: "danger",
}
DEFAULT_VARIANT = "secondary"

PENDING_TEST_STATUSES = (TestAssignmentStatus.INVITED, TestAssignmentStatus.STARTED)
SCHEDULED_INTERVIEW_STATUSES = (InterviewAssignmentStatus.SCHEDULED, InterviewAssignmentStatus.COMPLETED)
CANCELLED_INTERVIEW_STATUSES = (InterviewAssignmentStatus.CANCELLED, InterviewAssignmentStatus.NO_SHOW)
TEST_READY_STATUSES = (CandidateStatus.APPROVED, CandidateStatus.SHORTLISTED)


def _get(record: Any, key: str) -> Any:
    """Read a field from a mapping or a model, treating anything missing as None"""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _detached(value: Any) -> Any:
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error):
        return value


def _as_plain(value: Any) -> Optional[Dict[str, Any]]:
    """Return a string-keyed copy of the final decision that shares no state with its input"""
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return {str(key): _detached(item) for key, item in value.items()}
    return None


def _as_list(value: Any) -> List[Any]:
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return []
    try:
        return list(value)
    except TypeError:
        return []


def _count(records: Iterable[Any], statuses) -> int:
    return sum(1 for record in records if _get(record, "status") in statuses)


def _to_stage(stage: Union[PipelineStage, str, None]) -> Optional[PipelineStage]:
    try:
        return PipelineStage(stage)
    except ValueError:
        return None


def get_stage_progress(stage: Union[PipelineStage, str, None]) -> int:
    """
    Progress percentage for a pipeline stage

    Stages in the linear pipeline map to (position / 8) rounded half up;
    on_hold and rejected carry fixed values; anything else is 0.
    """
    stage = _to_stage(stage)
    if stage is None:
        return 0
    if stage in FIXED_PROGRESS:
        return FIXED_PROGRESS[stage]
    if stage not in PIPELINE_SEQUENCE:
        return 0
    position = PIPELINE_SEQUENCE.index(stage) + 1
    return int(math.floor(position / len(PIPELINE_SEQUENCE) * 100 + 0.5))


def get_stage_variant(stage: Union[PipelineStage, str, None]) -> str:
    """Colour hint used for stage badges and progress bars"""
    stage = _to_stage(stage)
    return STAGE_VARIANTS.get(stage, DEFAULT_VARIANT)


def _snapshot(stage: PipelineStage, tests: TestCounts, interviews: InterviewCounts,
              final_decision: Optional[Dict[str, Any]]) -> WorkflowSnapshot:
    label, next_action = STAGE_COPY[stage]
    return WorkflowSnapshot(
        stage=stage,
        label=label,
        nextAction=next_action,
        tests=tests,
        interviews=interviews,
        finalDecision=final_decision,
        progress=get_stage_progress(stage),
        variant=get_stage_variant(stage),
    )


def _resolve_stage(candidate_status: Any, decision: Any, tests: TestCounts,
                   interviews: InterviewCounts) -> PipelineStage:
    # Evaluated top to bottom, first match wins. The conditions overlap,
    # so the order is part of the contract.
    if candidate_status == CandidateStatus.REJECTED or decision == FinalDecisionKind.REJECTED:
        return PipelineStage.REJECTED
    if decision == FinalDecisionKind.SELECTED or candidate_status == CandidateStatus.SELECTED:
        return PipelineStage.SELECTED
    if decision == FinalDecisionKind.ON_HOLD or candidate_status == CandidateStatus.ON_HOLD:
        return PipelineStage.ON_HOLD
    if interviews.completed > 0 and not decision:
        return PipelineStage.AWAITING_DECISION
    if interviews.scheduled > 0:
        return PipelineStage.INTERVIEW_SCHEDULED
    if tests.passed > 0:
        return PipelineStage.AWAITING_INTERVIEW
    if tests.pending > 0:
        return PipelineStage.TEST_IN_PROGRESS
    # an existing assignment wins over approved/shortlisted
    if tests.assigned > 0:
        return PipelineStage.TEST_ASSIGNED
    if candidate_status in TEST_READY_STATUSES:
        return PipelineStage.AWAITING_TEST_ASSIGNMENT
    return PipelineStage.APPLICATION_REVIEW


def build_workflow_snapshot(
    candidate: Any,
    test_assignments: Optional[Iterable[Any]] = None,
    interview_assignments: Optional[Iterable[Any]] = None,
) -> WorkflowSnapshot:
    """
    Build the workflow snapshot for a candidate

    Args:
        candidate: Candidate record (mapping or model) with status,
            finalDecision and testResults; None yields the default snapshot
        test_assignments: Test assignment summaries for the candidate
        interview_assignments: Interview assignment summaries for the candidate

    Returns:
        WorkflowSnapshot with the stage, copy, aggregate counts,
        progress percentage and colour hint
    """
    if candidate is None:
        return _snapshot(PipelineStage.APPLICATION_REVIEW, TestCounts(), InterviewCounts(), None)

    tests = _as_list(test_assignments)
    interviews = _as_list(interview_assignments)
    test_results = _as_list(_get(candidate, "testResults"))
    final_decision = _get(candidate, "finalDecision")
    decision = _get(final_decision, "decision") or None

    test_counts = TestCounts(
        assigned=len(tests),
        pending=_count(tests, PENDING_TEST_STATUSES),
        completed=_count(tests, (TestAssignmentStatus.COMPLETED,)),
        expired=_count(tests, (TestAssignmentStatus.EXPIRED,)),
        passed=_count(test_results, (TestResultStatus.PASSED,)),
        failed=_count(test_results, (TestResultStatus.FAILED,)),
    )
    interview_counts = InterviewCounts(
        scheduled=_count(interviews, SCHEDULED_INTERVIEW_STATUSES),
        completed=_count(interviews, (InterviewAssignmentStatus.COMPLETED,)),
        cancelled=_count(interviews, CANCELLED_INTERVIEW_STATUSES),
    )

    stage = _resolve_stage(_get(candidate, "status"), decision, test_counts, interview_counts)
    logger.debug(f"Resolved candidate {_get(candidate, 'id') or _get(candidate, '_id')} to stage {stage.value}")

    return _snapshot(stage, test_counts, interview_counts, _as_plain(final_decision))


def count_by_stage(snapshots: Iterable[WorkflowSnapshot]) -> Dict[str, int]:
    """
    Count snapshots per stage

    Every stage is present in the result, including those with no candidates.
    """
    counts = {stage.value: 0 for stage in PipelineStage}
    for snapshot in snapshots:
        counts[PipelineStage(snapshot.stage).value] += 1
    return counts


def get_stage_catalogue() -> List[StageInfo]:
    """All stages in pipeline order, followed by on_hold and rejected"""
    ordered = PIPELINE_SEQUENCE + [PipelineStage.ON_HOLD, PipelineStage.REJECTED]
    return [
        StageInfo(
            stage=stage,
            label=STAGE_COPY[stage][0],
            nextAction=STAGE_COPY[stage][1],
            progress=get_stage_progress(stage),
            variant=get_stage_variant(stage),
        )
        for stage in ordered
    ]
