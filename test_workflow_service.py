"""
Tests for candidate pipeline stage resolution
"""
import copy
import pytest

from recruitflow.schemas.workflow_schema import CandidateSnapshot, PipelineStage
from recruitflow.services.workflow_service import (
    build_workflow_snapshot,
    count_by_stage,
    get_stage_catalogue,
    get_stage_progress,
    get_stage_variant,
)


def test_missing_candidate_returns_default_snapshot():
    """A missing candidate always yields the default application review snapshot"""
    snapshot = build_workflow_snapshot(None, [{"status": "completed"}], [{"status": "completed"}])

    assert snapshot.stage == PipelineStage.APPLICATION_REVIEW
    assert snapshot.label == "Application in Review"
    assert snapshot.nextAction == "Review application details"
    assert snapshot.tests.model_dump() == {
        "assigned": 0, "pending": 0, "completed": 0, "expired": 0, "passed": 0, "failed": 0
    }
    assert snapshot.interviews.model_dump() == {"scheduled": 0, "completed": 0, "cancelled": 0}
    assert snapshot.finalDecision is None
    assert snapshot.progress == 13


def test_assignment_lists_default_to_empty():
    snapshot = build_workflow_snapshot({"status": "pending"})
    assert snapshot.stage == PipelineStage.APPLICATION_REVIEW
    assert snapshot.tests.assigned == 0
    assert snapshot.interviews.scheduled == 0


@pytest.mark.parametrize("candidate,tests,interviews,expected", [
    ({"status": "rejected"}, [], [], PipelineStage.REJECTED),
    ({"status": "pending", "finalDecision": {"decision": "rejected"}}, [], [], PipelineStage.REJECTED),
    ({"status": "selected"}, [], [], PipelineStage.SELECTED),
    ({"status": "approved", "finalDecision": {"decision": "selected"}}, [], [], PipelineStage.SELECTED),
    ({"status": "on_hold"}, [], [], PipelineStage.ON_HOLD),
    ({"status": "shortlisted", "finalDecision": {"decision": "on_hold"}}, [], [], PipelineStage.ON_HOLD),
    ({"status": "shortlisted"}, [], [{"status": "completed"}], PipelineStage.AWAITING_DECISION),
    ({"status": "shortlisted"}, [], [{"status": "scheduled"}], PipelineStage.INTERVIEW_SCHEDULED),
    ({"status": "shortlisted", "testResults": [{"status": "passed"}]}, [], [], PipelineStage.AWAITING_INTERVIEW),
    ({"status": "approved"}, [{"status": "started"}], [], PipelineStage.TEST_IN_PROGRESS),
    ({"status": "approved"}, [{"status": "completed"}], [], PipelineStage.TEST_ASSIGNED),
    ({"status": "approved"}, [], [], PipelineStage.AWAITING_TEST_ASSIGNMENT),
    ({"status": "shortlisted"}, [], [], PipelineStage.AWAITING_TEST_ASSIGNMENT),
    ({"status": "pending"}, [], [], PipelineStage.APPLICATION_REVIEW),
    ({}, [], [], PipelineStage.APPLICATION_REVIEW),
])
def test_stage_rules(candidate, tests, interviews, expected):
    assert build_workflow_snapshot(candidate, tests, interviews).stage == expected


def test_rejected_decision_beats_selected_status():
    snapshot = build_workflow_snapshot({"status": "selected", "finalDecision": {"decision": "rejected"}})
    assert snapshot.stage == PipelineStage.REJECTED
    assert snapshot.label == "Application Rejected"
    assert snapshot.nextAction == "Notify candidate of decision"
    assert snapshot.progress == 0
    assert snapshot.variant == "danger"


def test_selected_candidate_copy():
    snapshot = build_workflow_snapshot({"status": "selected"})
    assert snapshot.label == "Candidate Selected"
    assert snapshot.nextAction == "Proceed with onboarding"
    assert snapshot.progress == 100


def test_completed_interview_counts_as_scheduled():
    snapshot = build_workflow_snapshot({"status": "shortlisted"}, [], [{"status": "completed"}])
    assert snapshot.interviews.scheduled == 1
    assert snapshot.interviews.completed == 1
    assert snapshot.interviews.cancelled == 0


def test_completed_interview_with_unknown_decision_stays_scheduled():
    """A decision that is set but not selected/rejected/on_hold skips awaiting_decision"""
    snapshot = build_workflow_snapshot(
        {"status": "shortlisted", "finalDecision": {"decision": "undecided"}},
        [],
        [{"status": "completed"}],
    )
    assert snapshot.stage == PipelineStage.INTERVIEW_SCHEDULED


def test_approved_candidate_with_invited_test_is_in_progress():
    """Invited counts as pending, so the test is considered in progress"""
    snapshot = build_workflow_snapshot({"status": "approved"}, [{"status": "invited"}], [])
    assert snapshot.stage == PipelineStage.TEST_IN_PROGRESS
    assert snapshot.tests.pending == 1


def test_existing_assignment_wins_over_approved_status():
    snapshot = build_workflow_snapshot({"status": "approved"}, [{"status": "expired"}], [])
    assert snapshot.stage == PipelineStage.TEST_ASSIGNED
    assert snapshot.label == "Test Assigned"
    assert snapshot.nextAction == "Ensure candidate starts the test"
    assert snapshot.progress == 38


def test_passed_result_without_assignments_awaits_interview():
    snapshot = build_workflow_snapshot({"status": "pending", "testResults": [{"status": "passed"}]})
    assert snapshot.stage == PipelineStage.AWAITING_INTERVIEW
    assert snapshot.tests.assigned == 0
    assert snapshot.tests.passed == 1


def test_aggregate_counts():
    tests = [
        {"status": "invited"},
        {"status": "started"},
        {"status": "completed"},
        {"status": "completed"},
        {"status": "expired"},
    ]
    interviews = [
        {"status": "scheduled"},
        {"status": "completed"},
        {"status": "cancelled"},
        {"status": "no_show"},
    ]
    candidate = {
        "status": "shortlisted",
        "testResults": [{"status": "passed"}, {"status": "failed"}, {"status": "failed"}],
    }

    snapshot = build_workflow_snapshot(candidate, tests, interviews)

    assert snapshot.tests.model_dump() == {
        "assigned": 5, "pending": 2, "completed": 2, "expired": 1, "passed": 1, "failed": 2
    }
    assert snapshot.interviews.model_dump() == {"scheduled": 2, "completed": 1, "cancelled": 2}
    assert snapshot.stage == PipelineStage.AWAITING_DECISION


def test_final_decision_is_passed_through():
    decision = {"decision": "on_hold", "notes": "Revisit next quarter", "decidedBy": "admin-1"}
    snapshot = build_workflow_snapshot({"status": "shortlisted", "finalDecision": decision})
    assert snapshot.finalDecision == decision
    assert snapshot.progress == 55
    assert snapshot.variant == "warning"


def test_snapshot_is_deterministic_and_inputs_untouched():
    candidate = {
        "status": "approved",
        "finalDecision": {"decision": "on_hold", "notes": "n"},
        "testResults": [{"status": "passed"}],
    }
    tests = [{"status": "invited"}]
    interviews = [{"status": "scheduled"}]
    originals = copy.deepcopy((candidate, tests, interviews))

    first = build_workflow_snapshot(candidate, tests, interviews)
    second = build_workflow_snapshot(candidate, tests, interviews)

    assert first.model_dump_json() == second.model_dump_json()
    assert (candidate, tests, interviews) == originals


def test_malformed_input_falls_through_to_defaults():
    candidate = {"status": "archived", "finalDecision": "yes", "testResults": 5}
    snapshot = build_workflow_snapshot(candidate, [None, {"status": None}, "bogus"], 7)
    assert snapshot.stage == PipelineStage.TEST_ASSIGNED
    assert snapshot.tests.assigned == 3
    assert snapshot.finalDecision is None


def test_final_decision_with_non_string_keys():
    snapshot = build_workflow_snapshot({"status": "pending", "finalDecision": {"decision": "selected", 1: "x"}})
    assert snapshot.stage == PipelineStage.SELECTED
    assert snapshot.finalDecision == {"decision": "selected", "1": "x"}


def test_final_decision_metadata_is_not_shared():
    candidate = {
        "status": "shortlisted",
        "finalDecision": {"decision": "on_hold", "metadata": {"reviewers": ["admin-1"]}},
    }
    snapshot = build_workflow_snapshot(candidate)

    snapshot.finalDecision["metadata"]["reviewers"].append("admin-2")
    snapshot.finalDecision["metadata"]["source"] = "dashboard"

    assert candidate["finalDecision"]["metadata"] == {"reviewers": ["admin-1"]}


@pytest.mark.parametrize("candidate,tests,interviews,label,next_action", [
    ({"status": "rejected"}, [], [],
     "Application Rejected", "Notify candidate of decision"),
    ({"status": "selected"}, [], [],
     "Candidate Selected", "Proceed with onboarding"),
    ({"status": "on_hold"}, [], [],
     "Candidate On Hold", "Review hold status regularly"),
    ({"status": "shortlisted"}, [], [{"status": "completed"}],
     "Awaiting Final Decision", "Record final decision"),
    ({"status": "shortlisted"}, [], [{"status": "scheduled"}],
     "Interview Scheduled", "Conduct interview and capture feedback"),
    ({"status": "shortlisted", "testResults": [{"status": "passed"}]}, [], [],
     "Awaiting Interview Scheduling", "Schedule next interview round"),
    ({"status": "approved"}, [{"status": "invited"}], [],
     "Test In Progress", "Monitor test completion"),
    ({"status": "approved"}, [{"status": "completed"}], [],
     "Test Assigned", "Ensure candidate starts the test"),
    ({"status": "approved"}, [], [],
     "Awaiting Test Assignment", "Assign appropriate assessment"),
    ({"status": "pending"}, [], [],
     "Application in Review", "Review application details"),
])
def test_stage_copy(candidate, tests, interviews, label, next_action):
    snapshot = build_workflow_snapshot(candidate, tests, interviews)
    assert snapshot.label == label
    assert snapshot.nextAction == next_action


def test_accepts_pydantic_candidate():
    candidate = CandidateSnapshot(
        id="cand-1",
        status="approved",
        finalDecision={"decision": "selected", "notes": "Strong fit"},
    )
    snapshot = build_workflow_snapshot(candidate)
    assert snapshot.stage == PipelineStage.SELECTED
    assert snapshot.finalDecision["decision"] == "selected"
    assert snapshot.finalDecision["notes"] == "Strong fit"


@pytest.mark.parametrize("stage,expected", [
    (PipelineStage.APPLICATION_REVIEW, 13),
    (PipelineStage.AWAITING_TEST_ASSIGNMENT, 25),
    (PipelineStage.TEST_ASSIGNED, 38),
    (PipelineStage.TEST_IN_PROGRESS, 50),
    (PipelineStage.AWAITING_INTERVIEW, 63),
    (PipelineStage.INTERVIEW_SCHEDULED, 75),
    (PipelineStage.AWAITING_DECISION, 88),
    (PipelineStage.SELECTED, 100),
    (PipelineStage.ON_HOLD, 55),
    (PipelineStage.REJECTED, 0),
    ("test_assigned", 38),
    ("unknown_stage", 0),
    (None, 0),
])
def test_stage_progress(stage, expected):
    assert get_stage_progress(stage) == expected


def test_stage_variant():
    assert get_stage_variant(PipelineStage.SELECTED) == "success"
    assert get_stage_variant("awaiting_decision") == "warning"
    assert get_stage_variant("unknown_stage") == "secondary"


def test_count_by_stage_includes_every_stage():
    snapshots = [
        build_workflow_snapshot({"status": "pending"}),
        build_workflow_snapshot({"status": "pending"}),
        build_workflow_snapshot({"status": "rejected"}),
    ]
    counts = count_by_stage(snapshots)
    assert set(counts) == {stage.value for stage in PipelineStage}
    assert counts["application_review"] == 2
    assert counts["rejected"] == 1
    assert counts["selected"] == 0


def test_stage_catalogue_order():
    catalogue = get_stage_catalogue()
    assert [entry.stage for entry in catalogue] == [
        PipelineStage.APPLICATION_REVIEW,
        PipelineStage.AWAITING_TEST_ASSIGNMENT,
        PipelineStage.TEST_ASSIGNED,
        PipelineStage.TEST_IN_PROGRESS,
        PipelineStage.AWAITING_INTERVIEW,
        PipelineStage.INTERVIEW_SCHEDULED,
        PipelineStage.AWAITING_DECISION,
        PipelineStage.SELECTED,
        PipelineStage.ON_HOLD,
        PipelineStage.REJECTED,
    ]
    assert catalogue[4].label == "Awaiting Interview Scheduling"
    assert catalogue[4].nextAction == "Schedule next interview round"
