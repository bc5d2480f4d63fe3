"""
Tests for test and interview assignments driving the candidate pipeline
"""
import pytest

from recruitflow.database.mock_db import MockDB
from recruitflow.schemas.workflow_schema import PipelineStage
from recruitflow.services.assignment_service import AssignmentService
from recruitflow.services.candidate_service import CandidateService


@pytest.fixture(autouse=True)
def clean_db():
    MockDB.clear()
    yield
    MockDB.clear()


def stage_of(candidate_id):
    return CandidateService.get_candidate(candidate_id)["workflow"].stage


def test_candidate_moves_through_pipeline():
    candidate_id = CandidateService.create_candidate({"id": "cand-1", "name": "Pia", "status": "approved"})
    assert stage_of(candidate_id) == PipelineStage.AWAITING_TEST_ASSIGNMENT

    test_id = AssignmentService.create_test({"title": "Aptitude", "passingPercentage": 60})
    assert AssignmentService.assign_test(test_id, [candidate_id], scheduled_date="2024-02-01") == 1
    assert stage_of(candidate_id) == PipelineStage.TEST_IN_PROGRESS
    assert MockDB.get_document("tests", test_id)["scheduledDate"] == "2024-02-01"

    result = AssignmentService.record_test_result(test_id, candidate_id, 72.5, score=29)
    assert result["status"] == "passed"
    assert stage_of(candidate_id) == PipelineStage.AWAITING_INTERVIEW

    interview_id = AssignmentService.create_interview({"title": "Technical Round", "round": 1})
    assert AssignmentService.assign_interview(interview_id, [candidate_id]) == 1
    assert stage_of(candidate_id) == PipelineStage.INTERVIEW_SCHEDULED

    assert AssignmentService.update_interview_status(interview_id, candidate_id, "completed", notes="Solid")
    assert stage_of(candidate_id) == PipelineStage.AWAITING_DECISION

    candidate = CandidateService.get_candidate(candidate_id)
    assert candidate["assignments"]["interviews"][0]["notes"] == "Solid"
    assert candidate["assignments"]["tests"][0]["percentage"] == 72.5


def test_failed_result_replaces_previous_result():
    candidate_id = CandidateService.create_candidate({"name": "Quin", "status": "approved"})
    test_id = AssignmentService.create_test({"title": "Typing"})
    AssignmentService.assign_test(test_id, [candidate_id])

    AssignmentService.record_test_result(test_id, candidate_id, 80)
    AssignmentService.record_test_result(test_id, candidate_id, 30)

    results = MockDB.get_document("candidates", candidate_id)["testResults"]
    assert len(results) == 1
    assert results[0]["status"] == "failed"
    assert stage_of(candidate_id) == PipelineStage.TEST_ASSIGNED


def test_reassigning_test_keeps_single_entry():
    candidate_id = CandidateService.create_candidate({"name": "Rae"})
    test_id = AssignmentService.create_test({"title": "Aptitude"})

    AssignmentService.assign_test(test_id, [candidate_id])
    AssignmentService.update_test_status(test_id, candidate_id, "started")
    AssignmentService.assign_test(test_id, [candidate_id])

    entries = MockDB.get_document("tests", test_id)["candidates"]
    assert len(entries) == 1
    assert entries[0]["status"] == "started"
    assert entries[0]["startedAt"]


def test_missing_documents():
    assert AssignmentService.assign_test("nope", ["a"]) is None
    assert AssignmentService.assign_interview("nope", ["a"]) is None
    assert AssignmentService.update_test_status("nope", "a", "expired") is False
    assert AssignmentService.update_interview_status("nope", "a", "no_show") is False
    assert AssignmentService.record_test_result("nope", "a", 90) is None


def test_candidate_not_on_interview():
    interview_id = AssignmentService.create_interview({"title": "HR Round"})
    assert AssignmentService.update_interview_status(interview_id, "stranger", "completed") is False
