"""
Service for tests and interviews and the candidates assigned to them
"""
import logging
from datetime import datetime
from typing import Dict, Any, Iterable, Optional

from recruitflow.database.mock_db import MockDB
from recruitflow.schemas.workflow_schema import (
    InterviewAssignmentStatus,
    TestAssignmentStatus,
    TestResultStatus,
)
from recruitflow.services.candidate_service import CandidateService

logger = logging.getLogger(__name__)

DEFAULT_PASSING_PERCENTAGE = 50


class AssignmentService:
    """Service for creating tests and interviews and tracking candidate entries on them"""

    @staticmethod
    def create_test(test_data: Dict[str, Any]) -> str:
        """
        Create a test document with no candidates assigned

        Returns:
            ID of the created test
        """
        test_data = dict(test_data)
        if test_data.get("passingPercentage") is None:
            test_data["passingPercentage"] = DEFAULT_PASSING_PERCENTAGE
        test_data["candidates"] = []
        test_data.setdefault("createdAt", datetime.now().isoformat())
        doc_id = MockDB.create_document(CandidateService.TESTS_COLLECTION, test_data)
        logger.info(f"Test created with ID: {doc_id}")
        return doc_id

    @staticmethod
    def create_interview(interview_data: Dict[str, Any]) -> str:
        """
        Create an interview document with no candidates assigned

        Returns:
            ID of the created interview
        """
        interview_data = dict(interview_data)
        interview_data["candidates"] = []
        interview_data.setdefault("createdAt", datetime.now().isoformat())
        doc_id = MockDB.create_document(CandidateService.INTERVIEWS_COLLECTION, interview_data)
        logger.info(f"Interview created with ID: {doc_id}")
        return doc_id

    @staticmethod
    def assign_test(
        test_id: str,
        candidate_ids: Iterable[str],
        scheduled_date: Optional[str] = None,
        scheduled_time: Optional[str] = None,
    ) -> Optional[int]:
        """
        Invite candidates to a test

        Candidates already on the test get a fresh invitation time.

        Returns:
            Number of candidates assigned, or None if the test does not exist
        """
        test = MockDB.get_document(CandidateService.TESTS_COLLECTION, test_id)
        if not test:
            logger.warning(f"Test with ID {test_id} not found")
            return None

        now = datetime.now().isoformat()
        entries = test.get("candidates", [])
        candidate_ids = list(dict.fromkeys(candidate_ids))
        for candidate_id in candidate_ids:
            existing = next((e for e in entries if e.get("candidate") == candidate_id), None)
            if existing:
                existing["invitedAt"] = now
            else:
                entries.append({
                    "candidate": candidate_id,
                    "status": TestAssignmentStatus.INVITED.value,
                    "invitedAt": now,
                })

        update = {"candidates": entries}
        if scheduled_date is not None:
            update["scheduledDate"] = scheduled_date
        if scheduled_time is not None:
            update["scheduledTime"] = scheduled_time
        MockDB.update_document(CandidateService.TESTS_COLLECTION, test_id, update)
        logger.info(f"Test {test_id} assigned to {len(candidate_ids)} candidates")
        return len(candidate_ids)

    @staticmethod
    def assign_interview(interview_id: str, candidate_ids: Iterable[str]) -> Optional[int]:
        """
        Add candidates to an interview

        Returns:
            Number of candidates requested, or None if the interview does not exist
        """
        interview = MockDB.get_document(CandidateService.INTERVIEWS_COLLECTION, interview_id)
        if not interview:
            logger.warning(f"Interview with ID {interview_id} not found")
            return None

        entries = interview.get("candidates", [])
        present = {e.get("candidate") for e in entries}
        candidate_ids = list(dict.fromkeys(candidate_ids))
        for candidate_id in candidate_ids:
            if candidate_id not in present:
                entries.append({
                    "candidate": candidate_id,
                    "status": InterviewAssignmentStatus.SCHEDULED.value,
                })

        MockDB.update_document(CandidateService.INTERVIEWS_COLLECTION, interview_id, {"candidates": entries})
        logger.info(f"Interview {interview_id} assigned to {len(candidate_ids)} candidates")
        return len(candidate_ids)

    @staticmethod
    def update_test_status(test_id: str, candidate_id: str, status: TestAssignmentStatus) -> bool:
        """
        Move a candidate's entry on a test to a new status

        Returns:
            False if the test or the candidate entry does not exist
        """
        status = TestAssignmentStatus(status)
        test = MockDB.get_document(CandidateService.TESTS_COLLECTION, test_id)
        entry = _find_entry(test, candidate_id)
        if entry is None:
            logger.warning(f"Candidate {candidate_id} not found on test {test_id}")
            return False

        entry["status"] = status.value
        if status == TestAssignmentStatus.STARTED:
            entry["startedAt"] = datetime.now().isoformat()
        MockDB.update_document(CandidateService.TESTS_COLLECTION, test_id, {"candidates": test["candidates"]})
        return True

    @staticmethod
    def record_test_result(test_id: str, candidate_id: str, percentage: float,
                           score: Optional[float] = None) -> Optional[Dict[str, Any]]:
        """
        Complete a candidate's test and store the result on the candidate

        The result is passed when the percentage reaches the test's
        passing percentage. A previous result for the same test is replaced.

        Returns:
            The stored result, or None if the test, the entry or the candidate does not exist
        """
        test = MockDB.get_document(CandidateService.TESTS_COLLECTION, test_id)
        entry = _find_entry(test, candidate_id)
        candidate = MockDB.get_document(CandidateService.COLLECTION_NAME, candidate_id)
        if entry is None or candidate is None:
            logger.warning(f"Cannot record result, candidate {candidate_id} not found on test {test_id}")
            return None

        now = datetime.now().isoformat()
        entry.update({
            "status": TestAssignmentStatus.COMPLETED.value,
            "score": score,
            "percentage": percentage,
            "completedAt": now,
        })
        MockDB.update_document(CandidateService.TESTS_COLLECTION, test_id, {"candidates": test["candidates"]})

        passing = test.get("passingPercentage", DEFAULT_PASSING_PERCENTAGE)
        result = {
            "test": test_id,
            "score": score,
            "percentage": percentage,
            "status": (TestResultStatus.PASSED if percentage >= passing else TestResultStatus.FAILED).value,
            "submittedAt": now,
        }
        results = [r for r in candidate.get("testResults") or [] if r.get("test") != test_id]
        results.append(result)
        MockDB.update_document(CandidateService.COLLECTION_NAME, candidate_id, {"testResults": results})
        logger.info(f"Test {test_id} result for candidate {candidate_id}: {result['status']}")
        return result

    @staticmethod
    def update_interview_status(interview_id: str, candidate_id: str, status: InterviewAssignmentStatus,
                                notes: Optional[str] = None) -> bool:
        """
        Move a candidate's entry on an interview to a new status

        Returns:
            False if the interview or the candidate entry does not exist
        """
        status = InterviewAssignmentStatus(status)
        interview = MockDB.get_document(CandidateService.INTERVIEWS_COLLECTION, interview_id)
        entry = _find_entry(interview, candidate_id)
        if entry is None:
            logger.warning(f"Candidate {candidate_id} not found on interview {interview_id}")
            return False

        entry["status"] = status.value
        if notes:
            entry["notes"] = notes
        MockDB.update_document(CandidateService.INTERVIEWS_COLLECTION, interview_id, {"candidates": interview["candidates"]})
        return True


def _find_entry(document: Optional[Dict[str, Any]], candidate_id: str) -> Optional[Dict[str, Any]]:
    if not document:
        return None
    return next((e for e in document.get("candidates", []) if e.get("candidate") == candidate_id), None)
