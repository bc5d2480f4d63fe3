"""
Service for candidate records and their pipeline workflow
"""
import logging
from datetime import date, datetime
from typing import Dict, Any, Iterable, List, Optional

from recruitflow.database.mock_db import MockDB
from recruitflow.schemas.workflow_schema import CandidateStatus, FinalDecisionKind, PipelineStage
from recruitflow.services.workflow_service import build_workflow_snapshot, count_by_stage

logger = logging.getLogger(__name__)

DECISION_STATUS = {
    FinalDecisionKind.SELECTED: CandidateStatus.SELECTED,
    FinalDecisionKind.REJECTED: CandidateStatus.REJECTED,
    FinalDecisionKind.ON_HOLD: CandidateStatus.ON_HOLD,
}


def _timestamp(value: Any) -> str:
    """ISO text for datetimes, so stored timestamps always compare as strings"""
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _test_summary(test: Dict[str, Any], entry: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "testId": test.get("id"),
        "title": test.get("title"),
        "status": entry.get("status"),
        "invitedAt": entry.get("invitedAt"),
        "startedAt": entry.get("startedAt"),
        "completedAt": entry.get("completedAt"),
        "score": entry.get("score"),
        "percentage": entry.get("percentage"),
        "scheduledDate": test.get("scheduledDate"),
        "scheduledTime": test.get("scheduledTime"),
        "createdAt": test.get("createdAt"),
    }


def _interview_summary(interview: Dict[str, Any], entry: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "interviewId": interview.get("id"),
        "title": interview.get("title"),
        "round": interview.get("round"),
        "type": interview.get("type"),
        "status": entry.get("status"),
        "scheduledDate": entry.get("scheduledDate"),
        "scheduledTime": entry.get("scheduledTime"),
        "notes": entry.get("notes"),
        "createdAt": interview.get("createdAt"),
    }


class CandidateService:
    """Service for reading candidates together with their derived pipeline stage"""

    COLLECTION_NAME = "candidates"
    TESTS_COLLECTION = "tests"
    INTERVIEWS_COLLECTION = "interviews"

    @staticmethod
    def build_assignment_index(collection_name: str, candidate_ids: Iterable[str]) -> Dict[str, List[Dict[str, Any]]]:
        """
        Group test or interview entries by candidate

        Args:
            collection_name: "tests" or "interviews"
            candidate_ids: Candidates to collect assignments for

        Returns:
            Mapping of candidate ID to its assignment summaries
        """
        if collection_name == CandidateService.TESTS_COLLECTION:
            summarize = _test_summary
        elif collection_name == CandidateService.INTERVIEWS_COLLECTION:
            summarize = _interview_summary
        else:
            raise ValueError(f"Unsupported assignment collection: {collection_name}")

        wanted = set(candidate_ids)
        index: Dict[str, List[Dict[str, Any]]] = {}
        for document in MockDB.get_all_documents(collection_name):
            for entry in document.get("candidates", []):
                candidate_id = entry.get("candidate")
                if candidate_id in wanted:
                    index.setdefault(candidate_id, []).append(summarize(document, entry))
        return index

    @staticmethod
    def _enrich(candidates: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        candidate_ids = [candidate["id"] for candidate in candidates]
        tests_by_candidate = CandidateService.build_assignment_index(CandidateService.TESTS_COLLECTION, candidate_ids)
        interviews_by_candidate = CandidateService.build_assignment_index(CandidateService.INTERVIEWS_COLLECTION, candidate_ids)

        enriched = []
        for candidate in candidates:
            test_assignments = tests_by_candidate.get(candidate["id"], [])
            interview_assignments = interviews_by_candidate.get(candidate["id"], [])
            workflow = build_workflow_snapshot(candidate, test_assignments, interview_assignments)
            enriched.append({
                **candidate,
                "workflow": workflow,
                "assignments": {
                    "tests": test_assignments,
                    "interviews": interview_assignments,
                },
            })
        return enriched

    @staticmethod
    def create_candidate(candidate_data: Dict[str, Any]) -> str:
        """
        Create a new candidate document

        Args:
            candidate_data: Dictionary with candidate information

        Returns:
            ID of the created candidate document
        """
        candidate_data = dict(candidate_data)
        candidate_data.setdefault("status", CandidateStatus.PENDING.value)
        candidate_data.setdefault("testResults", [])
        candidate_data["createdAt"] = _timestamp(candidate_data.get("createdAt") or datetime.now())
        doc_id = MockDB.create_document(CandidateService.COLLECTION_NAME, candidate_data)
        logger.info(f"Candidate record created with ID: {doc_id}")
        return doc_id

    @staticmethod
    def get_all_candidates(stage: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get all candidates with their workflow snapshot, newest first

        Args:
            stage: Only return candidates currently in this pipeline stage

        Returns:
            List of enriched candidate records

        Raises:
            ValueError: if stage is not a known pipeline stage
        """
        stage_filter = PipelineStage(stage) if stage else None
        candidates = sorted(
            MockDB.get_all_documents(CandidateService.COLLECTION_NAME),
            key=lambda c: _timestamp(c.get("createdAt")),
            reverse=True,
        )
        enriched = CandidateService._enrich(candidates)
        if stage_filter is not None:
            enriched = [c for c in enriched if c["workflow"].stage == stage_filter]
        return enriched

    @staticmethod
    def get_candidate(candidate_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a candidate by ID with its workflow snapshot

        Returns:
            Enriched candidate record or None if not found
        """
        candidate = MockDB.get_document(CandidateService.COLLECTION_NAME, candidate_id)
        if not candidate:
            logger.warning(f"Candidate with ID {candidate_id} not found in {CandidateService.COLLECTION_NAME} collection")
            return None
        return CandidateService._enrich([candidate])[0]

    @staticmethod
    def update_status(candidate_id: str, status: CandidateStatus) -> Optional[Dict[str, Any]]:
        """
        Update the raw status of a candidate

        Returns:
            Enriched candidate record or None if not found
        """
        if not MockDB.get_document(CandidateService.COLLECTION_NAME, candidate_id):
            logger.warning(f"Cannot update status, candidate {candidate_id} not found")
            return None
        try:
            MockDB.update_document(
                CandidateService.COLLECTION_NAME,
                candidate_id,
                {"status": CandidateStatus(status).value},
            )
        except Exception as e:
            logger.error(f"Error updating status for candidate {candidate_id}: {e}")
            raise
        logger.info(f"Candidate {candidate_id} status set to {CandidateStatus(status).value}")
        return CandidateService.get_candidate(candidate_id)

    @staticmethod
    def record_final_decision(
        candidate_id: str,
        decision: FinalDecisionKind,
        notes: Optional[str] = None,
        decided_by: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Record the final decision for a candidate

        The candidate's raw status follows the decision, so the derived
        stage moves to selected, rejected or on_hold.

        Args:
            candidate_id: ID of the candidate
            decision: selected, rejected or on_hold
            notes: Optional notes explaining the decision
            decided_by: Optional ID of the user recording it

        Returns:
            Enriched candidate record or None if not found
        """
        if not MockDB.get_document(CandidateService.COLLECTION_NAME, candidate_id):
            logger.warning(f"Cannot record decision, candidate {candidate_id} not found")
            return None

        decision = FinalDecisionKind(decision)
        try:
            MockDB.update_document(CandidateService.COLLECTION_NAME, candidate_id, {
                "finalDecision": {
                    "decision": decision.value,
                    "notes": notes,
                    "decidedBy": decided_by,
                    "decidedAt": datetime.now().isoformat(),
                },
                "status": DECISION_STATUS[decision].value,
            })
        except Exception as e:
            logger.error(f"Error recording final decision for candidate {candidate_id}: {e}")
            raise
        logger.info(f"Final decision '{decision.value}' recorded for candidate {candidate_id}")
        return CandidateService.get_candidate(candidate_id)

    @staticmethod
    def get_stage_overview() -> Dict[str, Any]:
        """
        Count candidates per pipeline stage

        Returns:
            Dictionary with the total and a per-stage breakdown
        """
        candidates = CandidateService.get_all_candidates()

        status_breakdown = {status.value: 0 for status in CandidateStatus}
        for candidate in candidates:
            raw_status = str(candidate.get("status") or "unknown")
            status_breakdown[raw_status] = status_breakdown.get(raw_status, 0) + 1

        return {
            "total": len(candidates),
            "stages": count_by_stage(c["workflow"] for c in candidates),
            "statusBreakdown": status_breakdown,
        }

    @staticmethod
    def get_candidates_by_status(status: CandidateStatus) -> List[Dict[str, Any]]:
        """
        Get candidates with the given raw status, newest first

        Returns:
            List of enriched candidate records
        """
        status = CandidateStatus(status)
        candidates = sorted(
            MockDB.find_documents(CandidateService.COLLECTION_NAME, lambda c: c.get("status") == status.value),
            key=lambda c: _timestamp(c.get("createdAt")),
            reverse=True,
        )
        return CandidateService._enrich(candidates)

    @staticmethod
    def bulk_update_status(candidate_ids: Iterable[str], status: CandidateStatus) -> int:
        """
        Set the raw status of several candidates at once

        Unknown IDs are skipped.

        Returns:
            Number of candidates updated
        """
        status = CandidateStatus(status)
        modified = 0
        for candidate_id in dict.fromkeys(candidate_ids):
            if not MockDB.get_document(CandidateService.COLLECTION_NAME, candidate_id):
                logger.warning(f"Skipping bulk status update, candidate {candidate_id} not found")
                continue
            MockDB.update_document(CandidateService.COLLECTION_NAME, candidate_id, {"status": status.value})
            modified += 1
        logger.info(f"Bulk status update set {modified} candidates to {status.value}")
        return modified
