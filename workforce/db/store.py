"""
Assignment store - durable home for ledger data.

The engine never persists anything itself; the host forwards committed
results here and rebuilds the ledger from the stored assignments on startup.
"""

import logging
from typing import Optional, List
from sqlalchemy.orm import Session

from workforce.capacity.models import TeamMember, Assignment
from workforce.capacity.service import CapacityLedger
from workforce.db.models import TeamMemberRecord, AssignmentRecord, ReassignmentRecord
from workforce.reassignment.models import LeaverReassignment, ReassignmentOutcome, ReassignmentStatus

logger = logging.getLogger(__name__)


class AssignmentStore:
    """Service for storing members, assignments and completed reassignments."""

    def __init__(self, db: Session):
        self.db = db

    # =============================================================================
    # Members and assignments
    # =============================================================================

    def save_member(self, member: TeamMember) -> TeamMemberRecord:
        """Insert or update a team member."""
        record = self.db.get(TeamMemberRecord, member.id)
        if record is None:
            record = TeamMemberRecord(id=member.id)
            self.db.add(record)

        record.name = member.name
        record.role = member.role
        record.location = member.location
        record.team_id = member.team_id
        record.max_capacity = member.max_capacity

        self.db.commit()
        self.db.refresh(record)
        return record

    def has_members(self) -> bool:
        return self.db.query(TeamMemberRecord.id).first() is not None

    def save_assignment(self, assignment: Assignment) -> AssignmentRecord:
        record = self._assignment_record(assignment)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def deactivate_assignment(self, assignment_id: str) -> bool:
        """Mark an assignment as removed. Returns False if it was not active."""
        return self.deactivate_assignments([assignment_id]) == 1

    def deactivate_assignments(self, assignment_ids: List[str]) -> int:
        """Mark several assignments as removed in one transaction; returns how many were active."""
        if not assignment_ids:
            return 0
        try:
            records = self.db.query(AssignmentRecord).filter(
                AssignmentRecord.assignment_id.in_(assignment_ids),
                AssignmentRecord.active.is_(True)
            ).all()
            for record in records:
                record.active = False
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(f"Failed to deactivate assignments {assignment_ids}", exc_info=True)
            raise
        return len(records)

    def active_assignments(self, team_member_id: Optional[str] = None) -> List[AssignmentRecord]:
        query = self.db.query(AssignmentRecord).filter(AssignmentRecord.active.is_(True))
        if team_member_id:
            query = query.filter(AssignmentRecord.team_member_id == team_member_id)
        return query.order_by(AssignmentRecord.id).all()

    # =============================================================================
    # Reassignments
    # =============================================================================

    def record_completion(self, outcome: ReassignmentOutcome) -> ReassignmentRecord:
        """
        Persist a completed reassignment in one transaction.

        The source assignment the ledger removed is deactivated, the target's
        new assignment is inserted, and the audit record is appended. Nothing
        is written if any step fails.
        """
        reassignment = outcome.reassignment
        if (
            not outcome.success
            or reassignment is None
            or outcome.assignment is None
            or outcome.removed_assignment is None
        ):
            raise ValueError("Only successful completions can be recorded")
        if reassignment.status != ReassignmentStatus.COMPLETED:
            raise ValueError(f"Reassignment {reassignment.id} is not completed")

        try:
            source_record = self.db.query(AssignmentRecord).filter(
                AssignmentRecord.assignment_id == outcome.removed_assignment.assignment_id,
                AssignmentRecord.active.is_(True)
            ).first()
            if source_record is None:
                raise ValueError(
                    f"Assignment {outcome.removed_assignment.assignment_id} is not active in the store"
                )
            source_record.active = False

            self.db.add(self._assignment_record(outcome.assignment))

            record = ReassignmentRecord(
                reassignment_id=reassignment.id,
                work_item_id=reassignment.work_item_id,
                client_id=reassignment.client_id,
                from_employee_id=reassignment.from_employee_id,
                to_team_member_id=reassignment.to_team_member_id,
                capacity_requirement=reassignment.capacity_requirement,
                new_capacity_percent=reassignment.new_capacity_percent,
                status=reassignment.status.value,
                record=reassignment.model_dump(mode="json"),
            )
            self.db.add(record)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(f"Failed to record reassignment {reassignment.id}", exc_info=True)
            raise

        self.db.refresh(record)
        logger.info(f"Recorded reassignment {reassignment.id} for client {reassignment.client_id}")
        return record

    def get_reassignments(self, work_item_id: Optional[str] = None) -> List[ReassignmentRecord]:
        query = self.db.query(ReassignmentRecord)
        if work_item_id:
            query = query.filter(ReassignmentRecord.work_item_id == work_item_id)
        return query.order_by(ReassignmentRecord.id).all()

    def load_reassignments(self) -> List[LeaverReassignment]:
        """Completed reassignment records, oldest first."""
        return [LeaverReassignment.model_validate(record.record) for record in self.get_reassignments()]

    # =============================================================================
    # Ledger rebuild
    # =============================================================================

    def load_ledger(self) -> CapacityLedger:
        """Recompute a CapacityLedger from stored members and active assignments."""
        members = [
            TeamMember(
                id=record.id,
                name=record.name,
                role=record.role or "",
                location=record.location or "",
                team_id=record.team_id or "",
                max_capacity=record.max_capacity,
            )
            for record in self.db.query(TeamMemberRecord).order_by(TeamMemberRecord.id).all()
        ]
        assignments = [
            Assignment(
                assignment_id=record.assignment_id,
                team_member_id=record.team_member_id,
                work_item_id=record.work_item_id,
                client_id=record.client_id,
                workload_percentage=record.workload_percentage,
                assigned_date=record.assigned_date,
            )
            for record in self.active_assignments()
        ]
        return CapacityLedger.from_records(members, assignments)

    @staticmethod
    def _assignment_record(assignment: Assignment) -> AssignmentRecord:
        return AssignmentRecord(
            assignment_id=assignment.assignment_id,
            team_member_id=assignment.team_member_id,
            work_item_id=assignment.work_item_id,
            client_id=assignment.client_id,
            workload_percentage=assignment.workload_percentage,
            assigned_date=assignment.assigned_date,
            active=True,
        )
