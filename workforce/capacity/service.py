"""
Capacity ledger service.

Holds team members and their assignments and is passed by reference to every
component that needs capacity data. All mutation goes through commit_transfer
(reassignments) or assign/unassign (explicit assignment changes); a member's
current_capacity is always recomputed from the sum of its assignments.

The ledger does not lock. A host serving concurrent clients must serialize
commits per team member around these calls.
"""

import logging
import uuid
from datetime import date
from typing import Optional, List, Dict, Iterable
from pydantic import BaseModel

from workforce.capacity.models import TeamMember, Assignment, WorkloadValidation
from workforce.capacity.ledger import available_capacity, validate_assignment_workload
from workforce.errors import EngineError, identity_conflict, ownership_mismatch, validation_error

logger = logging.getLogger(__name__)


class AssignmentOutcome(BaseModel):
    """Result of assigning or unassigning workload."""
    success: bool
    assignment: Optional[Assignment] = None
    member: Optional[TeamMember] = None
    validation: Optional[WorkloadValidation] = None
    error: Optional[EngineError] = None


class TransferResult(BaseModel):
    """Result of moving one client's workload between two members."""
    success: bool
    source: Optional[TeamMember] = None
    target: Optional[TeamMember] = None
    assignment: Optional[Assignment] = None  # new assignment on the target
    removed_assignment: Optional[Assignment] = None  # assignment taken off the source
    error: Optional[EngineError] = None


def _new_assignment_id() -> str:
    return f"asg-{uuid.uuid4().hex[:12]}"


class CapacityLedger:
    """In-memory ledger of team member capacity."""

    def __init__(
        self,
        members: Optional[Iterable[TeamMember]] = None,
        assignments: Optional[Iterable[Assignment]] = None
    ):
        self._members: Dict[str, TeamMember] = {}
        self._assignments: Dict[str, List[Assignment]] = {}

        for member in members or []:
            self._members[member.id] = member
            self._assignments[member.id] = []

        for assignment in assignments or []:
            if assignment.team_member_id not in self._members:
                raise ValueError(
                    f"Assignment {assignment.assignment_id} references unknown member {assignment.team_member_id}"
                )
            self._assignments[assignment.team_member_id].append(assignment)

        for member_id in self._members:
            self._refresh(member_id)

    @classmethod
    def from_records(
        cls,
        members: Iterable[TeamMember],
        assignments: Iterable[Assignment]
    ) -> "CapacityLedger":
        """Rebuild a ledger from stored members and assignment records."""
        return cls(members=members, assignments=assignments)

    def copy(self) -> "CapacityLedger":
        """Independent ledger with the same members and assignments, for staging commits."""
        return CapacityLedger(members=self.members(), assignments=self.all_assignments())

    # =============================================================================
    # Reads
    # =============================================================================

    def get_member(self, member_id: str) -> Optional[TeamMember]:
        return self._members.get(member_id)

    def members(self, team_id: Optional[str] = None) -> List[TeamMember]:
        if team_id is None:
            return list(self._members.values())
        return [m for m in self._members.values() if m.team_id == team_id]

    def assignments_for(self, member_id: str) -> List[Assignment]:
        return list(self._assignments.get(member_id, []))

    def all_assignments(self) -> List[Assignment]:
        return [a for member_assignments in self._assignments.values() for a in member_assignments]

    def client_assignment(self, member_id: str, client_id: str) -> Optional[Assignment]:
        """Active assignment of a client on a member, if any."""
        for assignment in self._assignments.get(member_id, []):
            if assignment.client_id == client_id:
                return assignment
        return None

    # =============================================================================
    # Mutations
    # =============================================================================

    def add_member(self, member: TeamMember) -> TeamMember:
        """Register a new member with no assignments."""
        if member.id in self._members:
            raise ValueError(f"Team member {member.id} already exists in ledger")
        self._members[member.id] = member
        self._assignments[member.id] = []
        return self._refresh(member.id)

    def assign(
        self,
        member_id: str,
        workload_percentage: float,
        client_id: Optional[str] = None,
        work_item_id: Optional[str] = None,
        confirm_over_capacity: bool = False,
        assigned_date: Optional[str] = None
    ) -> AssignmentOutcome:
        """
        Create a new assignment after checking workload policy.

        Over-capacity assignments are accepted only when confirm_over_capacity
        is set; the validation in the outcome tells the caller to ask.
        """
        member = self._members.get(member_id)
        if member is None:
            return AssignmentOutcome(
                success=False,
                error=identity_conflict(f"Team member {member_id} not found", member_id)
            )

        validation = validate_assignment_workload(workload_percentage, member.max_capacity - member.current_capacity)
        if not validation.is_valid:
            logger.warning(f"Rejected assignment for {member_id}: {validation.error_message}")
            return AssignmentOutcome(
                success=False,
                member=member,
                validation=validation,
                error=validation_error(validation.error_message, member_id)
            )

        if validation.requires_confirmation and not confirm_over_capacity:
            return AssignmentOutcome(success=False, member=member, validation=validation)

        assignment = Assignment(
            assignment_id=_new_assignment_id(),
            team_member_id=member_id,
            work_item_id=work_item_id,
            client_id=client_id,
            workload_percentage=workload_percentage,
            assigned_date=assigned_date or date.today().isoformat(),
        )
        self._assignments[member_id] = self._assignments[member_id] + [assignment]
        updated = self._refresh(member_id)
        logger.info(
            f"Assigned {workload_percentage}% to {member_id} "
            f"(now {updated.current_capacity}%, available {available_capacity(updated)}%)"
        )
        return AssignmentOutcome(success=True, assignment=assignment, member=updated, validation=validation)

    def unassign(self, assignment_id: str) -> AssignmentOutcome:
        """Remove an assignment, e.g. when its work item is cancelled."""
        for member_id, member_assignments in self._assignments.items():
            for assignment in member_assignments:
                if assignment.assignment_id == assignment_id:
                    self._assignments[member_id] = [
                        a for a in member_assignments if a.assignment_id != assignment_id
                    ]
                    updated = self._refresh(member_id)
                    logger.info(f"Removed assignment {assignment_id} from {member_id}")
                    return AssignmentOutcome(success=True, assignment=assignment, member=updated)

        return AssignmentOutcome(
            success=False,
            error=validation_error(f"Assignment {assignment_id} not found", assignment_id)
        )

    def commit_transfer(
        self,
        source_id: str,
        target_id: str,
        client_id: str,
        workload_percentage: Optional[float] = None,
        work_item_id: Optional[str] = None,
        assigned_date: Optional[str] = None
    ) -> TransferResult:
        """
        Move a client's assignment from source to target in one step.

        Both sides are staged first and swapped in together; on any error the
        ledger is left untouched. Capacity never blocks a transfer.
        """
        if source_id == target_id:
            return TransferResult(
                success=False,
                error=identity_conflict("Cannot reassign a client to the same person", target_id)
            )

        if source_id not in self._members:
            return TransferResult(
                success=False,
                error=identity_conflict(f"Employee {source_id} not found", source_id)
            )
        if target_id not in self._members:
            return TransferResult(
                success=False,
                error=identity_conflict(f"Team member {target_id} not found", target_id)
            )

        existing = self._transfer_candidate(source_id, client_id, workload_percentage)
        if existing is None:
            return TransferResult(
                success=False,
                error=ownership_mismatch(
                    f"Client {client_id} is not currently assigned to {source_id}", client_id
                )
            )
        if workload_percentage is not None and existing.workload_percentage != workload_percentage:
            return TransferResult(
                success=False,
                error=ownership_mismatch(
                    f"Client {client_id} is recorded at {existing.workload_percentage}% on {source_id}, "
                    f"not {workload_percentage}%",
                    client_id
                )
            )

        moved = Assignment(
            assignment_id=_new_assignment_id(),
            team_member_id=target_id,
            work_item_id=work_item_id or existing.work_item_id,
            client_id=client_id,
            workload_percentage=existing.workload_percentage,
            assigned_date=assigned_date or date.today().isoformat(),
        )

        staged_source = [a for a in self._assignments[source_id] if a.assignment_id != existing.assignment_id]
        staged_target = self._assignments[target_id] + [moved]

        self._assignments[source_id] = staged_source
        self._assignments[target_id] = staged_target
        source = self._refresh(source_id)
        target = self._refresh(target_id)

        logger.info(
            f"Transferred client {client_id} ({existing.workload_percentage}%) "
            f"from {source_id} ({source.current_capacity}%) to {target_id} ({target.current_capacity}%)"
        )
        return TransferResult(
            success=True, source=source, target=target, assignment=moved, removed_assignment=existing
        )

    def _transfer_candidate(
        self,
        source_id: str,
        client_id: str,
        workload_percentage: Optional[float]
    ) -> Optional[Assignment]:
        """The source assignment a transfer moves: one matching the workload if any, else the first."""
        candidates = [a for a in self._assignments[source_id] if a.client_id == client_id]
        if workload_percentage is not None:
            for assignment in candidates:
                if assignment.workload_percentage == workload_percentage:
                    return assignment
        return candidates[0] if candidates else None

    def _refresh(self, member_id: str) -> TeamMember:
        total = sum(a.workload_percentage for a in self._assignments[member_id])
        updated = self._members[member_id].model_copy(update={"current_capacity": total})
        self._members[member_id] = updated
        return updated
