"""
Leaver reassignment workflow.

Moves a client's capacity requirement from a leaving employee to a receiving
team member:

    Draft --complete--> Completed

A Draft is a projection and never touches the ledger. Completing it is the
only path that commits the capacity change and the ownership transfer.
Over-capacity is reported on the record but never blocks a completion.
"""

import logging
import uuid
from datetime import date
from typing import Optional, Union

from workforce.capacity.ledger import project_capacity
from workforce.capacity.models import TeamMember
from workforce.capacity.service import CapacityLedger
from workforce.errors import identity_conflict, ownership_mismatch, validation_error, invalid_state
from workforce.reassignment.models import (
    LeaverClient,
    LeaverEmployee,
    LeaverReassignment,
    ReassignmentOutcome,
    ReassignmentStatus,
)

logger = logging.getLogger(__name__)


def _new_reassignment_id() -> str:
    return f"rsg-{uuid.uuid4().hex[:12]}"


def propose_reassignment(
    client: LeaverClient,
    from_employee: Union[LeaverEmployee, TeamMember],
    to_member: TeamMember,
    work_item_id: Optional[str] = None,
    reassigned_date: Optional[str] = None
) -> ReassignmentOutcome:
    """
    Build a Draft reassignment of a client to a team member.

    Args:
        client: Client being moved
        from_employee: Employee currently owning the client
        to_member: Team member receiving the client
        work_item_id: Leaver work item the reassignment belongs to
        reassigned_date: ISO date to stamp on the record (defaults to today)

    Returns:
        ReassignmentOutcome holding the Draft, or an error when the move is
        a self-reassignment or the client is not owned by from_employee
    """
    if to_member.id == from_employee.id:
        logger.warning(f"Rejected self-reassignment of client {client.id} to {to_member.id}")
        return ReassignmentOutcome(
            success=False,
            error=identity_conflict("A client cannot be reassigned to the employee who is leaving", to_member.id)
        )

    if client.current_owner != from_employee.id:
        logger.warning(
            f"Client {client.id} is owned by {client.current_owner}, not {from_employee.id}"
        )
        return ReassignmentOutcome(
            success=False,
            error=ownership_mismatch(
                f"{client.name or client.id} is not currently owned by {from_employee.name}; refresh and try again",
                client.id
            )
        )

    projection = project_capacity(to_member.current_capacity, client.capacity_requirement, to_member.max_capacity)

    draft = LeaverReassignment(
        id=_new_reassignment_id(),
        work_item_id=work_item_id,
        client_id=client.id,
        client_name=client.name,
        industry=client.industry,
        client_role=client.role,
        capacity_requirement=client.capacity_requirement,
        from_employee_id=from_employee.id,
        from_employee_name=from_employee.name,
        to_team_member_id=to_member.id,
        to_team_member_name=to_member.name,
        to_team_member_role=to_member.role,
        to_team_member_location=to_member.location,
        new_capacity_percent=projection.projected,
        projection=projection,
        reassigned_date=reassigned_date or date.today().isoformat(),
        status=ReassignmentStatus.DRAFT,
    )

    return ReassignmentOutcome(success=True, reassignment=draft, client=client, target=to_member)


def complete_reassignment(
    draft: LeaverReassignment,
    client: LeaverClient,
    ledger: CapacityLedger,
    completed_date: Optional[str] = None
) -> ReassignmentOutcome:
    """
    Commit a Draft: move the client's workload and ownership to the target.

    The projection is recomputed from the ledger at commit time, so the
    Completed record reflects what the target actually carries afterwards.
    On any error the ledger is unchanged.
    """
    if draft.status != ReassignmentStatus.DRAFT:
        return ReassignmentOutcome(
            success=False,
            error=invalid_state(f"Reassignment {draft.id} is already {draft.status.value}", draft.id)
        )

    if client.id != draft.client_id:
        return ReassignmentOutcome(
            success=False,
            error=validation_error(
                f"Reassignment {draft.id} is for client {draft.client_id}, not {client.id}", client.id
            )
        )

    if client.current_owner != draft.from_employee_id:
        return ReassignmentOutcome(
            success=False,
            error=ownership_mismatch(
                f"{client.name or client.id} is no longer owned by {draft.from_employee_name or draft.from_employee_id}",
                client.id
            )
        )

    target = ledger.get_member(draft.to_team_member_id)
    if target is None:
        return ReassignmentOutcome(
            success=False,
            error=identity_conflict(f"Team member {draft.to_team_member_id} not found", draft.to_team_member_id)
        )

    projection = project_capacity(target.current_capacity, draft.capacity_requirement, target.max_capacity)
    stamp = completed_date or date.today().isoformat()

    transfer = ledger.commit_transfer(
        source_id=draft.from_employee_id,
        target_id=draft.to_team_member_id,
        client_id=draft.client_id,
        workload_percentage=draft.capacity_requirement,
        work_item_id=draft.work_item_id,
        assigned_date=stamp,
    )
    if not transfer.success:
        logger.warning(f"Could not complete reassignment {draft.id}: {transfer.error.message}")
        return ReassignmentOutcome(success=False, error=transfer.error)

    completed = draft.model_copy(update={
        "status": ReassignmentStatus.COMPLETED,
        "new_capacity_percent": projection.projected,
        "projection": projection,
        "reassigned_date": stamp,
    })
    moved_client = client.model_copy(update={
        "current_owner": draft.to_team_member_id,
        "reassigned_to": draft.to_team_member_id,
        "reassigned_date": stamp,
    })

    logger.info(
        f"Completed reassignment {completed.id}: {client.id} -> {completed.to_team_member_id} "
        f"({projection.projected}%, {projection.status.value})"
    )
    return ReassignmentOutcome(
        success=True,
        reassignment=completed,
        client=moved_client,
        source=transfer.source,
        target=transfer.target,
        assignment=transfer.assignment,
        removed_assignment=transfer.removed_assignment,
    )
