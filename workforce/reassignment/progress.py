"""Leaver work item progress."""

from typing import Iterable
from workforce.reassignment.models import (
    LeaverClient, LeaverReassignment, LeaverProgress, ReassignmentStatus,
)


def summarize_leaver_progress(
    clients: Iterable[LeaverClient],
    reassignments: Iterable[LeaverReassignment]
) -> LeaverProgress:
    """Totals of a leaver's clients and how many have completed reassignments."""
    clients = list(clients)
    reassignments = list(reassignments)
    completed = {r.client_id for r in reassignments if r.status == ReassignmentStatus.COMPLETED}
    drafted = {r.client_id for r in reassignments if r.status == ReassignmentStatus.DRAFT} - completed

    assigned = [c for c in clients if c.id in completed]

    return LeaverProgress(
        total_clients=len(clients),
        total_capacity=sum(c.capacity_requirement for c in clients),
        assigned_clients=len(assigned),
        assigned_capacity=sum(c.capacity_requirement for c in assigned),
        draft_client_ids=[c.id for c in clients if c.id in drafted],
        unassigned_client_ids=[c.id for c in clients if c.id not in completed and c.id not in drafted],
        is_complete=bool(clients) and len(assigned) == len(clients),
    )
