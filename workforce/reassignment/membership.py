"""
Team membership guard.

A person may be active on only one team at a time. People are matched on
their stable employee id when both sides carry one; otherwise on an exact,
case-insensitive first + last name pair.
"""

import logging
import uuid
from typing import Optional, List

from workforce.capacity.models import TeamMember
from workforce.capacity.service import CapacityLedger
from workforce.directory.models import Employee, DirectoryTeamMember
from workforce.directory.service import TeamDirectory
from workforce.errors import identity_conflict
from workforce.reassignment.models import MembershipCheck, MembershipResult

logger = logging.getLogger(__name__)


def _same_name(member: DirectoryTeamMember, first_name: str, last_name: str) -> bool:
    return (
        member.first_name.strip().lower() == first_name.strip().lower()
        and member.last_name.strip().lower() == last_name.strip().lower()
    )


def is_member_in_any_team(
    directory: TeamDirectory,
    first_name: str,
    last_name: str,
    employee_id: Optional[str] = None
) -> MembershipCheck:
    """
    Check whether a person is already on a team.

    With an employee_id, a member carrying an id is compared by id only, so
    two different people sharing a name are not confused. Members without an
    id fall back to the name comparison.
    """
    for team, member in directory.iter_members():
        if employee_id and member.employee_id:
            if member.employee_id == employee_id:
                return MembershipCheck(in_team=True, team_id=team.id, team_name=team.team_name, matched_on="employee_id")
            continue

        if _same_name(member, first_name, last_name):
            return MembershipCheck(in_team=True, team_id=team.id, team_name=team.team_name, matched_on="name")

    return MembershipCheck(in_team=False)


def add_member_to_team(
    directory: TeamDirectory,
    team_id: str,
    employee: Employee,
    expertise: Optional[List[str]] = None,
    ledger: Optional[CapacityLedger] = None
) -> MembershipResult:
    """
    Add a Workday employee to a team, refusing people already on a team.

    When a ledger is given the new member is registered there with no
    assignments.
    """
    team = directory.get_team(team_id)
    if team is None:
        return MembershipResult(
            success=False,
            error=identity_conflict(f"Team {team_id} not found", team_id)
        )

    existing = is_member_in_any_team(directory, employee.first_name, employee.last_name, employee.employee_id)
    if existing.in_team:
        logger.warning(
            f"{employee.full_name} is already on team {existing.team_id} (matched on {existing.matched_on})"
        )
        return MembershipResult(
            success=False,
            team_id=existing.team_id,
            error=identity_conflict(
                "This Team Member is already assigned under a different manager.", employee.id
            )
        )

    member = DirectoryTeamMember(
        id=f"member-{uuid.uuid4().hex[:12]}",
        first_name=employee.first_name,
        last_name=employee.last_name,
        title=employee.role,
        location=employee.location,
        employee_id=employee.employee_id,
        expertise=list(expertise or []),
        is_manual_add=True,
    )
    directory.append_member(team_id, member)

    if ledger is not None:
        ledger.add_member(TeamMember(
            id=member.id,
            name=employee.full_name,
            role=employee.role,
            location=employee.location,
            team_id=team_id,
        ))

    return MembershipResult(success=True, team_id=team_id, member_id=member.id)
