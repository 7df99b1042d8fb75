"""
In-memory directory collaborator.

Stands in for the employee/team/client directory and the work item store.
"""

import logging
from typing import Optional, List, Dict, Iterable, Tuple
from workforce.chairs.models import TeamWithRoles
from workforce.directory.models import (
    Employee, Client, DirectoryTeam, DirectoryTeamMember, WorkItem,
)
from workforce.directory import search

logger = logging.getLogger(__name__)


class TeamDirectory:
    """Teams, people, clients and work items known to the host."""

    def __init__(
        self,
        teams_with_roles: Optional[Iterable[TeamWithRoles]] = None,
        teams: Optional[Iterable[DirectoryTeam]] = None,
        employees: Optional[Iterable[Employee]] = None,
        clients: Optional[Iterable[Client]] = None,
        work_items: Optional[Iterable[WorkItem]] = None,
        expertise: Optional[Iterable[str]] = None
    ):
        self._teams_with_roles: List[TeamWithRoles] = list(teams_with_roles or [])
        self._teams: Dict[str, DirectoryTeam] = {team.id: team for team in teams or []}
        self._employees: List[Employee] = list(employees or [])
        self._clients: List[Client] = list(clients or [])
        self._work_items: Dict[str, WorkItem] = {item.id: item for item in work_items or []}
        self._expertise: List[str] = []
        for tag in expertise or []:
            self.add_expertise(tag)
        for _, member in self.iter_members():
            for tag in member.expertise:
                self.add_expertise(tag)

    @classmethod
    def from_config(cls) -> "TeamDirectory":
        """Build a directory from the seed configuration."""
        from workforce.directory.config import (
            load_teams_from_config,
            load_directory_teams_from_config,
            load_employees_from_config,
            load_clients_from_config,
            load_work_items_from_config,
            EXPERTISE_CONFIG,
        )
        return cls(
            teams_with_roles=load_teams_from_config(),
            teams=load_directory_teams_from_config(),
            employees=load_employees_from_config(),
            clients=load_clients_from_config(),
            work_items=load_work_items_from_config(),
            expertise=EXPERTISE_CONFIG,
        )

    # =============================================================================
    # Teams
    # =============================================================================

    def get_teams_with_roles(self) -> List[TeamWithRoles]:
        return list(self._teams_with_roles)

    def get_team(self, team_id: str) -> Optional[DirectoryTeam]:
        return self._teams.get(team_id)

    def teams(self) -> List[DirectoryTeam]:
        return list(self._teams.values())

    def iter_members(self) -> Iterable[Tuple[DirectoryTeam, DirectoryTeamMember]]:
        for team in self._teams.values():
            for member in team.members:
                yield team, member

    def get_member(self, team_id: str, member_id: str) -> Optional[DirectoryTeamMember]:
        team = self._teams.get(team_id)
        if team is None:
            return None
        return next((member for member in team.members if member.id == member_id), None)

    def append_member(self, team_id: str, member: DirectoryTeamMember) -> DirectoryTeam:
        team = self._teams[team_id]
        updated = team.model_copy(update={"members": team.members + [member]})
        self._teams[team_id] = updated
        logger.info(f"Added {member.first_name} {member.last_name} to team {team_id}")
        return updated

    def update_member(self, team_id: str, member_id: str, **updates) -> Optional[DirectoryTeamMember]:
        """Apply field updates to a team member. Returns None if the team or member is unknown."""
        team = self._teams.get(team_id)
        if team is None:
            return None

        updated = None
        members = []
        for member in team.members:
            if member.id == member_id:
                member = member.model_copy(update=updates)
                updated = member
            members.append(member)

        if updated is not None:
            self._teams[team_id] = team.model_copy(update={"members": members})
            logger.info(f"Updated member {member_id} on team {team_id}: {sorted(updates)}")
        return updated

    # =============================================================================
    # Expertise
    # =============================================================================

    def expertise_list(self) -> List[str]:
        return list(self._expertise)

    def add_expertise(self, tag: str) -> bool:
        """Add a tag to the master expertise list. Returns False for blanks and tags already listed."""
        tag = (tag or "").strip()
        if not tag or tag in self._expertise:
            return False
        self._expertise.append(tag)
        return True

    # =============================================================================
    # Search
    # =============================================================================

    def search_employees(self, query: str) -> List[Employee]:
        return search.search_employees(query, self._employees)

    def search_clients(self, query: str) -> List[Client]:
        return search.search_clients(query, self._clients)

    # =============================================================================
    # Work items
    # =============================================================================

    def work_items(self) -> List[WorkItem]:
        return list(self._work_items.values())

    def get_work_item(self, work_item_id: str) -> Optional[WorkItem]:
        return self._work_items.get(work_item_id)

    def save_work_item(self, work_item: WorkItem) -> WorkItem:
        self._work_items[work_item.id] = work_item
        return work_item
