"""
Configuration for directory data.

In production, this should fetch from:
- Workday (employees, managers)
- The team setup service (teams, roles, chairs)
- The client master (clients, CN numbers)
- The work item store

Until those collaborators are wired in, the host seeds itself from the lists
below.
"""

from datetime import date, timedelta
from typing import List
from workforce.capacity.models import TeamMember, Assignment
from workforce.chairs.models import TeamWithRoles, TeamRoleDefinition, Chair, ChairType
from workforce.directory.models import (
    Employee, Client, DirectoryTeam, DirectoryTeamMember, WorkItem,
)
from workforce.reassignment.models import LeaverClient, LeaverEmployee


TEAMS_CONFIG = [
    {
        "id": "team_pra",
        "name": "Property Risk Assessment",
        "team_base": "Workday",
        "qualifiers": ["Property", "North America"],
        "primary_manager": "mgr_001",
        "oversite_manager": "mgr_003",
        "roles": [
            {"id": "role_sam", "role_name": "Senior Account Manager", "chairs": ["Primary", "Secondary"]},
            {"id": "role_re", "role_name": "Risk Engineer", "chairs": ["Primary"]},
        ],
        "members": [
            {"id": "tm_001", "first_name": "John", "last_name": "Grimes", "title": "Senior Account Manager",
             "location": "New York", "employee_id": "1234567"},
            {"id": "tm_002", "first_name": "Sarah", "last_name": "Mitchell", "title": "Account Executive",
             "location": "New York", "employee_id": "1234568"},
            {"id": "tm_003", "first_name": "David", "last_name": "Chen", "title": "Risk Engineer",
             "location": "Chicago", "employee_id": "1234569"},
        ],
    },
    {
        "id": "team_gl",
        "name": "General Liability",
        "team_base": "Manual Select",
        "qualifiers": ["Casualty"],
        "primary_manager": "mgr_002",
        "delegate_manager": "mgr_001",
        "oversite_manager": "mgr_003",
        "roles": [
            {"id": "role_cs", "role_name": "Claims Specialist", "chairs": ["Primary", "Secondary", "Secondary"]},
            {"id": "role_pm", "role_name": "Project Manager", "chairs": ["Primary", "Secondary"], "max_chairs": 2},
        ],
        "members": [
            {"id": "tm_004", "first_name": "Emily", "last_name": "Watson", "title": "Account Executive",
             "location": "Boston", "employee_id": "1234570"},
            {"id": "tm_005", "first_name": "James", "last_name": "Rodriguez", "title": "Project Manager",
             "location": "Miami", "employee_id": "1234571"},
        ],
    },
]

# Workday employees that are not (yet) on a team
EMPLOYEES_CONFIG = [
    {"id": "wd_101", "first_name": "Patricia", "last_name": "Morrison", "role": "Senior Vice President",
     "location": "Phoenix", "employee_id": "2234501"},
    {"id": "wd_102", "first_name": "Robert", "last_name": "Wilson", "role": "Senior Risk Engineer",
     "location": "Houston", "employee_id": "2234502"},
]

EXPERTISE_CONFIG = [
    "Property",
    "Casualty",
    "Healthcare",
    "Manufacturing",
    "Risk Engineering",
]

CLIENTS_CONFIG = [
    {"id": "cl_001", "name": "The Palms South Properties", "cn_number": "CN-2024-10847", "industry": "Corporate"},
    {"id": "cl_002", "name": "Scout Healthcare", "cn_number": "CN-2024-10923", "industry": "Healthcare"},
    {"id": "cl_003", "name": "Easy Post", "cn_number": "CN-2024-11002", "industry": "Government"},
    {"id": "cl_004", "name": "Westfield Manufacturing Corp", "cn_number": "CN-2024-11310", "industry": "Manufacturing"},
]

# Active assignments; capacity is always derived from these
ASSIGNMENTS_CONFIG = [
    {"team_member_id": "tm_001", "client_id": "cl_001", "workload_percentage": 25},
    {"team_member_id": "tm_001", "client_id": "cl_002", "workload_percentage": 20},
    {"team_member_id": "tm_001", "client_id": "cl_003", "workload_percentage": 15},
    {"team_member_id": "tm_002", "client_id": "cl_004", "workload_percentage": 40},
    {"team_member_id": "tm_002", "workload_percentage": 30},
    {"team_member_id": "tm_003", "workload_percentage": 35},
    {"team_member_id": "tm_004", "workload_percentage": 20},
    {"team_member_id": "tm_005", "workload_percentage": 40},
    {"team_member_id": "tm_005", "workload_percentage": 30},
    {"team_member_id": "tm_005", "workload_percentage": 15},
]

LEAVER_CONFIG = {
    "id": "tm_001",
    "name": "John Grimes",
    "email": "johngrimes@example.com",
    "location": "New York",
    "team_id": "team_pra",
    "team_name": "Property Risk Assessment",
}

WORK_ITEMS_CONFIG = [
    {"id": "1001234567", "work_type": "Onboarding", "client_name": "Westfield Manufacturing Corp",
     "cn_number": "CN-2024-11310", "due_in_days": 14, "assignee": "David Chen", "priority": "High"},
    {"id": "1001234568", "work_type": "Leaver", "client_name": "", "due_in_days": 2,
     "assignee": "Sarah Mitchell", "priority": "High", "status": "In Progress"},
    {"id": "1001234569", "work_type": "New Joiner", "client_name": "", "due_in_days": -1,
     "assignee": "Emily Watson", "priority": "Medium"},
]


def load_teams_from_config() -> List[TeamWithRoles]:
    """Load team definitions (roles and chairs) from configuration."""
    teams = []

    for config in TEAMS_CONFIG:
        roles = []
        for role in config["roles"]:
            roles.append(TeamRoleDefinition(
                id=role["id"],
                role_name=role["role_name"],
                chairs=[
                    Chair(chair_type=ChairType(chair_type), order=order)
                    for order, chair_type in enumerate(role["chairs"], start=1)
                ],
                max_chairs=role.get("max_chairs"),
            ))
        teams.append(TeamWithRoles(
            id=config["id"],
            name=config["name"],
            team_base=config["team_base"],
            qualifiers=config.get("qualifiers", []),
            roles=roles,
            primary_manager=config["primary_manager"],
            delegate_manager=config.get("delegate_manager"),
            oversite_manager=config["oversite_manager"],
        ))

    return teams


def load_directory_teams_from_config() -> List[DirectoryTeam]:
    """Load team membership from configuration."""
    return [
        DirectoryTeam(
            id=config["id"],
            team_name=config["name"],
            members=[DirectoryTeamMember(**member) for member in config["members"]],
        )
        for config in TEAMS_CONFIG
    ]


def load_employees_from_config() -> List[Employee]:
    """Team members plus unassigned Workday employees."""
    employees = []
    for config in TEAMS_CONFIG:
        for member in config["members"]:
            employees.append(Employee(
                id=member["id"],
                first_name=member["first_name"],
                last_name=member["last_name"],
                role=member["title"],
                location=member["location"],
                team_id=config["id"],
                employee_id=member.get("employee_id"),
            ))
    employees.extend(Employee(**config) for config in EMPLOYEES_CONFIG)
    return employees


def load_clients_from_config() -> List[Client]:
    return [Client(**config) for config in CLIENTS_CONFIG]


def load_ledger_records_from_config() -> tuple[List[TeamMember], List[Assignment]]:
    """Team members and their active assignments, for building a CapacityLedger."""
    members = []
    for config in TEAMS_CONFIG:
        for member in config["members"]:
            members.append(TeamMember(
                id=member["id"],
                name=f"{member['first_name']} {member['last_name']}",
                role=member["title"],
                location=member["location"],
                team_id=config["id"],
            ))

    today = date.today().isoformat()
    assignments = [
        Assignment(
            assignment_id=f"asg-seed-{index:03d}",
            team_member_id=config["team_member_id"],
            client_id=config.get("client_id"),
            workload_percentage=config["workload_percentage"],
            assigned_date=today,
        )
        for index, config in enumerate(ASSIGNMENTS_CONFIG, start=1)
    ]
    return members, assignments


def load_leaver_from_config() -> tuple[LeaverEmployee, List[LeaverClient]]:
    """The seeded leaver and the clients they currently own."""
    leaver = LeaverEmployee(**LEAVER_CONFIG)
    clients_by_id = {client["id"]: client for client in CLIENTS_CONFIG}
    leaver_clients = []
    for config in ASSIGNMENTS_CONFIG:
        if config["team_member_id"] != leaver.id or not config.get("client_id"):
            continue
        client = clients_by_id[config["client_id"]]
        leaver_clients.append(LeaverClient(
            id=client["id"],
            name=client["name"],
            industry=client["industry"],
            role="Senior Account Manager",
            current_owner=leaver.id,
            capacity_requirement=config["workload_percentage"],
        ))
    return leaver, leaver_clients


def load_work_items_from_config() -> List[WorkItem]:
    """Work items with due dates relative to today."""
    today = date.today()
    items = []
    for config in WORK_ITEMS_CONFIG:
        fields = {k: v for k, v in config.items() if k != "due_in_days"}
        items.append(WorkItem(due_date=today + timedelta(days=config["due_in_days"]), **fields))
    return items
