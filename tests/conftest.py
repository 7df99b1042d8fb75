"""Shared fixtures: a small ledger, team directory and leaver."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workforce.capacity.models import TeamMember, Assignment
from workforce.capacity.service import CapacityLedger
from workforce.chairs.models import TeamWithRoles, TeamRoleDefinition, Chair, ChairType
from workforce.db import init_db
from workforce.directory.models import DirectoryTeam, DirectoryTeamMember, Employee
from workforce.directory.service import TeamDirectory
from workforce.reassignment.models import LeaverClient, LeaverEmployee


def _assignment(assignment_id, member_id, workload, client_id=None):
    return Assignment(
        assignment_id=assignment_id,
        team_member_id=member_id,
        client_id=client_id,
        workload_percentage=workload,
        assigned_date="2026-10-01",
    )


@pytest.fixture
def leaver():
    """Employee A, leaving with 60% load."""
    return LeaverEmployee(id="emp_a", name="Alex Archer", team_id="team_1", team_name="Property")


@pytest.fixture
def client_30():
    """Client owned by A needing 30% capacity."""
    return LeaverClient(
        id="cl_30",
        name="Harbour Freight Ltd",
        industry="Logistics",
        role="Account Manager",
        current_owner="emp_a",
        capacity_requirement=30,
    )


@pytest.fixture
def ledger():
    """A at 60% (30% of it on cl_30), B at 80%, C at 10%."""
    members = [
        TeamMember(id="emp_a", name="Alex Archer", role="Account Manager", location="London", team_id="team_1"),
        TeamMember(id="emp_b", name="Bea Brook", role="Account Manager", location="Leeds", team_id="team_1"),
        TeamMember(id="emp_c", name="Cai Chen", role="Analyst", location="Leeds", team_id="team_1"),
    ]
    assignments = [
        _assignment("asg-a1", "emp_a", 30, client_id="cl_30"),
        _assignment("asg-a2", "emp_a", 30, client_id="cl_other"),
        _assignment("asg-b1", "emp_b", 40),
        _assignment("asg-b2", "emp_b", 40),
        _assignment("asg-c1", "emp_c", 10),
    ]
    return CapacityLedger(members=members, assignments=assignments)


@pytest.fixture
def teams_with_roles():
    return [
        TeamWithRoles(
            id="team_1",
            name="Property",
            roles=[
                TeamRoleDefinition(
                    id="role_am",
                    role_name="Account Manager",
                    chairs=[
                        Chair(chair_type=ChairType.PRIMARY, order=1),
                        Chair(chair_type=ChairType.SECONDARY, order=2),
                    ],
                ),
                TeamRoleDefinition(
                    id="role_eng",
                    role_name="Risk Engineer",
                    chairs=[Chair(chair_type=ChairType.PRIMARY, order=1)],
                ),
            ],
        ),
        TeamWithRoles(
            id="team_2",
            name="Casualty",
            roles=[
                TeamRoleDefinition(
                    id="role_cs",
                    role_name="Claims Specialist",
                    chairs=[Chair(chair_type=ChairType.PRIMARY, order=1)],
                    max_chairs=3,
                ),
            ],
        ),
    ]


@pytest.fixture
def directory(teams_with_roles):
    return TeamDirectory(
        teams_with_roles=teams_with_roles,
        teams=[
            DirectoryTeam(
                id="team_1",
                team_name="Property",
                members=[
                    DirectoryTeamMember(id="emp_a", first_name="Alex", last_name="Archer", employee_id="E100"),
                    DirectoryTeamMember(id="emp_b", first_name="Bea", last_name="Brook"),
                ],
            ),
            DirectoryTeam(id="team_2", team_name="Casualty", members=[]),
        ],
        employees=[
            Employee(id="wd_1", first_name="Dana", last_name="Doyle", role="Analyst", location="York",
                     employee_id="E200"),
            Employee(id="wd_2", first_name="Alex", last_name="Archer", role="Analyst", location="Bath",
                     employee_id="E300"),
        ],
    )


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across sessions of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()
