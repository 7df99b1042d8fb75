"""
Database models for the assignment store.

Stores team members, active assignments and the reassignment audit trail.
Capacity is never stored on its own; it is recomputed from assignments.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TeamMemberRecord(Base):
    """A team member known to the ledger."""
    __tablename__ = "team_members"

    id = Column(String(255), primary_key=True)
    name = Column(String(255), nullable=False)
    role = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    team_id = Column(String(255), nullable=True, index=True)
    max_capacity = Column(Float, nullable=False, default=100.0)
    created_at = Column(DateTime, default=func.now(), nullable=False)


class AssignmentRecord(Base):
    """An assignment of workload to a team member."""
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True)
    assignment_id = Column(String(255), unique=True, nullable=False, index=True)
    team_member_id = Column(String(255), nullable=False, index=True)
    work_item_id = Column(String(255), nullable=True, index=True)
    client_id = Column(String(255), nullable=True, index=True)
    workload_percentage = Column(Float, nullable=False)
    assigned_date = Column(String(32), nullable=False)
    active = Column(Boolean, nullable=False, default=True, index=True)  # False once moved or removed
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)


class ReassignmentRecord(Base):
    """Completed reassignment, append-only."""
    __tablename__ = "reassignments"

    id = Column(Integer, primary_key=True)
    reassignment_id = Column(String(255), unique=True, nullable=False, index=True)
    work_item_id = Column(String(255), nullable=True, index=True)
    client_id = Column(String(255), nullable=False, index=True)
    from_employee_id = Column(String(255), nullable=False)
    to_team_member_id = Column(String(255), nullable=False)
    capacity_requirement = Column(Float, nullable=False)
    new_capacity_percent = Column(Float, nullable=False)
    status = Column(String(50), nullable=False)
    record = Column(JSON, nullable=False)  # full LeaverReassignment dump
    created_at = Column(DateTime, default=func.now(), nullable=False, index=True)
