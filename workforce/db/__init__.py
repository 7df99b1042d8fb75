"""Database package for the assignment store."""

from workforce.db.database import get_db, init_db, get_session
from workforce.db.models import Base, TeamMemberRecord, AssignmentRecord, ReassignmentRecord
from workforce.db.store import AssignmentStore

__all__ = [
    "get_db",
    "init_db",
    "get_session",
    "Base",
    "TeamMemberRecord",
    "AssignmentRecord",
    "ReassignmentRecord",
    "AssignmentStore",
]
