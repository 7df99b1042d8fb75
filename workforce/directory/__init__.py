"""Directory collaborator - people, teams, clients and work items."""

from workforce.directory.search import search_employees, search_clients
from workforce.directory.status import derive_work_item_status
from workforce.directory.service import TeamDirectory

__all__ = [
    "search_employees",
    "search_clients",
    "derive_work_item_status",
    "TeamDirectory",
]
