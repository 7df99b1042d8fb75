"""
Directory search.

Case-insensitive substring matching on name and identifier fields. Blank
queries return nothing rather than the whole directory.
"""

from typing import List, Iterable
from workforce.directory.models import Employee, Client


def _matches(query: str, *fields) -> bool:
    return any(query in (field or "").lower() for field in fields)


def search_employees(query: str, employees: Iterable[Employee]) -> List[Employee]:
    """Employees whose name or identifiers contain the query."""
    if not query or not query.strip():
        return []

    needle = query.strip().lower()
    return [
        employee for employee in employees
        if _matches(
            needle,
            employee.first_name,
            employee.last_name,
            employee.full_name,
            employee.id,
            employee.employee_id,
        )
    ]


def search_clients(query: str, clients: Iterable[Client]) -> List[Client]:
    """Clients whose name or CN number contains the query."""
    if not query or not query.strip():
        return []

    needle = query.strip().lower()
    return [
        client for client in clients
        if _matches(needle, client.name, client.cn_number, client.id)
    ]
