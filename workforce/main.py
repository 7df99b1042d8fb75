"""
Workforce capacity API.

Thin host around the engine: holds the in-memory directory and ledger,
forwards committed changes to the assignment store when persistence is
enabled, and maps engine errors to HTTP responses.

With persistence enabled the state is rebuilt from the store on startup, and
every ledger change is staged on a copy that replaces the live ledger only
after the store has committed.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Dict, List

from fastapi import FastAPI, HTTPException, Depends
from pydantic import BaseModel
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workforce.assignment import validate_team_assignment, TeamAssignmentFormState
from workforce.capacity import CapacityLedger, project_capacity, member_capacity_summary, TeamMember
from workforce.chairs import generate_chair_configs
from workforce.db import get_db, get_session, init_db, AssignmentStore
from workforce.directory import TeamDirectory, derive_work_item_status
from workforce.directory.models import DirectoryTeamMember
from workforce.errors import EngineError, ErrorKind
from workforce.reassignment import (
    propose_reassignment,
    complete_reassignment,
    add_member_to_team,
    cancel_work_item,
    summarize_leaver_progress,
    LeaverClient,
    LeaverEmployee,
    LeaverReassignment,
)

project_root = Path(__file__).resolve().parent.parent
load_dotenv(project_root / ".env")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

PERSISTENCE_ENABLED = os.getenv("PERSISTENCE_ENABLED", "false").lower() == "true"

app = FastAPI(
    title="workforce",
    description="Workforce capacity and reassignment allocation engine",
    version="0.1.0"
)


def _current_client(
    client: LeaverClient,
    leaver_id: str,
    ledger: CapacityLedger,
    completed: Dict[str, LeaverReassignment]
) -> LeaverClient:
    """Leaver client with its owner as recorded in the store."""
    if ledger.client_assignment(leaver_id, client.id) is not None:
        return client

    record = completed.get(client.id)
    if record is None or ledger.client_assignment(record.to_team_member_id, client.id) is None:
        return client

    return client.model_copy(update={
        "current_owner": record.to_team_member_id,
        "reassigned_to": record.to_team_member_id,
        "reassigned_date": record.reassigned_date,
    })


def _restore_added_members(directory: TeamDirectory, ledger: CapacityLedger) -> None:
    """Put members added at runtime back on their directory team."""
    known = {member.id for _, member in directory.iter_members()}
    for member in ledger.members():
        if member.id in known or directory.get_team(member.team_id) is None:
            continue
        first_name, _, last_name = member.name.partition(" ")
        directory.append_member(member.team_id, DirectoryTeamMember(
            id=member.id,
            first_name=first_name,
            last_name=last_name,
            title=member.role,
            location=member.location,
            is_manual_add=True,
        ))


class EngineState:
    """Directory, ledger and leaver workflow state served by the API."""

    def __init__(
        self,
        directory: TeamDirectory,
        ledger: CapacityLedger,
        leaver: Optional[LeaverEmployee] = None,
        leaver_clients: Optional[List[LeaverClient]] = None,
        reassignments: Optional[List[LeaverReassignment]] = None
    ):
        self.directory = directory
        self.ledger = ledger
        self.leaver = leaver
        self.leaver_clients: Dict[str, LeaverClient] = {c.id: c for c in leaver_clients or []}
        self.reassignments: Dict[str, LeaverReassignment] = {r.id: r for r in reassignments or []}

    @classmethod
    def from_config(cls) -> "EngineState":
        from workforce.directory.config import load_ledger_records_from_config, load_leaver_from_config

        members, assignments = load_ledger_records_from_config()
        leaver, clients = load_leaver_from_config()
        return cls(
            directory=TeamDirectory.from_config(),
            ledger=CapacityLedger.from_records(members, assignments),
            leaver=leaver,
            leaver_clients=clients,
        )

    @classmethod
    def from_store(cls, store: AssignmentStore) -> "EngineState":
        """Rebuild state from the assignment store, seeding it on first start."""
        from workforce.db.init_db import seed_store
        from workforce.directory.config import load_leaver_from_config

        seed_store(store)
        ledger = store.load_ledger()
        directory = TeamDirectory.from_config()
        _restore_added_members(directory, ledger)

        reassignments = store.load_reassignments()
        completed = {record.client_id: record for record in reassignments}  # latest record per client
        leaver, clients = load_leaver_from_config()

        logger.info(f"Restored {len(ledger.members())} members and {len(reassignments)} reassignments from store")
        return cls(
            directory=directory,
            ledger=ledger,
            leaver=leaver,
            leaver_clients=[_current_client(c, leaver.id, ledger, completed) for c in clients],
            reassignments=reassignments,
        )


state: Optional[EngineState] = None


def get_state() -> EngineState:
    """Get or initialize the engine state."""
    global state
    if state is None:
        if PERSISTENCE_ENABLED:
            logger.info("Initializing engine state from the assignment store...")
            init_db()
            with get_session() as db:
                state = EngineState.from_store(AssignmentStore(db))
        else:
            logger.info("Initializing engine state from configuration...")
            state = EngineState.from_config()
    return state


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.IDENTITY_CONFLICT: 409,
    ErrorKind.OWNERSHIP_MISMATCH: 409,
    ErrorKind.INVALID_STATE: 409,
}


def _raise_for(error: EngineError):
    raise HTTPException(
        status_code=_STATUS_BY_KIND.get(error.kind, 400),
        detail={"kind": error.kind.value, "message": error.message, "entity_id": error.entity_id}
    )


def _require_member(engine: EngineState, member_id: str) -> TeamMember:
    member = engine.ledger.get_member(member_id)
    if member is None:
        raise HTTPException(status_code=404, detail=f"Team member {member_id} not found")
    return member


# =============================================================================
# Request bodies
# =============================================================================

class ProposeReassignmentRequest(BaseModel):
    client_id: str
    from_employee_id: str
    to_team_member_id: str
    work_item_id: Optional[str] = None


class CompleteReassignmentRequest(BaseModel):
    reassignment_id: str


class CancelWorkItemRequest(BaseModel):
    notes: str


class AddMemberRequest(BaseModel):
    employee_id: str  # directory id of the Workday employee
    expertise: List[str] = []


class ExpertiseRequest(BaseModel):
    expertise: List[str]


# =============================================================================
# Endpoints
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "workforce", "persistence": PERSISTENCE_ENABLED}


@app.get("/capacity/project")
async def get_capacity_projection(current: float, additional: float, max_capacity: float = 100):
    """Project capacity after adding (or freeing) workload."""
    try:
        return project_capacity(current, additional, max_capacity)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/ledger/members")
async def list_ledger_members(team_id: Optional[str] = None, engine: EngineState = Depends(get_state)):
    """Team members with their current capacity."""
    return engine.ledger.members(team_id)


@app.get("/ledger/members/{member_id}")
async def get_ledger_member(member_id: str, workload: float = 0, engine: EngineState = Depends(get_state)):
    member = _require_member(engine, member_id)
    return {
        "member": member,
        "summary": member_capacity_summary(member, workload),
        "assignments": engine.ledger.assignments_for(member_id),
    }


@app.get("/chairs")
async def list_chairs():
    """Chair slots available to a role."""
    return generate_chair_configs()


@app.get("/teams")
async def list_teams(engine: EngineState = Depends(get_state)):
    """Teams with their roles and chairs."""
    return engine.directory.get_teams_with_roles()


@app.post("/team-assignments/validate")
async def validate_assignment(form_state: TeamAssignmentFormState, engine: EngineState = Depends(get_state)):
    """Validate a work item's team assignment."""
    return validate_team_assignment(form_state, engine.directory.get_teams_with_roles())


@app.get("/directory/employees")
async def search_employees(q: str = "", engine: EngineState = Depends(get_state)):
    return engine.directory.search_employees(q)


@app.get("/directory/clients")
async def search_clients(q: str = "", engine: EngineState = Depends(get_state)):
    return engine.directory.search_clients(q)


@app.get("/expertise")
async def list_expertise(engine: EngineState = Depends(get_state)):
    return engine.directory.expertise_list()


@app.get("/work-items")
async def list_work_items(engine: EngineState = Depends(get_state)):
    """Work items annotated with their derived schedule status."""
    return [
        {"work_item": item, "derived_status": derive_work_item_status(item)}
        for item in engine.directory.work_items()
    ]


@app.post("/work-items/{work_item_id}/cancel")
async def cancel_item(
    work_item_id: str,
    request: CancelWorkItemRequest,
    engine: EngineState = Depends(get_state),
    db: Session = Depends(get_db)
):
    """Cancel a work item and release its assignments; requires a reason of at least 10 characters."""
    work_item = engine.directory.get_work_item(work_item_id)
    if work_item is None:
        raise HTTPException(status_code=404, detail=f"Work item {work_item_id} not found")

    outcome = cancel_work_item(work_item, request.notes)
    if not outcome.success:
        _raise_for(outcome.error)

    released = [a.assignment_id for a in engine.ledger.all_assignments() if a.work_item_id == work_item_id]
    staged = engine.ledger.copy()
    for assignment_id in released:
        staged.unassign(assignment_id)

    if PERSISTENCE_ENABLED and released:
        try:
            AssignmentStore(db).deactivate_assignments(released)
        except SQLAlchemyError:
            raise HTTPException(status_code=503, detail=f"Could not save cancellation of {work_item_id}")

    engine.ledger = staged
    return engine.directory.save_work_item(outcome.work_item)


@app.get("/leaver")
async def get_leaver(engine: EngineState = Depends(get_state)):
    """The leaver, their clients and reassignment progress."""
    if engine.leaver is None:
        raise HTTPException(status_code=404, detail="No leaver configured")
    return {
        "leaver": engine.leaver,
        "clients": list(engine.leaver_clients.values()),
        "reassignments": list(engine.reassignments.values()),
        "progress": summarize_leaver_progress(engine.leaver_clients.values(), engine.reassignments.values()),
    }


@app.post("/reassignments/propose")
async def propose(request: ProposeReassignmentRequest, engine: EngineState = Depends(get_state)):
    """Create a Draft reassignment; the ledger is not changed."""
    client = engine.leaver_clients.get(request.client_id)
    if client is None:
        raise HTTPException(status_code=404, detail=f"Client {request.client_id} not found")

    from_employee = _require_member(engine, request.from_employee_id)
    to_member = _require_member(engine, request.to_team_member_id)

    outcome = propose_reassignment(client, from_employee, to_member, work_item_id=request.work_item_id)
    if not outcome.success:
        _raise_for(outcome.error)

    engine.reassignments[outcome.reassignment.id] = outcome.reassignment
    return outcome


@app.post("/reassignments/complete")
async def complete(
    request: CompleteReassignmentRequest,
    engine: EngineState = Depends(get_state),
    db: Session = Depends(get_db)
):
    """Commit a Draft reassignment to the ledger and, when enabled, the store."""
    draft = engine.reassignments.get(request.reassignment_id)
    if draft is None:
        raise HTTPException(status_code=404, detail=f"Reassignment {request.reassignment_id} not found")

    client = engine.leaver_clients.get(draft.client_id)
    if client is None:
        raise HTTPException(status_code=404, detail=f"Client {draft.client_id} not found")

    staged = engine.ledger.copy()
    outcome = complete_reassignment(draft, client, staged)
    if not outcome.success:
        _raise_for(outcome.error)

    if PERSISTENCE_ENABLED:
        store = AssignmentStore(db)
        try:
            store.record_completion(outcome)
        except SQLAlchemyError:
            raise HTTPException(status_code=503, detail=f"Could not save reassignment {draft.id}; nothing was changed")
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))

    engine.ledger = staged
    engine.reassignments[draft.id] = outcome.reassignment
    engine.leaver_clients[client.id] = outcome.client
    return outcome


@app.post("/teams/{team_id}/members")
async def add_member(
    team_id: str,
    request: AddMemberRequest,
    engine: EngineState = Depends(get_state),
    db: Session = Depends(get_db)
):
    """Add a Workday employee to a team."""
    matches = [e for e in engine.directory.search_employees(request.employee_id) if e.id == request.employee_id]
    if not matches:
        raise HTTPException(status_code=404, detail=f"Employee {request.employee_id} not found")

    for tag in request.expertise:
        engine.directory.add_expertise(tag)

    result = add_member_to_team(engine.directory, team_id, matches[0], request.expertise, ledger=engine.ledger)
    if not result.success:
        _raise_for(result.error)

    if PERSISTENCE_ENABLED:
        AssignmentStore(db).save_member(engine.ledger.get_member(result.member_id))

    return result


@app.put("/teams/{team_id}/members/{member_id}/expertise")
async def update_member_expertise(
    team_id: str,
    member_id: str,
    request: ExpertiseRequest,
    engine: EngineState = Depends(get_state)
):
    """Replace a member's expertise tags, adding new tags to the master list."""
    tags = [tag.strip() for tag in request.expertise if tag.strip()]
    member = engine.directory.update_member(team_id, member_id, expertise=tags)
    if member is None:
        raise HTTPException(status_code=404, detail=f"Member {member_id} not found on team {team_id}")

    for tag in tags:
        engine.directory.add_expertise(tag)
    return member


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=os.getenv("API_HOST", "0.0.0.0"), port=int(os.getenv("API_PORT", "8000")))
