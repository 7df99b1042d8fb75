"""Initialize the assignment store and seed it from configuration."""

import logging
from workforce.db.database import init_db, get_session
from workforce.db.store import AssignmentStore

logger = logging.getLogger(__name__)


def seed_store(store: AssignmentStore) -> bool:
    """Load seed members and assignments if the store holds no members yet. Returns True if seeded."""
    from workforce.directory.config import load_ledger_records_from_config

    if store.has_members():
        logger.info("Assignment store already seeded")
        return False

    members, assignments = load_ledger_records_from_config()
    for member in members:
        store.save_member(member)
    for assignment in assignments:
        store.save_assignment(assignment)
    logger.info(f"Seeded {len(members)} members and {len(assignments)} assignments")
    return True


def seed():
    """Create tables and seed the configured database."""
    init_db()
    with get_session() as db:
        seed_store(AssignmentStore(db))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
