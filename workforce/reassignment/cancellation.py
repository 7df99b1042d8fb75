"""Work item cancellation guard."""

import logging
from workforce.directory.models import WorkItem, WorkItemStatus
from workforce.errors import validation_error, invalid_state
from workforce.reassignment.models import CancellationCheck, CancellationOutcome

logger = logging.getLogger(__name__)


MIN_CANCELLATION_REASON_LENGTH = 10


def validate_cancellation_reason(notes: str) -> CancellationCheck:
    """A cancellation needs a reason of at least 10 characters once trimmed."""
    reason = (notes or "").strip()
    if len(reason) < MIN_CANCELLATION_REASON_LENGTH:
        return CancellationCheck(
            is_valid=False,
            reason=reason,
            message=(
                f"Please enter at least {MIN_CANCELLATION_REASON_LENGTH} characters "
                f"({len(reason)}/{MIN_CANCELLATION_REASON_LENGTH})"
            )
        )
    return CancellationCheck(is_valid=True, reason=reason)


def cancel_work_item(work_item: WorkItem, notes: str) -> CancellationOutcome:
    """
    Cancel a work item with a justification.

    Fails if the reason is too short or the item is already closed.
    """
    if work_item.status in (WorkItemStatus.COMPLETED, WorkItemStatus.CANCELLED):
        return CancellationOutcome(
            success=False,
            error=invalid_state(f"Work item {work_item.id} is already {work_item.status.value}", work_item.id)
        )

    check = validate_cancellation_reason(notes)
    if not check.is_valid:
        return CancellationOutcome(success=False, error=validation_error(check.message, work_item.id))

    cancelled = work_item.model_copy(update={
        "status": WorkItemStatus.CANCELLED,
        "cancellation_reason": check.reason,
    })
    logger.info(f"Cancelled work item {work_item.id}")
    return CancellationOutcome(success=True, work_item=cancelled)
