"""Derived schedule status for work items."""

from datetime import date, datetime
from typing import Optional, Union
from workforce.directory.models import WorkItem, WorkItemStatus, DerivedStatus


AT_RISK_WINDOW_DAYS = 3


def _as_day(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def derive_work_item_status(
    work_item: WorkItem,
    today: Optional[Union[date, datetime]] = None
) -> DerivedStatus:
    """
    Annotate a work item with On Track / At Risk / Overdue / Completed.

    - Completed if the work item itself is completed
    - Overdue if the due date is before today
    - At Risk if due within AT_RISK_WINDOW_DAYS days (inclusive)
    - On Track otherwise

    Dates are compared by day; time of day is ignored.
    """
    if work_item.status == WorkItemStatus.COMPLETED:
        return DerivedStatus.COMPLETED

    today_day = _as_day(today) if today is not None else date.today()
    days_until_due = (_as_day(work_item.due_date) - today_day).days

    if days_until_due < 0:
        return DerivedStatus.OVERDUE
    if days_until_due <= AT_RISK_WINDOW_DAYS:
        return DerivedStatus.AT_RISK
    return DerivedStatus.ON_TRACK
