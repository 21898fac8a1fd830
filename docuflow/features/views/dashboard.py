"""
Dashboard summary for signed-in users.
"""
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from docuflow.features.views.schemas import BarDatum, DashboardSummary, RecentDocument

if TYPE_CHECKING:
    from docuflow.core.state import ConsoleState


RECENT_LOG_COUNT = 10
RECENT_DOCUMENT_COUNT = 5
NO_ACTIVITY_LABEL = "No activity yet"

# (seconds per unit, unit name), largest first
_UNITS = (
    (31536000, "year"),
    (2592000, "month"),
    (86400, "day"),
    (3600, "hour"),
    (60, "minute"),
)


def time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """Coarse relative label, e.g. ``3 days ago``. A unit is used once more than one has passed."""
    now = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    seconds = (now - moment).total_seconds()
    for unit_seconds, unit in _UNITS:
        interval = seconds / unit_seconds
        if interval > 1:
            count = int(interval)
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "a few seconds ago"


def _sorted_bars(bars: List[BarDatum]) -> List[BarDatum]:
    return sorted(bars, key=lambda bar: bar.value, reverse=True)


def build_dashboard(state: "ConsoleState", now: Optional[datetime] = None) -> DashboardSummary:
    documents = state.documents.all()
    by_category = _sorted_bars([
        BarDatum(label=category.name, value=sum(1 for d in documents if d.category_id == category.id))
        for category in state.categories
    ])
    by_department = _sorted_bars([
        BarDatum(label=department.name, value=sum(1 for d in documents if d.issuing_department_id == department.id))
        for department in state.departments
    ])
    recent_documents = sorted(documents, key=lambda d: d.created_at, reverse=True)[:RECENT_DOCUMENT_COUNT]
    last = state.activity.last_activity()
    return DashboardSummary(
        total_documents=len(documents),
        total_categories=len(state.categories),
        total_departments=len(state.departments),
        last_activity=time_ago(last.timestamp, now) if last else NO_ACTIVITY_LABEL,
        documents_by_category=by_category,
        documents_by_department=by_department,
        recent_activity=state.activity.entries[:RECENT_LOG_COUNT],
        recent_documents=[
            RecentDocument(
                id=d.id,
                title=d.title,
                department_name=state.departments.name_of(d.issuing_department_id),
                created_at=d.created_at,
            )
            for d in recent_documents
        ],
    )
