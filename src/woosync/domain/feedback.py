"""When to ask the user for in-app feedback."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from woosync.domain.model import FeedbackStatus, FeedbackType

if TYPE_CHECKING:
    from woosync.domain.model import GeneralAppSettings

INSTALLATION_AGE_DAYS = 90
LAST_FEEDBACK_AGE_DAYS = 180


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _days_between(earlier: datetime, later: datetime) -> int:
    return max((_aware(later) - _aware(earlier)).days, 0)


def feedback_card_visible(
    settings: GeneralAppSettings,
    feedback_type: FeedbackType,
    *,
    now: datetime | None = None,
) -> bool:
    """Decide whether the feedback card of ``feedback_type`` should be shown.

    The general card waits until the app has been installed for 90 days and, once
    answered or dismissed, for another 180 days. Feature cards are shown until the
    user reacts to them.
    """
    now = now or datetime.now(UTC)
    feedback = settings.feedbacks.get(feedback_type)

    if feedback_type is FeedbackType.PRODUCTS_VARIATIONS:
        return feedback is None or feedback.status is FeedbackStatus.PENDING

    if settings.installation_date is None:
        return False
    if _days_between(settings.installation_date, now) < INSTALLATION_AGE_DAYS:
        return False
    if feedback is None or feedback.status is FeedbackStatus.PENDING:
        return True
    if feedback.status_date is None:
        return True
    return _days_between(feedback.status_date, now) >= LAST_FEEDBACK_AGE_DAYS
