from __future__ import annotations

"""Persistence bridge: turns completed study seconds into ledger hours."""

import logging
from typing import Callable, Optional

from .models import CommitResult, utc_today_iso
from .stores import LedgerError, StudyTimeLedger

logger = logging.getLogger(__name__)

DateProvider = Callable[[], str]


def seconds_to_hours(seconds: int) -> float:
    """Hours to one decimal, halves rounded up (900s is 0.3h, 179s is 0.0h)."""
    tenths = (max(0, int(seconds)) * 10 + 1800) // 3600
    return tenths / 10


class PersistenceBridge:
    def __init__(self, ledger: StudyTimeLedger, date_provider: Optional[DateProvider] = None) -> None:
        self._ledger = ledger
        self._date_provider: DateProvider = date_provider or utc_today_iso

    def today(self) -> str:
        return self._date_provider()

    def commit(self, subject: str, date_iso: str, seconds: int) -> CommitResult:
        """Add ``seconds`` (as hours, one decimal) for ``subject`` on ``date_iso``.

        Never raises on ledger failure: the error is logged and returned in
        the result so the caller can surface it.
        """
        hours = seconds_to_hours(seconds)
        if hours <= 0 or not subject:
            logger.debug("skipping commit: subject=%r seconds=%s", subject, seconds)
            return CommitResult(subject=subject, date=date_iso, seconds=seconds, hours=hours, committed=False)
        try:
            self._ledger.add_study_time(subject, date_iso, hours)
        except LedgerError as e:
            logger.warning(
                "study time commit failed: %s",
                e,
                extra={"_json_subject": subject, "_json_date": date_iso, "_json_hours": hours},
            )
            return CommitResult(
                subject=subject, date=date_iso, seconds=seconds, hours=hours, committed=False, error=str(e)
            )
        logger.info(
            "study time committed",
            extra={"_json_subject": subject, "_json_date": date_iso, "_json_hours": hours},
        )
        return CommitResult(subject=subject, date=date_iso, seconds=seconds, hours=hours, committed=True)


__all__ = ["PersistenceBridge", "seconds_to_hours"]
