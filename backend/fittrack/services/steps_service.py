"""Daily step aggregation - one record per user per reporting day."""

import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fittrack.config import get_settings
from fittrack.errors import ValidationError
from fittrack.models import DailyStepRecord
from fittrack.models.daily_steps import DEFAULT_STEP_SOURCE
from fittrack.services.common import clamp_limit
from fittrack.timeutils import Instant, local_date, normalize_day, utcnow


logger = logging.getLogger(__name__)


class StepsService:
    """Store for daily step aggregates."""

    HISTORY_DEFAULT_LIMIT = 30

    def __init__(self, db: Session, offset_minutes: Optional[int] = None):
        self.db = db
        if offset_minutes is None:
            offset_minutes = get_settings().reporting_tz_offset_minutes
        self.offset_minutes = offset_minutes

    @staticmethod
    def _validate_step_count(step_count) -> int:
        if step_count is None or isinstance(step_count, bool):
            raise ValidationError("Valid steps count is required", field="steps")
        if isinstance(step_count, float) and step_count.is_integer():
            step_count = int(step_count)
        if not isinstance(step_count, int) or step_count < 0:
            raise ValidationError("Valid steps count is required", field="steps")
        return step_count

    def _find(self, user_id: int, day) -> Optional[DailyStepRecord]:
        return (
            self.db.query(DailyStepRecord)
            .filter(DailyStepRecord.user_id == user_id, DailyStepRecord.day == day)
            .first()
        )

    def record_steps(
        self,
        user_id: int,
        step_count: int,
        day: Instant = None,
        source: Optional[str] = None,
    ) -> DailyStepRecord:
        """
        Upsert the step count for a reporting day.

        The stored count only ever grows: readings of the phone's counter can
        arrive late, out of order or twice, so an update keeps
        ``max(existing, incoming)``. ``synced_at`` is refreshed on every call;
        ``source`` is overwritten when given and kept when omitted.
        """
        step_count = self._validate_step_count(step_count)
        target_day = normalize_day(day, self.offset_minutes)

        record = self._find(user_id, target_day)
        if record is None:
            record = DailyStepRecord(
                user_id=user_id,
                day=target_day,
                step_count=step_count,
                source=source or DEFAULT_STEP_SOURCE,
                synced_at=utcnow(),
            )
            try:
                with self.db.begin_nested():
                    self.db.add(record)
            except IntegrityError:
                # Another sync created the row first; fold into it
                record = self._find(user_id, target_day)
                if record is None:
                    raise
                logger.info("Step insert race for user %s on %s, retrying as update", user_id, target_day)
            else:
                self.db.commit()
                self.db.refresh(record)
                return record

        record.step_count = max(record.step_count or 0, step_count)
        if source:
            record.source = source
        record.synced_at = utcnow()
        self.db.commit()
        self.db.refresh(record)
        return record

    def get_history(
        self,
        user_id: int,
        start_day: Instant = None,
        end_day: Instant = None,
        limit: Optional[int] = HISTORY_DEFAULT_LIMIT,
    ) -> List[DailyStepRecord]:
        """Records newest day first; ``start_day`` and ``end_day`` are both inclusive."""
        limit = clamp_limit(limit, self.HISTORY_DEFAULT_LIMIT)
        query = self.db.query(DailyStepRecord).filter(DailyStepRecord.user_id == user_id)

        if start_day is not None:
            query = query.filter(DailyStepRecord.day >= normalize_day(start_day, self.offset_minutes))
        if end_day is not None:
            day_after = normalize_day(end_day, self.offset_minutes) + timedelta(days=1)
            query = query.filter(DailyStepRecord.day < day_after)

        return query.order_by(DailyStepRecord.day.desc()).limit(limit).all()

    def get_today(self, user_id: int) -> DailyStepRecord:
        """Today's record, or an unsaved zero placeholder."""
        today = normalize_day(None, self.offset_minutes)
        record = self._find(user_id, today)
        if record:
            return record
        return DailyStepRecord(user_id=user_id, day=today, step_count=0, source=None, synced_at=None)

    def summarize(self, user_id: int, days: int = 7) -> dict:
        """Totals over the last ``days`` reporting days, today included."""
        days = max(1, min(int(days), 366))
        today = normalize_day(None, self.offset_minutes)
        since = today - timedelta(days=days - 1)

        records = (
            self.db.query(DailyStepRecord)
            .filter(
                DailyStepRecord.user_id == user_id,
                DailyStepRecord.day >= since,
                DailyStepRecord.day <= today,
            )
            .all()
        )

        total = sum(r.step_count for r in records)
        best = max(records, key=lambda r: r.step_count, default=None)

        return {
            "period_days": days,
            "days_recorded": len(records),
            "total_steps": total,
            "average_steps": round(total / days, 1),
            "best_day": local_date(best.day, self.offset_minutes) if best else None,
            "best_steps": best.step_count if best else 0,
        }
