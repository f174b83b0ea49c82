"""Dashboard statistics: revenue, month-over-month growth and customer counts."""
from __future__ import annotations

import itertools
import logging
import threading
from collections import OrderedDict
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from backend.app.core.config import settings
from backend.app.models.business import BusinessCategory
from backend.app.services.category_selector import (
    CustomerCountSource,
    RevenueSource,
    select_revenue_source,
)
from backend.app.services.revenue_records import StatsFetchError, fetch_revenue_rows

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
PCT_Q = Decimal("0.01")

# Growth reported when last month had no revenue but this month has some.
NEW_GROWTH_PERCENT = Decimal("100")


# ── Records ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RevenueRecord:
    created_at: datetime | None
    amount: Decimal
    customer_key: str | None = None


def _as_aware(value: datetime) -> datetime:
    """Naive timestamps coming back from the database are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            logger.debug("Unparseable revenue timestamp %r", value)
            return None
    return _as_aware(value)


def normalize_amount(row: Mapping[str, Any], amount_fields: Iterable[str]) -> Decimal:
    """First non-null amount field in priority order.

    Non-numeric, non-finite and negative values count as zero.
    """
    for field in amount_fields:
        value = row.get(field)
        if value is None:
            continue
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            logger.debug("Non-numeric %s=%r treated as zero", field, value)
            return ZERO
        if not amount.is_finite() or amount < ZERO:
            logger.debug("Unusable %s=%r treated as zero", field, value)
            return ZERO
        return amount
    return ZERO


def normalize_record(row: Mapping[str, Any], source: RevenueSource) -> RevenueRecord:
    customer_key = None
    if source.identifier_field:
        raw = row.get(source.identifier_field)
        if raw is not None and str(raw).strip():
            customer_key = str(raw).strip()
    return RevenueRecord(
        created_at=_parse_timestamp(row.get("created_at")),
        amount=normalize_amount(row, source.amount_fields),
        customer_key=customer_key,
    )


# ── Calendar windows ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MonthWindow:
    """Calendar month as the half-open interval ``[start, end)``."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime | None) -> bool:
        return moment is not None and self.start <= moment < self.end


def resolve_timezone(tz: tzinfo | str | None) -> tzinfo:
    if tz is None:
        return ZoneInfo(settings.REPORT_TIMEZONE)
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def _month_start(year: int, month: int, tz: tzinfo) -> datetime:
    while month < 1:
        month += 12
        year -= 1
    while month > 12:
        month -= 12
        year += 1
    return datetime(year, month, 1, tzinfo=tz)


def month_windows(now: datetime, tz: tzinfo) -> tuple[MonthWindow, MonthWindow]:
    """Current and previous calendar month around *now*, cut in *tz*."""
    local = _as_aware(now).astimezone(tz)
    current_start = _month_start(local.year, local.month, tz)
    return (
        MonthWindow(current_start, _month_start(local.year, local.month + 1, tz)),
        MonthWindow(_month_start(local.year, local.month - 1, tz), current_start),
    )


# ── Reduction ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class StatsSummary:
    total_revenue: Decimal
    monthly_revenue: Decimal
    total_transactions: int
    monthly_transactions: int
    total_customers: int
    revenue_growth_percent: Decimal

    @classmethod
    def zero(cls) -> StatsSummary:
        return cls(ZERO, ZERO, 0, 0, 0, ZERO.quantize(PCT_Q))

    def as_dict(self) -> dict[str, object]:
        return {
            "total_revenue": str(self.total_revenue),
            "monthly_revenue": str(self.monthly_revenue),
            "total_transactions": self.total_transactions,
            "monthly_transactions": self.monthly_transactions,
            "total_customers": self.total_customers,
            "revenue_growth_percent": str(self.revenue_growth_percent),
        }


@dataclass(frozen=True)
class StatsBreakdown:
    """Every quantity the reduction produces, including the internal ones.

    ``distinct_customers`` and ``active_entities`` measure different things
    and are never substituted for one another; :meth:`to_summary` picks the
    one the business category reports.
    """

    total_revenue: Decimal
    monthly_revenue: Decimal
    last_month_revenue: Decimal
    total_transactions: int
    monthly_transactions: int
    distinct_customers: int
    active_entities: int | None

    @property
    def revenue_growth_percent(self) -> Decimal:
        return revenue_growth(self.monthly_revenue, self.last_month_revenue)

    def to_summary(self, customer_count: CustomerCountSource) -> StatsSummary:
        if customer_count == CustomerCountSource.DISTINCT_IDENTIFIER:
            customers = self.distinct_customers
        else:
            customers = self.active_entities or 0
        return StatsSummary(
            total_revenue=self.total_revenue,
            monthly_revenue=self.monthly_revenue,
            total_transactions=self.total_transactions,
            monthly_transactions=self.monthly_transactions,
            total_customers=customers,
            revenue_growth_percent=self.revenue_growth_percent,
        )


def revenue_growth(monthly: Decimal, last_month: Decimal) -> Decimal:
    """Month-over-month growth in percent, rounded to two places."""
    if last_month > ZERO:
        growth = (monthly - last_month) / last_month * 100
        return growth.quantize(PCT_Q, rounding=ROUND_HALF_UP)
    if monthly > ZERO:
        return NEW_GROWTH_PERCENT.quantize(PCT_Q)
    return ZERO.quantize(PCT_Q)


def compute_breakdown(
    records: Iterable[RevenueRecord],
    now: datetime,
    tz: tzinfo,
    active_entities: int | None = None,
) -> StatsBreakdown:
    current, previous = month_windows(now, tz)

    total = monthly = last_month = ZERO
    total_count = monthly_count = 0
    customers: set[str] = set()

    for record in records:
        total += record.amount
        total_count += 1
        if current.contains(record.created_at):
            monthly += record.amount
            monthly_count += 1
        elif previous.contains(record.created_at):
            last_month += record.amount
        if record.customer_key:
            customers.add(record.customer_key)

    return StatsBreakdown(
        total_revenue=total,
        monthly_revenue=monthly,
        last_month_revenue=last_month,
        total_transactions=total_count,
        monthly_transactions=monthly_count,
        distinct_customers=len(customers),
        active_entities=active_entities,
    )


def summarize(
    records: Iterable[RevenueRecord],
    now: datetime,
    tz: tzinfo,
    customer_count: CustomerCountSource = CustomerCountSource.DISTINCT_IDENTIFIER,
    active_entities: int | None = None,
) -> StatsSummary:
    """Reduce normalized records into the dashboard summary."""
    return compute_breakdown(records, now, tz, active_entities).to_summary(customer_count)


def get_dashboard_stats(
    db: Session,
    business_id: UUID,
    category: BusinessCategory | str | None,
    now: datetime | None = None,
    tz: tzinfo | str | None = None,
    timeout: float | None = None,
) -> StatsSummary:
    """Fetch and reduce a business's revenue records.

    A failed or timed-out fetch is logged and yields an all-zero summary;
    it never raises to the caller.
    """
    now = now or datetime.now(timezone.utc)
    zone = resolve_timezone(tz)
    if timeout is None:
        timeout = settings.STATS_FETCH_TIMEOUT_SECONDS
    source = select_revenue_source(category)

    try:
        rows, active = fetch_revenue_rows(db, business_id, source, timeout=timeout)
    except StatsFetchError:
        logger.exception("Error fetching dashboard stats for business %s", business_id)
        return StatsSummary.zero()

    records = [normalize_record(row, source) for row in rows]
    return summarize(records, now, zone, source.customer_count, active)


# ── Superseded requests ──────────────────────────────────────────────────────


class StatsRequestTracker:
    """Hands out increasing tickets per selection key.

    Only the result of the newest ticket for a key may be published; a
    response for a business the user has since navigated away from is
    dropped instead of overwriting the newer one.  At most *capacity* keys
    are remembered; the least recently issued key is forgotten first, and
    its in-flight tickets are then treated as stale.
    """

    def __init__(self, capacity: int | None = None) -> None:
        self.capacity = capacity or settings.STATS_SESSION_CAPACITY
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._latest: OrderedDict[str, int] = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)

    def issue(self, key: str) -> int:
        with self._lock:
            ticket = next(self._counter)
            self._latest[key] = ticket
            self._latest.move_to_end(key)
            while len(self._latest) > self.capacity:
                self._latest.popitem(last=False)
            return ticket

    def is_current(self, key: str, ticket: int) -> bool:
        with self._lock:
            return self._latest.get(key) == ticket


class DashboardStatsBoard:
    """Latest accepted summary per selection key, bounded like its tracker."""

    def __init__(self, tracker: StatsRequestTracker | None = None) -> None:
        self.tracker = tracker or StatsRequestTracker()
        self._lock = threading.Lock()
        self._summaries: OrderedDict[str, tuple[str, StatsSummary]] = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._summaries)

    def publish(self, key: str, ticket: int, business_id: str, summary: StatsSummary) -> bool:
        with self._lock:
            if not self.tracker.is_current(key, ticket):
                logger.info(
                    "Discarding stale dashboard stats for business %s (ticket %d)",
                    business_id, ticket,
                )
                return False
            self._summaries[key] = (business_id, summary)
            self._summaries.move_to_end(key)
            while len(self._summaries) > self.tracker.capacity:
                self._summaries.popitem(last=False)
            return True

    def refresh(
        self, key: str, business_id: str, load: Callable[[], StatsSummary],
    ) -> tuple[int, StatsSummary, bool]:
        """Run *load* under a fresh ticket; returns ``(ticket, summary, accepted)``."""
        ticket = self.tracker.issue(key)
        summary = load()
        return ticket, summary, self.publish(key, ticket, business_id, summary)

    def current(self, key: str) -> tuple[str | None, StatsSummary]:
        with self._lock:
            business_id, summary = self._summaries.get(key, (None, StatsSummary.zero()))
        return business_id, summary
