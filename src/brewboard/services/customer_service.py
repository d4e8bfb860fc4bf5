"""
Customer Service Metrics
========================
Seeded customer acquisition, retention and satisfaction figures, plus
the negative-feedback triage queue.

Segment Model:
- Customers are split by gender (Male / Female) and six age groups
- New customers per day: (18 + 6*age_idx + noise*22) * segment weight
- Segment weight: gender multiplier (1.04 male, 0.98 female) times
  age multiplier (0.9 + 0.05*age_idx)
- Retention base rate: 0.55 + gender lift + age lift + noise, kept
  within 0.38-0.92

Period Comparison:
- Every figure is computed for the selected reporting range and, where
  a trend is shown, for the previous range of equal length

Feedback Triage:
- Priority comes from how long an item has been open:
  >= 14 days Critical, >= 7 High, >= 3 Medium, otherwise Low
- The queue is sorted by days open, oldest first
"""

import math
import uuid
from dataclasses import dataclass, asdict
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

import pandas as pd

from brewboard.config import FeedbackConfig
from brewboard.services.calendar_ranges import (
    PeriodSelection,
    TimeRange,
    iter_days,
    previous_range,
    reporting_range,
)
from brewboard.services.storage import LocalStore
from brewboard.services.synthetic import segment_noise, round_half_up, clamp
from brewboard.utils.constants import (
    AGE_GROUPS,
    DEMAND_CITIES,
    FEEDBACK_KEY,
    FEEDBACK_TYPES,
    GENDERS,
    RANKED_PRODUCTS,
    SEED_FEEDBACK,
)
from brewboard.utils.logger import get_logger, log_frame
from brewboard.utils.validators import ValidationResult

logger = get_logger(__name__)

ALL = "All"


# =============================================================================
# SEGMENT MODEL
# =============================================================================

def segment_weight(gender: str, age_idx: int) -> float:
    g_mul = 1.04 if gender == "Male" else 0.98
    a_mul = 0.9 + age_idx * 0.05
    return g_mul * a_mul


def daily_new(d: date, gender: str, age_idx: int) -> int:
    """New customers acquired on ``d`` for one segment"""
    base = 18 + age_idx * 6
    n = base + segment_noise(d.year, d.month - 1, d.day, 3 + age_idx) * 22
    return max(0, round_half_up(n * segment_weight(gender, age_idx)))


def retention_base(gender: str, age_idx: int, d: date) -> float:
    """Baseline retention probability for a segment on ``d``"""
    b = (
        0.55
        + (0.03 if gender == "Male" else 0.02)
        + min(0.12, age_idx * 0.015)
        + (segment_noise(d.year, d.month - 1, d.day, 19 + age_idx) - 0.5) * 0.08
    )
    return clamp(b, 0.38, 0.92)


@dataclass(frozen=True)
class SegmentFilter:
    """Gender and age-group filters; "All" disables a filter"""
    gender: str = ALL
    age_group: str = ALL

    def __post_init__(self):
        if self.gender != ALL and self.gender not in GENDERS:
            raise ValueError(f"Unknown gender filter: {self.gender}")
        if self.age_group != ALL and self.age_group not in AGE_GROUPS:
            raise ValueError(f"Unknown age group filter: {self.age_group}")

    @property
    def genders(self) -> List[str]:
        return list(GENDERS) if self.gender == ALL else [self.gender]

    @property
    def ages(self) -> List[str]:
        return list(AGE_GROUPS) if self.age_group == ALL else [self.age_group]

    def includes_age(self, group: str) -> bool:
        return self.age_group == ALL or self.age_group == group

    def includes_gender(self, gender: str) -> bool:
        return self.gender == ALL or self.gender == gender


class CustomerMetrics:
    """
    All customer figures for one period and segment selection.

    Usage
    -----
    >>> metrics = CustomerMetrics(selection, SegmentFilter(gender="Female"))
    >>> metrics.new_customers, metrics.change_pct
    >>> metrics.new_by_age()
    """

    def __init__(
        self,
        selection: PeriodSelection,
        segment: Optional[SegmentFilter] = None,
        today: Optional[date] = None
    ):
        self.selection = selection
        self.segment = segment or SegmentFilter()
        self.year = selection.resolved_year(today)
        self.month0 = selection.effective_month - 1
        self.range = reporting_range(selection, today)
        self.prev_range = previous_range(self.range)

        self.new_customers = self._sum_new(self.range)
        self.new_customers_prev = self._sum_new(self.prev_range)

    def _sum_new(self, window: TimeRange) -> int:
        days = iter_days(window.start, window.end)
        total = 0
        for g in self.segment.genders:
            for ag in self.segment.ages:
                idx = AGE_GROUPS.index(ag)
                total += sum(daily_new(d, g, idx) for d in days)
        return total

    # ------------------------------------------------------------------
    # Acquisition
    # ------------------------------------------------------------------

    @property
    def delta(self) -> int:
        return self.new_customers - self.new_customers_prev

    @property
    def change_pct(self) -> float:
        """Percent change vs the previous period (0 when it had no customers)"""
        if self.new_customers_prev <= 0:
            return 0.0
        return self.delta / self.new_customers_prev * 100

    def gender_breakdown(self) -> Dict[str, int]:
        days = iter_days(self.range.start, self.range.end)
        by = {g: 0 for g in GENDERS}
        for g in GENDERS:
            if not self.segment.includes_gender(g):
                continue
            for ag in self.segment.ages:
                idx = AGE_GROUPS.index(ag)
                by[g] += sum(daily_new(d, g, idx) for d in days)
        return by

    def new_by_age(self) -> pd.DataFrame:
        """New customers per age group (0 for groups filtered out)"""
        days = iter_days(self.range.start, self.range.end)
        rows = []
        for idx, ag in enumerate(AGE_GROUPS):
            total = 0
            if self.segment.includes_age(ag):
                for g in GENDERS:
                    if self.segment.includes_gender(g):
                        total += sum(daily_new(d, g, idx) for d in days)
            rows.append({'group': ag, 'customers': total})
        return pd.DataFrame(rows, columns=['group', 'customers'])

    # ------------------------------------------------------------------
    # Products, satisfaction and retention
    # ------------------------------------------------------------------

    def product_ranking(self) -> pd.DataFrame:
        """Product scores scaled by segment traffic, highest first"""
        intensity = max(1, self.new_customers / max(1, self.range.days))
        rows = []
        for idx, product in enumerate(RANKED_PRODUCTS):
            base = 50 + idx * 12
            s = (
                base
                + intensity * 0.8
                + (segment_noise(self.year, self.month0, self.selection.week + idx, 7) - 0.5) * 30
            )
            rows.append({'product': product, 'score': round_half_up(clamp(s, 10, 200))})
        df = pd.DataFrame(rows, columns=['product', 'score'])
        return df.sort_values('score', ascending=False, kind='stable').reset_index(drop=True)

    def satisfaction_by_age(self) -> pd.DataFrame:
        rows = []
        for idx, ag in enumerate(AGE_GROUPS):
            if not self.segment.includes_age(ag):
                rows.append({'group': ag, 'Male': 0, 'Female': 0})
                continue
            male = clamp(72 + idx * 2 + (segment_noise(self.year, self.month0, idx + 5, 11) - 0.5) * 12, 40, 98)
            female = clamp(74 + idx * 1.8 + (segment_noise(self.year, self.month0, idx + 8, 13) - 0.5) * 12, 40, 98)
            rows.append({'group': ag, 'Male': round_half_up(male), 'Female': round_half_up(female)})
        return pd.DataFrame(rows, columns=['group', 'Male', 'Female'])

    def retention_rate(self, gender: str) -> int:
        """
        Retention % for a gender over the previous period, nudged by
        period-over-period growth in new customers.
        """
        growth_weight = 12 if gender == "Male" else 10
        prev_days = iter_days(self.prev_range.start, self.prev_range.end)
        ages = self.segment.ages

        rates = [
            retention_base(gender, AGE_GROUPS.index(ag), d)
            for ag in ages
            for d in prev_days
        ]
        base_rate = sum(rates) / max(1, len(ages) * len(prev_days))
        growth = self.new_customers / self.new_customers_prev if self.new_customers_prev > 0 else 1
        rate = clamp(base_rate * 100 + (growth - 1) * growth_weight, 35, 95)
        return round_half_up(rate)

    def retention_by_age(self) -> pd.DataFrame:
        rows = []
        for idx, ag in enumerate(AGE_GROUPS):
            if not self.segment.includes_age(ag):
                rows.append({'group': ag, 'Male': 0, 'Female': 0})
                continue
            base_m = retention_base("Male", idx, self.range.start)
            base_f = retention_base("Female", idx, self.range.start)
            adj_m = clamp(base_m * 100 + (segment_noise(self.year, self.month0, idx + 21, 17) - 0.5) * 8, 35, 95)
            adj_f = clamp(base_f * 100 + (segment_noise(self.year, self.month0, idx + 31, 19) - 0.5) * 8, 35, 95)
            rows.append({'group': ag, 'Male': round_half_up(adj_m), 'Female': round_half_up(adj_f)})
        return pd.DataFrame(rows, columns=['group', 'Male', 'Female'])

    def demand_by_city(self) -> pd.DataFrame:
        """Relative demand index (10-99) per city"""
        bias = 6 if self.segment.gender == "Male" else -4 if self.segment.gender == "Female" else 0
        rows = []
        for i, city in enumerate(DEMAND_CITIES):
            d = 50 + (segment_noise(self.year, self.month0, self.selection.week + i, 41) - 0.5) * 50 + bias
            rows.append({**city, 'demand': round_half_up(clamp(d, 10, 99))})
        return pd.DataFrame(rows, columns=['city', 'lat', 'lon', 'demand'])

    def summary(self) -> Dict[str, Any]:
        return {
            'range': self.range.label,
            'new_customers': self.new_customers,
            'previous': self.new_customers_prev,
            'change_pct': self.change_pct,
            'retention_male': self.retention_rate("Male"),
            'retention_female': self.retention_rate("Female"),
        }


# =============================================================================
# FEEDBACK TRIAGE
# =============================================================================

@dataclass
class Feedback:
    id: str
    name: str
    phone: str
    type: str
    description: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['created_at'] = self.created_at.isoformat()
        return data


def priority_from_aging(days_open: int, config: Optional[FeedbackConfig] = None) -> str:
    config = config or FeedbackConfig()
    for label, threshold in config.priority_thresholds():
        if days_open >= threshold:
            return label
    return "Low"


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from ``earlier`` to ``later``, never negative"""
    return max(0, math.floor((later - earlier).total_seconds() / 86400))


def seed_feedback(now: Optional[datetime] = None) -> List[Feedback]:
    now = now or datetime.now()
    return [
        Feedback(
            id=row['id'],
            name=row['name'],
            phone=row['phone'],
            type=row['type'],
            description=row['description'],
            created_at=now - timedelta(days=row['days_ago']),
        )
        for row in SEED_FEEDBACK
    ]


def _in_range(moment: datetime, window: TimeRange) -> bool:
    start = datetime.combine(window.start, datetime.min.time())
    end = datetime.combine(window.end + timedelta(days=1), datetime.min.time())
    return start <= moment <= end


TRIAGE_COLUMNS = ['id', 'name', 'phone', 'type', 'description', 'created_at', 'days_open', 'priority']


def triage(
    feedbacks: List[Feedback],
    window: TimeRange,
    type_filter: str = ALL,
    priority_filter: str = ALL,
    query: str = "",
    now: Optional[datetime] = None,
    config: Optional[FeedbackConfig] = None
) -> pd.DataFrame:
    """
    Filter and prioritise feedback for the triage table.

    Parameters
    ----------
    feedbacks : list of Feedback
        Open feedback items
    window : TimeRange
        Reporting range; items created from its start through the end of
        its last day are kept
    type_filter, priority_filter : str
        "All" or a specific type / priority
    query : str
        Case-insensitive substring matched against name, phone and
        description
    now : datetime, optional
        Reference time for days-open

    Returns
    -------
    pd.DataFrame
        Matching rows sorted by days_open, oldest first
    """
    now = now or datetime.now()
    q = (query or "").strip().lower()
    rows = []
    for f in feedbacks:
        if not _in_range(f.created_at, window):
            continue
        days_open = days_between(now, f.created_at)
        priority = priority_from_aging(days_open, config)
        if type_filter != ALL and f.type != type_filter:
            continue
        if priority_filter != ALL and priority != priority_filter:
            continue
        if q and not (q in f.name.lower() or q in f.phone.lower() or q in f.description.lower()):
            continue
        rows.append({**asdict(f), 'days_open': days_open, 'priority': priority})

    df = pd.DataFrame(rows, columns=TRIAGE_COLUMNS)
    log_frame(logger, "Feedback triage", df)
    if df.empty:
        return df
    return df.sort_values('days_open', ascending=False, kind='stable').reset_index(drop=True)


def priority_counts(triaged: pd.DataFrame) -> Dict[str, int]:
    counts = triaged['priority'].value_counts() if not triaged.empty else pd.Series(dtype='int64')
    return {p: int(counts.get(p, 0)) for p in ["Critical", "High", "Medium", "Low"]}


class FeedbackBook:
    """
    Seed feedback plus items logged from the dashboard.

    The seed rows are always placed relative to "now"; logged items and
    resolved ids are persisted in the local store.
    """

    def __init__(self, store: LocalStore, now: Optional[datetime] = None):
        self.store = store
        self.now = now or datetime.now()

    def _state(self) -> Dict[str, list]:
        raw = self.store.load_json(FEEDBACK_KEY, default={})
        if not isinstance(raw, dict):
            logger.warning("Stored feedback state is not an object; starting fresh")
            raw = {}
        logged = raw.get('logged', [])
        if not isinstance(logged, list):
            logger.warning("Stored logged feedback is not a list; ignoring it")
            logged = []
        resolved = raw.get('resolved', [])
        if not isinstance(resolved, list):
            logger.warning("Stored resolved feedback ids are not a list; ignoring them")
            resolved = []
        return {
            'logged': [row for row in logged if isinstance(row, dict)],
            'resolved': [fid for fid in resolved if isinstance(fid, str)],
        }

    def _save(self, state: Dict[str, list]) -> None:
        self.store.save_json(FEEDBACK_KEY, state)

    def open_items(self) -> List[Feedback]:
        state = self._state()
        resolved = set(state['resolved'])
        items = seed_feedback(self.now)
        for row in state['logged']:
            try:
                items.append(Feedback(
                    id=str(row['id']),
                    name=str(row['name']),
                    phone=str(row['phone']),
                    type=str(row['type']),
                    description=str(row['description']),
                    created_at=datetime.fromisoformat(row['created_at']),
                ))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed feedback entry: {e}")
        return [f for f in items if f.id not in resolved]

    def log(self, name: str, phone: str, type_: str, description: str) -> ValidationResult:
        """Record a new complaint; name, type and description are required"""
        result = ValidationResult()
        name = (name or "").strip()
        description = (description or "").strip()
        if not name:
            result.add_error("Customer name is required", "name")
        if type_ not in FEEDBACK_TYPES:
            result.add_error("Choose a feedback type", "type")
        if not description:
            result.add_error("Describe the issue", "description")
        if not result.is_valid:
            return result

        item = Feedback(
            id=uuid.uuid4().hex[:8],
            name=name,
            phone=(phone or "").strip(),
            type=type_,
            description=description,
            created_at=datetime.now(),
        )
        state = self._state()
        state['logged'].append(item.to_dict())
        self._save(state)
        logger.info(f"Feedback logged: {item.type} from {item.name}")
        result.info['feedback'] = item
        return result

    def resolve(self, feedback_id: str) -> None:
        state = self._state()
        if feedback_id not in state['resolved']:
            state['resolved'].append(feedback_id)
            self._save(state)
            logger.info(f"Feedback {feedback_id} resolved")
