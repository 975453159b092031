"""Domain models for power-up scanning"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from powerup_challenge.exceptions import InvalidDateRangeError
from powerup_challenge.utils.dates import ensure_utc, format_for_query, format_display


@dataclass(frozen=True)
class DateRange:
    """Exact challenge window, both bounds inclusive"""
    start_date: datetime
    end_date: datetime

    def __post_init__(self):
        start = ensure_utc(self.start_date)
        end = ensure_utc(self.end_date)
        if start >= end:
            raise InvalidDateRangeError(
                f"Date range end ({format_display(end)}) must be after its start ({format_display(start)})"
            )
        object.__setattr__(self, 'start_date', start)
        object.__setattr__(self, 'end_date', end)

    def contains(self, instant: datetime) -> bool:
        return self.start_date <= instant <= self.end_date


@dataclass(frozen=True)
class ExtendedDateRange:
    """Date range padded on both ends, used for the API query and the early exit"""
    from_block: str
    to_block: str
    from_block_date: datetime
    to_block_date: datetime

    @classmethod
    def from_range(cls, date_range: DateRange, margin_hours: int) -> 'ExtendedDateRange':
        margin = timedelta(hours=margin_hours)
        from_block_date = date_range.start_date - margin
        to_block_date = date_range.end_date + margin
        return cls(
            from_block=format_for_query(from_block_date),
            to_block=format_for_query(to_block_date),
            from_block_date=from_block_date,
            to_block_date=to_block_date
        )


class PowerUpTransaction(BaseModel):
    """A validated power up inside the exact date range"""
    model_config = ConfigDict(frozen=True)

    date: str    # YYYY-MM-DD HH:MM:SS UTC
    amount: str  # HIVE, three decimals
    tx_id: str


@dataclass
class PowerUpResult:
    """Resolved power-up outcome for one user and one date range"""
    has_power_up: bool
    power_up_date: Optional[str] = None
    power_up_amount: Optional[str] = None
    power_up_tx_id: Optional[str] = None
    power_up_transactions: List[PowerUpTransaction] = field(default_factory=list)
    total_power_up: Optional[str] = None
