"""
Daily token quota accounting.

A user's usage counter belongs to one quota window, the UTC calendar day stored
in ``last_usage_date``. A stored date other than today means the counter is
stale and counts as zero. Each request is capped by whatever is left of the
daily limit, and is refused outright when too little is left to produce a
useful completion.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

LIMIT_EXCEEDED = "limit_exceeded"
INSUFFICIENT_TOKENS = "insufficient_tokens"


class DailyUsage(BaseModel):
    tokens_used_today: int = 0
    last_usage_date: Optional[str] = None
    daily_limit: int
    plan_name: str


class QuotaDecision(BaseModel):
    allowed: bool
    tokens_used_today: int
    tokens_remaining: int
    max_tokens: int = 0
    reason: Optional[str] = None


class UsageUpdate(BaseModel):
    tokens_used_today: int
    tokens_remaining_today: int


def utc_today(now: Optional[datetime] = None) -> str:
    """Return the current quota window as YYYY-MM-DD (UTC)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date().isoformat()


def resets_at(today: str) -> str:
    return f"{today}T23:59:59Z"


def needs_reset(usage: DailyUsage, today: str) -> bool:
    return usage.last_usage_date != today


def effective_tokens_used(usage: DailyUsage, today: str) -> int:
    if needs_reset(usage, today):
        return 0
    return usage.tokens_used_today or 0


def plan_request(
    usage: DailyUsage,
    today: str,
    max_per_request: int = 1500,
    min_per_request: int = 50,
) -> QuotaDecision:
    """Decide whether a request may run and how many tokens it may consume."""
    used = effective_tokens_used(usage, today)
    remaining = usage.daily_limit - used

    if used >= usage.daily_limit:
        return QuotaDecision(
            allowed=False,
            tokens_used_today=used,
            tokens_remaining=max(0, remaining),
            reason=LIMIT_EXCEEDED,
        )

    max_tokens = min(max_per_request, remaining)
    if max_tokens < min_per_request:
        return QuotaDecision(
            allowed=False,
            tokens_used_today=used,
            tokens_remaining=remaining,
            reason=INSUFFICIENT_TOKENS,
        )

    return QuotaDecision(
        allowed=True,
        tokens_used_today=used,
        tokens_remaining=remaining,
        max_tokens=max_tokens,
    )


def apply_usage(tokens_used_before: int, tokens_consumed: int, daily_limit: int) -> UsageUpdate:
    # The completion may overshoot the remaining budget; the total is kept as is.
    new_total = tokens_used_before + tokens_consumed
    return UsageUpdate(
        tokens_used_today=new_total,
        tokens_remaining_today=max(0, daily_limit - new_total),
    )
