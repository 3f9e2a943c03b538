from pydantic import BaseModel
from typing import Optional
from app.modules.enhance.quota import DailyUsage


class PlanInfo(BaseModel):
    name: str
    token_limit: int
    price_per_month: Optional[float] = None


class UserProfile(BaseModel):
    id: str
    email: Optional[str] = None
    tokens_used_today: int = 0
    last_usage_date: Optional[str] = None
    plan: PlanInfo

    @classmethod
    def from_row(cls, row: dict) -> "UserProfile":
        """Build from a users row joined with subscription_plans."""
        return cls(
            id=row["id"],
            email=row.get("email"),
            tokens_used_today=row.get("tokens_used_today") or 0,
            last_usage_date=row.get("last_usage_date"),
            plan=PlanInfo(**row["subscription_plans"]),
        )

    def daily_usage(self) -> DailyUsage:
        return DailyUsage(
            tokens_used_today=self.tokens_used_today,
            last_usage_date=self.last_usage_date,
            daily_limit=self.plan.token_limit,
            plan_name=self.plan.name,
        )
