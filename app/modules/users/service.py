from supabase import Client
from app.config import settings
from app.modules.users.schemas import UserProfile
from app.modules.enhance.quota import utc_today
from typing import Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = (
    "id, email, tokens_used_today, last_usage_date, "
    "subscription_plans(name, token_limit, price_per_month)"
)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get the users row joined with its plan, or None if no row exists yet"""
        result = self.supabase.table("users")\
            .select(PROFILE_COLUMNS)\
            .eq("id", user_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            return None
        return UserProfile.from_row(result.data)

    def ensure_user_record(self, user_id: str, email: Optional[str]) -> bool:
        """Create the users row on the free plan unless it exists. Returns True if created."""
        try:
            existing = self.supabase.table("users")\
                .select("id")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
            if existing and existing.data:
                return False

            plan_result = self.supabase.table("subscription_plans")\
                .select("id")\
                .eq("name", settings.free_plan_name)\
                .maybe_single()\
                .execute()
            if not plan_result or not plan_result.data:
                logger.error(f"Subscription plan '{settings.free_plan_name}' not found")
                raise HTTPException(status_code=500, detail="Failed to get free plan")

            logger.info(f"Creating user record for: {user_id}")
            result = self.supabase.table("users").insert({
                "id": user_id,
                "email": email,
                "plan_id": plan_result.data["id"],
                "tokens_used_today": 0,
                "last_usage_date": utc_today(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create user profile")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to create user record for {user_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create user profile")

    def _update_usage(self, user_id: str, tokens_used_today: int, today: str) -> bool:
        try:
            self.supabase.table("users")\
                .update({
                    "tokens_used_today": tokens_used_today,
                    "last_usage_date": today,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                })\
                .eq("id", user_id)\
                .execute()
            return True
        except Exception as e:
            logger.error(f"Token usage update error for {user_id}: {str(e)}")
            return False

    def reset_daily_usage(self, user_id: str, today: str) -> bool:
        """Start a new quota window. Failures are logged, not raised."""
        return self._update_usage(user_id, 0, today)

    def record_usage(self, user_id: str, tokens_used_today: int, today: str) -> bool:
        """Persist the new daily total. Failures are logged, not raised."""
        return self._update_usage(user_id, tokens_used_today, today)
