import logging
import openai
from openai import OpenAI
from supabase import Client
from fastapi import HTTPException
from typing import Optional, Tuple

from app.config import settings
from app.modules.enhance import quota
from app.modules.enhance.prompts import SYSTEM_PROMPT, build_prompt
from app.modules.enhance.schemas import EnhanceRequest, EnhanceResponse
from app.modules.users.service import UserService

logger = logging.getLogger(__name__)


class EnhanceService:
    def __init__(self, supabase: Client, llm: OpenAI):
        self.user_service = UserService(supabase)
        self.llm = llm

    def enhance(self, user_id: str, request: EnhanceRequest, today: Optional[str] = None) -> EnhanceResponse:
        """Check the daily quota, call the LLM, and record the tokens it consumed"""
        today = today or quota.utc_today()

        try:
            profile = self.user_service.get_profile(user_id)
        except Exception as e:
            logger.error(f"User fetch error for {user_id}: {str(e)}")
            profile = None
        if profile is None:
            raise HTTPException(status_code=500, detail="Failed to fetch user data")

        usage = profile.daily_usage()
        if quota.needs_reset(usage, today):
            logger.info(f"New quota window {today} for user {user_id}, resetting usage")
            self.user_service.reset_daily_usage(user_id, today)

        decision = quota.plan_request(
            usage,
            today,
            max_per_request=settings.max_tokens_per_request,
            min_per_request=settings.min_tokens_per_request,
        )
        if not decision.allowed:
            raise self._quota_error(decision, usage, today)

        enhanced_text, tokens_consumed = self._complete(
            build_prompt(request.text, request.enhancement_type),
            decision.max_tokens,
        )

        update = quota.apply_usage(decision.tokens_used_today, tokens_consumed, usage.daily_limit)
        self.user_service.record_usage(user_id, update.tokens_used_today, today)

        return EnhanceResponse(
            enhanced_text=enhanced_text,
            original_text=request.text,
            enhancement_type=request.enhancement_type,
            tokens_used_this_request=tokens_consumed,
            tokens_used_today=update.tokens_used_today,
            tokens_remaining_today=update.tokens_remaining_today,
            daily_limit=usage.daily_limit,
            resets_at=quota.resets_at(today),
        )

    def _quota_error(self, decision: quota.QuotaDecision, usage: quota.DailyUsage, today: str) -> HTTPException:
        if decision.reason == quota.LIMIT_EXCEEDED:
            return HTTPException(status_code=429, detail={
                "error": "Daily token limit exceeded. Try again tomorrow!",
                "tokens_used_today": decision.tokens_used_today,
                "daily_limit": usage.daily_limit,
                "plan": usage.plan_name,
                "resets_at": quota.resets_at(today),
            })
        return HTTPException(status_code=429, detail={
            "error": "Not enough tokens remaining for this request. Try again tomorrow!",
            "tokens_remaining": decision.tokens_remaining,
        })

    def _complete(self, prompt: str, max_tokens: int) -> Tuple[str, int]:
        """Run the chat completion. Returns (stripped text, total tokens billed)."""
        try:
            completion = self.llm.chat.completions.create(
                model=settings.openai_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_tokens,
                temperature=settings.openai_temperature,
            )
        except openai.APIError as e:
            code = getattr(e, "code", None)
            logger.error(f"Enhancement error: {str(e)}")
            if code == "insufficient_quota":
                raise HTTPException(status_code=503, detail="OpenAI API quota exceeded. Please try again later.")
            if code == "rate_limit_exceeded" or getattr(e, "status_code", None) == 429:
                raise HTTPException(status_code=429, detail="Rate limit exceeded. Please try again in a moment.")
            raise HTTPException(status_code=500, detail="Internal server error")

        content = completion.choices[0].message.content or ""
        tokens_consumed = completion.usage.total_tokens if completion.usage else 0
        return content.strip(), tokens_consumed
