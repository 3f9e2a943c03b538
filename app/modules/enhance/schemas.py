from pydantic import BaseModel, model_validator
from typing import Optional
from app.config import settings
from app.modules.enhance.prompts import DEFAULT_ENHANCEMENT_TYPE


class EnhanceRequest(BaseModel):
    text: Optional[str] = None
    enhancement_type: str = DEFAULT_ENHANCEMENT_TYPE

    @model_validator(mode="after")
    def validate_text(self):
        if not self.text or not self.text.strip():
            raise ValueError("Text is required")
        if len(self.text) > settings.max_text_length:
            raise ValueError(f"Text too long (max {settings.max_text_length} characters)")
        return self


class EnhanceResponse(BaseModel):
    enhanced_text: str
    original_text: str
    enhancement_type: str
    tokens_used_this_request: int
    tokens_used_today: int
    tokens_remaining_today: int
    daily_limit: int
    resets_at: str
