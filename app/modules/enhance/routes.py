from fastapi import APIRouter, Depends, Request
from openai import OpenAI
from supabase import Client
from typing import Dict

from app.config import settings
from app.core.dependencies import get_current_user
from app.core.rate_limit import limiter
from app.database.openai_client import get_openai
from app.database.supabase_client import get_supabase
from app.modules.enhance.schemas import EnhanceRequest, EnhanceResponse
from app.modules.enhance.service import EnhanceService

router = APIRouter(tags=["enhance"])


def get_enhance_service(
    supabase: Client = Depends(get_supabase),
    llm: OpenAI = Depends(get_openai)
) -> EnhanceService:
    return EnhanceService(supabase, llm)


@router.post("/enhance-text", response_model=EnhanceResponse)
@limiter.limit(settings.enhance_rate_limit)
def enhance_text(
    request: Request,
    enhance_request: EnhanceRequest,
    user_data: Dict = Depends(get_current_user),
    service: EnhanceService = Depends(get_enhance_service)
):
    """Enhance text with the LLM, charged against the user's daily token quota"""
    return service.enhance(user_data["id"], enhance_request)
