from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from app.modules.auth.schemas import (
    SignUpRequest, SignInRequest, VerifyEmailRequest,
    SignUpResponse, SignInResponse, VerifyEmailResponse
)
from app.modules.auth.service import AuthService
from app.modules.auth import pages
from app.core.dependencies import get_auth_service
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignUpResponse, status_code=201)
def signup(
    signup_data: SignUpRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user; a confirmation email is sent unless confirmation is disabled"""
    return service.sign_up(signup_data)


@router.post("/signin", response_model=SignInResponse)
def signin(
    signin_data: SignInRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Sign in and get access and refresh tokens"""
    return service.sign_in(signin_data)


@router.get("/callback", response_class=HTMLResponse)
def email_callback(
    token: Optional[str] = None,
    link_type: Optional[str] = Query(None, alias="type"),
    service: AuthService = Depends(get_auth_service)
):
    """Landing page for the confirmation link in the signup email"""
    if not token or not link_type:
        return HTMLResponse(pages.invalid_link_page(), status_code=400)

    try:
        user = service.verify_signup_link(token)
    except HTTPException as e:
        return HTMLResponse(pages.verification_failed_page(str(e.detail)), status_code=400)
    except Exception as e:
        logger.exception(f"Callback error: {str(e)}")
        return HTMLResponse(pages.unexpected_error_page(), status_code=500)

    # The email is confirmed either way; a missing row is recreated at sign-in
    try:
        service.user_service.ensure_user_record(user.id, user.email)
    except Exception as e:
        logger.error(f"Error creating user record: {str(e)}")

    return HTMLResponse(pages.success_page(), status_code=200)


@router.post("/verify-email", response_model=VerifyEmailResponse)
def verify_email(
    verify_data: VerifyEmailRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Confirm a signup with the one-time code from the email"""
    return service.verify_email_code(verify_data)
