import hashlib
import time
import logging
from supabase import Client
from app.modules.auth.schemas import (
    SignUpRequest, SignInRequest, VerifyEmailRequest,
    AuthUser, SignUpResponse, SignInResponse, SignInUser, VerifyEmailResponse
)
from app.modules.users.service import UserService
from app.modules.enhance.quota import utc_today, effective_tokens_used
from app.config import settings
from fastapi import HTTPException
from typing import Dict, Any

logger = logging.getLogger(__name__)

# Bearer token -> user cache, keeps repeated requests with one token off the auth API
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_MAX_SIZE = 500

CONFIRMATION_PENDING_MESSAGE = (
    "Please check your email and click the confirmation link to complete registration."
)


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


def _prune_auth_cache(now: float) -> None:
    expired = [key for key, (_, expiry) in _AUTH_USER_CACHE.items() if expiry <= now]
    for key in expired:
        del _AUTH_USER_CACHE[key]


def _provider_message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.user_service = UserService(supabase)

    def _create_user_record(self, user) -> None:
        """Create the profile row; failures surface to the client as a generic 500"""
        try:
            self.user_service.ensure_user_record(user.id, user.email)
        except Exception as e:
            detail = e.detail if isinstance(e, HTTPException) else str(e)
            logger.error(f"Error creating user record for {user.id}: {detail}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def sign_up(self, signup_data: SignUpRequest) -> SignUpResponse:
        """Register with Supabase Auth; the profile row is created once the email is confirmed"""
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": signup_data.email,
                "password": signup_data.password,
                "options": {
                    "email_redirect_to": settings.email_redirect_url
                }
            })
        except Exception as e:
            logger.error(f"Signup error: {str(e)}")
            raise HTTPException(status_code=400, detail=_provider_message(e))

        user = auth_response.user
        if not user:
            raise HTTPException(status_code=400, detail="Failed to register user")

        if not user.email_confirmed_at:
            return SignUpResponse(
                message=CONFIRMATION_PENDING_MESSAGE,
                user=AuthUser(id=user.id, email=user.email, email_confirmed=False),
            )

        # Confirmation disabled on the project: the account is usable right away
        self._create_user_record(user)
        return SignUpResponse(
            message="User created successfully",
            user=AuthUser(id=user.id, email=user.email, email_confirmed=True),
        )

    def sign_in(self, signin_data: SignInRequest) -> SignInResponse:
        """Password sign-in; creates the profile row if it is missing"""
        logger.info(f"Sign in attempt for: {signin_data.email}")
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": signin_data.email,
                "password": signin_data.password
            })
        except Exception as e:
            logger.error(f"Sign in error: {str(e)}")
            raise HTTPException(status_code=401, detail=_provider_message(e))

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid login credentials")

        user = auth_response.user
        session = auth_response.session
        logger.info(f"Auth successful for user: {user.id}")

        try:
            profile = self.user_service.get_profile(user.id)
        except Exception as e:
            logger.error(f"Profile fetch error for {user.id}: {str(e)}")
            profile = None

        if profile is None:
            logger.info("User profile not found, creating one")
            try:
                self.user_service.ensure_user_record(user.id, user.email)
                profile = self.user_service.get_profile(user.id)
            except Exception as e:
                logger.error(f"Error creating user profile: {str(e)}")
                profile = None
            if profile is None:
                raise HTTPException(status_code=500, detail="Failed to create user profile")

        usage = profile.daily_usage()
        return SignInResponse(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            user=SignInUser(
                id=user.id,
                email=user.email,
                tokens_used_today=effective_tokens_used(usage, utc_today()),
                daily_token_limit=usage.daily_limit,
                plan_name=usage.plan_name,
                last_usage_date=profile.last_usage_date,
            ),
        )

    def verify_signup_link(self, token_hash: str):
        """Confirm a signup from the emailed link. Returns the confirmed user."""
        try:
            response = self.supabase.auth.verify_otp({
                "token_hash": token_hash,
                "type": "signup"
            })
        except Exception as e:
            logger.error(f"Email verification error: {str(e)}")
            raise HTTPException(status_code=400, detail=_provider_message(e))
        if not response.user:
            raise HTTPException(status_code=400, detail="Verification failed")
        return response.user

    def verify_email_code(self, verify_data: VerifyEmailRequest) -> VerifyEmailResponse:
        """Confirm a signup from the emailed one-time code and create the profile row"""
        try:
            response = self.supabase.auth.verify_otp({
                "email": verify_data.email,
                "token": verify_data.token,
                "type": "signup"
            })
        except Exception as e:
            logger.error(f"Email verification error: {str(e)}")
            raise HTTPException(status_code=400, detail=_provider_message(e))

        user = response.user
        if not user:
            raise HTTPException(status_code=400, detail="Verification failed")

        self._create_user_record(user)
        return VerifyEmailResponse(
            message="Email verified successfully",
            user=AuthUser(id=user.id, email=user.email, email_confirmed=True),
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer access token to its user. Uses a short TTL cache."""
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid token")
            logger.error(f"Token validation error: {error_msg}")
            raise HTTPException(status_code=401, detail="Authentication failed")

        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid token")

        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
        }
        _prune_auth_cache(now)
        if len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
            # Full of live entries: evict the oldest insertion
            del _AUTH_USER_CACHE[next(iter(_AUTH_USER_CACHE))]
        _AUTH_USER_CACHE[cache_key] = (user_data, now + settings.auth_cache_ttl_seconds)
        return user_data
