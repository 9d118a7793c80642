"""
Authentication Endpoints.

Registration, password login, token refresh and revocation, account changes,
and the Google sign-in exchange that swaps a Supabase session for StudentOS
tokens.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from studentos.core.database.entities import User
from studentos.core.database.repositories import RefreshTokenRepository, UserRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import AuthProvider, UserRole
from studentos.core.models.io.auth import (
    AuthResponse,
    ChangePasswordRequest,
    GoogleAuthResponse,
    GoogleCallbackRequest,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
    UpdateEmailRequest,
    UserSummary,
)
from studentos.core.models.io.base import MessageResponse
from studentos.core.models.io.profiles import OnboardingRequest, ProfileEnvelope, StudentProfileRead
from studentos.core.security import TokenError, decode_refresh_token, hash_password, verify_password
from studentos.server.services.auth import issue_tokens, profile_completion, user_summary
from studentos.server.services.deps import CurrentUser, SessionDep
from studentos.server.services.rate_limiter import clear_login_attempts, enforce_login_limit
from studentos.server.services.supabase import SupabaseAuthVerifier, SupabaseNotConfigured, get_supabase_verifier

logger = get_logger(__name__)

router = APIRouter()

SupabaseVerifierDep = Annotated[SupabaseAuthVerifier, Depends(get_supabase_verifier)]


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a student account with a password and return a token pair.",
    responses={409: {"description": "Email already registered"}},
)
async def register(body: RegisterRequest, session: SessionDep) -> AuthResponse:
    """
    Register a student account.

    The password must be at least 10 characters long and contain an uppercase
    letter, a digit and a special character.
    """
    users = UserRepository(session)
    if await users.email_exists(body.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

    user = User(email=body.email, password_hash=hash_password(body.password), role=UserRole.STUDENT.value)
    user, profile = await users.create_with_profile(user, full_name=body.full_name)
    tokens = await issue_tokens(session, user)
    logger.info(f"Registered new student account {user.id}")
    return AuthResponse(user=user_summary(user, profile), **tokens.model_dump())


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login",
    description="Authenticate with email and password. Limited to 5 attempts per 15 minutes per IP.",
    responses={
        401: {"description": "Invalid credentials"},
        403: {"description": "Account deactivated"},
        429: {"description": "Too many login attempts"},
    },
)
async def login(
    body: LoginRequest,
    session: SessionDep,
    ip: Annotated[str, Depends(enforce_login_limit)],
) -> AuthResponse:
    """
    Log in with a password.

    Accounts created through Google sign-in have no password and cannot log in here.
    A successful login clears the caller's failed attempts.
    """
    users = UserRepository(session)
    user = await users.get_by_email(body.email)
    if user is None or not user.password_hash:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been deactivated. Please contact support.",
        )
    if not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    user = await users.touch_last_login(user)
    await clear_login_attempts(ip)
    profile = await users.get_profile(user.id)
    tokens = await issue_tokens(session, user)
    return AuthResponse(user=user_summary(user, profile), **tokens.model_dump())


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh Tokens",
    description="Exchange a refresh token for a new token pair. The old refresh token is revoked.",
    responses={400: {"description": "Refresh token missing"}, 401: {"description": "Invalid refresh token"}},
)
async def refresh(body: RefreshRequest, session: SessionDep) -> TokenPair:
    """Rotate a refresh token."""
    if not body.refresh_token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Refresh token required")

    tokens = RefreshTokenRepository(session)
    try:
        user_id = decode_refresh_token(body.refresh_token)
    except TokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired refresh token"
        ) from exc
    stored = await tokens.get_valid(body.refresh_token)
    if stored is None or stored.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired refresh token")

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    await tokens.revoke(body.refresh_token)
    return await issue_tokens(session, user)


@router.post("/logout", response_model=MessageResponse, summary="Logout")
async def logout(body: LogoutRequest, user: CurrentUser, session: SessionDep) -> MessageResponse:
    """Revoke the given refresh token, if any."""
    if body.refresh_token:
        await RefreshTokenRepository(session).revoke(body.refresh_token)
    return MessageResponse(message="Logged out successfully")


@router.post("/logout-all", response_model=MessageResponse, summary="Logout Everywhere")
async def logout_all(user: CurrentUser, session: SessionDep) -> MessageResponse:
    """Revoke every refresh token of the caller."""
    await RefreshTokenRepository(session).revoke_all(user.id)
    return MessageResponse(message="Logged out from all devices")


@router.get("/me", response_model=UserSummary, summary="Current User")
async def me(user: CurrentUser, session: SessionDep) -> UserSummary:
    """The caller's account with its student or employer profile."""
    profile = await UserRepository(session).get_profile(user.id)
    return user_summary(user, profile)


@router.post(
    "/onboarding",
    response_model=ProfileEnvelope,
    summary="Complete Onboarding",
    description="Second sign-up step: education details and goals.",
    responses={404: {"description": "Student profile not found"}},
)
async def onboarding(body: OnboardingRequest, user: CurrentUser, session: SessionDep) -> ProfileEnvelope:
    """Store the onboarding answers on the caller's student profile."""
    users = UserRepository(session)
    profile = await users.get_student_profile(user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    changes = body.model_dump(exclude_unset=True, exclude={"goals"})
    for key, value in changes.items():
        setattr(profile, key, value)
    profile.goals = body.goals or []
    profile.profile_completion = profile_completion(profile)
    profile = await users.save_profile(profile)
    return ProfileEnvelope(profile=StudentProfileRead.model_validate(profile))


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Change Password",
    description="Change the caller's password. Every refresh token of the account is revoked.",
    responses={400: {"description": "Current password incorrect or no password set"}},
)
async def change_password(body: ChangePasswordRequest, user: CurrentUser, session: SessionDep) -> MessageResponse:
    """Verify the current password, store the new one and sign out all devices."""
    if not user.password_hash:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Password login is not enabled for this account"
        )
    if not verify_password(body.current_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    await UserRepository(session).update(user, {"password_hash": hash_password(body.new_password)})
    await RefreshTokenRepository(session).revoke_all(user.id)
    logger.info(f"Password changed for user {user.id}")
    return MessageResponse(message="Password changed successfully")


@router.post(
    "/update-email",
    response_model=UserSummary,
    summary="Update Email",
    responses={401: {"description": "Password incorrect"}, 409: {"description": "Email already in use"}},
)
async def update_email(body: UpdateEmailRequest, user: CurrentUser, session: SessionDep) -> UserSummary:
    """Change the caller's login email after confirming their password."""
    if not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Password is incorrect")

    users = UserRepository(session)
    existing = await users.get_by_email(body.new_email)
    if existing is not None and existing.id != user.id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")

    user = await users.update(user, {"email": body.new_email})
    profile = await users.get_profile(user.id)
    return user_summary(user, profile)


@router.post(
    "/google-callback",
    response_model=GoogleAuthResponse,
    summary="Google Sign-In Exchange",
    description="Verify a Supabase access token and issue StudentOS tokens for its user.",
    responses={
        401: {"description": "Supabase token invalid or email mismatch"},
        403: {"description": "Account deactivated"},
        503: {"description": "Supabase auth not configured"},
    },
)
async def google_callback(
    body: GoogleCallbackRequest,
    session: SessionDep,
    verifier: SupabaseVerifierDep,
) -> GoogleAuthResponse:
    """
    Exchange a Supabase session for StudentOS tokens.

    The Supabase token is verified once against the Supabase auth API and the
    verified email must equal the submitted one. Unknown emails become new
    student accounts without a password.
    """
    try:
        verified_email = await verifier.verify(body.supabase_access_token)
    except SupabaseNotConfigured as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Google sign-in is not configured"
        ) from exc
    if verified_email is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Supabase session")
    if verified_email.lower() != body.email.lower():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Email does not match Supabase session")

    users = UserRepository(session)
    user = await users.get_by_email(body.email)
    is_new_user = user is None

    if user is None:
        user = User(
            email=body.email,
            role=UserRole.STUDENT.value,
            email_verified=True,
            auth_provider=AuthProvider.google.value,
            provider_id=body.provider_id,
        )
        full_name = body.full_name or body.email.split("@")[0]
        user, profile = await users.create_with_profile(user, full_name=full_name, avatar_url=body.avatar_url)
        user = await users.touch_last_login(user)
        logger.info(f"Created account {user.id} from Google sign-in")
    else:
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Your account has been deactivated. Please contact support.",
            )
        user = await users.touch_last_login(user, provider_id=body.provider_id)
        profile = await users.get_profile(user.id)

    tokens = await issue_tokens(session, user)
    return GoogleAuthResponse(user=user_summary(user, profile), is_new_user=is_new_user, **tokens.model_dump())
