"""Authentication API endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from marketplace.dependencies import (
    CurrentUser,
    get_current_user,
    get_registration_flow,
    get_reset_flow,
    get_session_flow,
)
from marketplace.schemas.auth import (
    LoginRequest,
    OtpRequest,
    OtpResponse,
    RefreshRequest,
    ResetPasswordRequest,
    ResetPasswordResponse,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    UpdatePasswordRequest,
)
from marketplace.services.registration import RegistrationFlow
from marketplace.services.reset import ResetFlow
from marketplace.services.session import SessionFlow

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post("/register", response_model=SignupResponse)
def register(body: SignupRequest, flow: RegistrationFlow = Depends(get_registration_flow)) -> SignupResponse:
    """Register a new user account and send the confirmation email."""
    result = flow.signup(body.first_name, body.last_name, body.email, body.password)
    return SignupResponse(message=result.message, token=result.token)


@router.get("/confirm/{token}", response_class=PlainTextResponse)
def confirm(token: str, flow: RegistrationFlow = Depends(get_registration_flow)) -> str:
    """Activate the account from the emailed confirmation link."""
    return flow.confirm(token)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, flow: SessionFlow = Depends(get_session_flow)) -> TokenResponse:
    """Authenticate and receive a JWT token."""
    return TokenResponse(token=flow.login(body.email, body.password))


@router.post("/logout", response_class=PlainTextResponse)
def logout() -> str:
    """Acknowledge logout. Tokens are not tracked, so the client just drops it."""
    return SessionFlow.logout()


@router.post("/refresh-token", response_model=TokenResponse)
def refresh_token(body: RefreshRequest, flow: SessionFlow = Depends(get_session_flow)) -> TokenResponse:
    """Exchange a still-valid token for one with a new expiry."""
    return TokenResponse(token=flow.refresh(body.refresh_token))


@router.post("/reset-password", response_model=ResetPasswordResponse)
def reset_password(body: ResetPasswordRequest, flow: ResetFlow = Depends(get_reset_flow)) -> ResetPasswordResponse:
    """Send a one-time password to the user's email."""
    return ResetPasswordResponse(otp=flow.request_reset(body.email))


@router.post("/otp", response_model=OtpResponse)
def otp_verify(body: OtpRequest, flow: ResetFlow = Depends(get_reset_flow)) -> OtpResponse:
    """Log in with a one-time password."""
    token = flow.verify_otp(body.email, body.otp)
    return OtpResponse(message="Login successful", token=token)


@router.patch("/update-password", response_class=PlainTextResponse)
def update_password(
    body: UpdatePasswordRequest,
    user: CurrentUser = Depends(get_current_user),
    flow: ResetFlow = Depends(get_reset_flow),
) -> str:
    """Set a new password for the authenticated user."""
    return flow.update_password(user.user_id, body.password)
