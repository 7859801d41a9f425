"""
storehub.api.routers.auth

Authentication endpoints.

Responsibilities:
- Login, self-service registration, token refresh.
- Read/update the caller's own profile.
- Token-gated password reset (forgot-password -> reset-password).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, EmailStr, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from storehub.api.deps import authenticator
from storehub.auth.deps import get_principal
from storehub.auth.models import Principal, UserRole
from storehub.errors import AccessDenied
from storehub.services.auth_service import AuthResult, Authenticator, Profile

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=2, max_length=100)


class RefreshRequest(BaseModel):
    email: EmailStr


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=6)


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6)
    # Accepted only so that an attempt to move tenants is rejected explicitly.
    entity_id: int | None = None


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    entity_id: int


class AuthResponse(BaseModel):
    user: UserOut
    token: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    entity_id: int
    entity_name: str


def _auth_response(result: AuthResult) -> AuthResponse:
    u = result.user
    return AuthResponse(
        user=UserOut(id=u.id, email=u.email, name=u.name, role=u.role, entity_id=u.entity_id),
        token=result.token,
    )


def _profile_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        email=profile.email,
        name=profile.name,
        role=profile.role,
        entity_id=profile.entity_id,
        entity_name=profile.entity_name,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest, auth: Authenticator = Depends(authenticator)
) -> AuthResponse:
    return _auth_response(await auth.login(email=body.email, password=body.password))


@router.post("/register", response_model=AuthResponse, status_code=HTTP_201_CREATED)
async def register(
    body: RegisterRequest, auth: Authenticator = Depends(authenticator)
) -> AuthResponse:
    result = await auth.register(email=body.email, password=body.password, name=body.name)
    return _auth_response(result)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    principal: Principal = Depends(get_principal),
    auth: Authenticator = Depends(authenticator),
) -> ProfileResponse:
    return _profile_response(await auth.get_profile(principal.id))


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    body: UpdateProfileRequest,
    principal: Principal = Depends(get_principal),
    auth: Authenticator = Depends(authenticator),
) -> ProfileResponse:
    profile = await auth.update_profile(
        principal.id,
        name=body.name,
        email=body.email,
        password=body.password,
        entity_id=body.entity_id,
    )
    return _profile_response(profile)


@router.post("/refresh", response_model=AuthResponse)
async def refresh_token(
    body: RefreshRequest,
    principal: Principal = Depends(get_principal),
    auth: Authenticator = Depends(authenticator),
) -> AuthResponse:
    # Refresh skips the password, so only the holder of a valid token may renew
    # it. Ownership is settled before the email is looked up: any email other
    # than the caller's own gets the same 403, registered or not.
    own = await auth.get_profile(principal.id)
    if own.email != body.email:
        raise AccessDenied("Token does not belong to this user")
    return _auth_response(await auth.refresh_token(email=body.email))


@router.post("/forgot-password", status_code=HTTP_204_NO_CONTENT)
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    auth: Authenticator = Depends(authenticator),
) -> Response:
    reset_token = await auth.forgot_password(email=body.email)
    sink = request.app.state.reset_token_sink
    if reset_token is not None and sink is not None:
        sink(body.email, reset_token)
    # Same answer whether or not the email matched a user.
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.post("/reset-password", status_code=HTTP_204_NO_CONTENT)
async def reset_password(
    body: ResetPasswordRequest, auth: Authenticator = Depends(authenticator)
) -> Response:
    await auth.reset_password(token=body.token, new_password=body.password)
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# Delivering the reset token (email, SMS...) is outside this service; the app
# factory accepts a `reset_token_sink` callable for that hand-off.
