"""Login, signup, logout, password reset and current session."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from bizdesk.context import AppContext
from bizdesk.core.errors import ConflictError, InvalidReferenceError
from bizdesk.routers.common import (
    SESSION_COOKIE,
    get_client_session,
    get_context,
    session_token,
    set_session_cookie,
)
from bizdesk.services.auth_service import AuthResult
from bizdesk.services.session_store import SessionStore

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str
    password: str


class SignupRequest(BaseModel):
    email: str
    password: str
    name: str
    role_id: str


class ResetRequest(BaseModel):
    email: str


def _session_body(session: Optional[SessionStore]) -> dict:
    if session is None or not session.is_authenticated:
        return {"authenticated": False, "user": None, "role": None}
    return {
        "authenticated": True,
        "user": session.user.model_dump(mode="json"),
        "role": session.role.model_dump(mode="json") if session.role else None,
    }


def _raise_for(result: AuthResult) -> None:
    if result.ok:
        return
    if isinstance(result.error, ConflictError):
        status = 409
    elif isinstance(result.error, InvalidReferenceError):
        status = 422
    else:
        status = 401
    raise HTTPException(status_code=status, detail=result.message)


@router.get("/session")
def current_session(session: Optional[SessionStore] = Depends(get_client_session)):
    return _session_body(session)


@router.get("/roles")
def list_roles(ctx: AppContext = Depends(get_context)):
    """Role catalog for the signup form."""
    return [r.model_dump(mode="json") for r in ctx.roles.all()]


def _start_session(ctx: AppContext, response: Response, previous: Optional[str], attempt) -> dict:
    """Run attempt against a fresh session; only a success issues the cookie and drops the old one."""
    token, session = ctx.sessions.open()
    result = attempt(ctx.auth.for_session(session))
    if not result.ok:
        ctx.sessions.discard(token)
        _raise_for(result)
    if previous:
        ctx.sessions.discard(previous)
    set_session_cookie(response, token)
    return _session_body(session)


@router.post("/login")
def login(
    body: LoginRequest,
    response: Response,
    ctx: AppContext = Depends(get_context),
    token: Optional[str] = Depends(session_token),
):
    return _start_session(ctx, response, token, lambda auth: auth.login(body.email, body.password))


@router.post("/signup", status_code=201)
def signup(
    body: SignupRequest,
    response: Response,
    ctx: AppContext = Depends(get_context),
    token: Optional[str] = Depends(session_token),
):
    return _start_session(
        ctx, response, token, lambda auth: auth.signup(body.email, body.password, body.name, body.role_id)
    )


@router.post("/logout")
def logout(
    response: Response,
    ctx: AppContext = Depends(get_context),
    token: Optional[str] = Depends(session_token),
    session: Optional[SessionStore] = Depends(get_client_session),
):
    if session is not None:
        ctx.auth.for_session(session).logout()
    ctx.sessions.discard(token)
    response.delete_cookie(SESSION_COOKIE)
    return _session_body(None)


@router.post("/reset-password")
def reset_password(body: ResetRequest, ctx: AppContext = Depends(get_context)):
    ctx.auth.reset_password(body.email)
    return {"status": "ok"}
