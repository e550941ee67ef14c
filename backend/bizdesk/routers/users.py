"""User administration (requires users.manage)."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from bizdesk.context import AppContext
from bizdesk.routers.common import read_collection, require_permission, run_mutation
from bizdesk.schemas.user import AppRole, UserStatus, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])

manage_users = require_permission("users.manage")


class RoleBody(BaseModel):
    role: AppRole


class StatusBody(BaseModel):
    status: UserStatus


@router.get("")
def list_users(ctx: AppContext = Depends(manage_users)):
    return read_collection(ctx.users)


@router.patch("/{user_id}")
def update_user(user_id: str, body: UserUpdate, ctx: AppContext = Depends(manage_users)):
    return run_mutation(ctx, ctx.users.update_user, user_id, body)


@router.put("/{user_id}/role")
def update_user_role(user_id: str, body: RoleBody, ctx: AppContext = Depends(manage_users)):
    return run_mutation(ctx, ctx.users.update_user_role, user_id, body.role)


@router.put("/{user_id}/status")
def update_user_status(user_id: str, body: StatusBody, ctx: AppContext = Depends(manage_users)):
    return run_mutation(ctx, ctx.users.update_user_status, user_id, body.status)
