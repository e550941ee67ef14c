"""User repository: profiles joined with role assignments, role upsert."""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bizdesk.core.errors import NotFoundError
from bizdesk.models import Profile, UserRole
from bizdesk.repositories.crud import fetch_all, plain_values
from bizdesk.schemas.user import AppRole, User, UserStatus


def to_user(profile: Profile, role: str) -> User:
    return User(
        id=profile.id,
        name=profile.name or "",
        email=profile.email,
        role=role,
        status=profile.status or UserStatus.ACTIVE,
        avatar=profile.avatar_url,
        created_at=profile.created_at,
        last_login=profile.last_login,
    )


def list_users(db: Session, limit: int, default_role: str) -> list[User]:
    """
    Two reads: profiles (newest first, capped at limit), then the role
    assignments for exactly those profiles. No assignment -> default_role.
    """
    profiles = fetch_all(db, Profile, Profile.created_at.desc(), limit=limit)
    if not profiles:
        return []
    rows = db.execute(
        select(UserRole.user_id, UserRole.role).where(UserRole.user_id.in_([p.id for p in profiles]))
    ).all()
    role_map = {r.user_id: r.role for r in rows}
    return [to_user(p, role_map.get(p.id, default_role)) for p in profiles]


def get_profile(db: Session, user_id: str) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        raise NotFoundError(f"User {user_id} not found")
    return profile


def update_profile(db: Session, user_id: str, values: dict[str, Any]) -> Profile:
    profile = get_profile(db, user_id)
    for key, value in plain_values(values).items():
        setattr(profile, key, value)
    db.flush()
    return profile


def _dialect_insert(db: Session):
    name = db.get_bind().dialect.name
    if name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        return None
    return insert


def upsert_user_role(db: Session, user_id: str, role: AppRole | str) -> None:
    """
    One role row per user. INSERT .. ON CONFLICT (user_id) DO UPDATE on
    Postgres and SQLite; other dialects fall back to check-then-act.
    """
    role_value = AppRole(role).value
    get_profile(db, user_id)
    insert = _dialect_insert(db)
    if insert is not None:
        stmt = insert(UserRole).values(user_id=user_id, role=role_value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserRole.user_id],
            set_={"role": role_value, "updated_at": func.now()},
        )
        db.execute(stmt)
        return

    existing: Optional[UserRole] = db.execute(
        select(UserRole).where(UserRole.user_id == user_id)
    ).scalar_one_or_none()
    if existing is not None:
        existing.role = role_value
    else:
        db.add(UserRole(user_id=user_id, role=role_value))
    db.flush()
