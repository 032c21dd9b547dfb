"""
routes_auth.py
---------------
Authentication routes for LessonCraft.

Features:
- Login endpoint (validates username & password, issues a JWT).
- `me` returns the user bound to the current session.
- Logout drops the caller's in-memory draft.
- Uses an in-memory demo user table with Argon2 hashes.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from lessoncraft.core import security
from lessoncraft.core.security import SessionContext, get_current_session
from lessoncraft.models.draft import LoginResponse, SessionUser
from lessoncraft.models.lesson_plan import User
from lessoncraft.services.draft_session import DraftStore, draft_store

router = APIRouter(prefix="/auth", tags=["Authentication"])

# ------------------------------------------------
# Demo users (username -> password hash, profile)
# ------------------------------------------------
demo_users = {
    "demouser": {
        "hashed_password": security.get_password_hash("demopass"),
        "profile": User(email="demouser", name="Demo User"),
    },
}


def get_draft_store() -> DraftStore:
    return draft_store


class LoginRequest(BaseModel):
    username: str
    password: str


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest):
    """
    Authenticate user and return a JWT token.

    Raises:
        HTTPException: If credentials are invalid.
    """
    record = demo_users.get(request.username)

    if not record or not security.verify_password(request.password, record["hashed_password"]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    profile: User = record["profile"]
    token = security.create_access_token(
        data={"sub": request.username, "email": profile.email, "name": profile.name}
    )
    return LoginResponse(access_token=token, user=profile)


@router.get("/me", response_model=SessionUser)
def me(session: SessionContext = Depends(get_current_session)):
    return SessionUser(user=session.user)


@router.post("/logout")
def logout(
    session: SessionContext = Depends(get_current_session),
    store: DraftStore = Depends(get_draft_store),
):
    store.discard(session.username)
    return {"message": "Logged out"}
