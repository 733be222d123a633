# app/routers/users.py
"""Back-office users — register, login (JWT), password / username changes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.user import PasswordChange, TokenOut, UserLogin, UserOut, UserRegister, UsernameChange
from app.services.auth_service import (
    authenticate, create_access_token, get_current_user, hash_password, verify_password,
)
from app.services.crud import commit_or_raise
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _token_for(user: User) -> TokenOut:
    return TokenOut(id=user.id, username=user.username, role=user.role,
                    token=create_access_token({"id": user.id}))


@router.post("/users/register", response_model=TokenOut, status_code=201, summary="Create a user")
def register(body: UserRegister, db: Session = Depends(get_db)):
    if not (body.username or "").strip() or not body.password:
        raise HTTPException(status_code=400, detail="Username and password are required")
    if db.query(User).filter(User.username == body.username).first():
        raise HTTPException(status_code=400, detail="User already exists")
    user = User(username=body.username, hashed_password=hash_password(body.password),
                role=body.role or "user")
    db.add(user)
    commit_or_raise(db, "registering user", {"username": body.username, "role": body.role})
    logger.info(f"[AUTH] Registered user '{user.username}'")
    return _token_for(user)


@router.post("/users/login", response_model=TokenOut, summary="Log in and get a bearer token")
def login(body: UserLogin, db: Session = Depends(get_db)):
    user = authenticate(db, body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return _token_for(user)


@router.get("/users/me", response_model=UserOut, summary="Current user")
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/users/change-password", summary="Change the current user's password")
def change_password(body: PasswordChange, current_user: User = Depends(get_current_user),
                    db: Session = Depends(get_db)):
    if not verify_password(body.old_password, current_user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid old password")
    current_user.hashed_password = hash_password(body.new_password)
    commit_or_raise(db, "changing password", {"id": current_user.id})
    logger.info(f"[AUTH] Password changed for '{current_user.username}'")
    return {"status": "updated", "message": "Password updated successfully"}


@router.put("/users/update-username", response_model=TokenOut, summary="Change the current user's username")
def update_username(body: UsernameChange, current_user: User = Depends(get_current_user),
                    db: Session = Depends(get_db)):
    taken = db.query(User).filter(User.username == body.new_username, User.id != current_user.id).first()
    if taken:
        raise HTTPException(status_code=400, detail="Username already taken")
    current_user.username = body.new_username
    commit_or_raise(db, "updating username", {"id": current_user.id, "username": body.new_username})
    return _token_for(current_user)
