# app/schemas/user.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class UserRegister(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = "user"


class UserLogin(BaseModel):
    username: str
    password: str


class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(min_length=1)


class UsernameChange(BaseModel):
    new_username: str = Field(min_length=1)


class UserOut(BaseModel):
    id: str
    username: str
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class TokenOut(BaseModel):
    id: str
    username: str
    role: str
    token: str
    token_type: str = "bearer"
