# auth.py
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from db import get_db
from security import ADMIN, USER, Principal, authenticate, login, signup

router = APIRouter()


class Credentials(BaseModel):
    username: str
    password: str


def get_config(request: Request):
    return request.app.state.config


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def current_admin(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    config=Depends(get_config),
) -> Principal:
    return authenticate(db, ADMIN, bearer_token(authorization), config)


def current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    config=Depends(get_config),
) -> Principal:
    return authenticate(db, USER, bearer_token(authorization), config)


# === ADMIN ===
@router.post("/admin/signup", status_code=status.HTTP_201_CREATED)
def admin_signup(body: Credentials, db: Session = Depends(get_db), config=Depends(get_config)):
    admin_id = signup(db, ADMIN, body.username, body.password, config)
    return {"message": "Admin created successfully", "adminId": admin_id}

@router.post("/admin/login")
def admin_login(
    username: Optional[str] = Header(None),
    password: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    config=Depends(get_config),
):
    token = login(db, ADMIN, username, password, config)
    return {"message": "Logged in successfully", "token": token}

# === USERS ===
@router.post("/users/signup", status_code=status.HTTP_201_CREATED)
def user_signup(body: Credentials, db: Session = Depends(get_db), config=Depends(get_config)):
    user_id = signup(db, USER, body.username, body.password, config)
    return {"message": "User created successfully", "userId": user_id}

@router.post("/users/login")
def user_login(
    username: Optional[str] = Header(None),
    password: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    config=Depends(get_config),
):
    token = login(db, USER, username, password, config)
    return {"message": "Logged in successfully", "token": token}
