# security.py
# admins and users sign tokens with separate keys
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from errors import AuthenticationFailed, DuplicateIdentity, Unauthorized, ValidationError
from store import CredentialStore
from validation import PasswordPolicy, is_valid_password, is_valid_username

logger = logging.getLogger(__name__)

ADMIN = "admin"
USER = "user"
ALGORITHM = "HS256"


@dataclass(frozen=True)
class Principal:
    role: str
    id: int
    username: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN

    @property
    def is_user(self) -> bool:
        return self.role == USER


def require_admin(principal: Principal) -> Principal:
    if principal is None or not principal.is_admin:
        raise Unauthorized("Admin access required")
    return principal


def require_user(principal: Principal) -> Principal:
    if principal is None or not principal.is_user:
        raise Unauthorized("User access required")
    return principal


def pwd_context(config) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=config.BCRYPT_ROUNDS)


def hash_password(p: str, config) -> str:
    return pwd_context(config).hash(p)


def verify_password(p: str, hp: str, config) -> bool:
    return pwd_context(config).verify(p, hp)


def signing_key(role: str, config) -> str:
    if role == ADMIN:
        return config.ADMIN_SECRET_KEY
    if role == USER:
        return config.USER_SECRET_KEY
    raise ValueError(f"unknown role {role!r}")


def issue_token(role: str, identity_id: int, username: str, config, now=None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "sub": username,
        "uid": identity_id,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=config.TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, signing_key(role, config), algorithm=ALGORITHM)


def decode_token(role: str, token: str, config) -> dict:
    if not token:
        raise Unauthorized("Missing token")
    try:
        claims = jwt.decode(
            token,
            signing_key(role, config),
            algorithms=[ALGORITHM],
            options={"require": ["exp", "sub", "uid", "role"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")
    if claims.get("role") != role:
        raise Unauthorized("Invalid token")
    return claims


def signup(db: Session, role: str, username, password, config) -> int:
    username = username.strip() if isinstance(username, str) else username
    if not is_valid_username(username):
        raise ValidationError("Invalid username")
    if not is_valid_password(password, PasswordPolicy.from_config(config)):
        raise ValidationError("Password is not strong enough")

    store = CredentialStore(db, role)
    if store.find_by_username(username):
        raise DuplicateIdentity()
    record = store.insert(username, hash_password(password, config))
    logger.info("Created %s %s (id=%s)", role, username, record.id)
    return record.id


def login(db: Session, role: str, username, password, config) -> str:
    if not isinstance(username, str) or not isinstance(password, str):
        raise AuthenticationFailed()
    record = CredentialStore(db, role).find_by_username(username.strip())
    if not record or not verify_password(password, record.hashed_password, config):
        logger.warning("Failed %s login for %s", role, username)
        raise AuthenticationFailed()
    logger.info("%s %s logged in", role.capitalize(), record.username)
    return issue_token(role, record.id, record.username, config)


def authenticate(db: Session, role: str, token, config) -> Principal:
    try:
        claims = decode_token(role, token, config)
    except Unauthorized as e:
        logger.warning("Rejected %s token: %s", role, e.message)
        raise
    record = CredentialStore(db, role).find_by_id(claims["uid"])
    if not record or record.username != claims["sub"]:
        raise Unauthorized("Unknown identity")
    return Principal(role=role, id=record.id, username=record.username)
