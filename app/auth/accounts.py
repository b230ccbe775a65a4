## Account registration and (mock) credential checks
import logging

import bcrypt

from app.settings import settings
from app.state.store import DEMO_USER_NAME, Account, User
from app.state.store import accounts as directory

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100


class InvalidCredentials(Exception):
    pass


def hash_password(password: str) -> str:
    # bcrypt has a 72-byte limit, truncate if necessary
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))

def normalize_email(email: str) -> str:
    return email.strip().lower()

def register(name: str, email: str, password: str) -> User:
    email_norm = normalize_email(email)
    name = name.strip()
    if not name or len(name) > MAX_NAME_LENGTH:
        raise ValueError("Name must be 1-100 characters.")
    if "@" not in email_norm:
        raise ValueError("Enter a valid email address.")
    if not password:
        raise ValueError("Password is required.")

    # AccountExists from the directory propagates to the caller
    directory.add(Account(name=name, email=email_norm, password_hash=hash_password(password)))
    logger.info("Registered account %s", email_norm)
    return User(name=name, email=email_norm)

def authenticate(email: str, password: str) -> User:
    """
    Known accounts must present the right password. Unknown emails sign in
    as the demo user while demo login is enabled.
    """
    email_norm = normalize_email(email)
    if "@" not in email_norm:
        raise InvalidCredentials()

    acc = directory.get(email_norm)
    if acc is not None:
        if not verify_password(password, acc.password_hash):
            raise InvalidCredentials()
        return User(name=acc.name, email=acc.email)

    if settings.demo_login_enabled:
        return User(name=DEMO_USER_NAME, email=email_norm)
    raise InvalidCredentials()

def rename(user: User, name: str) -> None:
    name = name.strip()
    if not name or len(name) > MAX_NAME_LENGTH:
        raise ValueError("Name must be 1-100 characters.")
    user.name = name
    directory.rename(user.email, name)
