"""
Notekeeper Backend - Authenticator
====================================

What:  Registration, login, and per-request session token verification.
How:   Passwords are hashed with bcrypt (salted, one-way). Sessions are
       stateless HS256 JSON Web Tokens carrying the user id in `sub`.
Who:   Called by the auth routes (register/login) and by the
       `get_current_user` dependency on every protected request.

Flows:
    register:  validate → reject duplicate email → hash → insert → sign token
    login:     validate → look up by email → bcrypt compare → sign token
    verify:    decode + check signature/expiry → look up user by id

Failure policy:
    login answers "Invalid login credentials" for an unknown email and for a
    wrong password alike, and runs a bcrypt comparison in both cases.
    verify answers "Please authenticate" for every token problem, the same
    message the API gives when no token is sent at all.

bcrypt is CPU bound, so hashing and comparison run in Starlette's thread
pool instead of on the event loop.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Tuple

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

from notekeeper.exceptions import (
    AuthenticationError,
    DuplicateUserError,
    ValidationError,
)
from notekeeper.models.user import User
from notekeeper.stores.users import UserStore

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input and newer releases
# reject anything longer
BCRYPT_MAX_PASSWORD_BYTES = 72

INVALID_CREDENTIALS = "Invalid login credentials"
PLEASE_AUTHENTICATE = "Please authenticate"


def hash_password(password: str, rounds: int = 12) -> str:
    """Salted bcrypt hash of `password`, as a str suitable for storage."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison of a candidate password against a stored hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long candidate
        return False


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    return hash_password("notekeeper-timing-equalizer", rounds=rounds)


class Authenticator:
    """
    Verifies credentials and issues/verifies session tokens.

    Args:
        users:          Credential store for this request
        secret:         HMAC signing secret (must be non-empty)
        algorithm:      JWT algorithm, one of HS256/HS384/HS512
        expire_minutes: Token lifetime; 0 issues tokens without expiry
        hash_rounds:    bcrypt work factor for new password hashes

    The Authenticator holds no state of its own beyond this configuration.
    """

    def __init__(
        self,
        users: UserStore,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 0,
        hash_rounds: int = 12,
    ):
        if not secret:
            raise ValueError("Authenticator requires a non-empty signing secret")
        self.users = users
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.hash_rounds = hash_rounds

    # ── Credentials ───────────────────────────────────────────────────────

    async def register(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        """
        Create an account and return it with a fresh session token.

        Raises:
            ValidationError:    Email or password missing/blank, or password
                                longer than 72 bytes
            DuplicateUserError: An account with this exact email exists
        """
        self._require_credentials(email, password)
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                message=f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
                field="password",
            )

        if await self.users.find_one(email=email) is not None:
            raise DuplicateUserError(email=email)

        password_hash = await run_in_threadpool(hash_password, password, self.hash_rounds)
        user = await self.users.insert(email=email, password_hash=password_hash)
        logger.info("User registered: %s", user.id)
        return user, self.issue_token(user)

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        """
        Check an email/password pair and return the user with a new token.

        Raises:
            ValidationError:     Email or password missing/blank
            AuthenticationError: Unknown email or wrong password (same message)
        """
        self._require_credentials(email, password)

        user = await self.users.find_one(email=email)
        if user is not None:
            stored_hash = user.password_hash
        else:
            stored_hash = await run_in_threadpool(_dummy_hash, self.hash_rounds)
        matches = await run_in_threadpool(check_password, password, stored_hash)

        if user is None or not matches:
            logger.info("Login rejected (%s)", "unknown email" if user is None else "bad password")
            raise AuthenticationError(
                message=INVALID_CREDENTIALS,
                reason="unknown_email" if user is None else "bad_password",
            )

        logger.info("User logged in: %s", user.id)
        return user, self.issue_token(user)

    @staticmethod
    def _require_credentials(email: Optional[str], password: Optional[str]) -> None:
        if not email or not email.strip() or not password:
            raise ValidationError(message="Email and password are required")

    # ── Tokens ────────────────────────────────────────────────────────────

    def issue_token(self, user: User) -> str:
        """Sign a token whose subject is the user's id."""
        now = datetime.now(timezone.utc)
        claims = {"sub": str(user.id), "iat": now}
        if self.expire_minutes:
            claims["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def decode_token(self, token: Optional[str]) -> uuid.UUID:
        """
        Validate signature (and expiry when enabled); return the user id.

        Raises:
            AuthenticationError: For any problem with the token
        """
        if not token:
            raise AuthenticationError(message=PLEASE_AUTHENTICATE, reason="missing_token")

        required = ["sub", "exp"] if self.expire_minutes else ["sub"]
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": required},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError(message=PLEASE_AUTHENTICATE, reason="expired_token")
        except jwt.PyJWTError as e:
            raise AuthenticationError(
                message=PLEASE_AUTHENTICATE,
                reason="invalid_token",
                context={"error_type": type(e).__name__},
            )

        try:
            return uuid.UUID(str(claims["sub"]))
        except ValueError:
            raise AuthenticationError(message=PLEASE_AUTHENTICATE, reason="invalid_subject")

    async def verify(self, token: Optional[str]) -> User:
        """
        Resolve a session token to the current User record.

        Raises:
            AuthenticationError: Token absent, malformed, mis-signed, expired,
                                 or its user no longer exists
        """
        user_id = self.decode_token(token)
        user = await self.users.find_one(user_id=user_id)
        if user is None:
            raise AuthenticationError(
                message=PLEASE_AUTHENTICATE,
                reason="unknown_user",
                context={"user_id": str(user_id)},
            )
        return user
