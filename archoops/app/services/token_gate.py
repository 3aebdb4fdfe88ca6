"""
Session Token Gate

Issues and verifies signed session tokens and enforces per-route role
requirements. The token's claim encoding is private to this module.
"""

import logging
from datetime import UTC, timedelta
from typing import Optional

from jose import JWTError, jwt

from archoops.app.result import Error, Result, Return
from archoops.app.services.clock import Clock, utc_now
from archoops.domain.entities.enums import UserRole
from archoops.domain.identity import SessionIdentity

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=7)


class InvalidSessionTokenError(Exception):
    """Token is malformed, unsigned, wrongly signed, expired or carries an unknown role"""


class TokenGate:
    """
    Issues and checks session tokens.

    Business Rules:
    - Tokens are HS256 JWTs carrying sub, role, iat and exp
    - Any verification failure is UNAUTHORIZED, never partial trust
    - Role requirements are exact-match, not hierarchical
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = DEFAULT_SESSION_TTL,
        clock: Clock = utc_now,
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("TokenGate requires a non-empty signing secret")
        self.secret = secret
        self.expires_in = expires_in
        self.clock = clock
        self.algorithm = algorithm

    def _now_timestamp(self) -> int:
        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return int(now.timestamp())

    def issue(self, identity: SessionIdentity) -> str:
        """
        Sign a session token for the given identity.

        Args:
            identity: Subject and role to embed

        Returns:
            JWT token string
        """
        issued_at = self._now_timestamp()
        payload = {
            "sub": identity.subject_id,
            "role": UserRole(identity.role).value,
            "iat": issued_at,
            "exp": issued_at + int(self.expires_in.total_seconds()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionIdentity:
        """
        Verify signature and expiry and decode the identity.

        Raises:
            InvalidSessionTokenError: on any verification failure
        """
        try:
            # Expiry is checked against the injected clock below
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidSessionTokenError(str(exc)) from exc

        expires_at = payload.get("exp")
        subject_id = payload.get("sub")
        role = payload.get("role")

        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            raise InvalidSessionTokenError("Token has no expiry claim")
        if self._now_timestamp() > expires_at:
            raise InvalidSessionTokenError("Token has expired")
        if not isinstance(subject_id, str) or not subject_id:
            raise InvalidSessionTokenError("Token has no subject")

        try:
            role = UserRole(role)
        except ValueError as exc:
            raise InvalidSessionTokenError(f"Unknown role: {role!r}") from exc

        return SessionIdentity(subject_id=subject_id, role=role)

    def authorize(
        self, token: Optional[str], required_role: Optional[UserRole] = None
    ) -> Result[SessionIdentity]:
        """
        Authenticate a token and check the route's role requirement.

        Args:
            token: Raw bearer token, or None when the request carried none
            required_role: Role the route demands, or None for any session

        Returns:
            Result with the verified SessionIdentity, or Error
            (UNAUTHORIZED, FORBIDDEN)
        """
        if not token:
            return Return.err(Error("UNAUTHORIZED", "Authentication required"))

        try:
            identity = self.verify(token)
        except InvalidSessionTokenError as exc:
            logger.info(f"Rejected session token: {exc}")
            return Return.err(Error("UNAUTHORIZED", "Authentication required"))

        if required_role is not None and identity.role != required_role:
            return Return.err(
                Error(
                    "FORBIDDEN",
                    f"This endpoint requires {UserRole(required_role).value} role",
                )
            )

        return Return.ok(identity)

