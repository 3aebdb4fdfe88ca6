"""
Login Use Case

Verifies credentials and issues a session token.
"""

import bcrypt

from archoops.app.result import Error, Result, Return
from archoops.app.services.token_gate import TokenGate
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.identity import SessionIdentity
from .dtos import AuthResponse
from .passwords import BCRYPT_ROUNDS, verify_password
from .public_user import to_public_user


class LoginUseCase:
    """
    Use case for user login and session token issuance.

    Business Rules:
    - Email lookup is case-insensitive
    - A bcrypt check runs even for unknown emails to keep timing flat
    - Same error for unknown email and wrong password
    """

    def __init__(self, uow: UnitOfWork, token_gate: TokenGate):
        self.uow = uow
        self.token_gate = token_gate

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower())

            if user is None:
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not verify_password(password, user.password_hash):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            access_token = self.token_gate.issue(
                SessionIdentity(subject_id=str(user.id), role=user.role)
            )
            return Return.ok(AuthResponse(user=to_public_user(user), access_token=access_token))
