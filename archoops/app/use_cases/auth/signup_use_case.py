"""
Signup Use Case

Creates a teacher or student account and issues a session token.
"""

import logging

from archoops.app.repositories.user_repository import DuplicateEmailError
from archoops.app.result import Error, Result, Return
from archoops.app.services.join_code_allocator import normalize_join_code
from archoops.app.services.token_gate import TokenGate
from archoops.app.services.unit_of_work import UnitOfWork
from archoops.domain.entities import Enrollment, User, UserRole
from archoops.domain.identity import SessionIdentity
from .dtos import AuthResponse, SignupCommand
from .passwords import hash_password, validate_password
from .public_user import to_public_user

logger = logging.getLogger(__name__)

SIGNUP_ROLES = (UserRole.teacher, UserRole.student)


class SignupUseCase:
    """
    Use case for account signup.

    Business Rules:
    - Email is normalized to lower case and must be unique
    - Only teacher and student accounts can sign up; admins are provisioned
    - A student may pass a class join code to be enrolled right away;
      an unknown code does not block signup
    - Password hashed with bcrypt (cost factor 12)
    """

    def __init__(self, uow: UnitOfWork, token_gate: TokenGate):
        self.uow = uow
        self.token_gate = token_gate

    async def execute(self, command: SignupCommand) -> Result[AuthResponse]:
        try:
            role = UserRole(command.role)
        except ValueError:
            role = None
        if role not in SIGNUP_ROLES:
            return Return.err(Error("INVALID_ROLE", "Role must be teacher or student"))

        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        email = command.email.lower()

        async with self.uow:
            existing = await self.uow.users.get_by_email(email)
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "User with this email already exists")
                )

            try:
                user = await self.uow.users.create(
                    User(
                        email=email,
                        password_hash=hash_password(command.password),
                        display_name=command.display_name,
                        role=role,
                    )
                )
            except DuplicateEmailError:
                # Lost a race with a concurrent signup for the same email
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "User with this email already exists")
                )

            if role == UserRole.student and command.class_join_code:
                class_room = await self.uow.classes.get_by_join_code(
                    normalize_join_code(command.class_join_code)
                )
                if class_room is not None:
                    await self.uow.enrollments.create(
                        Enrollment(user_id=user.id, class_id=class_room.id)
                    )
                else:
                    logger.info(f"Signup with unknown class code for user {user.id}")

            await self.uow.commit()

            access_token = self.token_gate.issue(
                SessionIdentity(subject_id=str(user.id), role=user.role)
            )
            return Return.ok(AuthResponse(user=to_public_user(user), access_token=access_token))
