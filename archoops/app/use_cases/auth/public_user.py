from archoops.domain.entities import User
from .dtos import PublicUser


def to_public_user(user: User) -> PublicUser:
    return PublicUser(
        id=str(user.id),
        email=user.email,
        display_name=user.display_name,
        role=user.role.value,
    )
