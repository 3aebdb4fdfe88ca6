"""
Shared helpers for API integration tests
"""
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from archoops.app.use_cases.auth.passwords import hash_password
from archoops.domain.entities import User, UserRole


async def signup(
    client: AsyncClient,
    email: str,
    role: str = "student",
    password: str = "SecurePass123",
    **extra,
) -> dict:
    """Sign up through the API and return the response body"""
    response = await client.post(
        "/auth/signup",
        json={
            "email": email,
            "password": password,
            "display_name": email.split("@")[0],
            "role": role,
            **extra,
        },
    )
    assert response.status_code == 201, response.text
    client.cookies.clear()
    return response.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def create_admin(
    db_session: AsyncSession,
    email: str = "admin@example.com",
    password: str = "AdminPass123",
) -> User:
    """Admins cannot sign up; insert one directly"""
    admin = User(
        email=email,
        password_hash=hash_password(password),
        display_name="Admin",
        role=UserRole.admin,
    )
    db_session.add(admin)
    await db_session.commit()
    await db_session.refresh(admin)
    return admin
