import bcrypt

from archoops.app.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 10
BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode(), password_hash.encode())


def validate_password(password: str) -> Result[None]:
    """
    Validate password complexity.

    Returns:
        Result with None if valid, or Error if invalid
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "INVALID_PASSWORD",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )
    return Return.ok(None)
