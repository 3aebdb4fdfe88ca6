"""
Join Code Allocator

Generates short, human-entered class join codes that are unique across
live classes at the moment of allocation.
"""

import logging
import secrets
import string
from typing import Awaitable, Callable, Optional, TypeVar

from archoops.app.repositories.class_repository import DuplicateJoinCodeError, IClassRepository

logger = logging.getLogger(__name__)

JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits
JOIN_CODE_LENGTH = 6
DEFAULT_MAX_ATTEMPTS = 50

T = TypeVar("T")


class JoinCodeAllocationExhausted(Exception):
    """Every attempt within the retry budget collided with an existing code"""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not allocate a unique join code after {attempts} attempts")


def generate_join_code() -> str:
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH))


def normalize_join_code(code: str) -> str:
    return code.strip().upper()


def is_valid_join_code(code: str) -> bool:
    return len(code) == JOIN_CODE_LENGTH and all(c in JOIN_CODE_ALPHABET for c in code)


class JoinCodeAllocator:
    """
    Allocates join codes with a bounded, iterative retry loop.

    The lookup before insert only avoids most collisions. The store's unique
    index on join_code decides correctness; a DuplicateJoinCodeError raised
    while persisting counts as one more collision.
    """

    def __init__(
        self,
        classes: IClassRepository,
        code_factory: Callable[[], str] = generate_join_code,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.classes = classes
        self.code_factory = code_factory
        self.max_attempts = max_attempts

    async def _draw_free_code(self) -> Optional[str]:
        code = self.code_factory()
        existing = await self.classes.get_by_join_code(code)
        if existing is not None:
            logger.debug(f"Join code collision on lookup: {code}")
            return None
        return code

    async def allocate(self) -> str:
        """
        Draw codes until one is not used by a live class.

        Raises:
            JoinCodeAllocationExhausted: when max_attempts draws all collided
        """
        for _ in range(self.max_attempts):
            code = await self._draw_free_code()
            if code is not None:
                return code

        logger.error(f"Join code allocation exhausted after {self.max_attempts} attempts")
        raise JoinCodeAllocationExhausted(self.max_attempts)

    async def claim(self, persist: Callable[[str], Awaitable[T]]) -> T:
        """
        Allocate a code and persist it, retrying on unique-index collisions.

        Args:
            persist: Coroutine function that stores the code (for example by
                inserting a class) and raises DuplicateJoinCodeError when
                another writer took the code first

        Returns:
            Whatever persist returned for the winning code

        Raises:
            JoinCodeAllocationExhausted: when max_attempts draws all collided
        """
        for attempt in range(1, self.max_attempts + 1):
            code = await self._draw_free_code()
            if code is None:
                continue
            try:
                return await persist(code)
            except DuplicateJoinCodeError:
                logger.warning(f"Join code {code} taken concurrently, retrying (attempt {attempt})")

        logger.error(f"Join code allocation exhausted after {self.max_attempts} attempts")
        raise JoinCodeAllocationExhausted(self.max_attempts)
