from datetime import datetime
from typing import Callable

from archoops.domain.base import utc_now

# Injected into the core services so tests can move time
Clock = Callable[[], datetime]

__all__ = ["Clock", "utc_now"]
