from typing import Optional

from fastapi import status
from archoops.app.result import Error

# Status used when a ClientError is raised without an explicit one
DEFAULT_STATUS_BY_CODE = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: Optional[int] = None):
        self.base_error = base_error
        self.status_code = status_code or DEFAULT_STATUS_BY_CODE.get(
            base_error.code, status.HTTP_400_BAD_REQUEST
        )
        super().__init__(base_error.message)


class ServerError(Exception):
    """Unexpected failure; the client only sees the error code"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)
