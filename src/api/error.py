from typing import Dict, NoReturn

from fastapi import status
from libs.result import Error

# Business error codes that the caller can act on, and the status they map to
CLIENT_ERROR_STATUS: Dict[str, int] = {
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_OR_EXPIRED_TOKEN": status.HTTP_400_BAD_REQUEST,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> NoReturn:
    """Raise ClientError for known business codes, ServerError for everything else"""
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is not None:
        raise ClientError(error, status_code=status_code)
    raise ServerError(error)
