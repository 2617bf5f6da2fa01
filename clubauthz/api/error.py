from typing import Dict

from fastapi import status

from clubauthz.libs.result import Error

# Codes shared by most routes
COMMON_STATUS_CODES: Dict[str, int] = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NO_CLUB_CONTEXT": status.HTTP_400_BAD_REQUEST,
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


def raise_for_error(error: Error, status_codes: Dict[str, int]) -> None:
    """Raise the ClientError a route maps the code to, or a ServerError"""
    mapping = {**COMMON_STATUS_CODES, **status_codes}
    if error.code in mapping:
        raise ClientError(error, status_code=mapping[error.code])
    raise ServerError(error)
