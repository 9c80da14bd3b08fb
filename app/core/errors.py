# ------------------------------------------
# Application error taxonomy
# - ErrorKind : closed set of failure categories
# - STATUS_CODES : ErrorKind -> HTTP status, complete by construction
# - AppError : raised by services and the auth guard, rendered as {"error": message}
# ------------------------------------------

import enum
from fastapi import HTTPException, status


class ErrorKind(str, enum.Enum):
    validation = "validation"
    unauthorized = "unauthorized"
    forbidden = "forbidden"
    conflict = "conflict"
    not_found = "not_found"
    internal = "internal"


STATUS_CODES = {
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.unauthorized: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.forbidden: status.HTTP_403_FORBIDDEN,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.internal: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_unmapped = set(ErrorKind) - set(STATUS_CODES)
if _unmapped:
    raise RuntimeError(f"Error kinds without a status code: {sorted(k.value for k in _unmapped)}")


class AppError(HTTPException):
    def __init__(self, kind: ErrorKind, message: str):
        headers = {"WWW-Authenticate": "Bearer"} if kind == ErrorKind.unauthorized else None
        super().__init__(status_code=STATUS_CODES[kind], detail=message, headers=headers)
        self.kind = kind
        self.message = message
