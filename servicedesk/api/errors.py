from __future__ import annotations

from enum import Enum


class ApiErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CLIENT = "client"
    SERVER = "server"
    NETWORK = "network"
    INVALID_RESPONSE = "invalid_response"


DEFAULT_MESSAGES = {
    ApiErrorKind.UNAUTHORIZED: "Your session has expired. Please login again.",
    ApiErrorKind.FORBIDDEN: "You do not have permission to perform this action.",
    ApiErrorKind.NOT_FOUND: "The requested resource was not found.",
    ApiErrorKind.CLIENT: "The request was rejected by the server.",
    ApiErrorKind.SERVER: "Something went wrong on the server. Please try again later.",
    ApiErrorKind.NETWORK: "Network error. Please check your internet connection.",
    ApiErrorKind.INVALID_RESPONSE: "The server returned an unexpected response.",
}


class ApiError(Exception):
    """Every failure of a backend call, reduced to a kind and a message."""

    def __init__(self, kind: ApiErrorKind, message: str = "", status_code: int | None = None) -> None:
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    @classmethod
    def from_status(cls, status_code: int, message: str = "") -> ApiError:
        if status_code == 401:
            kind = ApiErrorKind.UNAUTHORIZED
        elif status_code == 403:
            kind = ApiErrorKind.FORBIDDEN
        elif status_code == 404:
            kind = ApiErrorKind.NOT_FOUND
        elif status_code >= 500:
            kind = ApiErrorKind.SERVER
        else:
            kind = ApiErrorKind.CLIENT
        return cls(kind, message, status_code=status_code)
