# freshcart/errors.py
from typing import Any, Optional

GENERIC_MESSAGE = "Something went wrong"


class ApiError(Exception):
    """Non-2xx answer (or transport failure) from the storefront API."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404 or "not found" in self.message.lower()

    @classmethod
    def from_payload(cls, status_code: int, payload: Any) -> "ApiError":
        message = GENERIC_MESSAGE
        if isinstance(payload, dict):
            # our backend answers {"message": ...}; FastAPI-style servers use "detail"
            for key in ("message", "detail"):
                if isinstance(payload.get(key), str) and payload[key]:
                    message = payload[key]
                    break
        return cls(message, status_code=status_code, payload=payload)


class ValidationError(ValueError):
    def __init__(self, field: str, label: str):
        super().__init__(f"{label} is required.")
        self.field = field
        self.label = label
