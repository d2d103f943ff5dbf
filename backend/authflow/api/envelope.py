"""Response envelopes shared by every endpoint.

Success bodies are ``{"status", "data", "message"}``; failures are
``{"status", "message"}`` with no ``data`` key. Both are built from small
frozen value objects so handlers never assemble ad-hoc dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import Response, jsonify


@dataclass(frozen=True, slots=True)
class Ok:
    """
    Successful outcome.

    :param status: HTTP status code, mirrored in the body.
    :type status: int
    :param data: JSON-serializable payload.
    :type data: Any
    :param message: Human-readable summary.
    :type message: str
    """

    status: int
    data: Any
    message: str = "Success"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "data": self.data, "message": self.message}

    def to_response(self) -> Response:
        response = jsonify(self.to_dict())
        response.status_code = self.status
        return response


@dataclass(frozen=True, slots=True)
class Err:
    """
    Failed outcome.

    :param status: HTTP status code, mirrored in the body.
    :type status: int
    :param message: Client-safe explanation.
    :type message: str
    :param kind: Stable machine identifier of the failure class. Used for logs,
        not serialized.
    :type kind: str
    """

    status: int
    message: str
    kind: str = "error"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "message": self.message}

    def to_response(self) -> Response:
        response = jsonify(self.to_dict())
        response.status_code = self.status
        return response


__all__ = ["Ok", "Err"]
