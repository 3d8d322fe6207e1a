"""Output modes and structured JSON output."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class OutputMode(IntEnum):
    """How command output is displayed."""

    NORMAL = 0
    QUIET = 1
    JSON = 2


@dataclass
class NonInteractiveFlags:
    """Options for running without prompts."""

    yes: bool = False
    mode: OutputMode = OutputMode.NORMAL


@dataclass
class JSONError:
    """Error details carried in JSON output."""

    title: str
    message: str

    def to_dict(self) -> dict[str, str]:
        """Return the error as a JSON-ready mapping."""
        return {"title": self.title, "message": self.message}


@dataclass
class JSONOutput:
    """Structured command result; empty fields are left out when serialised."""

    status: str
    message: str = ""
    data: dict[str, Any] | None = field(default=None)
    error: JSONError | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping, omitting empty optional fields."""
        result: dict[str, Any] = {"status": self.status}
        if self.message:
            result["message"] = self.message
        if self.data:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result

    def to_json(self) -> str:
        """Serialise to compact JSON text."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)