"""JSON output for the non-interactive wimm commands."""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class CommandResult:
    command: str
    status: str = "OK"
    message: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=iso_timestamp)

    @property
    def exit_code(self) -> int:
        return 0 if self.status == "OK" else 1

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2, default=str)

    def emit(self) -> int:
        print(self.to_json())
        return self.exit_code


def structured_response(command: str, *, message: str = "", payload: Optional[Dict[str, Any]] = None) -> int:
    return CommandResult(command, message=message, payload=payload or {}).emit()


def structured_error(command: str, message: str, *, payload: Optional[Dict[str, Any]] = None) -> int:
    return CommandResult(command, status="ERROR", message=message, payload=payload or {}).emit()


__all__ = ["CommandResult", "iso_timestamp", "structured_error", "structured_response"]
