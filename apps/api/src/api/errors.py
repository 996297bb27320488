from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int


class OutletNotFoundError(LookupError):
    """Raised when the outlet directory has no outlet with the requested id."""

    def __init__(self, outlet_id: str) -> None:
        super().__init__(f"outlet {outlet_id} not found")
        self.outlet_id = outlet_id


class OutletRecordError(RuntimeError):
    """Raised when the outlet directory returns a row that cannot be mapped."""

    def __init__(self, outlet_id: str, reason: str) -> None:
        super().__init__(f"outlet {outlet_id} record is malformed: {reason}")
        self.outlet_id = outlet_id
        self.reason = reason
