from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from domain.watchlist import WatchListItem


@dataclass(frozen=True)
class AuthResponse:
    success: bool
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message}


@dataclass(frozen=True)
class DatabaseResponse:
    """Uniform result of every data operation; failures never raise."""

    success: bool
    message: str
    rows_affected: int = 0
    data: Optional[List[WatchListItem]] = None

    @classmethod
    def failure(cls, message: str) -> "DatabaseResponse":
        return cls(success=False, message=message, rows_affected=0, data=None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "rows_affected": self.rows_affected,
            "data": None if self.data is None else [item.to_dict() for item in self.data],
        }
