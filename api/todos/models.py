"""
Domain types for the todo feature.

`completed` is a real bool here. The 0/1 wire encoding lives in `schemas.py`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class Task:
    id: int
    title: str
    completed: bool
    created_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Task:
        return cls(
            id=int(row["id"]),
            title=str(row["title"]),
            completed=bool(row["completed"]),
            created_at=row["created_at"],
        )


@dataclass(frozen=True, slots=True)
class Stats:
    total: int
    completed: int

    @property
    def active(self) -> int:
        return self.total - self.completed
