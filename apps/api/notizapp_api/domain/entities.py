from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Note:
    filename: str
    folder: str
    content: str
    updated_at: str
