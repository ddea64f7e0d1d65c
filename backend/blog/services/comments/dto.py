"""DTOs for CommentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    article_id: int
    user_id: int
    content: str
    created_at: datetime
