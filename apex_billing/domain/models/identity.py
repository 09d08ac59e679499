from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated caller as resolved from a bearer credential."""

    user_id: str
    email: Optional[str] = None
