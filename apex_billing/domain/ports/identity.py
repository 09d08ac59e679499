from __future__ import annotations

from typing import Protocol

from ..models import Identity


class IdentityResolver(Protocol):
    """Maps a bearer credential to the caller's identity."""

    def resolve(self, token: str) -> Identity:
        ...
