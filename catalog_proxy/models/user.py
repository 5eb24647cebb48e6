"""Per-user record names for the device-side key-value collaborator.

The proxy never reads these.  They describe the shape of the store the
client apps keep: one JSON blob per (user, field).
"""

from __future__ import annotations

from enum import Enum


class UserField(str, Enum):  # noqa: UP042  (StrEnum needs 3.11)
    PROFILE = "profile"
    WATCHLIST = "watchlist"
    PROGRESS = "progress"  # per-episode watch progress
    FRIENDS = "friends"
