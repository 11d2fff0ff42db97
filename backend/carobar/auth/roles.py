"""Role identifiers carried in the `roleId` JWT claim.

  SA  → Carobar administrator, full access
  CA  → company manager, elevated rights within one company
  CU  → company staff, day-to-day data entry
"""

from __future__ import annotations

import enum


class Role(str, enum.Enum):
    ADMIN = "SA"
    MANAGER = "CA"
    STAFF = "CU"


# ── Common role sets ────────────────────────────────────────

ALL_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.MANAGER, Role.STAFF})
MANAGEMENT: frozenset[Role] = frozenset({Role.ADMIN, Role.MANAGER})


def has_role(role_id: str | None, allowed: frozenset[Role] | set[Role]) -> bool:
    """Check a raw `roleId` claim against an allowlist.

    Unknown role strings never match.
    """
    if role_id is None:
        return False
    try:
        return Role(role_id) in allowed
    except ValueError:
        return False
