"""
person_registry.auth.models

Caller identity model.

Responsibilities:
- Define the resolved caller (`User`) whose id becomes a person's owner_id.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    """
    Authenticated caller identity, resolved by the request layer.
    """

    id: int
    login: str


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; the network layer owns authentication itself.
