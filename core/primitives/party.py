"""
POS Party Primitive — Customer / Staff References
===================================================
Customer and staff directories are external collaborators.
An order stores only {id, name} of the selected parties; selection
is by reference.

The authenticated operator carries a capability flag instead of a
role label: the cart consults `can_reassign_staff`, never "manager".

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PartyRef:
    """Reference to a customer or staff member."""
    party_id: str
    name: str

    def __post_init__(self):
        if not self.party_id or not isinstance(self.party_id, str):
            raise ValueError("party_id must be non-empty string.")
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be non-empty string.")

    def to_dict(self) -> dict:
        return {"id": self.party_id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> PartyRef:
        return cls(party_id=data["id"], name=data["name"])


@dataclass(frozen=True)
class Operator:
    """
    The authenticated person working the till.

    can_reassign_staff: elevated (manager) capability. Without it the
    operator is always the staff member on their own orders.
    """
    operator_id: str
    name: str
    can_reassign_staff: bool = False

    def __post_init__(self):
        if not self.operator_id or not isinstance(self.operator_id, str):
            raise ValueError("operator_id must be non-empty string.")
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be non-empty string.")

    def as_staff(self) -> PartyRef:
        return PartyRef(party_id=self.operator_id, name=self.name)
