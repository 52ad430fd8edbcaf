"""Shared type aliases for the core and domain layers."""
from typing import Literal

AdversaryName = Literal["xenomorph", "ash"]
TradeDirection = Literal["give", "take"]

__all__ = ["AdversaryName", "TradeDirection"]
