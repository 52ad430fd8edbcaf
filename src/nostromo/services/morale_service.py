"""Team morale: damage, item mitigation and the morale game over."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

from nostromo.domain.entities import Character
from nostromo.domain.items import Item, ItemType
from nostromo.services.context import GameContext
from nostromo.services.errors import GameLost
from nostromo.services.events import MitigationUsedEvent, MoraleChangedEvent

logger = logging.getLogger(__name__)

MITIGATION_REDUCTION: Dict[ItemType, int] = {
    ItemType.CAT_CARRIER: 1,
    ItemType.ELECTRIC_PROD: 2,
}


@dataclass(slots=True)
class _Mitigator:
    holder: Character
    item: Item
    reduction: int


class MoraleLedger:
    """Owns every change to the shared morale counter."""

    def apply_damage(
        self, ctx: GameContext, amount: int, *, adversary_involved: bool, reason: str = ""
    ) -> int:
        """Reduce morale by ``amount`` after offering mitigation; return the loss applied.

        Raises GameLost when morale reaches zero.
        """
        if amount <= 0:
            return 0
        reduction = self._offer_mitigation(ctx, amount, adversary_involved)
        damage = max(0, amount - reduction)
        state = ctx.state
        state.morale -= damage
        logger.debug("Morale -%d (%s) -> %d", damage, reason or "unspecified", state.morale)
        if damage:
            ctx.emit(MoraleChangedEvent(amount=-damage, morale=max(0, state.morale), reason=reason))
        if state.morale <= 0:
            state.morale = 0
            raise GameLost("Morale dropped to 0")
        return damage

    def restore(self, ctx: GameContext, amount: int, *, reason: str = "") -> int:
        """Raise morale, never above its starting value; return the gain."""
        state = ctx.state
        gained = max(0, min(amount, state.starting_morale - state.morale))
        if gained:
            state.morale += gained
            ctx.emit(MoraleChangedEvent(amount=gained, morale=state.morale, reason=reason))
        return gained

    def _offer_mitigation(self, ctx: GameContext, amount: int, adversary_involved: bool) -> int:
        candidates = self._find_mitigators(ctx, adversary_involved)
        if not candidates:
            return 0
        if len(candidates) == 1:
            chosen = candidates[0]
            question = (
                f"{chosen.holder.name} can use {chosen.item.type.label} to prevent "
                f"{chosen.reduction} Morale loss. Use it?"
            )
            if not ctx.prompter.confirm(question):
                return 0
        else:
            entries = [
                (
                    f"{candidate.holder.name}: use {candidate.item.type.label} "
                    f"(-{candidate.reduction} Morale loss)",
                    candidate,
                )
                for candidate in candidates
            ]
            entries.append(("Use neither", None))
            chosen = ctx.prompter.choose(f"Losing {amount} Morale. Use an item?", entries)
            if chosen is None:
                return 0

        if chosen.item.spend_use():
            chosen.holder.remove_item(chosen.item)
        ctx.emit(
            MitigationUsedEvent(
                character_name=chosen.holder.name,
                item_name=chosen.item.type.label,
                prevented=min(amount, chosen.reduction),
            )
        )
        return chosen.reduction

    @staticmethod
    def _find_mitigators(ctx: GameContext, adversary_involved: bool) -> List[_Mitigator]:
        eligible = [ItemType.CAT_CARRIER]
        if adversary_involved:
            eligible.append(ItemType.ELECTRIC_PROD)
        found: List[_Mitigator] = []
        for item_type in eligible:
            for character in ctx.state.characters:
                item = character.find_item(item_type)
                if item is not None:
                    found.append(
                        _Mitigator(holder=character, item=item, reduction=MITIGATION_REDUCTION[item_type])
                    )
                    break
        return found
