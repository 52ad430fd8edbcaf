"""Encounter cards and the shuffled encounter deck."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, List

from nostromo.core.rng import RNG

logger = logging.getLogger(__name__)


class EncounterType(Enum):
    """Every card that can appear in the encounter deck."""

    QUIET = "All Is Quiet"
    LOST_THE_SIGNAL = "Lost The Signal"
    STALK = "Stalk"
    HUNT = "Hunt"
    MEET_ME_IN_THE_INFIRMARY = "Meet Me In The Infirmary"
    CREW_EXPENDABLE = "Crew Expendable"
    COLLATING_DATA = "Collating Data"

    @property
    def is_alien(self) -> bool:
        return self in _ALIEN_CARDS

    @property
    def is_order_937(self) -> bool:
        return not self.is_alien


_ALIEN_CARDS = frozenset(
    {
        EncounterType.QUIET,
        EncounterType.LOST_THE_SIGNAL,
        EncounterType.STALK,
        EncounterType.HUNT,
    }
)

ADVERSARY_CARDS = frozenset({EncounterType.LOST_THE_SIGNAL, EncounterType.STALK, EncounterType.HUNT})

ALIEN_DECK: Dict[EncounterType, int] = {
    EncounterType.QUIET: 5,
    EncounterType.LOST_THE_SIGNAL: 1,
    EncounterType.STALK: 3,
    EncounterType.HUNT: 2,
}

ORDER_937_DECK: Dict[EncounterType, int] = {
    EncounterType.MEET_ME_IN_THE_INFIRMARY: 1,
    EncounterType.CREW_EXPENDABLE: 1,
    EncounterType.COLLATING_DATA: 1,
}


def expand_counts(counts: Dict[EncounterType, int]) -> List[EncounterType]:
    cards: List[EncounterType] = []
    for card, count in counts.items():
        cards.extend([card] * count)
    return cards


class EncounterDeck:
    """Draw pile plus discard pile; the discard is reshuffled in when the draw pile runs out.

    The top of the draw pile is the end of the list.
    """

    def __init__(self, cards: Iterable[EncounterType], rng: RNG) -> None:
        self._rng = rng
        self.draw_pile: List[EncounterType] = list(cards)
        self.discard_pile: List[EncounterType] = []

    @classmethod
    def build(cls, rng: RNG, *, include_order_937: bool) -> "EncounterDeck":
        cards = expand_counts(ALIEN_DECK)
        if include_order_937:
            cards.extend(expand_counts(ORDER_937_DECK))
        deck = cls(cards, rng)
        deck.shuffle()
        return deck

    def __len__(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile)

    def shuffle(self) -> None:
        self._rng.shuffle(self.draw_pile)

    def draw(self) -> EncounterType:
        """Move the top card to the discard pile and return it."""
        if not self.draw_pile:
            self._reshuffle_discards()
        if not self.draw_pile:
            raise ValueError("The encounter deck is empty.")
        card = self.draw_pile.pop()
        self.discard_pile.append(card)
        return card

    def replace(self, predicate: Callable[[EncounterType], bool]) -> int:
        """Return matching discarded cards to the draw pile and reshuffle it."""
        returned = [card for card in self.discard_pile if predicate(card)]
        if not returned:
            return 0
        self.discard_pile = [card for card in self.discard_pile if not predicate(card)]
        self.draw_pile.extend(returned)
        self.shuffle()
        logger.debug("Returned %d card(s) to the encounter deck", len(returned))
        return len(returned)

    def add_cards(self, cards: Iterable[EncounterType]) -> None:
        self.draw_pile.extend(cards)
        self.shuffle()

    def remove(self, predicate: Callable[[EncounterType], bool]) -> int:
        """Take matching cards out of both piles for the rest of the game."""
        before = len(self)
        self.draw_pile = [card for card in self.draw_pile if not predicate(card)]
        self.discard_pile = [card for card in self.discard_pile if not predicate(card)]
        return before - len(self)

    def contains(self, card: EncounterType) -> bool:
        return card in self.draw_pile or card in self.discard_pile

    def _reshuffle_discards(self) -> None:
        logger.debug("Reshuffling %d discarded encounter(s)", len(self.discard_pile))
        self.draw_pile = self.discard_pile
        self.discard_pile = []
        self.shuffle()
