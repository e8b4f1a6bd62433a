"""Loot deck setup."""

import random

from .state import LootDeck


class LootManager:
    """Builds loot decks from a scenario's loot deck configuration."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def apply(self, deck: LootDeck, config: dict[str, int]) -> None:
        """Replace the deck's cards with the configured card counts, shuffled.

        Args:
            deck: Deck to rebuild
            config: Card type to number of cards, e.g. {"money": 12}
        """
        deck.cards = [card for card, count in config.items() for _ in range(max(0, count))]
        deck.drawn = 0
        self.rng.shuffle(deck.cards)
