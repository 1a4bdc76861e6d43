# -----------------------------------------------------------------------------
#  query.py
#  Read-only questions about a built deck
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from itertools import combinations
from typing import Literal

from spotplane.deck import Card, Deck, SymbolId, plane_size


@dataclass(frozen=True)
class DeckStats:
    order: int
    total_cards: int
    total_symbols: int
    symbols_per_card: int
    expected_cards: int
    expected_symbols: int

    @property
    def is_consistent(self) -> bool:
        return (
            self.total_cards == self.expected_cards
            and self.total_symbols == self.expected_symbols
            and self.symbols_per_card == self.order + 1
        )

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class SymbolPosition:
    symbol_id: SymbolId
    kind: Literal["affine", "infinity"]
    x: int | None = None
    y: int | None = None
    slope: int | None = None   # None with kind "infinity" means the vertical direction

    def describe(self) -> str:
        if self.kind == "affine":
            return f"point ({self.x}, {self.y})"
        if self.slope is None:
            return "point at infinity (vertical direction)"
        return f"point at infinity (slope {self.slope})"


def find_shared_symbol(card_a: Card, card_b: Card) -> SymbolId | None:
    """
    The symbol both cards carry. In a valid deck two distinct cards share
    exactly one; None only when the cards come from different decks.
    Comparing a card with itself returns its first symbol.
    """
    seen = set(card_a.symbols)
    for sym in card_b.symbols:
        if sym in seen:
            return sym
    return None


def find_cards_with_symbol(deck: Deck, symbol_id: SymbolId) -> tuple[Card, ...]:
    return tuple(card for card in deck.cards if symbol_id in card.symbols)


def get_deck_stats(deck: Deck) -> DeckStats:
    expected = plane_size(deck.order)
    return DeckStats(
        order=deck.order,
        total_cards=len(deck.cards),
        total_symbols=len(deck.symbols),
        symbols_per_card=deck.symbols_per_card,
        expected_cards=expected,
        expected_symbols=expected,
    )


def incidence_matrix(deck: Deck) -> tuple[tuple[int, ...], ...]:
    """Card x symbol 0/1 table, rows ordered by card id (shuffle-independent)."""
    width = len(deck.symbols)
    rows = []
    for card in sorted(deck.cards, key=lambda c: c.id):
        row = [0] * width
        for sym in card.symbols:
            row[sym] = 1
        rows.append(tuple(row))
    return tuple(rows)


def verify_deck(deck: Deck) -> list[str]:
    """
    Check every plane invariant; return one message per violation.
    An empty list means the deck is a projective plane of order deck.order.
    """
    q = deck.order
    n = plane_size(q)
    problems: list[str] = []

    if len(deck.cards) != n:
        problems.append(f"deck has {len(deck.cards)} cards, expected {n}")
    if len(deck.symbols) != n:
        problems.append(f"deck has {len(deck.symbols)} symbols, expected {n}")

    ids = sorted(c.id for c in deck.cards)
    if ids != list(range(len(deck.cards))):
        problems.append("card ids are not 0..N-1 without gaps")

    for card in deck.cards:
        if len(card.symbols) != q + 1:
            problems.append(f"card {card.id} has {len(card.symbols)} symbols, expected {q + 1}")
        if len(set(card.symbols)) != len(card.symbols):
            problems.append(f"card {card.id} repeats a symbol")
        bad = [s for s in card.symbols if not 0 <= s < n]
        if bad:
            problems.append(f"card {card.id} has out-of-range symbols {bad}")

    counts = Counter(s for card in deck.cards for s in set(card.symbols))
    for sym in range(n):
        if counts[sym] != q + 1:
            problems.append(f"symbol {sym} appears on {counts[sym]} cards, expected {q + 1}")

    sets = [(card.id, set(card.symbols)) for card in deck.cards]
    for (ia, sa), (ib, sb) in combinations(sets, 2):
        shared = len(sa & sb)
        if shared != 1:
            problems.append(f"cards {ia} and {ib} share {shared} symbols, expected 1")

    # dual property: each pair of symbols lies on exactly one card
    pair_counts = Counter(pair for _, s in sets for pair in combinations(sorted(s), 2))
    expected_pairs = n * (n - 1) // 2
    if len(pair_counts) != expected_pairs or any(c != 1 for c in pair_counts.values()):
        missing = expected_pairs - len(pair_counts)
        repeated = sum(1 for c in pair_counts.values() if c > 1)
        problems.append(f"symbol pairs: {missing} never together, {repeated} together on several cards")

    return problems


def symbol_position(order: int, symbol_id: SymbolId) -> SymbolPosition:
    """Where a symbol sits in the affine plane plus its line at infinity."""
    n = plane_size(order)
    if not 0 <= symbol_id < n:
        raise ValueError(f"symbol {symbol_id} out of range for order {order} (0..{n - 1})")
    if symbol_id == 0:
        return SymbolPosition(symbol_id, "infinity")
    if symbol_id <= order:
        return SymbolPosition(symbol_id, "infinity", slope=symbol_id - 1)
    x, y = divmod(symbol_id - (order + 1), order)
    return SymbolPosition(symbol_id, "affine", x=x, y=y)
