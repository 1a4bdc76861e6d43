# -----------------------------------------------------------------------------
#  deck.py
#  Spot It! style decks from the projective plane PG(2, q)
# -----------------------------------------------------------------------------

"""
Points of PG(2, q) are the deck's symbols, lines are its cards.

  symbol 0          point at infinity of the vertical direction
  symbols 1..q      points at infinity of slopes 0..q-1
  symbol S+x*q+y    affine point (x, y), S = q+1

  card 0            line at infinity
  cards 1..q        vertical lines x = i (through symbol 0)
  remaining q²      lines y = a*x + b, row-major in (a, b)
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace

from spotplane.errors import InvalidOrderError
from spotplane.galois import GaloisField
from spotplane.labels import GlyphTable, make_labels

SymbolId = int

# Orders offered by the front end. 6 and 10 are not prime powers: no deck exists.
VALID_ORDERS: tuple[int, ...] = (2, 3, 4, 5, 7, 8, 9, 11)


@dataclass(frozen=True)
class Card:
    id: int
    symbols: tuple[SymbolId, ...]


@dataclass(frozen=True)
class SymbolMeta:
    id: SymbolId
    label: str
    glyph: str | None = None


@dataclass(frozen=True)
class Deck:
    cards: tuple[Card, ...]
    symbols: tuple[SymbolMeta, ...]
    order: int
    symbols_per_card: int

    def card(self, card_id: int) -> Card:
        """Card by id, wherever a shuffle has put it."""
        for c in self.cards:
            if c.id == card_id:
                return c
        raise KeyError(f"no card with id {card_id} in this deck")

    def label(self, symbol_id: SymbolId) -> str:
        return self.symbols[symbol_id].label


@dataclass(frozen=True)
class OrderInfo:
    order: int
    total_cards: int
    total_symbols: int
    symbols_per_card: int
    description: str


def plane_size(q: int) -> int:
    """Number of points (and lines) of a projective plane of order q."""
    return q * q + q + 1


def get_order_info(q: int) -> OrderInfo:
    total = plane_size(q)
    return OrderInfo(
        order=q,
        total_cards=total,
        total_symbols=total,
        symbols_per_card=q + 1,
        description=f"{total} cards, {q + 1} symbols each",
    )


def _validate_order(q: int) -> GaloisField:
    if not isinstance(q, int) or isinstance(q, bool) or q < 2:
        raise InvalidOrderError(f"Order must be an integer >= 2. Got: {q!r}")
    # InvalidOrderError for non prime powers, UnsupportedFieldError for e.g. 25
    return GaloisField(q)


def _build_symbols(count: int, mode: str, glyphs: GlyphTable | None) -> tuple[SymbolMeta, ...]:
    labels = make_labels(count, mode, glyphs)
    if mode == "emojis":
        return tuple(SymbolMeta(id=i, label=lab, glyph=lab) for i, lab in enumerate(labels))
    return tuple(SymbolMeta(id=i, label=lab) for i, lab in enumerate(labels))


def generate_deck(q: int, mode: str = "emojis", glyphs: GlyphTable | None = None) -> Deck:
    """
    Build the deck of the projective plane of order q.

    q must be a prime power with an implemented field (see GaloisField);
    mode is "emojis" or "numbers". The result has q²+q+1 cards and symbols,
    q+1 symbols per card, and any two cards share exactly one symbol.
    Deterministic: the same q always yields the same incidence.
    """
    field = _validate_order(q)
    n = plane_size(q)
    per_card = q + 1

    symbols = _build_symbols(n, mode, glyphs)

    def affine(x: int, y: int) -> SymbolId:
        return per_card + x * q + y

    rows: list[tuple[SymbolId, ...]] = [tuple(range(per_card))]

    for i in range(q):
        rows.append((0, *(affine(i, j) for j in range(q))))

    for a in field.elements():
        for b in field.elements():
            line = [a + 1]
            for x in field.elements():
                y = field.add(field.multiply(a, x), b)
                line.append(affine(x, y))
            rows.append(tuple(line))

    cards = tuple(Card(id=i, symbols=row) for i, row in enumerate(rows))
    return Deck(cards=cards, symbols=symbols, order=q, symbols_per_card=per_card)


def shuffle_deck(deck: Deck, rng: random.Random | None = None) -> Deck:
    """New deck with the cards reordered; ids, symbols and incidence are untouched."""
    cards = list(deck.cards)
    (rng or random.Random()).shuffle(cards)
    return replace(deck, cards=tuple(cards))
