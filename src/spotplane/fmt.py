# src/spotplane/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable

from colorama import Fore, Style

from spotplane.deck import Card, Deck, SymbolId

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

MATRIX_ON = "●"
MATRIX_OFF = "·"


def strip_ansi(s: str | None) -> str:
    return ANSI_RE.sub("", s or "")


def format_symbol(deck: Deck, symbol_id: SymbolId, *, show_ids: bool = True,
                  highlight: bool = False) -> str:
    meta = deck.symbols[symbol_id]
    text = meta.label
    if show_ids and meta.glyph is not None:
        text = f"{meta.label}{Style.DIM}#{symbol_id + 1}{Style.RESET_ALL}"
    if highlight:
        return f"{Fore.YELLOW}{Style.BRIGHT}[{text}{Fore.YELLOW}{Style.BRIGHT}]{Style.RESET_ALL}"
    return text


def format_card(deck: Deck, card: Card, *, show_ids: bool = True,
                highlight: Iterable[SymbolId] = ()) -> str:
    """'Card  12: 🍎 🍊 …' with highlighted symbols bracketed."""
    marked = set(highlight)
    width = len(str(len(deck.cards)))
    body = "  ".join(
        format_symbol(deck, s, show_ids=show_ids, highlight=s in marked) for s in card.symbols
    )
    return f"{Fore.GREEN}Card {card.id + 1:>{width}}{Style.RESET_ALL}: {body}"


def format_matrix_row(card_id: int, row: Iterable[int], *, width: int) -> str:
    cells = "".join(MATRIX_ON if v else MATRIX_OFF for v in row)
    return f"{card_id + 1:>{width}} {cells}"


def format_id_ruler(count: int, *, indent: int) -> list[str]:
    """Two header lines with the tens and units digit of every 1-based column."""
    tens = "".join(str((i + 1) // 10 % 10) if i + 1 >= 10 else " " for i in range(count))
    units = "".join(str((i + 1) % 10) for i in range(count))
    pad = " " * indent
    return [pad + tens, pad + units]
