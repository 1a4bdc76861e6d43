from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("spotplane")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .deck import (
    VALID_ORDERS,
    Card,
    Deck,
    OrderInfo,
    SymbolMeta,
    generate_deck,
    get_order_info,
    shuffle_deck,
)
from .errors import DeckError, InvalidOrderError, UnsupportedFieldError
from .galois import GaloisField
from .labels import GlyphTable, load_glyph_table, make_labels
from .primes import get_prime_power, is_prime, is_prime_power
from .query import (
    DeckStats,
    SymbolPosition,
    find_cards_with_symbol,
    find_shared_symbol,
    get_deck_stats,
    incidence_matrix,
    symbol_position,
    verify_deck,
)

__all__ = [
    "VALID_ORDERS",
    "Card",
    "Deck",
    "DeckError",
    "DeckStats",
    "GaloisField",
    "GlyphTable",
    "InvalidOrderError",
    "OrderInfo",
    "SymbolMeta",
    "SymbolPosition",
    "UnsupportedFieldError",
    "__version__",
    "find_cards_with_symbol",
    "find_shared_symbol",
    "generate_deck",
    "get_deck_stats",
    "get_order_info",
    "get_prime_power",
    "incidence_matrix",
    "is_prime",
    "is_prime_power",
    "load_glyph_table",
    "make_labels",
    "shuffle_deck",
    "symbol_position",
    "verify_deck",
]
