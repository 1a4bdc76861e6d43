# src/spotplane/display.py
from __future__ import annotations

from colorama import Fore, Style

from spotplane import __version__
from spotplane.config import list_profiles_with_descriptions, read_current_profile
from spotplane.deck import VALID_ORDERS, Deck, get_order_info
from spotplane.errors import UserInputError
from spotplane.fmt import format_card, format_id_ruler, format_matrix_row, format_symbol
from spotplane.galois import GaloisField
from spotplane.output_manager import OutputManager
from spotplane.query import (
    find_cards_with_symbol,
    find_shared_symbol,
    get_deck_stats,
    incidence_matrix,
    symbol_position,
    verify_deck,
)
from spotplane.runtime import CFG

ALIGN_WIDTH = 20  # label column


def _out(om: OutputManager | None):
    return om.write if om is not None else print


def _row(label: str, value: object) -> str:
    return f"  {label + ':':<{ALIGN_WIDTH}}{value}"


def _card_index(deck: Deck, number: int) -> int:
    """1-based card number as typed by the user -> card id."""
    if not 1 <= number <= len(deck.cards):
        raise UserInputError(f"Invalid input: card must be between 1 and {len(deck.cards)}, got {number}.")
    return number - 1


def _symbol_index(deck: Deck, number: int) -> int:
    if not 1 <= number <= len(deck.symbols):
        raise UserInputError(f"Invalid input: symbol must be between 1 and {len(deck.symbols)}, got {number}.")
    return number - 1


def _show_ids() -> bool:
    return bool(CFG("DISPLAY.SHOW_IDS", True))


def print_stats(deck: Deck, om: OutputManager | None = None) -> None:
    out = _out(om)
    stats = get_deck_stats(deck)
    ok = f"{Fore.GREEN}yes{Style.RESET_ALL}" if stats.is_consistent else f"{Fore.RED}NO{Style.RESET_ALL}"
    out(f"\n{Fore.YELLOW}{Style.BRIGHT}Projective plane of order {deck.order}{Style.RESET_ALL}")
    out(_row("Cards", f"{stats.total_cards} (expected {stats.expected_cards})"))
    out(_row("Symbols", f"{stats.total_symbols} (expected {stats.expected_symbols})"))
    out(_row("Symbols per card", stats.symbols_per_card))
    out(_row("Consistent", ok))


def print_deck(deck: Deck, om: OutputManager | None = None) -> None:
    """Statistics followed by every card in deck order."""
    out = _out(om)
    print_stats(deck, om)
    out("")
    show_ids = _show_ids()
    for card in deck.cards:
        out(format_card(deck, card, show_ids=show_ids))


def print_card(deck: Deck, number: int, om: OutputManager | None = None) -> None:
    card = deck.card(_card_index(deck, number))
    _out(om)(format_card(deck, card, show_ids=_show_ids()))


def print_pair(deck: Deck, first: int, second: int, om: OutputManager | None = None) -> None:
    """Both cards with their common symbol highlighted."""
    out = _out(om)
    a = deck.card(_card_index(deck, first))
    b = deck.card(_card_index(deck, second))
    if a.id == b.id:
        raise UserInputError("Invalid input: pick two different cards.")
    shared = find_shared_symbol(a, b)
    show_ids = _show_ids()
    out(format_card(deck, a, show_ids=show_ids, highlight=[shared] if shared is not None else []))
    out(format_card(deck, b, show_ids=show_ids, highlight=[shared] if shared is not None else []))
    if shared is None:
        out(f"{Fore.RED}These cards share no symbol.{Style.RESET_ALL}")
    else:
        out(f"Shared symbol: {format_symbol(deck, shared, show_ids=True)}")


def print_symbol(deck: Deck, number: int, om: OutputManager | None = None) -> None:
    """Every card holding the symbol, plus where the symbol lives in the plane."""
    out = _out(om)
    sid = _symbol_index(deck, number)
    cards = find_cards_with_symbol(deck, sid)
    pos = symbol_position(deck.order, sid)
    out(f"Symbol {format_symbol(deck, sid, show_ids=True)} is the {pos.describe()}, "
        f"on {len(cards)} cards:")
    show_ids = _show_ids()
    for card in sorted(cards, key=lambda c: c.id):
        out("  " + format_card(deck, card, show_ids=show_ids, highlight=[sid]))


def print_matrix(deck: Deck, om: OutputManager | None = None) -> None:
    out = _out(om)
    max_order = int(CFG("DISPLAY.MAX_MATRIX_ORDER", 7))
    if deck.order > max_order:
        n = len(deck.cards)
        out(f"Incidence matrix only shown for orders up to {max_order}; "
            f"order {deck.order} would be {n}x{n}.")
        return
    matrix = incidence_matrix(deck)
    width = len(str(len(matrix)))
    out(f"\n{Fore.YELLOW}Incidence matrix{Style.RESET_ALL} (rows: cards, columns: symbols)")
    for line in format_id_ruler(len(deck.symbols), indent=width + 1):
        out(line)
    for card_id, row in enumerate(matrix):
        out(format_matrix_row(card_id, row, width=width))


def print_verification(deck: Deck, om: OutputManager | None = None) -> bool:
    out = _out(om)
    problems = verify_deck(deck)
    if not problems:
        out(f"{Fore.GREEN}✓ Every pair of cards shares exactly one symbol "
            f"and every pair of symbols shares exactly one card.{Style.RESET_ALL}")
        return True
    out(f"{Fore.RED}✗ {len(problems)} invariant violation(s):{Style.RESET_ALL}")
    for p in problems:
        out(f"  - {p}")
    return False


def print_field(field: GaloisField, om: OutputManager | None = None) -> None:
    """Addition and multiplication tables of GF(q)."""
    out = _out(om)
    q = field.order
    w = len(str(q - 1))
    out(f"\n{Fore.YELLOW}{field.describe()}{Style.RESET_ALL}")
    for title, op in (("+", field.add), ("×", field.multiply)):
        out("")
        out(f"{title:>{w}} | " + " ".join(f"{b:>{w}}" for b in field.elements()))
        out("-" * (w + 1) + "+" + "-" * ((w + 1) * q))
        for a in field.elements():
            out(f"{a:>{w}} | " + " ".join(f"{op(a, b):>{w}}" for b in field.elements()))


def print_orders(om: OutputManager | None = None) -> None:
    out = _out(om)
    out("\nAvailable orders:")
    for q in VALID_ORDERS:
        info = get_order_info(q)
        out(f"  {Style.BRIGHT}{q:>2}{Style.RESET_ALL}  {info.description}")
    out("  (6 and 10 are missing: they are not prime powers, so no such plane exists.)")


def print_profiles_with_descriptions() -> None:
    pairs = list_profiles_with_descriptions()
    if not pairs:
        print("\nAvailable profiles: (none)")
        return
    current = read_current_profile()
    lines = []
    for name, desc in pairs:
        mark = "🡆" if current and name == current else " "
        lines.append(f"{mark} {name:13} — {desc}")
    print("\nAvailable profiles:\n  " + "\n  ".join(lines))


def show_intro_help(om: OutputManager | None = None) -> None:
    lines = [
        "",
        f"{Fore.GREEN}spotplane v{__version__}{Style.RESET_ALL} — Spot It! decks from finite projective planes",
        "-" * 78,
        "Every two cards share exactly one symbol because the cards are the lines",
        "and the symbols the points of a projective plane of order q.",
        "",
        f"{Fore.MAGENTA + Style.BRIGHT}Commands:{Style.RESET_ALL}",
        "   <q>                 build and show the deck of order q (2 3 4 5 7 8 9 11)",
        "   card N              show card N",
        "   pair A B            show the symbol cards A and B share",
        "   symbol S            show all cards with symbol S and its place in the plane",
        "   matrix              show the card x symbol incidence matrix",
        "   field               show addition/multiplication tables of GF(q)",
        "   stats               show deck statistics",
        "   verify              check every plane invariant",
        "   shuffle             shuffle the cards (ids and symbols are kept)",
        "   mode emojis|numbers switch symbol labels",
        "   orders              list available orders",
        "   p                   list profiles; type a profile name to switch",
        "   hist                show decks built this session",
        "   debug on|off|status switch debug output",
        "   h or help           show this help",
        "   q or quit           quit",
        "",
    ]
    out = _out(om)
    for line in lines:
        out(line)
