# src/spotplane/cli.py

"""
spotplane - Spot It! decks from finite projective planes

Description:
    Builds the deck of the projective plane of order q (q a prime power) and
    shows its cards, shared symbols, incidence matrix and field tables,
    either once from the command line or in an interactive session.

usage: see spotplane -h
"""

from __future__ import annotations

import argparse
import faulthandler
import random
import sys
import textwrap
import time
import traceback
from dataclasses import dataclass, field
from importlib.resources import files as pkg_files
from typing import NamedTuple

from colorama import Fore, Style
from colorama import init as colorama_init

from spotplane import __version__ as _ver
from spotplane import config as CONFIG
from spotplane.deck import Deck, generate_deck, shuffle_deck
from spotplane.display import (
    print_card,
    print_deck,
    print_field,
    print_matrix,
    print_orders,
    print_pair,
    print_profiles_with_descriptions,
    print_stats,
    print_symbol,
    print_verification,
    show_intro_help,
)
from spotplane.errors import DeckError, UserInputError
from spotplane.galois import GaloisField
from spotplane.labels import SYMBOL_MODES
from spotplane.output_manager import OutputManager
from spotplane.runtime import APPLY, CFG, debug_log
from spotplane.runtime import current as _rt_current
from spotplane.utility import clear_screen, flatten_dotted, parse_int, typename, validate_output_setting
from spotplane.workspace import ensure_workspace_seeded, workspace_dir

_COMMANDS = {"init", "where", "orders", "active"}


# In memory session history
class HistoryItem(NamedTuple):
    order: int
    mode: str
    profile: str | None
    timestamp: float


_HISTORY: list[HistoryItem] = []


def add_to_history(order: int, mode: str, profile: str | None = None) -> None:
    _HISTORY.append(HistoryItem(order=order, mode=mode, profile=profile, timestamp=time.time()))


def get_history() -> list[HistoryItem]:
    return list(_HISTORY)


@dataclass
class Session:
    """The deck currently on screen and how it was built."""
    order: int
    mode: str
    rng: random.Random = field(default_factory=random.Random)
    deck: Deck | None = None

    def build(self, order: int | None = None) -> Deck:
        """(Re)build the deck; on error the previous order and deck are kept."""
        order = self.order if order is None else order
        t0 = time.perf_counter()
        deck = generate_deck(order, self.mode)
        debug_log(f"deck of order {order} built in {(time.perf_counter() - t0) * 1000:.1f} ms")
        if _rt_current().debug:
            debug_log(GaloisField(order).describe())
        self.order, self.deck = order, deck
        return deck

    def require_deck(self) -> Deck:
        return self.deck if self.deck is not None else self.build()


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{Fore.RED}Error:{Style.RESET_ALL} {msg}"
    else:
        head, _, rest = msg.partition(":")
        msg = f"{Fore.RED}{head}:{Style.RESET_ALL}{rest}"
    print(msg, file=sys.stderr)


def _is_int(token: str) -> bool:
    try:
        parse_int(token)
    except UserInputError:
        return False
    return True


def _resolve_inputs(items: list[str]) -> tuple[str | None, int | None]:
    """
    (profile, order) from the positionals: a numeric item is the order,
    anything else the profile (or a command such as 'init').
    """
    if not items:
        return None, None
    if len(items) == 1:
        tok = items[0]
        return (None, parse_int(tok, "order")) if _is_int(tok) else (tok, None)
    a, b = items[0], items[1]
    if _is_int(a):
        return None, parse_int(a, "order")
    return a, (parse_int(b, "order") if _is_int(b) else None)


def _make_rng(seed: int | None) -> random.Random:
    if seed is None:
        seed = int(CFG("SHUFFLE.SEED", 0) or 0)
    return random.Random(seed) if seed else random.Random()


def _apply_profile(name: str, debug: bool) -> str:
    selected = CONFIG.load_settings(name)
    APPLY(selected)
    if debug:
        _rt_current().debug = True
    debug_log(f"active profile: {selected.name} ({selected._source})")
    for k, v in sorted(flatten_dotted(selected.as_dict()).items(), key=lambda kv: kv[0].lower()):
        debug_log(f"    {k:.<40} {v!r} ({typename(v)})")
    return selected.name


def _select_profile_name(explicit: str | None) -> str:
    """explicit --> last used --> 'default'"""
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent("""\
    commands:
      init      Create the workspace and copy the packaged profiles and glyph tables if missing.
      where     Show the workspace and package paths.
      orders    List the deck orders that can be built.
      active    Show the active profile.
    """)

    p = argparse.ArgumentParser(
        prog="spotplane",
        description="Spot It! decks from finite projective planes",
        usage=(
            "spotplane [[profile] [order]] [--mode MODE] [--card N | --pair A B | --symbol S]\n"
            "                 [--matrix] [--field] [--shuffle] [--seed SEED] [--verify]\n"
            "                 [--output OUTPUT] [--quiet] [--debug]\n"
            "       spotplane init | where | orders | active\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="[profile] [order]",
                   help="optional profile name followed by the deck order")
    p.add_argument("--mode", choices=SYMBOL_MODES, default=None, help="Symbol labels (profile default otherwise)")
    p.add_argument("--card", type=int, metavar="N", help="Show only card N")
    p.add_argument("--pair", type=int, nargs=2, metavar=("A", "B"), help="Show the symbol cards A and B share")
    p.add_argument("--symbol", type=int, metavar="S", help="Show the cards holding symbol S")
    p.add_argument("--matrix", action="store_true", help="Also print the incidence matrix")
    p.add_argument("--field", action="store_true", help="Also print the GF(q) addition/multiplication tables")
    p.add_argument("--shuffle", action="store_true", help="Shuffle the cards before printing")
    p.add_argument("--seed", type=int, default=None, help="Seed for --shuffle")
    p.add_argument("--verify", action="store_true", help="Check every plane invariant (exit code 1 on failure)")
    p.add_argument("--output", default=None, help="Write results to a file (also prints unless --quiet)")
    p.add_argument("--quiet", action="store_true", help="Suppress screen output")
    p.add_argument("--debug", action="store_true", help="Show field construction, timings and tracebacks")
    p.add_argument("--version", action="version", version=f"spotplane {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except (UserInputError, DeckError) as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if "--debug" in (argv if argv is not None else sys.argv):
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _run_commands(command: str) -> int:
    if command == "init":
        ws, _, copied = ensure_workspace_seeded()
        print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}, data: {copied.get('data', 0)}")
    elif command == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('spotplane')}")
    elif command == "orders":
        print_orders()
    elif command == "active":
        print(f"Active profile: {CONFIG.read_current_profile() or 'default'}")
    return 0


def _one_shot(args, session: Session, output_target: str | None) -> int:
    deck = session.build()
    if args.shuffle:
        deck = shuffle_deck(deck, session.rng)
        session.deck = deck
    add_to_history(session.order, session.mode, _rt_current().profile_name)

    om = OutputManager(output_file=output_target, quiet=args.quiet, order=session.order)
    ok = True
    try:
        if args.card is not None:
            print_card(deck, args.card, om)
        elif args.pair is not None:
            print_pair(deck, args.pair[0], args.pair[1], om)
        elif args.symbol is not None:
            print_symbol(deck, args.symbol, om)
        else:
            print_deck(deck, om)
        if args.matrix:
            print_matrix(deck, om)
        if args.field:
            print_field(GaloisField(session.order), om)
        if args.verify:
            ok = print_verification(deck, om)
    finally:
        om.close()
    if om.path:
        debug_log(f"output written to {om.path}")
    return 0 if ok else 1


# ---- main ----
def _main_impl(argv=None) -> int:
    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)
    _install_loud_error_handlers(args.debug)

    profile, order = _resolve_inputs(args.items)
    if profile in _COMMANDS:
        return _run_commands(profile)

    ensure_workspace_seeded()
    if profile and not CONFIG.has_profile(profile):
        print(f"Unknown profile: '{profile}'")
        print("Available profiles:", ", ".join(CONFIG.list_all_profiles()))
        return 2
    profile_name = _apply_profile(_select_profile_name(profile), args.debug)

    try:
        output_target = validate_output_setting(args.output)
    except ValueError as e:
        print(f"Fatal error in --output: {e}", file=sys.stderr)
        return 1
    if output_target is None:
        output_target = CFG("OUTPUT.OUTPUT_FILE", None) or None

    session = Session(
        order=order if order is not None else int(CFG("DECK.DEFAULT_ORDER", 3)),
        mode=args.mode or str(CFG("DECK.SYMBOL_MODE", "emojis")),
        rng=_make_rng(args.seed),
    )

    if order is not None:
        return _one_shot(args, session, output_target)
    return _repl(session, profile_name, output_target)


# ---- REPL ----
def _numbers(parts: list[str], count: int, usage: str) -> list[int]:
    if len(parts) != count + 1:
        raise UserInputError(f"Invalid input: usage is '{usage}'.")
    return [parse_int(p) for p in parts[1:]]


def _render(session: Session, output_target: str | None) -> None:
    deck = session.require_deck()
    om = OutputManager(output_file=output_target, quiet=False, order=session.order)
    try:
        print_deck(deck, om)
    finally:
        om.close()


def _handle(low: str, session: Session, output_target: str | None) -> bool:
    """Run one REPL command; False when the input is not a command."""
    parts = low.split()
    cmd = parts[0]

    if _is_int(low):
        session.build(parse_int(low, "order"))
        add_to_history(session.order, session.mode, _rt_current().profile_name)
        _render(session, output_target)
    elif cmd == "card":
        (n,) = _numbers(parts, 1, "card N")
        print_card(session.require_deck(), n)
    elif cmd == "pair":
        a, b = _numbers(parts, 2, "pair A B")
        print_pair(session.require_deck(), a, b)
    elif cmd == "symbol":
        (s,) = _numbers(parts, 1, "symbol S")
        print_symbol(session.require_deck(), s)
    elif cmd == "matrix":
        print_matrix(session.require_deck())
    elif cmd == "field":
        print_field(GaloisField(session.order))
    elif cmd == "stats":
        print_stats(session.require_deck())
    elif cmd == "verify":
        print_verification(session.require_deck())
    elif cmd == "shuffle":
        session.deck = shuffle_deck(session.require_deck(), session.rng)
        _render(session, output_target)
    elif cmd == "mode":
        if len(parts) != 2 or parts[1] not in SYMBOL_MODES:
            raise UserInputError(f"Invalid input: usage is 'mode {'|'.join(SYMBOL_MODES)}'.")
        session.mode = parts[1]
        session.deck = None
        _render(session, output_target)
    elif cmd == "orders":
        print_orders()
    elif cmd in {"p", "profiles"}:
        print_profiles_with_descriptions()
    elif cmd in {"hist", "history"}:
        hist = get_history()
        if not hist:
            print("History is empty.")
        for item in hist:
            ts = time.strftime("%H:%M:%S", time.localtime(item.timestamp))
            print(f"{ts}  order={item.order:<3} mode={item.mode:<8} profile={item.profile or '-'}")
    elif cmd == "debug":
        rt = _rt_current()
        if len(parts) == 1 or parts[1] == "status":
            print(f"Debug is currently {'ON' if rt.debug else 'OFF'}.")
        elif parts[1] in {"on", "off"}:
            rt.debug = parts[1] == "on"
            print(f"Debug mode {'enabled' if rt.debug else 'disabled'} for this session.")
        else:
            print("Usage: DEBUG [on|off|status]")
    else:
        return False
    return True


def _repl(session: Session, profile_name: str, output_target: str | None) -> int:
    if not _rt_current().debug:
        clear_screen()
    print(f"{Fore.YELLOW}{Style.BRIGHT}spotplane v{_ver} — Spot It! decks from projective planes{Style.RESET_ALL}")

    current_profile = profile_name
    while True:
        try:
            prompt = (f"\nProfile: {current_profile}  Order: {session.order} — "
                      "enter an order, command or profile (h=Help, q=Quit): ")
            user_input = input(prompt).strip()
            low = user_input.lower()
            if low in {"", "q", "quit"}:
                break
            if low in {"h", "help"}:
                show_intro_help()
                continue

            try:
                if _handle(low, session, output_target):
                    continue
            except (UserInputError, DeckError) as e:
                _print_user_error(str(e))
                continue

            if CONFIG.has_profile(user_input):
                try:
                    current_profile = _apply_profile(user_input, _rt_current().debug)
                    CONFIG.write_current_profile(user_input)
                    session.mode = str(CFG("DECK.SYMBOL_MODE", session.mode))
                    session.rng = _make_rng(None)
                    session.deck = None
                    print(f"Applied profile: {current_profile}")
                except UserInputError as e:
                    print(f"{Fore.RED}Failed to load profile {Style.RESET_ALL}'{user_input}': {e}", file=sys.stderr)
                continue

            print(f"{Fore.RED}Invalid input: {Style.RESET_ALL}'{user_input}'. Type H for help.")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        except Exception as e:
            if _rt_current().debug:
                traceback.print_exc()
            else:
                _print_user_error(f"{e.__class__.__name__}: {e}")
            continue
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
