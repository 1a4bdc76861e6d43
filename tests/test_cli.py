# tests/test_cli.py
"""
End-to-end runs of the command line: one-shot flags, commands, output files
and a scripted interactive session.
"""

from __future__ import annotations

import builtins

import pytest

from spotplane import cli
from spotplane.config import read_current_profile
from spotplane.fmt import strip_ansi


def _run(capsys, *argv):
    code = cli.main(list(argv))
    out, err = capsys.readouterr()
    return code, strip_ansi(out), strip_ansi(err)


# ---------- one-shot ------------------------------------------------------------


def test_prints_fano_deck(capsys):
    code, out, _ = _run(capsys, "2", "--mode", "numbers")
    assert code == 0
    assert "Projective plane of order 2" in out
    assert "Card 1: 1  2  3" in out
    assert "Card 7: 3  5  6" in out


def test_emoji_deck_shows_ids(capsys):
    code, out, _ = _run(capsys, "3")
    assert code == 0
    assert "#1" in out and "Card 13:" in out


def test_not_a_prime_power(capsys):
    code, _, err = _run(capsys, "6")
    assert code == 2
    assert "prime power" in err


def test_unsupported_field(capsys):
    code, _, err = _run(capsys, "25")
    assert code == 2
    assert "Error:" in err


def test_verify(capsys):
    code, out, _ = _run(capsys, "4", "--verify", "--quiet")
    assert code == 0
    assert out == ""
    code, out, _ = _run(capsys, "4", "--verify")
    assert "✓ Every pair of cards shares exactly one symbol" in out


def test_pair(capsys):
    code, out, _ = _run(capsys, "3", "--mode", "numbers", "--pair", "1", "2")
    assert code == 0
    assert "Shared symbol: 1" in out
    assert "[1]" in out


def test_same_card_twice(capsys):
    code, _, err = _run(capsys, "3", "--pair", "2", "2")
    assert code == 2
    assert "two different cards" in err


def test_card_out_of_range(capsys):
    code, _, err = _run(capsys, "3", "--card", "99")
    assert code == 2
    assert "between 1 and 13" in err


def test_single_card(capsys):
    code, out, _ = _run(capsys, "2", "--mode", "numbers", "--card", "4")
    assert code == 0
    assert out.strip() == "Card 4: 2  4  6"


def test_symbol(capsys):
    code, out, _ = _run(capsys, "2", "--mode", "numbers", "--symbol", "7")
    assert code == 0
    assert "point (1, 1)" in out
    assert "on 3 cards" in out


def test_matrix_and_field(capsys):
    code, out, _ = _run(capsys, "2", "--mode", "numbers", "--card", "1", "--matrix", "--field")
    assert code == 0
    assert "Incidence matrix" in out
    assert "1 ●●●····" in out
    assert "GF(2)" in out


def test_matrix_too_large(capsys):
    code, out, _ = _run(capsys, "8", "--mode", "numbers", "--card", "1", "--matrix")
    assert code == 0
    assert "only shown for orders up to 7" in out


def test_seeded_shuffle_is_reproducible(capsys):
    _, first, _ = _run(capsys, "5", "--shuffle", "--seed", "11", "--mode", "numbers")
    _, second, _ = _run(capsys, "5", "--shuffle", "--seed", "11", "--mode", "numbers")
    _, plain, _ = _run(capsys, "5", "--mode", "numbers")
    assert first == second
    assert first != plain


def test_classic_profile(capsys):
    code, out, _ = _run(capsys, "classic", "7", "--card", "1")
    assert code == 0
    assert out.strip() == "Card  1: 1  2  3  4  5  6  7  8"


def test_unknown_profile(capsys):
    code, out, _ = _run(capsys, "nope", "3")
    assert code == 2
    assert "Unknown profile" in out


def test_forbidden_output(capsys):
    code, _, err = _run(capsys, "3", "--output", "deck.py")
    assert code == 1
    assert "Forbidden" in err


# ---------- output files --------------------------------------------------------


def test_split_output(capsys, isolated_workspace):
    code, out, _ = _run(capsys, "2", "--mode", "numbers", "--output", "decks/", "--quiet")
    assert code == 0
    assert out == ""
    text = (isolated_workspace / "decks" / "order_2.txt").read_text(encoding="utf-8")
    assert "Card 1: 1  2  3" in text
    assert "\x1b[" not in text


def test_single_output_appends(capsys, isolated_workspace):
    _run(capsys, "2", "--card", "1", "--mode", "numbers", "--output", "all.txt", "--quiet")
    _run(capsys, "3", "--card", "1", "--mode", "numbers", "--output", "all.txt", "--quiet")
    text = (isolated_workspace / "all.txt").read_text(encoding="utf-8")
    assert text == "Card 1: 1  2  3\n\nCard  1: 1  2  3  4\n\n"


# ---------- commands --------------------------------------------------------------


def test_orders_command(capsys):
    code, out, _ = _run(capsys, "orders")
    assert code == 0
    assert "21 cards, 5 symbols each" in out
    assert "133 cards, 12 symbols each" in out


def test_init_and_where(capsys, isolated_workspace):
    code, out, _ = _run(capsys, "init")
    assert code == 0
    assert "Workspace ready" in out
    assert (isolated_workspace / "profiles" / "classic.toml").exists()
    code, out, _ = _run(capsys, "where")
    assert str(isolated_workspace.resolve()) in out


def test_active_command(capsys):
    _, out, _ = _run(capsys, "active")
    assert "Active profile: default" in out


# ---------- interactive session ---------------------------------------------------


def _script(monkeypatch, lines):
    feed = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_repl_session(capsys, monkeypatch):
    _script(monkeypatch, [
        "2",
        "pair 1 2",
        "symbol 1",
        "mode numbers",
        "card 3",
        "matrix",
        "verify",
        "field",
        "stats",
        "shuffle",
        "hist",
        "debug",
        "card 99",
        "7x",
        "h",
        "q",
    ])
    code, out, err = _run(capsys)
    assert code == 0
    assert "Projective plane of order 2" in out
    assert "Shared symbol:" in out
    assert "point at infinity (vertical direction)" in out
    assert "Card 3: 1  6  7" in out
    assert "Incidence matrix" in out
    assert "✓ Every pair" in out
    assert "GF(2)" in out
    assert "order=2" in out
    assert "Debug is currently OFF." in out
    assert "card must be between 1 and 7" in err
    assert "Invalid input: '7x'" in out
    assert "Commands:" in out


def test_repl_keeps_deck_after_bad_order(capsys, monkeypatch):
    _script(monkeypatch, ["4", "6", "card 21"])
    code, out, err = _run(capsys)
    assert code == 0
    assert "prime power" in err
    assert "Card 21:" in out


def test_repl_switches_profile(capsys, monkeypatch):
    _script(monkeypatch, ["classic", "card 1"])
    code, out, _ = _run(capsys)
    assert code == 0
    assert "Applied profile: classic" in out
    assert read_current_profile() == "classic"
    # the order on screen is kept; labels and ids follow the new profile
    assert "Card  1: 1  2  3  4" in out


@pytest.mark.parametrize("cmd", ["pair 1", "card x", "mode letters"])
def test_repl_usage_errors(capsys, monkeypatch, cmd):
    _script(monkeypatch, ["3", cmd])
    code, _, err = _run(capsys)
    assert code == 0
    assert "Invalid input" in err


def test_repl_profile_switch_keeps_debug(capsys, monkeypatch):
    _script(monkeypatch, ["debug on", "classic", "debug"])
    code, out, err = _run(capsys)
    assert code == 0
    assert "Applied profile: classic" in out
    assert "Debug is currently ON." in out
    assert "[debug] active profile: classic" in err
