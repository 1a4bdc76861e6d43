# src/spotplane/errors.py
from __future__ import annotations


class DeckError(Exception):
    """Base class for every error raised by the deck engine."""


class UnsupportedFieldError(DeckError, ValueError):
    """
    The order is a prime power, but no field arithmetic is implemented for its
    characteristic/degree combination (e.g. 25 = 5², 27 = 3³).
    """


class InvalidOrderError(UnsupportedFieldError):
    """The order is not a prime power (or not an integer >= 2); no plane exists."""


class UserInputError(Exception):
    pass
