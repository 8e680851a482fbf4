"""Split free-text equipment tokens into (identifier, quantity) pairs.

Tokens are tried against an ordered sequence of matchers. Each matcher either
returns a :class:`TokenMatch` or ``None``; the first match wins:

1. ``KM18H5Ox2``  -> ``("KM18H5O", 2)``  explicit ``x`` multiplier
2. ``KM18H5O2``   -> ``("KM18H5O", 2)``  trailing digit run
3. ``KM-18H``     -> ``("KM-18H", 1)``   literal
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence

from . import logger

MULTIPLIER_RE = re.compile(r"(.+)x(\d+)")
TRAILING_DIGITS_RE = re.compile(r"([a-zA-Z0-9]+?)(\d+)")
ASCII_DIGITS = "0123456789"

MAX_QUANTITY = 2**32 - 1


class IdentifierParseError(ValueError):
    """Base class for tokens that cannot be decomposed into identifier and quantity."""

    def __init__(self, token: str, message: str) -> None:
        super().__init__(message)
        self.token = token


class InvalidQuantityError(IdentifierParseError):
    """The quantity part of a token is not an unsigned integer."""


class MalformedTokenError(IdentifierParseError):
    """No split point could be determined for a token."""


@dataclass(frozen=True)
class TokenMatch:
    identifier: str
    quantity_text: str
    rule: str


TokenMatcher = Callable[[str], Optional[TokenMatch]]


def match_multiplier(token: str) -> Optional[TokenMatch]:
    """Match ``<anything>x<digits>``, splitting on the last such suffix."""
    match = MULTIPLIER_RE.fullmatch(token)
    if match is None:
        return None
    return TokenMatch(match.group(1), match.group(2), "multiplier")


def match_trailing_digits(token: str) -> Optional[TokenMatch]:
    """Match an alphanumeric code ending in digits, e.g. ``KM18H5O2``.

    The identifier keeps everything up to the last non-digit character, so
    ``KM18`` splits into ``KM`` and ``18``. Tokens made only of digits are
    left for the literal rule.
    """
    if TRAILING_DIGITS_RE.fullmatch(token) is None:
        return None
    identifier = token.rstrip(ASCII_DIGITS)
    if not identifier or identifier == token:
        return None
    return TokenMatch(identifier, token[len(identifier):], "trailing_digits")


def match_literal(token: str) -> Optional[TokenMatch]:
    return TokenMatch(token, "1", "literal")


TOKEN_MATCHERS: Sequence[TokenMatcher] = (
    match_multiplier,
    match_trailing_digits,
    match_literal,
)


def parse_quantity(token: str, quantity_text: str) -> int:
    if not (quantity_text.isascii() and quantity_text.isdigit()):
        raise InvalidQuantityError(
            token, f"Qty must be integer: {token!r} has quantity {quantity_text!r}"
        )
    quantity = int(quantity_text)
    if quantity > MAX_QUANTITY:
        raise InvalidQuantityError(
            token, f"Qty must be integer: {token!r} quantity exceeds {MAX_QUANTITY}"
        )
    return quantity


def split_token(
    token: str, matchers: Sequence[TokenMatcher] = TOKEN_MATCHERS
) -> TokenMatch:
    """Return the first match for ``token`` from ``matchers``."""
    for matcher in matchers:
        result = matcher(token)
        if result is not None:
            return result
    raise MalformedTokenError(token, f"Format error: {token}")


def parse_identifiers(
    tokens: Iterable[str], matchers: Sequence[TokenMatcher] = TOKEN_MATCHERS
) -> Dict[str, int]:
    """Parse user tokens into ``{identifier: quantity}``.

    Quantities of repeated identifiers are summed; identifiers keep the order
    in which they were first seen. Any bad token aborts the whole parse.
    """
    requested: Dict[str, int] = {}
    for token in tokens:
        result = split_token(token, matchers)
        quantity = parse_quantity(token, result.quantity_text)
        logger.debug(
            "Token %r -> %r x %s (%s)", token, result.identifier, quantity, result.rule
        )
        requested[result.identifier] = requested.get(result.identifier, 0) + quantity
    return requested
