# roundvote/identity.py
from typing import Any

from roundvote.config import (
    IDENTITY_LENGTH,
    IDENTITY_CATEGORIES,
    ODD_POSITION_WEIGHT,
    EVEN_POSITION_WEIGHT,
)

_DIGITS = "0123456789"


def checksum_digit(body: str) -> int:
    """
    Weighted checksum over the six body digits of an identity token.

    `body` is the full token or at least its first seven characters; only
    positions 1-6 are read. Odd positions weigh ODD_POSITION_WEIGHT, even
    positions EVEN_POSITION_WEIGHT, and the sum is reduced modulo 10.
    """
    total = 0
    for i in range(1, 7):
        weight = ODD_POSITION_WEIGHT if i % 2 == 1 else EVEN_POSITION_WEIGHT
        total += int(body[i]) * weight
    return total % 10


def validate(token: Any) -> bool:
    """
    Check an identity token for syntax and self-consistency.

    Never raises: anything that is not an 8-character string with a known
    category marker, six body digits and a matching check digit is simply
    rejected.
    """
    if not isinstance(token, str) or len(token) != IDENTITY_LENGTH:
        return False
    if token[0] not in IDENTITY_CATEGORIES:
        return False
    # str.isdigit() accepts superscripts and other non-ASCII digits
    if any(c not in _DIGITS for c in token[1:]):
        return False
    return int(token[7]) == checksum_digit(token)


def make_token(category: str, body: str) -> str:
    """Append the check digit to a category marker plus six digits."""
    draft = category + body
    if len(draft) != IDENTITY_LENGTH - 1 or category not in IDENTITY_CATEGORIES:
        raise ValueError(f"cannot build identity token from {draft!r}")
    if any(c not in _DIGITS for c in body):
        raise ValueError(f"identity body must be digits: {body!r}")
    return draft + str(checksum_digit(draft))
