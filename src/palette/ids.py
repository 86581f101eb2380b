from __future__ import annotations

"""Color identifier minting.

Identifiers are 16 lowercase hex digits (64 random bits), the same shape
the host application writes into palette files. They carry no meaning;
only uniqueness across the project matters.
"""

import re
import secrets
from typing import Container

COLOR_ID_LENGTH = 16

_COLOR_ID_RE = re.compile(r"^[0-9a-f]{16}$")


def is_color_id(value: object) -> bool:
    """Return True if ``value`` looks like a minted color identifier."""
    return isinstance(value, str) and bool(_COLOR_ID_RE.match(value))


def new_color_id(taken: Container[str] = (), *, retries: int = 16) -> str:
    """Return a fresh identifier not contained in ``taken``.

    Parameters
    ----------
    taken:
        Identifiers already in use anywhere in the project.
    retries:
        Number of draws before giving up. Collisions on 64 random bits are
        not expected; the bound only keeps a broken ``taken`` container
        from looping forever.

    Raises
    ------
    RuntimeError
        If every draw collided with ``taken``.
    """
    for _ in range(max(1, retries)):
        candidate = secrets.token_hex(COLOR_ID_LENGTH // 2)
        if candidate not in taken:
            return candidate
    raise RuntimeError(f"could not mint a unique color id after {retries} attempts")
