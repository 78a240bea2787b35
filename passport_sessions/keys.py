# passport_sessions/keys.py
from __future__ import annotations

import secrets
import string
from typing import Optional, Protocol, Sequence

ALPHABET = string.ascii_letters + string.digits
KEY_LENGTH = 64


class RandomSource(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


class KeyGenerator:
    """
    Mints session identifiers.

    Characters are drawn from ``[A-Za-z0-9]`` using the OS entropy pool
    (``secrets.SystemRandom``) unless another source is injected. If the
    entropy source fails the error propagates; there is no fallback to a
    seeded PRNG.
    """

    def __init__(self, rng: Optional[RandomSource] = None, length: int = KEY_LENGTH) -> None:
        if length <= 0:
            raise ValueError("length must be positive")
        self._rng = rng if rng is not None else secrets.SystemRandom()
        self._length = length

    @property
    def length(self) -> int:
        return self._length

    def generate(self) -> str:
        return "".join(self._rng.choice(ALPHABET) for _ in range(self._length))


_default = KeyGenerator()


def generate_session_key() -> str:
    return _default.generate()

