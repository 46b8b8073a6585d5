"""Stable 32-bit string hash and base-36 codec.

The hash is a MurmurHash2-style multiply/xor-shift mix over the UTF-8 bytes
of the input followed by a final avalanche step. It is not cryptographic; it
only needs to be fast, well distributed and identical on every platform.
"""

from __future__ import annotations

_M = 0x5BD1E995
_MASK = 0xFFFFFFFF
_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

HASH_BITS = 32


def hash32(text: str) -> int:
    h = 0
    for byte in text.encode("utf-8"):
        h = ((h ^ byte) * _M) & _MASK
        h ^= h >> 13
    h ^= h >> 13
    h = (h * _M) & _MASK
    h ^= h >> 15
    return h


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("to_base36 expects a non-negative integer")
    if number == 0:
        return "0"
    digits: list[str] = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def from_base36(text: str) -> int:
    if not text or any(ch not in _ALPHABET for ch in text):
        raise ValueError(f"Not a lowercase base-36 string: {text!r}")
    return int(text, 36)
