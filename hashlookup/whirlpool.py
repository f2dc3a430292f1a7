"""The Whirlpool hash function (512-bit digest)."""

from __future__ import annotations

import struct

_MASK64 = (1 << 64) - 1
_ROUNDS = 10

_E = (0x1, 0xB, 0x9, 0xC, 0xD, 0x6, 0xF, 0x3, 0xE, 0x8, 0x7, 0x4, 0xA, 0x2, 0x5, 0x0)
_R = (0x7, 0xC, 0xB, 0xD, 0xE, 0x4, 0x9, 0xF, 0x6, 0x3, 0x8, 0xA, 0x2, 0x5, 0x1, 0x0)
_E_INV = tuple(_E.index(v) for v in range(16))

_CIRCULANT_ROW = (1, 1, 4, 1, 8, 5, 2, 9)


def _sbox_entry(x: int) -> int:
    high = _E[x >> 4]
    low = _E_INV[x & 0xF]
    r = _R[high ^ low]
    return (_E[high ^ r] << 4) | _E_INV[low ^ r]


def _gf_mul(a: int, b: int) -> int:
    product = 0
    while b:
        if b & 1:
            product ^= a
        a <<= 1
        if a & 0x100:
            a ^= 0x11D
        b >>= 1
    return product


def _rotr(word: int, bits: int) -> int:
    return ((word >> bits) | (word << (64 - bits))) & _MASK64 if bits else word


def _column_word(s: int) -> int:
    word = 0
    for factor in _CIRCULANT_ROW:
        word = (word << 8) | _gf_mul(s, factor)
    return word


_SBOX = tuple(_sbox_entry(x) for x in range(256))
_C0 = tuple(_column_word(s) for s in _SBOX)
_TABLES = tuple(tuple(_rotr(w, 8 * k) for w in _C0) for k in range(8))
_ROUND_CONSTANTS = tuple(
    int.from_bytes(bytes(_SBOX[8 * r : 8 * r + 8]), "big") for r in range(_ROUNDS)
)


def _transform(words: list[int], key: tuple[int, ...] | list[int]) -> list[int]:
    out = []
    for i, acc in enumerate(key):
        for t, table in enumerate(_TABLES):
            acc ^= table[(words[(i - t) & 7] >> (56 - 8 * t)) & 0xFF]
        out.append(acc)
    return out


def _compress(state: list[int], block: bytes) -> list[int]:
    message = struct.unpack(">8Q", block)
    key = list(state)
    cipher_state = [m ^ k for m, k in zip(message, key)]
    for constant in _ROUND_CONSTANTS:
        key = _transform(key, (constant, 0, 0, 0, 0, 0, 0, 0))
        cipher_state = _transform(cipher_state, key)
    return [h ^ c ^ m for h, c, m in zip(state, cipher_state, message)]


class Whirlpool:
    """Incremental Whirlpool hasher with a hashlib-like interface."""

    digest_size = 64
    block_size = 64
    name = "whirlpool"

    def __init__(self, data: bytes = b"") -> None:
        self._state = [0] * 8
        self._pending = b""
        self._length = 0
        self.update(data)

    def update(self, data: bytes) -> None:
        """Feed more bytes into the hash."""
        data = bytes(data)
        self._length += len(data)
        buffer = self._pending + data
        full = len(buffer) - len(buffer) % self.block_size
        for start in range(0, full, self.block_size):
            self._state = _compress(self._state, buffer[start : start + self.block_size])
        self._pending = buffer[full:]

    def digest(self) -> bytes:
        """Return the digest of everything fed so far."""
        tail = self._pending + b"\x80"
        tail += bytes((32 - len(tail)) % self.block_size)
        tail += (self._length * 8).to_bytes(32, "big")
        state = self._state
        for start in range(0, len(tail), self.block_size):
            state = _compress(state, tail[start : start + self.block_size])
        return b"".join(word.to_bytes(8, "big") for word in state)

    def hexdigest(self) -> str:
        return self.digest().hex()


def whirlpool_digest(data: bytes) -> bytes:
    """Return the Whirlpool digest of ``data``."""
    return Whirlpool(data).digest()