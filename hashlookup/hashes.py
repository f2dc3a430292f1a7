"""Hash values and the hash algorithms an index can be built with."""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from Crypto.Cipher import DES
from Crypto.Hash import MD4, RIPEMD160

from .whirlpool import whirlpool_digest

_HEX_DIGITS = frozenset("0123456789abcdef")
_NAME_NOISE = str.maketrans("", "", "-+., ")
_LM_MAGIC = b"KGS!@#$%"


@dataclass(frozen=True)
class Hash:
    """An immutable hash value; bytes past its end read as zero."""

    value: bytes = b""

    @classmethod
    def from_string(cls, text: str) -> Hash:
        """Parse hex text, ignoring any non-hex characters and a dangling digit."""
        digits = "".join(c for c in text.lower() if c in _HEX_DIGITS)
        return cls(bytes.fromhex(digits[: len(digits) // 2 * 2]))

    def partial_match(self, other: Hash) -> bool:
        """True if ``other`` starts with all the bytes of this hash."""
        return all(byte == other[i] for i, byte in enumerate(self.value))

    def __getitem__(self, index: int) -> int:
        if 0 <= index < len(self.value):
            return self.value[index]
        return 0

    def __iter__(self) -> Iterator[int]:
        return iter(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.value.hex().upper()


@dataclass(frozen=True)
class Hasher:
    """A named hash algorithm producing :class:`Hash` values."""

    name: str
    digest_size: int
    function: Callable[[bytes], bytes] = field(repr=False, compare=False)

    def hash(self, data: bytes | str) -> Hash:
        """Hash raw bytes; text is encoded as UTF-8 first."""
        if isinstance(data, str):
            data = data.encode()
        return Hash(self.function(bytes(data)))


def _md4(data: bytes) -> bytes:
    return MD4.new(data).digest()


def _md5(data: bytes) -> bytes:
    return hashlib.md5(data).digest()


def _sha1(data: bytes) -> bytes:
    return hashlib.sha1(data).digest()


def _sha224(data: bytes) -> bytes:
    return hashlib.sha224(data).digest()


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _sha384(data: bytes) -> bytes:
    return hashlib.sha384(data).digest()


def _sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def _ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


def _lm_des_key(half: bytes) -> bytes:
    middle = (((half[i - 1] << (8 - i)) | (half[i] >> i)) & 0xFF for i in range(1, 7))
    return bytes([half[0] & 0xFE, *middle, (half[6] << 1) & 0xFF])


def _lm_des(half: bytes) -> bytes:
    return DES.new(_lm_des_key(half), DES.MODE_ECB).encrypt(_LM_MAGIC)


def lm_hash(data: bytes) -> bytes:
    """LAN Manager hash: the first 14 bytes upper-cased, split into two DES keys."""
    padded = bytes(data[:14]).upper().ljust(14, b"\0")
    return _lm_des(padded[:7]) + _lm_des(padded[7:])


def ntlm_hash(data: bytes) -> bytes:
    """NTLM hash: MD4 of the bytes each followed by a zero byte."""
    widened = bytearray(2 * len(data))
    widened[::2] = data
    return _md4(bytes(widened))


def mysql41_hash(data: bytes) -> bytes:
    """MySQL 4.1+ password hash: SHA-1 applied twice."""
    return _sha1(_sha1(data))


_ALGORITHMS = (
    (Hasher("MD4", 16, _md4), ("md4",)),
    (Hasher("MD5", 16, _md5), ("md5",)),
    (Hasher("SHA-1", 20, _sha1), ("sha1", "sha")),
    (Hasher("SHA-224", 28, _sha224), ("sha224",)),
    (Hasher("SHA-256", 32, _sha256), ("sha256",)),
    (Hasher("SHA-384", 48, _sha384), ("sha384",)),
    (Hasher("SHA-512", 64, _sha512), ("sha512",)),
    (Hasher("MySQL4.1+", 20, mysql41_hash), ("mysql41", "mysql")),
    (Hasher("RIPEMD-160", 20, _ripemd160), ("ripemd160", "ripemd")),
    (Hasher("Whirlpool", 64, whirlpool_digest), ("whirlpool",)),
    (Hasher("LM", 16, lm_hash), ("lm",)),
    (Hasher("NTLM", 16, ntlm_hash), ("ntlm",)),
)

_BY_KEY = {key: hasher for hasher, keys in _ALGORITHMS for key in keys}


def get_hasher(name: str) -> Hasher:
    """Find an algorithm by name, ignoring case and the characters ``-+., ``."""
    key = name.translate(_NAME_NOISE).lower()
    try:
        return _BY_KEY[key]
    except KeyError:
        raise ValueError(f'The hash type "{key}" is unknown!') from None


def available_hashes() -> list[str]:
    """Names of all supported algorithms."""
    return [hasher.name for hasher, _ in _ALGORITHMS]


def hashes_string(delim: str = " ") -> str:
    return delim.join(available_hashes())