import hashlib

import pytest

from hashlookup.hashes import (
    Hash,
    Hasher,
    available_hashes,
    get_hasher,
    hashes_string,
    lm_hash,
    mysql41_hash,
    ntlm_hash,
)
from hashlookup.whirlpool import whirlpool_digest


def test_md5_example_from_usage():
    assert str(get_hasher("md5").hash("12345")) == "827CCB0EEA8A706C4C34A16891F84E7B"


def test_lm_of_empty_string():
    assert lm_hash(b"").hex().upper() == "AAD3B435B51404EEAAD3B435B51404EE"


def test_ntlm_known_value():
    assert ntlm_hash(b"password").hex().upper() == "8846F7EAEE8FB117AD06BDD830B7586C"


def test_ntlm_of_empty_is_md4_of_empty():
    assert ntlm_hash(b"") == get_hasher("md4").hash(b"").value


def test_lm_is_case_insensitive():
    assert lm_hash(b"Secret") == lm_hash(b"SECRET")


def test_lm_truncates_at_fourteen_bytes():
    assert lm_hash(b"a" * 14) == lm_hash(b"a" * 20)


def test_lm_short_word_has_empty_second_half():
    assert lm_hash(b"abc")[8:] == lm_hash(b"")[8:]


def test_mysql_is_double_sha1():
    sha1 = get_hasher("sha1")
    assert get_hasher("mysql").hash(b"password") == sha1.hash(sha1.hash(b"password").value)
    assert mysql41_hash(b"password") == get_hasher("MySQL4.1+").hash(b"password").value


@pytest.mark.parametrize("name", ["md5", "sha1", "sha224", "sha256", "sha384", "sha512"])
def test_standard_hashes_agree_with_hashlib(name):
    assert get_hasher(name).hash(b"wordlist").value == hashlib.new(name, b"wordlist").digest()


def test_whirlpool_hasher_uses_whirlpool():
    assert get_hasher("Whirlpool").hash(b"abc").value == whirlpool_digest(b"abc")


@pytest.mark.parametrize("name", available_hashes())
def test_digest_size_matches_output(name):
    hasher = get_hasher(name)
    assert len(hasher.hash(b"sample")) == hasher.digest_size


def test_ripemd_digest_is_160_bits():
    assert len(get_hasher("RIPEMD-160").hash(b"x")) * 8 == 160


def test_text_is_hashed_as_utf8():
    hasher = get_hasher("sha256")
    assert hasher.hash("grüße") == hasher.hash("grüße".encode())


@pytest.mark.parametrize(
    "alias, canonical",
    [
        ("sha", "SHA-1"),
        ("SHA-1", "SHA-1"),
        ("mysql", "MySQL4.1+"),
        ("MySQL 4.1+", "MySQL4.1+"),
        ("ripemd", "RIPEMD-160"),
        ("Sha.256", "SHA-256"),
    ],
)
def test_name_normalisation(alias, canonical):
    assert get_hasher(alias).name == canonical


def test_unknown_hash_reports_normalised_name():
    with pytest.raises(ValueError, match='"foo"'):
        get_hasher("F-O.o")


def test_available_hashes_listing():
    names = available_hashes()
    assert names[0] == "MD4"
    assert names[-1] == "NTLM"
    assert len(names) == 12
    assert all(isinstance(get_hasher(n), Hasher) for n in names)


def test_hashes_string():
    assert hashes_string() == " ".join(available_hashes())
    assert hashes_string(", ").split(", ") == available_hashes()


def test_hash_string_round_trip():
    value = get_hasher("sha1").hash(b"roundtrip")
    assert Hash.from_string(str(value)) == value
    assert str(value) == str(value).upper()


def test_from_string_ignores_separators_and_case():
    assert Hash.from_string("ab:CD") == Hash(bytes([0xAB, 0xCD]))


def test_from_string_drops_dangling_digit():
    assert Hash.from_string("abc") == Hash(bytes([0xAB]))


def test_getitem_out_of_range_is_zero():
    value = Hash(bytes([7, 9]))
    assert value[1] == 9
    assert value[5] == 0
    assert value[-1] == 0
    assert list(value) == [7, 9]


def test_partial_match_prefix():
    short = Hash(bytes([1, 2]))
    long = Hash(bytes([1, 2, 3]))
    assert short.partial_match(long)
    assert not long.partial_match(short)
    assert Hash().partial_match(long)
    assert not Hash(bytes([1, 4])).partial_match(long)


def test_prefix_of_full_hash_matches():
    full = get_hasher("md5").hash(b"prefix")
    prefix = Hash.from_string(str(full)[:16])
    assert len(prefix) == 8
    assert prefix.partial_match(full)