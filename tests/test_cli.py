import hashlib

import pytest

from hashlookup.cli import (
    EXIT_GENERIC_FAILURE,
    EXIT_PARSE_FAILURE,
    EXIT_SUCCESS,
    EXIT_TEST_FAILURE,
    build_parser,
    main,
)
from hashlookup.filearray import IndexEntry
from hashlookup.hashes import available_hashes
from hashlookup.util import MatchMode


@pytest.fixture
def wordlist(tmp_path):
    path = tmp_path / "words.txt"
    path.write_bytes(b"apple\nbanana\ncherry\n")
    return path


@pytest.fixture
def index(tmp_path, wordlist):
    path = tmp_path / "words-md5.idx"
    assert main(["-c", "-q", str(wordlist), str(path), "md5"]) == EXIT_SUCCESS
    return path


def _md5_upper(word: bytes) -> str:
    return hashlib.md5(word).hexdigest().upper()


def test_exit_codes_are_distinct(tmp_path):
    assert [EXIT_SUCCESS, EXIT_GENERIC_FAILURE, EXIT_TEST_FAILURE, EXIT_PARSE_FAILURE] == [0, 1, 2, 3]
    assert main(["-l"]) == 0
    assert main(["-c", "-r", "abc", "a", "b", "md5"]) == 3
    missing = tmp_path / "missing.idx"
    assert main(["-v", "-q", str(missing)]) == 1


def test_list_prints_all_hashes(capsys):
    assert main(["-l"]) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert out.split() == available_hashes()
    assert "MD5" in out.split()


def test_no_arguments_prints_usage(capsys):
    assert main([]) == EXIT_SUCCESS
    assert "Usage:" in capsys.readouterr().err


def test_help_lists_options(capsys):
    assert main(["-h"]) == EXIT_SUCCESS
    err = capsys.readouterr().err
    assert "--create" in err
    assert "RANDOM_PARTIAL" in err


def test_bad_match_mode_is_parse_failure(capsys):
    assert main(["-v", "-m", "bogus", "x.idx"]) == EXIT_PARSE_FAILURE
    assert 'Unknown Match Mode "BOGUS"!' in capsys.readouterr().err


def test_bad_ram_is_parse_failure():
    assert main(["-c", "-r", "abc", "a", "b", "md5"]) == EXIT_PARSE_FAILURE


def test_parser_reads_match_mode():
    args = build_parser().parse_args(["-v", "-m", "all_full", "idx"])
    assert args.verify is True
    assert args.match is MatchMode.ALL_FULL
    assert args.operands == ["idx"]


def test_parser_match_without_mode():
    args = build_parser().parse_args(["-v", "-m"])
    assert args.match is True
    assert args.operands == []


def test_unknown_option_is_reported(capsys):
    assert main(["--bogus", "-l"]) == EXIT_SUCCESS
    assert "Unknown option: --bogus" in capsys.readouterr().out


def test_create_then_search_full_match(index, wordlist, capsys):
    capsys.readouterr()
    target = _md5_upper(b"banana")
    assert main(["-q", str(wordlist), str(index), "md5", target]) == EXIT_SUCCESS
    assert capsys.readouterr().out == f"{target}: banana\n"


def test_search_partial_match(index, wordlist, capsys):
    capsys.readouterr()
    full = _md5_upper(b"apple")
    assert main(["-q", str(wordlist), str(index), "md5", full[:16]]) == EXIT_SUCCESS
    assert capsys.readouterr().out == f"{full}: apple [partial]\n"


def test_search_several_hashes_in_order(index, wordlist, capsys):
    capsys.readouterr()
    first, second = _md5_upper(b"cherry"), _md5_upper(b"apple")
    assert main(["-q", str(wordlist), str(index), "md5", first, second]) == EXIT_SUCCESS
    assert capsys.readouterr().out == f"{first}: cherry\n{second}: apple\n"


def test_search_without_match_prints_nothing_when_quiet(index, wordlist, capsys):
    capsys.readouterr()
    missing = _md5_upper(b"durian")
    assert main(["-q", str(wordlist), str(index), "md5", missing]) == EXIT_SUCCESS
    assert capsys.readouterr().out == ""


def test_search_reports_none_when_not_quiet(index, wordlist, capsys):
    capsys.readouterr()
    missing = _md5_upper(b"durian")
    assert main([str(wordlist), str(index), "md5", missing]) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert f"Matches for hash {missing}:" in out
    assert "none" in out


def test_search_missing_wordlist_fails(index, tmp_path, capsys):
    capsys.readouterr()
    missing = tmp_path / "missing.txt"
    assert main(["-q", str(missing), str(index), "md5", "00"]) == EXIT_GENERIC_FAILURE
    assert "does not exist" in capsys.readouterr().err


def test_create_unknown_hash_fails(wordlist, tmp_path, capsys):
    result = main(["-c", "-q", str(wordlist), str(tmp_path / "x.idx"), "nope"])
    assert result == EXIT_GENERIC_FAILURE
    assert 'The hash type "nope" is unknown!' in capsys.readouterr().err


def test_create_and_verify_passes(wordlist, tmp_path, capsys):
    idx = tmp_path / "cv.idx"
    assert main(["-c", "-v", "-q", "-a", str(wordlist), str(idx), "md5"]) == EXIT_SUCCESS
    assert capsys.readouterr().out == ""


def test_verify_all_with_wordlist(index, wordlist):
    assert main(["-v", "-q", "-a", str(wordlist), str(index), "md5"]) == EXIT_SUCCESS


def test_verify_unsorted_index_fails(tmp_path, capsys):
    idx = tmp_path / "unsorted.idx"
    idx.write_bytes(
        IndexEntry(b"\xff" * 8, 0).to_bytes() + IndexEntry(b"\x00" * 8, 5).to_bytes()
    )
    assert main(["-v", "-q", "-s", str(idx)]) == EXIT_TEST_FAILURE
    assert capsys.readouterr().out == "Test: Sorted: Failed!\n"


def test_verify_sorted_index_reports_ok(tmp_path, capsys):
    idx = tmp_path / "sorted.idx"
    idx.write_bytes(
        IndexEntry(b"\x00" * 8, 0).to_bytes() + IndexEntry(b"\xff" * 8, 5).to_bytes()
    )
    assert main(["-v", str(idx)]) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert "\tTest: Sorted:" in out
    assert "OK" in out


def test_verify_wrong_operand_count_prints_usage(capsys):
    assert main(["-v", "a", "b"]) == EXIT_SUCCESS
    assert "Usage:" in capsys.readouterr().err


def test_verify_rejects_index_with_bad_size(tmp_path, capsys):
    idx = tmp_path / "broken.idx"
    idx.write_bytes(b"\x00" * 5)
    assert main(["-v", "-q", str(idx)]) == EXIT_GENERIC_FAILURE
    assert "divisible" in capsys.readouterr().err