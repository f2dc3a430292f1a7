# hashlookup

`hashlookup` turns a wordlist into a compact, sorted index file of hashes.
It then finds the words behind given hashes by binary search. Neither the
wordlist nor the index is loaded into memory.

Each index entry is 14 bytes long. It holds the first 8 bytes of a word's
hash and the 48-bit little-endian offset of that word's line in the
wordlist. There is one entry per wordlist line. A wordlist that ends in a
newline also gets an entry for the empty line after it. The index is sorted
in place with a heap sort, and the front of the file can be cached in RAM.

## Supported hashes

MD4, MD5, SHA-1, SHA-224, SHA-256, SHA-384, SHA-512, MySQL4.1+ (SHA-1
applied twice), RIPEMD-160, Whirlpool, LM and NTLM.

Hash names are matched case-insensitively, and the characters `-+., ` are
ignored, so `sha512`, `SHA-512` and `Sha 512` all name the same hash.
`sha` is also accepted for SHA-1, `mysql` for MySQL4.1+, and `ripemd` for
RIPEMD-160.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

Show the full help:

```
hashlookup -h
```

List the available hashes, separated by spaces:

```
hashlookup -l
```

Create an index from a wordlist and sort it. `-r SIZE` sets how many MiB of
RAM the sort may use as a cache. The default is 256.

```
hashlookup -c words.txt words-sha512.idx sha512
hashlookup -c -r 1024 words.txt words-md5.idx md5
```

Look up one or more hashes in a sorted index:

```
hashlookup words.txt words-md5.idx md5 827CCB0EEA8A706C4C34A16891F84E7B
```

Each match is printed as `HASH: word`. Characters in a hash that are not
hex digits are ignored. If the hash you give is shorter than the
algorithm's digest, only its prefix is compared. Such a match is marked
`[partial]` and shows the word's full hash.

Verify an index. If you give only the index file, the tests that need the
wordlist and the hash type are skipped.

```
hashlookup -v words-md5.idx
hashlookup -v -s -m ALL words.txt words-md5.idx md5
hashlookup -v --match=ALL_FULL words.txt words-md5.idx md5
```

You can create and verify an index in one run with `hashlookup -c -v ...`.

Verify options:

- `-s`, `--sorted`: check that the index entries are in ascending hash
  order.
- `-m`, `--match[=MODE]`: hash each word of the wordlist and look it up in
  the index. The modes are `ALL` (the default), `ALL_FULL`, `ALL_PARTIAL`,
  `RANDOM`, `RANDOM_FULL` and `RANDOM_PARTIAL`. Mode names are not
  case-sensitive. Put the mode right after `-m`, or use `--match=MODE`,
  because the argument that follows `-m` is read as its mode.
- `-a`, `--all`: run the sorted test and the match test in `ALL` mode.
- `-f`, `--fast`: run the sorted test and the match test in `RANDOM_FULL`
  mode. This is what runs when no test is named.

`-q` / `--quiet` turns off the progress bars and most other output, which
suits scripts. In quiet mode a search prints only the matches, and a
verification prints only the tests that failed.

Exit status:

- `0` on success.
- `1` on an error such as a missing file, an index whose size is not a
  multiple of 14, or an unknown hash.
- `2` if a verification test failed.
- `3` if the command line could not be parsed.

A wrong number of operands for the chosen mode prints the short usage text.

## Python API

- `hashlookup.hashes.get_hasher(name)` returns a `Hasher`. Its
  `hash(data)` method returns a `Hash`. `available_hashes()` and
  `hashes_string(delim)` list the supported names. `Hash.from_string(text)`
  parses hex text, and `str(hash)` gives upper-case hex. `lm_hash`,
  `ntlm_hash` and `mysql41_hash` work on raw bytes.
- `hashlookup.whirlpool.Whirlpool` is an incremental Whirlpool hasher with
  `update`, `digest` and `hexdigest`. `whirlpool_digest(data)` is a
  one-shot form.
- `hashlookup.createidx.create_index(wordlist, index_file, hash_name, quiet)`
  writes an unsorted index.
- `hashlookup.sortidx.sort_index(index_file, cache_bytes, quiet)` sorts an
  index in place. `heapify`, `sort_heap` and `sift_down` are its steps.
- `hashlookup.filearray.FileArray(path, cache_size, progress_bar, auto_load)`
  gives random access to the `IndexEntry` items of an index file through
  `read`, `write` and iteration. It can be used as a context manager, and
  with `auto_load` it writes its cache back on close. `index_file_size` and
  `index_entry_count` inspect a file without opening an array.
- `hashlookup.search.find_matches(wordlist, index, hasher, hash_value)`
  returns the `Match` objects for a hash. Each of its arguments may be
  given either as a path or name, or as an open object.
- `hashlookup.checkidx.check_sorted(array, progress_bar, quiet)` and
  `check_match(wordlist, array, hash_name, mode, progress_bar, quiet)` run
  the verification tests.
- `hashlookup.util.MatchMode.parse(name)` reads a match mode.
  `get_formatted_size(size, power)` formats byte counts as B, KiB, MiB and
  so on.
- `hashlookup.progressbar.ProgressBar` draws a terminal progress bar made of
  weighted `Segment`s. It redraws from a background thread while it is
  used as a context manager.

## Limitations

- The `RANDOM`, `RANDOM_FULL` and `RANDOM_PARTIAL` match modes check
  nothing: the match test passes at once in these modes. A plain `-v` or
  `-f` uses `RANDOM_FULL`, so in practice it checks only that the index is
  sorted. Use `-m ALL` (or `ALL_FULL` / `ALL_PARTIAL`) to check the words
  against the index.
- A search assumes the index is sorted. It finds nothing reliable in an
  unsorted one.