"""Build sorted hash index files from wordlists and look up hashes in them."""

__version__ = "1.0.0"