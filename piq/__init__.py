"""Supporting pieces for the piq compiler: bitset, hash map, hashers, argument parsing, logging, diagnostics and builtins."""

__version__ = "0.1.0"

__all__ = [
    "args",
    "bitset",
    "builtins",
    "diagnostic",
    "hashers",
    "hashmap",
    "log",
]