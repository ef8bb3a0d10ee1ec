# piq

Building blocks for the piq compiler, with no runtime dependencies, for
Python 3.10 and later.

- `piq.bitset`: `Bitset`, a packed, growable sequence of booleans with
  indexing, iteration, `push`, `push_n`, `pop`, `peek`, `pop_n`, and
  `get_set` / `get_clear` (change a bit and return its previous value).
- `piq.hashmap`: `HashMap`, an open-addressing hash map with linear probing,
  tombstones and doubling when elements plus tombstones reach 13/20 of the
  buckets. New keys and stored keys have separate hash callbacks; new keys
  are compared with a callback, stored keys by equality. A context object is
  passed to every callback. Lookups return bucket indices (`lookup`,
  `is_occupied`, `key_at`, `value_at`), so a caller can look up once and
  write with `insert_at`. `HashMapFullError` is raised when the table cannot
  grow further.
- `piq.hashers`: 32-bit hash functions `mix`, `hash_int`, `hash_bytes`,
  `hash_string` and `hash_binding`.
- `piq.args`: a small command-line parser with flags, string and integer
  options, and nested subcommands (`Argument`, `ArgumentBag`, `ProgramArgs`,
  `parse_args`, `format_help`). Bad input raises `ArgumentError`; `-h` or
  `--help` raises `HelpRequested`. Both carry the help text.
- `piq.log`: a program-wide verbosity level (`Verbosity`, `set_verbosity`,
  `get_verbosity`). `log_verbose` writes to standard output when the level is
  above `Verbosity.SOME`; `log_extra_verbose` when it is above
  `Verbosity.VERY`.
- `piq.diagnostic`: `find_line_and_col` (one-based `PositionInfo`),
  `format_error_ctx` (the surrounding lines with the span highlighted in ANSI
  colour) and `format_resolution_errors`.
- `piq.builtins`: the builtin terms and types (`BuiltinTerm`,
  `BuiltinType`), their names and types (`term_name`, `term_type`,
  `lookup_term`, `is_comparison`, `is_arithmetic`), fixed-width integer
  evaluation (`apply_builtin`) and the modulo variants `mod_trunc`,
  `mod_floor` and `mod_euc`.

## Examples

### Bitset

```python
from piq.bitset import Bitset

bits = Bitset(0)
bits.push(True)
bits.push(False)
bits.push_n(True, 10)
assert len(bits) == 12
assert bits[0] and not bits[1]
assert bits.pop() is True
```

### Hash map

```python
from piq.hashmap import HashMap

def hash_key(key, context):
    return key * 0x9E3779B9 & 0xFFFFFFFF

def same_key(a, b, context):
    return a == b

hm = HashMap(same_key, hash_key, hash_key, 512, True)
for key in range(1000):
    hm.upsert(key, key, key + 1, None)

index = hm.lookup(42, None)
assert hm.is_occupied(index)
assert hm.key_at(index) == 42
assert hm.value_at(index) == 43
```

### Command-line arguments

```python
from piq.args import ArgKind, Argument, ArgumentBag, ProgramArgs, parse_args

program = ProgramArgs(
    root=ArgumentBag((
        Argument(ArgKind.FLAG, "verbose", "print more", short_name="v"),
        Argument(
            ArgKind.SUBCOMMAND, "build", "compile a file", value=1,
            subs=ArgumentBag((
                Argument(ArgKind.STRING, "output", "output path", short_name="o"),
            )),
        ),
    )),
    preamble="demo compiler",
)

parsed = parse_args(program, ["demo", "-v", "build", "--output=out.ll"])
assert parsed["verbose"] is True
assert parsed.subcommands == ["build"]
assert parsed["output"] == "out.ll"
```

### Diagnostics

```python
from piq.diagnostic import find_line_and_col, format_error_ctx

source = "(fun f (a) a)\n(fun g () (f 1))"
pos = find_line_and_col(source, 15)
print(pos.line, pos.column)
print(format_error_ctx(source, 15, 3))
```

### Builtins

```python
from piq.builtins import lookup_term, apply_builtin, mod_floor

add = lookup_term("i32-add")
assert apply_builtin(add, 2, 3) == 5
assert mod_floor(-5, 3) == 1
```

## What the package does not do

It is a library of supporting pieces only. It contains no lexer, parser,
type checker or code generator, cannot compile or run programs, and installs
no command.

## Running the tests

Install the `test` extra and run `pytest` from the project root.