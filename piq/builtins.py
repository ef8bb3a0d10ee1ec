"""Builtin terms and types, and the semantics of the builtin operators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class BuiltinType(IntEnum):
    """Indices of the builtin types."""

    BOOL = 0
    U8 = 1
    U16 = 2
    U32 = 3
    U64 = 4
    I8 = 5
    I16 = 6
    I32 = 7
    I64 = 8
    STRING = 9

    COMPARE_I8S = 10
    COMPARE_I16S = 11
    COMPARE_I32S = 12
    COMPARE_I64S = 13

    COMPARE_U8S = 14
    COMPARE_U16S = 15
    COMPARE_U32S = 16
    COMPARE_U64S = 17

    I8_ARITHMETIC = 18
    I16_ARITHMETIC = 19
    I32_ARITHMETIC = 20
    I64_ARITHMETIC = 21

    U8_ARITHMETIC = 22
    U16_ARITHMETIC = 23
    U32_ARITHMETIC = 24
    U64_ARITHMETIC = 25

    ANY_INT = 26


class BuiltinTerm(IntEnum):
    """Indices of the builtin terms."""

    TRUE = 0
    FALSE = 1

    I8_EQ = 2
    I16_EQ = 3
    I32_EQ = 4
    I64_EQ = 5
    U8_EQ = 6
    U16_EQ = 7
    U32_EQ = 8
    U64_EQ = 9

    I8_GT = 10
    I16_GT = 11
    I32_GT = 12
    I64_GT = 13
    U8_GT = 14
    U16_GT = 15
    U32_GT = 16
    U64_GT = 17

    I8_GTE = 18
    I16_GTE = 19
    I32_GTE = 20
    I64_GTE = 21
    U8_GTE = 22
    U16_GTE = 23
    U32_GTE = 24
    U64_GTE = 25

    I8_LT = 26
    I16_LT = 27
    I32_LT = 28
    I64_LT = 29
    U8_LT = 30
    U16_LT = 31
    U32_LT = 32
    U64_LT = 33

    I8_LTE = 34
    I16_LTE = 35
    I32_LTE = 36
    I64_LTE = 37
    U8_LTE = 38
    U16_LTE = 39
    U32_LTE = 40
    U64_LTE = 41

    I8_ADD = 42
    I16_ADD = 43
    I32_ADD = 44
    I64_ADD = 45
    U8_ADD = 46
    U16_ADD = 47
    U32_ADD = 48
    U64_ADD = 49

    I8_SUB = 50
    I16_SUB = 51
    I32_SUB = 52
    I64_SUB = 53
    U8_SUB = 54
    U16_SUB = 55
    U32_SUB = 56
    U64_SUB = 57

    I8_MUL = 58
    I16_MUL = 59
    I32_MUL = 60
    I64_MUL = 61
    U8_MUL = 62
    U16_MUL = 63
    U32_MUL = 64
    U64_MUL = 65

    I8_DIV = 66
    I16_DIV = 67
    I32_DIV = 68
    I64_DIV = 69
    U8_DIV = 70
    U16_DIV = 71
    U32_DIV = 72
    U64_DIV = 73

    I8_REM = 74
    I16_REM = 75
    I32_REM = 76
    I64_REM = 77
    U8_REM = 78
    U16_REM = 79
    U32_REM = 80
    U64_REM = 81

    # floored modulo
    I8_MOD = 82
    I16_MOD = 83
    I32_MOD = 84
    I64_MOD = 85


TYPE_NAMES: dict[BuiltinType, str] = {
    BuiltinType.BOOL: "Bool",
    BuiltinType.U8: "U8",
    BuiltinType.U16: "U16",
    BuiltinType.U32: "U32",
    BuiltinType.U64: "U64",
    BuiltinType.I8: "I8",
    BuiltinType.I16: "I16",
    BuiltinType.I32: "I32",
    BuiltinType.I64: "I64",
    BuiltinType.STRING: "String",
}

_WIDTHS = (8, 16, 32, 64)
_COMPARISONS = ("eq", "gt", "gte", "lt", "lte")
_ARITHMETIC = ("add", "sub", "mul", "div", "rem")

_INT_TYPES = {
    (True, 8): BuiltinType.I8,
    (True, 16): BuiltinType.I16,
    (True, 32): BuiltinType.I32,
    (True, 64): BuiltinType.I64,
    (False, 8): BuiltinType.U8,
    (False, 16): BuiltinType.U16,
    (False, 32): BuiltinType.U32,
    (False, 64): BuiltinType.U64,
}


@dataclass(frozen=True)
class _TermInfo:
    op: str
    signed: bool
    bits: int

    @property
    def is_comparison(self) -> bool:
        return self.op in _COMPARISONS

    @property
    def name(self) -> str:
        prefix = "i" if self.signed else "u"
        suffix = "?" if self.is_comparison else ""
        return f"{prefix}{self.bits}-{self.op}{suffix}"

    @property
    def operand_type(self) -> BuiltinType:
        return _INT_TYPES[(self.signed, self.bits)]

    @property
    def function_type(self) -> BuiltinType:
        prefix = "I" if self.signed else "U"
        if self.is_comparison:
            return BuiltinType[f"COMPARE_{prefix}{self.bits}S"]
        return BuiltinType[f"{prefix}{self.bits}_ARITHMETIC"]


def _build_term_info() -> dict[BuiltinTerm, _TermInfo]:
    infos = [
        _TermInfo(op, signed, bits)
        for op in _COMPARISONS + _ARITHMETIC
        for signed in (True, False)
        for bits in _WIDTHS
    ]
    infos.extend(_TermInfo("mod", True, bits) for bits in _WIDTHS)
    return {
        BuiltinTerm(value): info
        for value, info in enumerate(infos, start=BuiltinTerm.I8_EQ)
    }


_TERM_INFO = _build_term_info()

_TERM_NAMES: dict[BuiltinTerm, str] = {
    BuiltinTerm.TRUE: "True",
    BuiltinTerm.FALSE: "False",
    **{term: info.name for term, info in _TERM_INFO.items()},
}
_TERMS_BY_NAME = {name: term for term, name in _TERM_NAMES.items()}

# Function types map to ((param types), return type).
FUNCTION_SIGNATURES: dict[BuiltinType, tuple[tuple[BuiltinType, ...], BuiltinType]] = {
    info.function_type: (
        (info.operand_type, info.operand_type),
        BuiltinType.BOOL if info.is_comparison else info.operand_type,
    )
    for info in _TERM_INFO.values()
}

ANY_INT_MEMBERS: tuple[BuiltinType, ...] = (
    BuiltinType.I8,
    BuiltinType.I16,
    BuiltinType.I32,
    BuiltinType.I64,
    BuiltinType.U8,
    BuiltinType.U16,
    BuiltinType.U32,
    BuiltinType.U64,
)


def term_name(term: int) -> str:
    """The source-level name of a builtin term."""
    return _TERM_NAMES[BuiltinTerm(term)]


def term_type(term: int) -> BuiltinType:
    """The type of a builtin term."""
    term = BuiltinTerm(term)
    if term in (BuiltinTerm.TRUE, BuiltinTerm.FALSE):
        return BuiltinType.BOOL
    return _TERM_INFO[term].function_type


def lookup_term(name: str) -> BuiltinTerm:
    """The builtin term with the given source-level name."""
    try:
        return _TERMS_BY_NAME[name]
    except KeyError:
        raise KeyError(f"unknown builtin: {name!r}") from None


def is_comparison(term: int) -> bool:
    """Whether the term is a comparison predicate."""
    info = _TERM_INFO.get(BuiltinTerm(term))
    return info is not None and info.is_comparison


def is_arithmetic(term: int) -> bool:
    """Whether the term is an arithmetic operator."""
    info = _TERM_INFO.get(BuiltinTerm(term))
    return info is not None and not info.is_comparison


def _trunc_div(dividend: int, divisor: int) -> int:
    if divisor == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = abs(dividend) // abs(divisor)
    return -quotient if (dividend < 0) != (divisor < 0) else quotient


def mod_trunc(dividend: int, divisor: int) -> int:
    """Remainder of truncated division; takes the sign of the dividend."""
    if divisor == 0:
        raise ZeroDivisionError("integer modulo by zero")
    remainder = abs(dividend) % abs(divisor)
    return -remainder if dividend < 0 else remainder


def mod_floor(dividend: int, divisor: int) -> int:
    """Modulo computed as ``(a rem b + b) rem b``."""
    return mod_trunc(mod_trunc(dividend, divisor) + divisor, divisor)


def mod_euc(dividend: int, divisor: int) -> int:
    """Euclidean modulo; never negative."""
    remainder = mod_trunc(dividend, divisor)
    if remainder >= 0:
        return remainder
    return remainder + divisor if divisor > 0 else remainder - divisor


def _wrap(value: int, signed: bool, bits: int) -> int:
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def apply_builtin(term: int, left: int, right: int) -> int | bool:
    """Evaluate a builtin binary operator at its fixed bit width.

    Operands and results wrap around like machine integers. Comparisons
    return a bool. Division and remainder by zero raise ZeroDivisionError.
    """
    term = BuiltinTerm(term)
    info = _TERM_INFO.get(term)
    if info is None:
        raise TypeError(f"builtin {_TERM_NAMES[term]!r} is not a function")

    def wrap(value: int) -> int:
        return _wrap(value, info.signed, info.bits)

    a = wrap(left)
    b = wrap(right)
    op = info.op
    if op == "eq":
        return a == b
    if op == "gt":
        return a > b
    if op == "gte":
        return a >= b
    if op == "lt":
        return a < b
    if op == "lte":
        return a <= b
    if op == "add":
        return wrap(a + b)
    if op == "sub":
        return wrap(a - b)
    if op == "mul":
        return wrap(a * b)
    if op == "div":
        return wrap(_trunc_div(a, b))
    if op == "rem":
        return wrap(mod_trunc(a, b))
    # floored modulo, with the intermediate sum wrapping like the codegen
    return wrap(mod_trunc(wrap(mod_trunc(a, b) + b), b))