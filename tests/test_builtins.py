import pytest

from piq.builtins import (
    ANY_INT_MEMBERS,
    FUNCTION_SIGNATURES,
    TYPE_NAMES,
    BuiltinTerm,
    BuiltinType,
    apply_builtin,
    is_arithmetic,
    is_comparison,
    lookup_term,
    mod_euc,
    mod_floor,
    mod_trunc,
    term_name,
    term_type,
)

# (dividend, divisor, trunc, euclidean, floor)
MODULO_CASES = [
    (5, 3, 2, 2, 2),
    (5, -3, 2, 2, -1),
    (-5, 3, -2, 1, 1),
    (-5, -3, -2, 1, -2),
]


@pytest.mark.parametrize("a, b, trunc, euc, floor", MODULO_CASES)
def test_mod_trunc(a, b, trunc, euc, floor):
    assert mod_trunc(a, b) == trunc


@pytest.mark.parametrize("a, b, trunc, euc, floor", MODULO_CASES)
def test_mod_floor(a, b, trunc, euc, floor):
    assert mod_floor(a, b) == floor


@pytest.mark.parametrize("a, b, trunc, euc, floor", MODULO_CASES)
def test_mod_euc(a, b, trunc, euc, floor):
    assert mod_euc(a, b) == euc


def test_modulo_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        mod_trunc(1, 0)
    with pytest.raises(ZeroDivisionError):
        mod_floor(1, 0)
    with pytest.raises(ZeroDivisionError):
        mod_euc(1, 0)


@pytest.mark.parametrize(
    "term, value",
    [
        (BuiltinTerm.TRUE, 0),
        (BuiltinTerm.FALSE, 1),
        (BuiltinTerm.I8_EQ, 2),
        (BuiltinTerm.U64_LTE, 41),
        (BuiltinTerm.I8_ADD, 42),
        (BuiltinTerm.U64_REM, 81),
        (BuiltinTerm.I64_MOD, 85),
    ],
)
def test_term_values(term, value):
    assert int(term) == value


def test_term_count():
    names = [term_name(term) for term in BuiltinTerm]
    assert len(set(names)) == 86
    assert names[0] == "True"
    assert names[-1] == "i64-mod"


@pytest.mark.parametrize(
    "term, name",
    [
        (BuiltinTerm.TRUE, "True"),
        (BuiltinTerm.FALSE, "False"),
        (BuiltinTerm.I8_EQ, "i8-eq?"),
        (BuiltinTerm.U32_GTE, "u32-gte?"),
        (BuiltinTerm.I16_LT, "i16-lt?"),
        (BuiltinTerm.I32_ADD, "i32-add"),
        (BuiltinTerm.U16_SUB, "u16-sub"),
        (BuiltinTerm.U64_DIV, "u64-div"),
        (BuiltinTerm.I64_REM, "i64-rem"),
        (BuiltinTerm.I32_MOD, "i32-mod"),
    ],
)
def test_term_name(term, name):
    assert term_name(term) == name


def test_lookup_round_trips_every_term():
    for term in BuiltinTerm:
        assert lookup_term(term_name(term)) is term


def test_lookup_unknown_name():
    with pytest.raises(KeyError):
        lookup_term("u8-mod")


def test_term_name_invalid_value():
    with pytest.raises(ValueError):
        term_name(86)


@pytest.mark.parametrize(
    "term, expected",
    [
        (BuiltinTerm.TRUE, BuiltinType.BOOL),
        (BuiltinTerm.FALSE, BuiltinType.BOOL),
        (BuiltinTerm.I8_EQ, BuiltinType.COMPARE_I8S),
        (BuiltinTerm.U16_GT, BuiltinType.COMPARE_U16S),
        (BuiltinTerm.I64_LTE, BuiltinType.COMPARE_I64S),
        (BuiltinTerm.I32_ADD, BuiltinType.I32_ARITHMETIC),
        (BuiltinTerm.U8_MUL, BuiltinType.U8_ARITHMETIC),
        (BuiltinTerm.I64_MOD, BuiltinType.I64_ARITHMETIC),
    ],
)
def test_term_type(term, expected):
    assert term_type(term) is expected


def test_type_indices():
    assert int(term_type(BuiltinTerm.TRUE)) == 0
    assert int(term_type(BuiltinTerm.I8_EQ)) == 10
    assert int(term_type(BuiltinTerm.U64_ADD)) == 25
    assert BuiltinType(9) is BuiltinType.STRING
    assert BuiltinType(26) is BuiltinType.ANY_INT


def test_type_names():
    assert TYPE_NAMES[term_type(BuiltinTerm.TRUE)] == "Bool"
    assert TYPE_NAMES[BuiltinType.I32] == "I32"
    assert TYPE_NAMES[BuiltinType.STRING] == "String"
    assert len(TYPE_NAMES) == 10


def test_function_signatures():
    assert FUNCTION_SIGNATURES[term_type(BuiltinTerm.I32_EQ)] == (
        (BuiltinType.I32, BuiltinType.I32),
        BuiltinType.BOOL,
    )
    assert FUNCTION_SIGNATURES[term_type(BuiltinTerm.U8_ADD)] == (
        (BuiltinType.U8, BuiltinType.U8),
        BuiltinType.U8,
    )
    assert len(FUNCTION_SIGNATURES) == 16


def test_any_int_members():
    result_types = {
        FUNCTION_SIGNATURES[term_type(term)][1]
        for term in BuiltinTerm
        if is_arithmetic(term)
    }
    assert set(ANY_INT_MEMBERS) == result_types
    assert len(ANY_INT_MEMBERS) == 8
    assert ANY_INT_MEMBERS[0] is BuiltinType.I8
    assert ANY_INT_MEMBERS[-1] is BuiltinType.U64


def test_comparison_and_arithmetic_partition():
    comparisons = [t for t in BuiltinTerm if is_comparison(t)]
    arithmetic = [t for t in BuiltinTerm if is_arithmetic(t)]
    assert len(comparisons) == 40
    assert len(arithmetic) == 44
    assert not set(comparisons) & set(arithmetic)
    assert not is_comparison(BuiltinTerm.TRUE)
    assert not is_arithmetic(BuiltinTerm.FALSE)


@pytest.mark.parametrize(
    "name, left, right, expected",
    [
        ("i32-eq?", 3, 3, True),
        ("i32-eq?", 3, 4, False),
        ("i8-lt?", -1, 0, True),
        ("u8-lt?", -1, 0, False),
        ("u16-gt?", 2, 1, True),
        ("i64-gte?", 5, 5, True),
        ("i16-lte?", 6, 5, False),
        ("i8-add", 127, 1, -128),
        ("u8-sub", 0, 1, 255),
        ("u32-mul", 0x10000, 0x10000, 0),
        ("i32-add", 2, 3, 5),
        ("i32-div", -7, 2, -3),
        ("u8-div", 255, 2, 127),
        ("i32-rem", -7, 2, -1),
        ("u16-rem", 65535, 10, 5),
        ("i32-mod", -7, 2, 1),
        ("i32-mod", 5, -3, -1),
        ("i8-mod", 50, 100, -6),
    ],
)
def test_apply_builtin(name, left, right, expected):
    assert apply_builtin(lookup_term(name), left, right) == expected


def test_apply_builtin_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        apply_builtin(BuiltinTerm.I32_DIV, 1, 0)
    with pytest.raises(ZeroDivisionError):
        apply_builtin(BuiltinTerm.U8_REM, 1, 256)


def test_apply_builtin_rejects_non_functions():
    with pytest.raises(TypeError):
        apply_builtin(BuiltinTerm.TRUE, 1, 2)