import pytest

from piq.diagnostic import (
    BLU,
    RED,
    RESET,
    PositionInfo,
    find_line_and_col,
    format_error_ctx,
    format_resolution_errors,
)

TEST_PROGRAM = (
    "(sig sndpar (Fn (I16, I32) I32))\n"
    "(fun sndpar (a, b) b)\n"
    "\n"
    "(sig (Fn () I32))\n"
    "(fun test () (sndpar (1, 2)))"
)


def test_previous_context_newlines():
    output = format_error_ctx(TEST_PROGRAM, 0, 1)
    assert output.count("\n") == 4


def test_frame_and_highlight():
    output = format_error_ctx(TEST_PROGRAM, 0, 1)
    assert output.startswith(RED + "/---\n| " + RESET + BLU + "(" + RESET + "sig")
    assert output.endswith("\n" + RED + "\\---" + RESET)


def test_context_starts_two_lines_before():
    start = TEST_PROGRAM.index("(fun test")
    output = format_error_ctx(TEST_PROGRAM, start, 4)
    assert "(sig sndpar" not in output
    assert "(sig (Fn () I32))" in output
    assert BLU + "(fun" + RESET + " test" in output


def test_empty_text():
    assert format_error_ctx("", 0, 0) == RED + "/---\n| " + RESET + "\n" + RED + "\\---" + RESET


def test_find_line_and_col_start():
    assert find_line_and_col(TEST_PROGRAM, 0) == PositionInfo(1, 1)


def test_find_line_and_col_second_line():
    pos = find_line_and_col(TEST_PROGRAM, TEST_PROGRAM.index("(fun sndpar"))
    assert pos == PositionInfo(2, 1)


def test_find_line_and_col_out_of_range():
    with pytest.raises(IndexError):
        find_line_and_col("abc", 10)


def test_resolution_errors_single():
    start = TEST_PROGRAM.index("sndpar")
    assert format_resolution_errors(TEST_PROGRAM, [(start, 6)]) == (
        "Unknown binding 'sndpar' at 1:6"
    )


def test_resolution_errors_joined_by_newline():
    first = TEST_PROGRAM.index("sndpar")
    second = TEST_PROGRAM.index("test")
    lines = format_resolution_errors(TEST_PROGRAM, [(first, 6), (second, 4)]).split("\n")
    assert len(lines) == 2
    assert lines[1].startswith("Unknown binding 'test' at 5:")


def test_resolution_errors_empty():
    assert format_resolution_errors(TEST_PROGRAM, []) == ""