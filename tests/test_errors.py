import pytest

from nullcheck.errors import (
    AnalysisError,
    ErrorCode,
    error_code_name,
    format_error,
    test_output as make_test_output,
    user_output,
)
from nullcheck.ir import LoadInst, Value


@pytest.fixture
def load():
    ptr = Value("%ptr", is_pointer=True)
    return LoadInst("%val", pointer=ptr, line=7)


@pytest.mark.parametrize(
    "code, name",
    [
        (ErrorCode.OK, "OK"),
        (ErrorCode.DEREF, "DEREF"),
        (ErrorCode.NULL_DEREF, "NULL_DEREF"),
        (ErrorCode.UNDEFINED_DEREF, "UNDEFINED_DEREF"),
        (ErrorCode.ERROR, "UNKNOWN_ERROR"),
        (ErrorCode.MISSED_DEFINITION, "MISSED_DEFINITION"),
    ],
)
def test_error_code_names(code, name):
    assert error_code_name(code) == name


def test_unknown_code_name():
    assert error_code_name(99) == "???"


def test_code_values():
    assert error_code_name(ErrorCode(ErrorCode.DEREF | 1)) == "NULL_DEREF"
    assert error_code_name(ErrorCode(ErrorCode.DEREF | 2)) == "UNDEFINED_DEREF"
    assert error_code_name(ErrorCode(ErrorCode.ERROR | 1)) == "MISSED_DEFINITION"
    assert ErrorCode.MISSED_DEFINITION & ErrorCode.ERROR == ErrorCode.ERROR
    assert ErrorCode.NULL_DEREF & ErrorCode.ERROR != ErrorCode.ERROR


def test_user_output_null_deref(load):
    assert user_output(ErrorCode.NULL_DEREF, load) == "Null dereference happening at line 7"


def test_user_output_without_line():
    inst = LoadInst("%v", pointer=Value("%p", is_pointer=True))
    assert user_output(ErrorCode.NULL_DEREF, inst) is None


def test_user_output_other_codes(load):
    assert user_output(ErrorCode.UNDEFINED_DEREF, load) is None
    assert user_output(ErrorCode.OK, load) is None


def test_test_output_ok_is_silent(load):
    assert make_test_output(ErrorCode.OK, load, 1) is None


def test_test_output_error(load):
    line = make_test_output(ErrorCode.NULL_DEREF, load, 3)
    assert line.startswith("TEST[3]:NULL_DEREF")
    assert line.endswith(str(load))


def test_format_error_plain():
    assert format_error("boom") == "ERROR: boom"


def test_format_error_with_instruction(load):
    text = format_error("boom", load)
    first, second = text.split("\n")
    assert first == "ERROR: boom"
    assert second == f"    while dealing with {load}"


def test_analysis_error_carries_instruction(load):
    with pytest.raises(AnalysisError) as info:
        raise AnalysisError("bad", load)
    assert info.value.instruction is load
    assert str(info.value) == "bad"