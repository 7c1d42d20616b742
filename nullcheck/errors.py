"""Result codes of the analysis and the messages built from them."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nullcheck.ir import Instruction


class ErrorCode(IntEnum):
    """Outcome of analysing one instruction.

    The values are bit patterns: every dereference problem has the
    ``DEREF`` bit set, every internal problem the ``ERROR`` bit.
    """

    OK = 0
    DEREF = 16
    NULL_DEREF = DEREF | 1
    UNDEFINED_DEREF = DEREF | 2
    ERROR = 32
    MISSED_DEFINITION = ERROR | 1


_NAMES = {
    ErrorCode.OK: "OK",
    ErrorCode.DEREF: "DEREF",
    ErrorCode.NULL_DEREF: "NULL_DEREF",
    ErrorCode.UNDEFINED_DEREF: "UNDEFINED_DEREF",
    ErrorCode.ERROR: "UNKNOWN_ERROR",
    ErrorCode.MISSED_DEFINITION: "MISSED_DEFINITION",
}


class AnalysisError(Exception):
    """Raised when the analysis reaches a state it cannot handle."""

    def __init__(self, message: str, instruction: Instruction | None = None):
        super().__init__(message)
        self.message = message
        self.instruction = instruction


def error_code_name(code: int) -> str:
    """Return the display name of a result code, or ``"???"``."""
    try:
        return _NAMES[ErrorCode(code)]
    except ValueError:
        return "???"


def user_output(code: int, inst: Instruction) -> str | None:
    """Return the user-facing report for a null dereference, if there is one."""
    if code == ErrorCode.NULL_DEREF and inst.line is not None:
        return f"Null dereference happening at line {inst.line}"
    return None


def test_output(code: int, inst: Instruction, number: int) -> str | None:
    """Return the machine-checkable line for a non-OK result, else ``None``."""
    if code == ErrorCode.OK:
        return None
    return f"TEST[{number}]:{error_code_name(code)}  {inst}"


# Not a pytest test function despite the name.
test_output.__test__ = False  # type: ignore[attr-defined]


def format_error(msg: str, inst: Instruction | None = None) -> str:
    """Format an internal error, naming the instruction being handled."""
    text = f"ERROR: {msg}"
    if inst is not None:
        text += f"\n    while dealing with {inst}"
    return text