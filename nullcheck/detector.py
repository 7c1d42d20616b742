"""Run the null dereference analysis over a function and report findings."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from nullcheck.errors import AnalysisError, ErrorCode, format_error, user_output
from nullcheck.errors import test_output as _test_line
from nullcheck.ir import Function, Instruction
from nullcheck.visitor import Visitor


@dataclass(frozen=True)
class Finding:
    """A non-OK result for one instruction; ``number`` counts from 1."""

    number: int
    code: ErrorCode
    instruction: Instruction

    @property
    def line(self) -> int | None:
        return self.instruction.line


def run_on_function(
    function: Function,
    test_output: bool = False,
    debug_output: bool = False,
    stream: TextIO | None = None,
) -> list[Finding]:
    """Analyse ``function`` block by block, writing reports to ``stream``.

    Returns every non-OK result. A result with the error bit set stops the
    analysis of the rest of its block. Internal errors are reported and
    raised again.
    """
    out = sys.stderr if stream is None else stream
    visitor = Visitor()
    findings: list[Finding] = []
    number = 0

    out.write("\n")
    for block in function:
        for inst in block:
            try:
                result = visitor.visit(inst)
            except AnalysisError as exc:
                out.write(format_error(exc.message, inst) + "\n")
                raise
            number += 1

            report = user_output(result, inst)
            if report is not None:
                out.write(report + "\n")

            if test_output:
                line = _test_line(result, inst, number)
                if line is not None:
                    out.write(line + "\n")

            if result != ErrorCode.OK:
                findings.append(Finding(number, ErrorCode(result), inst))

            if result & ErrorCode.ERROR == ErrorCode.ERROR:
                break

    if debug_output:
        try:
            out.write(visitor.dump())
        except AnalysisError as exc:
            out.write(format_error(exc.message) + "\n")

    out.write("\n")
    return findings