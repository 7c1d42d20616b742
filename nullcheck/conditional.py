"""Walk of a function's branch structure, marking where branches merge."""

from __future__ import annotations

import sys
from typing import TextIO

from nullcheck.ir import BasicBlock, BranchInst, Function

HELLO = "HELLO"
MERGE_HERE = "MERGE HERE"
IF_ELSE_MERGE = "IF..ELSE: MERGE HERE"


def _block_text(block: BasicBlock) -> str:
    lines = [f"{block.name}:"]
    lines += [f"  {inst}" for inst in block]
    return "\n".join(lines)


def _branch_targets(block: BasicBlock) -> tuple[BasicBlock | None, BasicBlock | None]:
    true_bb: BasicBlock | None = None
    false_bb: BasicBlock | None = None
    for inst in block:
        if isinstance(inst, BranchInst):
            true_bb = inst.successors[0]
            if inst.is_conditional:
                false_bb = inst.successors[1]
    return true_bb, false_bb


class ConditionalAnalyzer:
    """Visits blocks depth-first along branches and records merge points.

    Blocks stay visited across calls to :meth:`analyze`.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._visited: set[BasicBlock] = set()
        self._stream = stream

    def analyze(self, function: Function) -> list[str]:
        """Return the events of the walk: block listings and merge markers.

        The events are also written, one per line, to the stream.
        """
        events: list[str] = []
        for block in function:
            self._analyze_block(block, None, events)
        out = sys.stderr if self._stream is None else self._stream
        for event in events:
            out.write(event + "\n")
        return events

    def _analyze_block(
        self, block: BasicBlock, else_bb: BasicBlock | None, events: list[str]
    ) -> None:
        if block in self._visited:
            return
        self._visited.add(block)
        events.append(_block_text(block))

        true_bb, false_bb = _branch_targets(block)
        closes_else = else_bb is not None and else_bb is true_bb

        if closes_else:
            events.append(HELLO)

        if true_bb is not None and false_bb is not None:
            self._analyze_block(true_bb, false_bb, events)
            if closes_else:
                events.append(MERGE_HERE)
            self._analyze_block(false_bb, None, events)
            if else_bb is None:
                events.append(IF_ELSE_MERGE)