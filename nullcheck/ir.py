"""A small model of the intermediate representation the analysis reads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(eq=False)
class Value:
    """A value in a function. Values compare and hash by identity."""

    name: str = ""
    is_pointer: bool = field(default=False, kw_only=True)

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Constant(Value):
    """A constant: a null pointer, an integer, or some other non-null constant."""

    int_value: int | None = field(default=None, kw_only=True)
    null: bool = field(default=False, kw_only=True)

    @property
    def is_null_value(self) -> bool:
        return self.null or self.int_value == 0

    @property
    def is_int(self) -> bool:
        return self.int_value is not None

    def __str__(self) -> str:
        if self.name:
            return self.name
        if self.null:
            return "null"
        if self.int_value is not None:
            return str(self.int_value)
        return "constant"


@dataclass(eq=False)
class Instruction(Value):
    """Base of all instructions; ``line`` is the source line, if known."""

    line: int | None = field(default=None, kw_only=True)

    def _result(self) -> str:
        return f"{self.name} = " if self.name else ""


@dataclass(eq=False)
class StoreInst(Instruction):
    """Store ``value`` at the address ``pointer``."""

    value: Value = field(kw_only=True)
    pointer: Value = field(kw_only=True)

    def __str__(self) -> str:
        return f"store {self.value}, {self.pointer}"


@dataclass(eq=False)
class LoadInst(Instruction):
    """Load the value at the address ``pointer``."""

    pointer: Value = field(kw_only=True)

    def __str__(self) -> str:
        return f"{self._result()}load {self.pointer}"


@dataclass(eq=False)
class GetElementPtrInst(Instruction):
    """Compute an address from ``pointer`` and a list of indices."""

    pointer: Value = field(kw_only=True)
    indices: list[Value] = field(default_factory=list, kw_only=True)

    def __str__(self) -> str:
        parts = [str(self.pointer), *(str(i) for i in self.indices)]
        return f"{self._result()}getelementptr inbounds {', '.join(parts)}"


@dataclass(eq=False)
class MemCpyInst(Instruction):
    """Copy memory from ``source`` to ``dest``."""

    source: Value = field(kw_only=True)
    dest: Value = field(kw_only=True)

    def __str__(self) -> str:
        return f"call memcpy({self.dest}, {self.source})"


@dataclass(eq=False)
class BranchInst(Instruction):
    """A jump to one block, or a conditional jump to one of two blocks."""

    successors: list[BasicBlock] = field(kw_only=True, repr=False)
    condition: Value | None = field(default=None, kw_only=True)

    def __post_init__(self) -> None:
        if len(self.successors) not in (1, 2):
            raise ValueError("a branch has one or two successors")

    @property
    def is_conditional(self) -> bool:
        return len(self.successors) == 2

    def __str__(self) -> str:
        labels = ", ".join(f"label %{bb.name}" for bb in self.successors)
        if self.is_conditional:
            return f"br {self.condition}, {labels}"
        return f"br {labels}"


@dataclass(eq=False)
class OtherInst(Instruction):
    """Any instruction the analysis does not look into."""

    opcode: str = field(default="", kw_only=True)
    operands: list[Value] = field(default_factory=list, kw_only=True)

    def __str__(self) -> str:
        ops = ", ".join(str(op) for op in self.operands)
        text = f"{self._result()}{self.opcode}"
        return f"{text} {ops}" if ops else text


@dataclass(eq=False)
class BasicBlock:
    """A straight-line sequence of instructions."""

    name: str = ""
    instructions: list[Instruction] = field(default_factory=list)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)


@dataclass(eq=False)
class Function:
    """A function: an ordered list of basic blocks."""

    name: str = ""
    blocks: list[BasicBlock] = field(default_factory=list)

    def __iter__(self) -> Iterator[BasicBlock]:
        return iter(self.blocks)