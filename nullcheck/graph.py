"""The pointer graph: what each tracked value is known to point to."""

from __future__ import annotations

from enum import IntEnum

from nullcheck.errors import AnalysisError
from nullcheck.ir import Value


class LeafType(IntEnum):
    """What is known about a value that does not reference another node."""

    NIL = 1
    NON_NIL = 2
    DONT_KNOW = NIL | NON_NIL
    UNDEFINED = 8


class GraphError(AnalysisError):
    """Raised when the graph is used in a way it cannot support."""


_LEAF_TEXT = {
    LeafType.NIL: "NIL",
    LeafType.NON_NIL: "NON_NIL; ",
    LeafType.DONT_KNOW: "DONT_KNOW; ",
    LeafType.UNDEFINED: "UNDEFINED",
}


class Node:
    """A graph node: either a leaf with a status or a reference to another node."""

    __slots__ = ("leaf_type", "referenced")

    def __init__(self, leaf_type: LeafType | None = None, referenced: Node | None = None):
        if (leaf_type is None) == (referenced is None):
            raise ValueError("a node is either a leaf or a reference")
        self.leaf_type = leaf_type
        self.referenced = referenced

    def deref_is_error(self) -> bool:
        """True if dereferencing this node is a null or undefined dereference."""
        return self.referenced is None and self.leaf_type in (LeafType.NIL, LeafType.UNDEFINED)

    def transform_to_ref(self, referenced: Node) -> None:
        """Turn this leaf into a reference to ``referenced``."""
        if self.referenced is not None:
            raise GraphError("Transforming REF to REF node.")
        self.leaf_type = None
        self.referenced = referenced

    def depth(self) -> int:
        """Number of references followed before reaching a leaf."""
        seen: set[Node] = set()
        node = self
        count = 0
        while node.referenced is not None:
            if node in seen:
                raise GraphError("Reference cycle in graph.")
            seen.add(node)
            count += 1
            node = node.referenced
        return count

    def status(self) -> LeafType:
        """The leaf status; a reference is always non-nil."""
        if self.referenced is not None:
            return LeafType.NON_NIL
        assert self.leaf_type is not None
        return self.leaf_type

    def assign(self, other: Node) -> None:
        """Overwrite this node's contents with those of ``other``."""
        self.leaf_type = other.leaf_type
        self.referenced = other.referenced

    def hex_id(self) -> str:
        """A short pseudo-random tag derived from the node's identity."""
        address = id(self) & 0xFFFFFFFFFFFFFFFF
        tag = 5381
        for shift in (0, 8, 16, 32, 40, 48, 56):
            tag = ((tag << 5) + tag + (address >> shift)) & 0xFFFF
        return f"<{tag:04x}>"

    def dump(self) -> str:
        """One-line description of the node."""
        if self.referenced is not None:
            return f"{self.hex_id()} REF OF {self.referenced.hex_id()} at depth {self.depth()}"
        text = f"{self.hex_id()} LEAF/{_LEAF_TEXT.get(self.leaf_type, '???')}"
        if self.deref_is_error():
            text += " (!)"
        return text

    def __repr__(self) -> str:
        return f"Node({self.dump()})"


def leaf_node(status: LeafType) -> Node:
    """A new leaf node with the given status."""
    return Node(leaf_type=LeafType(status))


def ref_node(referenced: Node) -> Node:
    """A new node referencing ``referenced``."""
    return Node(referenced=referenced)


class Graph:
    """Nodes, the values that are entry points into them, and derived offset nodes.

    Offset nodes stand for fields of aggregates: each (base node, offset)
    pair maps to at most one node.
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._offsets: dict[tuple[Node, int], Node] = {}
        self._entries: dict[Value, Node] = {}

    def _update(self, old: Node | None, new: Node) -> Node:
        if old is None:
            fresh = Node(leaf_type=new.leaf_type, referenced=new.referenced)
            self._nodes.append(fresh)
            return fresh
        old.assign(new)
        return old

    def insert_node(self, node: Node) -> Node:
        """Add a copy of ``node`` to the graph and return the stored node."""
        return self._update(None, node)

    def insert_entry(self, value: Value, node: Node) -> Node:
        """Store ``node`` for ``value``, overwriting the value's node if it has one."""
        existing = self._entries.get(value)
        result = self._update(existing, node)
        if existing is None:
            self._entries[value] = result
        return result

    def alias(self, value: Value, node: Node) -> None:
        """Make ``value`` an entry point to an existing node."""
        self._entries[value] = node

    def get_node(self, value: Value) -> Node:
        try:
            return self._entries[value]
        except KeyError:
            raise GraphError(f"No node for value {value}") from None

    def get_offset(self, value: Value, offset: int) -> Node:
        """Return the offset node of ``value``, creating it with the base's status."""
        if value not in self._entries:
            raise GraphError("Creating offset of something I don't know")
        base = self._entries[value]
        key = (base, offset)
        if key not in self._offsets:
            self._offsets[key] = self.insert_node(leaf_node(base.status()))
        return self._offsets[key]

    def is_entry_point(self, value: Value) -> bool:
        return value in self._entries

    def contains_offset(self, value: Value, offset: int) -> bool:
        if value not in self._entries:
            return False
        return self.contains_offset_node(self._entries[value], offset)

    def contains_offset_node(self, base: Node, offset: int) -> bool:
        return (base, offset) in self._offsets

    @staticmethod
    def _value_text(value: Value) -> str:
        return str(value).replace("getelementptr inbounds", "GEP", 1)

    def dump(self) -> str:
        """Readable listing of nodes, entry points and offset nodes."""
        lines = ["", "NODES IN GRAPH:"]
        lines += [f" - {node.dump()}" for node in self._nodes]
        lines += ["", "ENTRY POINTS INTO GRAPH:"]
        lines += [
            f" - {self._value_text(value):<60} => {node.dump()}"
            for value, node in self._entries.items()
        ]
        lines += ["", "DERIVED OFFSET NODES"]
        lines += [
            f" - {node.hex_id()} = ({base.hex_id()}, {offset})"
            for (base, offset), node in self._offsets.items()
        ]
        return "\n".join(lines) + "\n"