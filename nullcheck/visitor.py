"""Per-instruction transfer functions of the null dereference analysis."""

from __future__ import annotations

from nullcheck.errors import ErrorCode
from nullcheck.graph import Graph, LeafType, Node, leaf_node, ref_node
from nullcheck.ir import (
    Constant,
    GetElementPtrInst,
    Instruction,
    LoadInst,
    MemCpyInst,
    StoreInst,
)


class Visitor:
    """Walks instructions in order and keeps a pointer graph of what is known."""

    def __init__(self) -> None:
        self.graph = Graph()

    def visit(self, inst: Instruction) -> ErrorCode:
        """Update the graph for ``inst`` and report any dereference problem."""
        if isinstance(inst, StoreInst):
            return self._visit_store(inst)
        if isinstance(inst, LoadInst):
            return self._visit_load(inst)
        if isinstance(inst, GetElementPtrInst):
            return self._visit_gep(inst)
        if isinstance(inst, MemCpyInst):
            return self._visit_memcpy(inst)
        return ErrorCode.OK

    def dump(self) -> str:
        """Readable listing of the pointer graph."""
        return self.graph.dump()

    def _visit_store(self, inst: StoreInst) -> ErrorCode:
        value, dest = inst.value, inst.pointer
        graph = self.graph

        # Storing through a known null or undefined address is an error,
        # whatever is being stored.
        if graph.is_entry_point(dest) and graph.get_node(dest).deref_is_error():
            return self._deref_status(graph.get_node(dest))

        if not value.is_pointer:
            return ErrorCode.OK

        if isinstance(value, Constant):
            status = LeafType.NIL if value.is_null_value else LeafType.NON_NIL
            leaf = graph.insert_node(leaf_node(status))
            graph.insert_entry(dest, ref_node(leaf))
        else:
            if graph.is_entry_point(value):
                referenced = graph.get_node(value)
            else:
                referenced = graph.insert_entry(value, leaf_node(LeafType.DONT_KNOW))
            graph.insert_entry(dest, ref_node(referenced))
        return ErrorCode.OK

    def _visit_load(self, inst: LoadInst) -> ErrorCode:
        graph = self.graph
        source = inst.pointer
        if not graph.is_entry_point(source):
            return ErrorCode.OK

        node = graph.get_node(source)
        if node.deref_is_error():
            graph.insert_entry(inst, leaf_node(LeafType.UNDEFINED))
            return self._deref_status(node)
        if node.referenced is not None:
            graph.alias(inst, node.referenced)
        else:
            fresh = graph.insert_node(leaf_node(LeafType.DONT_KNOW))
            node.transform_to_ref(fresh)
            graph.alias(inst, fresh)
        return ErrorCode.OK

    def _visit_gep(self, inst: GetElementPtrInst) -> ErrorCode:
        # Address computation dereferences nothing, so it never reports.
        graph = self.graph
        base = inst.pointer
        if not graph.is_entry_point(base):
            graph.insert_entry(base, leaf_node(LeafType.DONT_KNOW))

        offset = -1
        for index in inst.indices:
            if isinstance(index, Constant) and index.is_int:
                if offset == -1:
                    offset = 0
                offset += index.int_value

        # Without usable constant indices every access collapses onto -1,
        # which is recorded as unknown.
        if offset == -1:
            graph.insert_entry(inst, leaf_node(LeafType.DONT_KNOW))
        else:
            graph.alias(inst, graph.get_offset(base, offset))
        return ErrorCode.OK

    def _visit_memcpy(self, inst: MemCpyInst) -> ErrorCode:
        if self._is_error_entry(inst.source) or self._is_error_entry(inst.dest):
            return ErrorCode.NULL_DEREF
        return ErrorCode.OK

    def _is_error_entry(self, value) -> bool:
        return self.graph.is_entry_point(value) and self.graph.get_node(value).deref_is_error()

    @staticmethod
    def _deref_status(node: Node) -> ErrorCode:
        status = node.status()
        if status == LeafType.NIL:
            return ErrorCode.NULL_DEREF
        if status == LeafType.UNDEFINED:
            return ErrorCode.UNDEFINED_DEREF
        return ErrorCode.OK