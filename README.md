# nullcheck

`nullcheck` finds null-pointer dereferences by statically analysing
functions written in a small SSA-style intermediate representation. The
representation has stores, loads, element-address computations
(`GetElementPtrInst`), memory copies (`MemCpyInst`), branches
(`BranchInst`) and a catch-all `OtherInst`.

It tracks pointers in a points-to graph. Each value the analysis meets
becomes an entry point into the graph. A value maps either to a leaf
node (`NIL`, `NON_NIL`, `DONT_KNOW` or `UNDEFINED`) or to a reference
node that points at another node. Struct fields and array elements are
held as offset nodes derived from their base node.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Usage

Build a `Function` out of `BasicBlock`s and instructions from
`nullcheck.ir`, then pass it to `nullcheck.detector.run_on_function`:

```python
import io

from nullcheck.ir import BasicBlock, Constant, Function, LoadInst, StoreInst, Value
from nullcheck.detector import run_on_function

# int *pointer = 0; int value = *pointer;
slot = Value("%pointer", is_pointer=True)
null = Constant("null", is_pointer=True, null=True)
store = StoreInst(value=null, pointer=slot, line=1)
loaded = LoadInst("%0", pointer=slot, line=2)
deref = LoadInst("%1", pointer=loaded, line=2)

fn = Function("main", [BasicBlock("entry", [store, loaded, deref])])

out = io.StringIO()
findings = run_on_function(fn, test_output=True, debug_output=False, stream=out)
for finding in findings:
    print(finding.number, finding.code.name, finding.line)
print(out.getvalue())
```

Here the third instruction is reported as `NULL_DEREF`.

`run_on_function` returns a list of `Finding` records (`number`, `code`,
`instruction`, and a `line` property), one for each instruction whose
result is not `ErrorCode.OK`. Instructions are numbered from 1 in the
order they are visited. It writes its report to `stream`, or to standard
error when no stream is given:

- `Null dereference happening at line N` for every null dereference
  whose instruction carries a `line`;
- with `test_output`, one `TEST[n]:<CODE>` line for each instruction
  whose result is not `OK`;
- with `debug_output`, a dump of the pointer graph: its nodes, its entry
  points and its derived offset nodes.

A result with the `ErrorCode.ERROR` bit set stops the analysis of the
rest of its basic block. When the graph is used in a way it cannot
support, a `GraphError` (a kind of `AnalysisError`) is raised; the
detector writes an `ERROR:` message naming the instruction and raises
the exception again.

## Building blocks

- `nullcheck.ir`: `Value`, `Constant`, the instruction classes,
  `BasicBlock` and `Function`. Values compare by identity.
- `nullcheck.errors`: the `ErrorCode` flags, `AnalysisError`,
  `error_code_name`, and the formatters `user_output`, `test_output` and
  `format_error`.
- `nullcheck.graph`: `Node`, `Graph`, `LeafType`, `GraphError`,
  `leaf_node` and `ref_node`.
- `nullcheck.visitor`: `Visitor`, whose `visit` handles one instruction
  and updates the graph it keeps; `dump` lists that graph.
- `nullcheck.conditional`: `ConditionalAnalyzer`, which walks a
  function's blocks depth-first along branches. `analyze` returns the
  events of the walk (block listings and the markers `HELLO`,
  `MERGE HERE` and `IF..ELSE: MERGE HERE`) and writes them to its stream.
  Blocks stay visited across calls.

## What it does not do

- It reads no source code or IR text: functions are built in Python
  from the classes in `nullcheck.ir`.
- There is no command-line program; the analysis is used as a library.
- The analysis is not flow-sensitive. It runs over each function's
  instructions in block order and does not take branch conditions into
  account; `ConditionalAnalyzer` only marks where branches merge.