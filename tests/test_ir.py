import pytest

from nullcheck.ir import (
    BasicBlock,
    BranchInst,
    Constant,
    Function,
    GetElementPtrInst,
    LoadInst,
    MemCpyInst,
    OtherInst,
    StoreInst,
    Value,
)


def test_values_hash_by_identity():
    a = Value("%x")
    b = Value("%x")
    table = {a: 1, b: 2}
    assert len(table) == 2
    assert table[a] == 1
    assert a != b


def test_constant_null_values():
    assert Constant(null=True, is_pointer=True).is_null_value
    assert Constant(int_value=0).is_null_value
    assert not Constant(int_value=5).is_null_value
    assert not Constant("@g", is_pointer=True).is_null_value


def test_constant_is_int():
    assert Constant(int_value=3).is_int
    assert not Constant(null=True).is_int


def test_constant_text():
    assert str(Constant(int_value=42)) == "42"
    assert str(Constant(null=True)) == "null"
    assert str(Constant("@g")) == "@g"


def test_store_mentions_operands():
    store = StoreInst(value=Constant(null=True), pointer=Value("%p", is_pointer=True))
    text = str(store)
    assert text.startswith("store")
    assert "%p" in text and "null" in text


def test_load_text_has_result_and_pointer():
    load = LoadInst("%v", pointer=Value("%p"))
    text = str(load)
    assert text.startswith("%v = ")
    assert "load" in text and text.endswith("%p")


def test_gep_text():
    gep = GetElementPtrInst("%g", pointer=Value("%s"), indices=[Constant(int_value=0), Constant(int_value=1)])
    assert "getelementptr inbounds" in str(gep)
    assert str(gep).endswith("%s, 0, 1")


def test_memcpy_text():
    inst = MemCpyInst(source=Value("%src"), dest=Value("%dst"))
    assert "%src" in str(inst) and "%dst" in str(inst)


def test_branch_conditional():
    a, b = BasicBlock("a"), BasicBlock("b")
    br = BranchInst(successors=[a, b], condition=Value("%c"))
    assert br.is_conditional
    assert "%c" in str(br)
    uncond = BranchInst(successors=[a])
    assert not uncond.is_conditional
    assert "label %a" in str(uncond)


@pytest.mark.parametrize("count", [0, 3])
def test_branch_rejects_bad_successor_count(count):
    with pytest.raises(ValueError):
        BranchInst(successors=[BasicBlock() for _ in range(count)])


def test_branch_repr_does_not_recurse():
    block = BasicBlock("loop")
    block.instructions.append(BranchInst(successors=[block]))
    assert "loop" in repr(block)


def test_other_inst_text():
    inst = OtherInst("%r", opcode="add", operands=[Value("%a"), Value("%b")])
    assert str(inst).startswith("%r = add")
    assert str(inst).endswith("%a, %b")


def test_iteration_over_function_and_blocks():
    i1 = LoadInst("%1", pointer=Value("%p"))
    i2 = OtherInst(opcode="ret")
    b1 = BasicBlock("entry", [i1])
    b2 = BasicBlock("exit", [i2])
    fn = Function("main", [b1, b2])
    assert list(fn) == [b1, b2]
    assert [inst for bb in fn for inst in bb] == [i1, i2]


def test_instruction_line():
    inst = LoadInst("%v", pointer=Value("%p"), line=12)
    assert inst.line == 12
    assert LoadInst("%v", pointer=Value("%p")).line is None