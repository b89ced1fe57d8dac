import pytest

from bf_parser import (
    BFSyntaxError,
    Instruction,
    UnmatchedLeft,
    UnmatchedRight,
    filter_source,
    parse_bf,
)


def test_plain_ops():
    ops = parse_bf("+-<>.,")
    assert [op.name for op in ops] == [
        'Increment', 'Decrement', 'MoveLeft', 'MoveRight', 'Output', 'Input',
    ]
    assert not any(op.is_jump for op in ops)


def test_nested_targets():
    ops = parse_bf("+[>[-]<-]")
    assert ops[1] == Instruction('[', 8)
    assert ops[8] == Instruction(']', 1)
    assert ops[3] == Instruction('[', 5)
    assert ops[5] == Instruction(']', 3)


@pytest.mark.parametrize("code", ["[]", "[[]]", "[][]", "+[-[+]>[<]]", "[[[][]]][]"])
def test_targets_are_an_involution(code):
    ops = parse_bf(code)
    jumps = [i for i, op in enumerate(ops) if op.is_jump]
    assert len(jumps) == code.count('[') + code.count(']')
    for i in jumps:
        j = ops[i].jump_target
        assert ops[j].jump_target == i
        assert {ops[i].char, ops[j].char} == {'[', ']'}


@pytest.mark.parametrize("code, position", [("[", 0), ("+[[]", 1), ("[+[", 0)])
def test_unmatched_left(code, position):
    with pytest.raises(UnmatchedLeft) as exc:
        parse_bf(code)
    assert exc.value.position == position


@pytest.mark.parametrize("code, position", [("]", 0), ("[]]", 2), ("][", 0)])
def test_unmatched_right(code, position):
    with pytest.raises(UnmatchedRight) as exc:
        parse_bf(code)
    assert exc.value.position == position


def test_resolver_does_not_filter():
    with pytest.raises(BFSyntaxError):
        parse_bf("+a+")


def test_filter_source():
    assert filter_source("hello + world [-]\n.,<>#") == "+[-].,<>"


def test_resolution_is_deterministic():
    code = "++[>+<-]>[.-]"
    assert parse_bf(code) == parse_bf(code)


def test_instruction_is_immutable():
    op = Instruction('[', 3)
    with pytest.raises(AttributeError):
        op.jump_target = 4
