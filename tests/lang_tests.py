"""
Tests for the command language front end
"""
import pytest

from lark.exceptions import UnexpectedInput

from .context import CommandFrontEnd, symbols


def parse(text):
    parser = CommandFrontEnd()
    parser.parse(text)
    assert parser.is_success(), f"parse failed due to {parser.error_summary()}"
    return parser.get_parsed()


def test_insert_stmnt():
    program = parse("insert 1 'one'")
    assert program == symbols.Program([symbols.InsertStmnt(1, "one")])


def test_literal_types():
    program = parse('insert -2.5 "minus"; insert 7 null; insert \'k\' 3')
    assert program.statements == [
        symbols.InsertStmnt(-2.5, "minus"),
        symbols.InsertStmnt(7, None),
        symbols.InsertStmnt("k", 3),
    ]
    assert isinstance(program.statements[1].key, int)
    assert isinstance(program.statements[0].key, float)


def test_multiple_stmnts():
    program = parse("get 3; range <= 3; range == 3; range >= 3; size; scan;")
    assert program.statements == [
        symbols.GetStmnt(3),
        symbols.RangeStmnt("<=", 3),
        symbols.RangeStmnt("==", 3),
        symbols.RangeStmnt(">=", 3),
        symbols.SizeStmnt(),
        symbols.ScanStmnt(),
    ]


def test_keywords_case_insensitive():
    program = parse("INSERT 1 NULL; Size")
    assert program.statements == [symbols.InsertStmnt(1, None), symbols.SizeStmnt()]


@pytest.mark.parametrize("text", [
    "range < 3",
    "insert 1",
    "get",
    "delete 3",
    "",
])
def test_invalid_commands(text):
    parser = CommandFrontEnd()
    parser.parse(text)
    assert not parser.is_success()
    assert parser.get_parsed() is None
    assert parser.error_summary()


def test_raise_exception():
    parser = CommandFrontEnd(raise_exception=True)
    with pytest.raises(UnexpectedInput):
        parser.parse("range < 3")
