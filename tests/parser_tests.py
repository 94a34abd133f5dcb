"""
Tests for the command language front end
"""
import pytest

from lark.exceptions import UnexpectedInput

from .context import CommandFrontEnd, Program, InsertStmnt, SearchStmnt, EmptyStmnt


def parse(text):
    parser = CommandFrontEnd()
    parser.parse(text)
    assert parser.is_success(), parser.error_summary()
    return parser.get_parsed()


def test_insert_stmnt():
    program = parse("insert 5 'five'")
    assert isinstance(program, Program)
    assert program.statements == [InsertStmnt(5, "five")]


def test_keywords_are_case_insensitive():
    program = parse('INSERT -3 "minus three"')
    assert program.statements == [InsertStmnt(-3, "minus three")]


def test_bare_word_literals():
    program = parse("insert apple fruit")
    assert program.statements == [InsertStmnt("apple", "fruit")]


def test_search_stmnt_and_alias():
    assert parse("search 42").statements == [SearchStmnt(42)]
    assert parse("find 'x'").statements == [SearchStmnt("x")]


def test_empty_stmnt():
    assert parse("empty").statements == [EmptyStmnt()]


def test_multi_stmnt():
    program = parse("insert 1 one; insert 2 'two'; search 1; empty;")
    assert program.statements == [
        InsertStmnt(1, "one"),
        InsertStmnt(2, "two"),
        SearchStmnt(1),
        EmptyStmnt(),
    ]


def test_quoted_string_keeps_spaces():
    program = parse("insert 'hello world' 7")
    assert program.statements == [InsertStmnt("hello world", 7)]


@pytest.mark.parametrize("text", ["insert 5", "search", "select cola from foo", "insert 1 2 3", ""])
def test_invalid_input(text):
    parser = CommandFrontEnd()
    parser.parse(text)
    assert not parser.is_success()
    assert parser.get_parsed() is None
    assert parser.error_summary()


def test_invalid_input_raises_when_requested():
    parser = CommandFrontEnd(raise_exception=True)
    with pytest.raises(UnexpectedInput):
        parser.parse("delete 5")


def test_parser_recovers_after_failure():
    parser = CommandFrontEnd()
    parser.parse("insert")
    assert not parser.is_success()
    parser.parse("search 1")
    assert parser.is_success()
    assert parser.error_summary() is None
