from __future__ import annotations
"""
Contains symbol classes used by parser, and the transformer that
builds them from lark's parse tree
"""
from typing import Any, List, Union
from dataclasses import dataclass

from lark import Transformer, Token

from .visitor import Visitor


@dataclass
class Symbol:
    """
    Symbol is the root of parser hierarchy.
    Symbols compose the parser's output, i.e. the AST
    """
    def accept(self, visitor: Visitor) -> Any:
        return visitor.visit(self)


@dataclass
class Program(Symbol):
    statements: List[Union[InsertStmnt, GetStmnt, RangeStmnt, SizeStmnt, ScanStmnt]]


@dataclass
class InsertStmnt(Symbol):
    key: Any
    value: Any


@dataclass
class GetStmnt(Symbol):
    key: Any


@dataclass
class RangeStmnt(Symbol):
    comparator: str
    key: Any


@dataclass
class SizeStmnt(Symbol):
    pass


@dataclass
class ScanStmnt(Symbol):
    pass


def literal_to_value(token: Token) -> Any:
    """
    convert a literal token to the python value it denotes
    """
    if token.type == "INTEGER_NUMBER":
        return int(token)
    elif token.type == "REAL_NUMBER":
        return float(token)
    elif token.type == "STRING":
        # strip enclosing quotes
        return str(token)[1:-1]
    elif token.type == "NULL":
        return None
    raise ValueError(f"Unknown literal type {token.type}")


class ToAst(Transformer):
    """
    Handle conversion of all parse rules/tokens to AST classes.
    Each method is named after the grammar rule it handles, and receives
    the already transformed children of that rule.
    """

    def program(self, args) -> Program:
        return Program(list(args))

    def insert_stmnt(self, args) -> InsertStmnt:
        key, value = args
        return InsertStmnt(key, value)

    def get_stmnt(self, args) -> GetStmnt:
        return GetStmnt(args[0])

    def range_stmnt(self, args) -> RangeStmnt:
        comparator, key = args
        return RangeStmnt(comparator, key)

    def size_stmnt(self, args) -> SizeStmnt:
        return SizeStmnt()

    def scan_stmnt(self, args) -> ScanStmnt:
        return ScanStmnt()

    def key(self, args):
        return args[0]

    def value(self, args):
        return args[0]

    def comparator(self, args) -> str:
        return str(args[0])

    def literal(self, args):
        return literal_to_value(args[0])
