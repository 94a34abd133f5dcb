from __future__ import annotations
"""
Contains symbol classes produced by the parser, i.e. the AST of the command language.

Classes deriving from `_Symbol`, whose name doesn't start with an underscore,
are matched to the grammar rule of the same (snake-cased) name by
lark's `ast_utils.create_transformer`.
"""
import sys

from dataclasses import dataclass
from typing import Any, List

from lark import Transformer, ast_utils

from ..dataexchange import CommandType


this_module = sys.modules[__name__]


class _Symbol(ast_utils.Ast):
    """
    Symbol is the root of parser hierarchy.
    This will be skipped by `create_transformer`
    """
    pass


class _Stmnt(_Symbol):
    command_type: CommandType = None


@dataclass
class Program(_Symbol, ast_utils.AsList):
    statements: List[_Stmnt]


@dataclass
class InsertStmnt(_Stmnt):
    key: Any
    value: Any

    command_type = CommandType.Insert


@dataclass
class SearchStmnt(_Stmnt):
    key: Any

    command_type = CommandType.Search


@dataclass
class EmptyStmnt(_Stmnt):
    command_type = CommandType.Empty


class ToAst(Transformer):
    """
    Converts literal tokens to python values.
    The rule callbacks are added by `create_transformer`
    """

    def INTEGER_NUMBER(self, token):
        return int(token)

    def STRING(self, token):
        # strip surrounding quotes
        return str(token[1:-1])

    def IDENTIFIER(self, token):
        return str(token)


def create_transformer() -> Transformer:
    return ast_utils.create_transformer(this_module, ToAst())
