from __future__ import annotations
import logging

from lark import Lark
from lark.exceptions import UnexpectedInput  # root of all lark parse exceptions

from .grammar import GRAMMAR
from .symbols import Program, ToAst


class CommandFrontEnd:
    """
    Parser for the bptindex command language, based on lark definition
    """
    def __init__(self, raise_exception=False):
        self.parser = None
        self.parsed = None  # parsed AST
        self.exc = None  # exception
        self.is_succ = False
        self.raise_exception = raise_exception
        self._init()

    def _init(self):
        # basic lexer so that e.g. `1.5` is always lexed as a single real
        self.parser = Lark(GRAMMAR, parser='earley', lexer='basic', start="program")

    def error_summary(self):
        if self.exc is not None:
            return str(self.exc)

    def is_success(self):
        """
        whether parse operation is success
        """
        return self.is_succ

    def get_parsed(self) -> Program:
        return self.parsed

    def parse(self, text: str):
        """
        parse `text`; on success the AST is available via `get_parsed`

        :param text:
        :return:
        """
        try:
            tree = self.parser.parse(text)
            logging.debug(f"untransformed AST:\n{tree.pretty()}")
            self.parsed = ToAst().transform(tree)
            self.is_succ = True
            self.exc = None
        except UnexpectedInput as e:
            self.exc = e
            self.parsed = None
            self.is_succ = False
            if self.raise_exception:
                raise
