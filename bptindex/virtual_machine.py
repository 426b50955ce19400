from __future__ import annotations
"""
The virtual machine executes parsed programs against a tree
"""
import logging
from dataclasses import dataclass
from typing import List

from .btree import BPTree, InvalidArgumentException
from .constants import DEFAULT_BRANCHING_FACTOR
from .dataexchange import Response, ExecuteResult
from .lang_parser.visitor import Visitor
from .lang_parser.symbols import (
    Symbol,
    Program,
    InsertStmnt,
    GetStmnt,
    RangeStmnt,
    SizeStmnt,
    ScanStmnt,
)


@dataclass
class VMConfig:
    """
    Configuration for a virtual machine, i.e. for the tree it owns
    """
    branching_factor: int = DEFAULT_BRANCHING_FACTOR


class VirtualMachine(Visitor):
    """
    This will execute statements against the tree it owns.
    Each statement handler returns a `Response`; failures from the tree
    are converted to failed responses, rather than raised
    """

    def __init__(self, config: VMConfig):
        self.config = config
        self.tree = None
        self.init()

    def init(self):
        """
        create a fresh, empty tree
        """
        self.tree = BPTree(self.config.branching_factor)

    def run(self, program: Program) -> List[Response]:
        """
        run the virtual machine with program on state
        :param program:
        :return: one response per statement
        """
        result = []
        for stmnt in program.statements:
            try:
                result.append(self.execute(stmnt))
            except Exception:
                logging.error(f"ERROR: virtual machine failed on: [{stmnt}]")
                raise
        return result

    def execute(self, stmnt: Symbol) -> Response:
        """
        execute statement
        """
        return stmnt.accept(self)

    # section : statement handlers

    def visit_insert_stmnt(self, stmnt: InsertStmnt) -> Response:
        try:
            self.tree.insert(stmnt.key, stmnt.value)
        except InvalidArgumentException as e:
            return Response(False, error_message=str(e), status=ExecuteResult.InvalidArgument)
        except TypeError as e:
            # key can't be compared with keys already in the tree
            return Response(False, error_message=f"incomparable key [{stmnt.key!r}]: {e}",
                            status=ExecuteResult.IncomparableKey)
        return Response(True, status=ExecuteResult.Success)

    def visit_get_stmnt(self, stmnt: GetStmnt) -> Response:
        try:
            value = self.tree.get(stmnt.key)
        except TypeError as e:
            return Response(False, error_message=f"incomparable key [{stmnt.key!r}]: {e}",
                            status=ExecuteResult.IncomparableKey)
        return Response(True, status=ExecuteResult.Success, body=value)

    def visit_range_stmnt(self, stmnt: RangeStmnt) -> Response:
        try:
            values = self.tree.range_search(stmnt.key, stmnt.comparator)
        except TypeError as e:
            return Response(False, error_message=f"incomparable key [{stmnt.key!r}]: {e}",
                            status=ExecuteResult.IncomparableKey)
        return Response(True, status=ExecuteResult.Success, body=values)

    def visit_size_stmnt(self, stmnt: SizeStmnt) -> Response:
        return Response(True, status=ExecuteResult.Success, body=self.tree.size())

    def visit_scan_stmnt(self, stmnt: ScanStmnt) -> Response:
        return Response(True, status=ExecuteResult.Success, body=list(self.tree.items()))
