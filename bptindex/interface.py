from __future__ import annotations
"""
This module contains the highest level user-interaction, i.e. the shell that
parses commands and hands them to the virtual machine, the REPL, and the
other run modes (file, demo, stress).
"""
import os.path
import sys
import random
import logging

from typing import Any, List, Optional

from .btree import BPTree, InvalidArgumentException
from .constants import (
    DEFAULT_BRANCHING_FACTOR,
    DEMO_BRANCHING_FACTOR,
    DEMO_KEYS,
    DEMO_NUM_INSERTS,
    EXIT_SUCCESS,
    LESS_EQUAL,
    USAGE,
)
from .dataexchange import Response, MetaCommandResult
from .lang_parser.cmdhandler import CommandFrontEnd
from .lang_parser.symbols import Program
from .stress import run_insert_stress_suite
from .virtual_machine import VirtualMachine, VMConfig


# section: core execution/user-interface logic

def config_logging(level: int = logging.INFO):
    # config logger
    FORMAT = "[%(filename)s:%(lineno)s - %(funcName)s ] %(message)s"
    # log to stdout
    logging.basicConfig(format=FORMAT, level=level)


class BPTreeShell:
    """
    This provides programmatic interface for interacting with a tree
    via the command language.

    An example flow is like:
    ```
    # create handler instance
    shell = BPTreeShell(branching_factor=4)

    # submit statements
    resp = shell.handle_input("insert 1 'one'; insert 2 'two'; range <= 2")
    assert resp.success

    # one response per statement
    for stmnt_resp in resp.body:
        print(stmnt_resp.body)
    ```
    """

    def __init__(self, branching_factor: int = DEFAULT_BRANCHING_FACTOR, log_level: int = logging.INFO):
        """
        :param branching_factor: branching factor of the tree the shell operates on
        :param log_level: level the root logger is configured with
        """
        self.config = VMConfig(branching_factor)
        self.log_level = log_level
        self.parser = CommandFrontEnd()
        self.virtual_machine = None
        self.configure()
        self.reset()

    def configure(self):
        """
        Handle any configuration tasks
        """
        config_logging(self.log_level)

    def reset(self):
        """
        Reset state. Recreates virtual_machine, and hence the tree.
        """
        self.virtual_machine = VirtualMachine(self.config)

    @property
    def tree(self) -> BPTree:
        return self.virtual_machine.tree

    def handle_input(self, input_buffer: str) -> Response:
        """
        handle input- parse and execute

        :param input_buffer:
        :return:
        """
        if self.is_meta_command(input_buffer):
            m_resp = self.do_meta_command(input_buffer.strip())
            if m_resp.success:
                return m_resp

            print("Unable to process meta command")
            return Response(False, status=m_resp.status, error_message=m_resp.error_message)

        p_resp = self.prepare_statement(input_buffer)
        if not p_resp.success:
            return Response(False, error_message=p_resp.error_message)

        e_resps = self.execute_statement(p_resp.body)
        failed = [resp for resp in e_resps if not resp.success]
        if failed:
            logging.warning(f"Execution of command '{input_buffer}' failed")
            return Response(False, error_message=failed[0].error_message, body=e_resps)
        logging.debug(f"Execution of command '{input_buffer}' succeeded")
        return Response(True, body=e_resps)

    @staticmethod
    def is_meta_command(command: str) -> bool:
        command = command.strip()
        return bool(command) and command[0] == '.'

    def do_meta_command(self, command: str) -> Response:
        """
        handle execution of meta command
        :param command:
        :return:
        """
        if command == ".quit":
            print("goodbye")
            sys.exit(EXIT_SUCCESS)
        elif command == ".btree":
            print("Printing tree" + "-"*50)
            self.tree.print_tree()
            print("Finished printing tree" + "-"*50)
            return Response(True, status=MetaCommandResult.Success)
        elif command == ".validate":
            print("Validating tree....")
            try:
                self.tree.validate()
            except AssertionError as e:
                return Response(False, status=MetaCommandResult.ValidationFailed,
                                error_message=f"validation failed: {e}")
            print("Validation succeeded.......")
            return Response(True, status=MetaCommandResult.Success)
        elif command == ".reset":
            self.reset()
            return Response(True, status=MetaCommandResult.Success)
        elif command == ".help":
            print(USAGE)
            return Response(True, status=MetaCommandResult.Success)
        return Response(False, status=MetaCommandResult.UnrecognizedCommand,
                        error_message=f"unrecognized meta command [{command}]")

    def prepare_statement(self, command: str) -> Response:
        """
        prepare statement, i.e. parse statement and
        return it's AST

        :param command:
        :return:
        """
        self.parser.parse(command)
        if not self.parser.is_success():
            return Response(False, error_message=f"parse failed due to: [{self.parser.error_summary()}]")
        return Response(True, body=self.parser.get_parsed())

    def execute_statement(self, program: Program) -> List[Response]:
        """
        execute statement;
        returns return value of child-invocation
        """
        return self.virtual_machine.run(program)


def repl(branching_factor: int = DEFAULT_BRANCHING_FACTOR):
    """
    REPL (read-eval-print loop) for bptindex
    """
    try:
        shell = BPTreeShell(branching_factor)
    except InvalidArgumentException as e:
        print(f"Unable to start repl due to [{e}]")
        return

    print("Welcome to bptindex")
    print("For help use .help")
    while True:
        input_buffer = input("bpt > ")
        if not input_buffer.strip():
            continue
        resp = shell.handle_input(input_buffer)
        if not resp.success:
            print(f"Command execution failed due to [{resp.error_message}] ")
            continue

        if shell.is_meta_command(input_buffer):
            continue
        for stmnt_resp in resp.body:
            print(stmnt_resp)


def run_file(input_filepath: str, branching_factor: int = DEFAULT_BRANCHING_FACTOR) -> Response:
    """
    Execute statements in file.
    """
    if not os.path.exists(input_filepath):
        return Response(False, error_message=f"Argument file [{input_filepath}] not found")

    try:
        shell = BPTreeShell(branching_factor)
    except InvalidArgumentException as e:
        return Response(False, error_message=str(e))

    with open(input_filepath) as fp:
        contents = fp.read()

    resp = shell.handle_input(contents)
    if not resp.success:
        print(f"Command execution failed due to [{resp.error_message}] ")
        return resp

    for stmnt_resp in resp.body:
        print(stmnt_resp)
    return resp


def run_demo(keys: List[Any] = None, values: List[Any] = None, seed: Optional[int] = None) -> BPTree:
    """
    Insert randomly picked entries into a tree with branching factor 3,
    printing the tree after each insert, then print a range search.

    This does not ensure the tree is implemented correctly, just that
    insert, range_search, and str(tree) work end to end.

    In the printed tree structure, being in the same curly bracket {} means
    you have the same parent node; being in the same square bracket [] means
    in the same node.
    """
    if keys is None:
        keys = DEMO_KEYS
    if values is None:
        values = keys
    rnd = random.Random(seed)

    tree = BPTree(DEMO_BRANCHING_FACTOR)
    # track inserted values, to compare against the contents of the tree
    inserted = []
    for _ in range(DEMO_NUM_INSERTS):
        index = rnd.randrange(len(keys))
        key, value = keys[index], values[index]
        inserted.append(value)
        tree.insert(key, value)
        print(f"\nInsert {key}\nTree structure:\n{tree}")

    filtered_values = tree.range_search(keys[2 % len(keys)], LESS_EQUAL)
    print(f"Filtered values: {filtered_values}")
    print(f"All values: {inserted}")
    print(f"Size (Number of LeafNodes): {tree.size()}")
    return tree


def run_stress():
    """
    Run stress test
    """
    config_logging()
    run_insert_stress_suite()
    print("Stress suite succeeded")


def parse_args_and_start(args: List):
    """
    parse args and starts
    :return:
    """
    args_description = """Usage:
python run.py repl [branching-factor]
    // start repl
python run.py file <filepath> [branching-factor]
    // execute commands in file at <filepath>
python run.py demo
    // insert random entries and print the tree after each insert
python run.py stress
    // run the insert stress suite
    """
    if len(args) < 1:
        print("Error: run-mode not specified")
        print(args_description)
        return

    runmode = args[0].lower()
    # repl and file accept an optional trailing branching factor
    factor_pos = 2 if runmode == "file" else 1
    branching_factor = DEFAULT_BRANCHING_FACTOR
    if runmode in ("repl", "file") and len(args) > factor_pos:
        try:
            branching_factor = int(args[factor_pos])
        except ValueError:
            print(f"Error: branching factor must be an integer; received [{args[factor_pos]}]")
            print(args_description)
            return

    if runmode == "repl":
        repl(branching_factor)
    elif runmode == "demo":
        run_demo()
    elif runmode == "stress":
        run_stress()
    elif runmode == "file":
        if len(args) < 2:
            print("Error: Expected input filepath")
            print(args_description)
            return
        resp = run_file(args[1], branching_factor)
        if not resp.success:
            print(f"Error: {resp.error_message}")
    else:
        print(f"Error: Invalid run mode [{runmode}]")
        print(args_description)
        return
