"""
This sets up the modules for testing
"""
import os
import sys
# otherwise everything that needs to be tested will have to be explicitly imported
# which would make the top level export expose items that aren't intended for user access
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


# specific internal imports for specific tests suites
# generally we'll import entire module, unless it' clearer to import a specific member

# btree
from bptindex.btree import BPTree, Comparator, InvalidArgumentException
from bptindex.node import NodeType, InternalNode, LeafNode, child_index, lower_bound, upper_bound
from bptindex.cursor import Cursor

# lang_tests
from bptindex.lang_parser.cmdhandler import CommandFrontEnd
from bptindex.lang_parser import symbols

# interface
from bptindex.interface import BPTreeShell, parse_args_and_start, repl, run_demo, run_file
from bptindex.dataexchange import Response, MetaCommandResult, ExecuteResult
from bptindex.stress import run_insert_stress_test, run_insert_stress_suite
