from .btree import BPTree, Comparator, InvalidArgumentException
from .cursor import Cursor
from .interface import BPTreeShell, parse_args_and_start, repl, run_demo, run_file, run_stress
from .node import NodeType, InternalNode, LeafNode
