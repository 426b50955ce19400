"""
Main interface for user/developer of bptindex.

Utility to start repl and run commands.

Requires bptindex to be installed.
"""

import sys

from bptindex import parse_args_and_start


if __name__ == '__main__':
    parse_args_and_start(sys.argv[1:])
