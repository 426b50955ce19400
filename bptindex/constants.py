# operational constants
EXIT_SUCCESS = 0

# tree constants
# NOTE: a branching factor must be strictly greater than this; otherwise
# a split could leave a node with no keys
MIN_BRANCHING_FACTOR = 2
DEFAULT_BRANCHING_FACTOR = 3

# range search comparator symbols
LESS_EQUAL = "<="
EQUAL_EQUAL = "=="
GREATER_EQUAL = ">="

# demo driver constants
# these mirror the canned data set the tree was first exercised with
DEMO_KEYS = [0.0, 0.5, 0.2, 0.8]
DEMO_NUM_INSERTS = 10
DEMO_BRANCHING_FACTOR = 3

USAGE = '''
Supported meta-commands:
------------------------
print usage
.help

quit REPl
> .quit

print btree
> .btree

performs internal consistency checks on the tree
> .validate

discard the tree and start with an empty one
> .reset

Supported commands:
-------------------
Commands can be chained with ';'. Keys and values are literals, i.e.
integers, reals, quoted strings or null.

Insert a key-value pair (duplicate keys are allowed)
> insert 42 'forty two'

Get the first value stored under a key
> get 42

Range search; comparator is one of <=, ==, >=
> range <= 42

Number of leaf nodes
> size

All entries in key order
> scan
'''
