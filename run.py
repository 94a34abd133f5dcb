"""
Main interface for user/developer of minibtree.

Utility to start repl and run commands.

Requires minibtree to be installed.
"""

import sys

from minibtree import parse_args_and_start


if __name__ == '__main__':
    sys.exit(parse_args_and_start(sys.argv[1:]))
