from .btree import BTree, Node, InvalidDegree
from .interface import IndexShell, ShellConfig, parse_args_and_start, repl, run_file
