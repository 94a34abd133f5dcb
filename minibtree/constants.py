# operational constants
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

PROMPT = 'btree > '

# logging
LOG_FORMAT = "[%(filename)s:%(lineno)s - %(funcName)s ] %(message)s"

# btree constants
# NOTE: a node holds at most 2 * degree - 1 keys
DEFAULT_DEGREE = 2
# NOTE: degree 1 would give 1-key nodes that can't be split around a median
MIN_DEGREE = 2

NOT_FOUND_MSG = 'not found'

USAGE = '''
Supported meta-commands:
------------------------
print usage
.help

quit REPl
> .quit

print btree
> .btree

performs internal consistency checks on the btree
> .validate

discard all entries, i.e. start over with an empty btree
> .nuke

Supported commands:
-------------------
Keys and values are integers, quoted strings, or bare words.
Multiple commands can be separated with ';'.

Insert an entry; duplicate keys are kept, and the first inserted value wins on lookup
> insert 5 'five'

Lookup a key
> search 5
> find 5

Check whether anything has been inserted
> empty
'''
