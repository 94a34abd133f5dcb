from .handler import CommandFrontEnd
from .symbols import Program, InsertStmnt, SearchStmnt, EmptyStmnt
