"""
Contains classes used for data exchange, i.e.
do not have any "compute" methods.
"""
from collections import deque
from typing import Any, List, TypeVar, Generic
from dataclasses import dataclass
from enum import Enum, auto

# This is used to parameterize Response type as per: https://stackoverflow.com/a/42989302
T = TypeVar("T")


# section result enums


class MetaCommandResult(Enum):
    Success = auto()
    UnrecognizedCommand = auto()
    InvalidArgument = auto()
    ValidationFailed = auto()


class CommandType(Enum):
    Insert = auto()
    Search = auto()
    Empty = auto()


@dataclass
class Response(Generic[T]):
    """
    Use as a generic class to encapsulate a response and a body
    """

    # is success
    success: bool
    # if fail, why
    error_message: str = None
    # an enum encoding state
    status: Any = None
    # output of operation
    body: T = None

    def __str__(self):
        if self.error_message:
            return f"Response(fail, {self.error_message})"
        else:
            return f"Response(success, {str(self.body)})"

    def __repr__(self):
        return self.__str__()


class Pipe:
    """
    Holds command output, e.g. results of search, until the caller reads it
    """

    def __init__(self):
        self.store = deque()

    def write(self, msg):
        self.store.append(msg)

    def has_msgs(self) -> bool:
        return len(self.store) > 0

    def read(self):
        """
        Read oldest message and remove it from the pipe
        """
        return self.store.popleft()

    def read_all(self) -> List:
        """
        Drain the pipe, oldest message first
        """
        msgs = list(self.store)
        self.store.clear()
        return msgs

    def reset(self):
        self.store.clear()
