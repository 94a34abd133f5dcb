from __future__ import annotations
"""
This module contains the highest level user-interaction and resource allocation
i.e. management of entities, like the parser, the btree, and the output pipe.
"""
import os.path
import sys
import logging

from dataclasses import dataclass
from typing import List

from .btree import BTree, InvalidDegree
from .constants import (
    DEFAULT_DEGREE,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    LOG_FORMAT,
    NOT_FOUND_MSG,
    PROMPT,
    USAGE,
)
from .dataexchange import CommandType, MetaCommandResult, Pipe, Response
from .lang_parser.handler import CommandFrontEnd
from .lang_parser.symbols import Program
from .stress import run_insert_stress_suite


logger = logging.getLogger(__name__)


# section: core execution/user-interface logic

def config_logging(level: int = logging.INFO):
    # log to stdout
    logging.basicConfig(format=LOG_FORMAT, level=level)


@dataclass
class ShellConfig:
    degree: int = DEFAULT_DEGREE
    log_level: int = logging.INFO


class IndexShell:
    """
    Programmatic interface for driving a btree with the command language.

    An example flow is like:
    ```
    shell = IndexShell()

    resp = shell.handle_input("insert 5 'five'; search 5")
    assert resp.success

    # read results of statements that produce output
    pipe = shell.get_pipe()
    while pipe.has_msgs():
        print(pipe.read())
    ```
    """

    def __init__(self, config: ShellConfig = None):
        self.config = config or ShellConfig()
        self.frontend = CommandFrontEnd()
        self.pipe = Pipe()
        self.tree = None
        self.configure()
        self.reset()

    def configure(self):
        """
        Handle any configuration tasks
        """
        config_logging(self.config.log_level)

    def reset(self):
        """
        Reset state. Recreates the tree, and drains the pipe.
        """
        self.pipe.reset()
        self.tree = BTree(self.config.degree)

    def get_pipe(self) -> Pipe:
        return self.pipe

    def close(self):
        """
        Nothing is persisted; the pipe is drained
        """
        self.pipe.reset()

    def handle_input(self, input_buffer: str) -> Response:
        """
        handle input- parse and execute

        :param input_buffer:
        :return:
        """
        input_buffer = input_buffer.strip()
        if not input_buffer:
            return Response(True)

        if self.is_meta_command(input_buffer):
            m_resp = self.do_meta_command(input_buffer)
            if m_resp.success:
                return Response(True, status=MetaCommandResult.Success)

            logger.error(f"Unable to process meta command [{input_buffer}]")
            return Response(False, error_message=m_resp.error_message, status=m_resp.status)

        p_resp = self.prepare_statement(input_buffer)
        if not p_resp.success:
            return Response(False, error_message=p_resp.error_message)

        e_resp = self.execute_statement(p_resp.body)
        if e_resp.success:
            logger.info(f"Execution of command '{input_buffer}' succeeded")
        else:
            logger.error(f"Execution of command '{input_buffer}' failed")
        return e_resp

    @staticmethod
    def is_meta_command(command: str) -> bool:
        return command.startswith('.')

    def do_meta_command(self, command: str) -> Response:
        """
        handle execution of meta command
        :param command:
        :return:
        """
        if command == ".quit":
            print("goodbye")
            self.close()
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
                return Response(False, error_message=f"validation failed: {e}",
                                status=MetaCommandResult.ValidationFailed)
            print("Validation succeeded.......")
            return Response(True, status=MetaCommandResult.Success)
        elif command == ".nuke":
            self.reset()
            return Response(True, status=MetaCommandResult.Success)
        elif command == ".help":
            print(USAGE)
            return Response(True, status=MetaCommandResult.Success)
        return Response(False, error_message=f"unrecognized meta command [{command}]",
                        status=MetaCommandResult.UnrecognizedCommand)

    def prepare_statement(self, command: str) -> Response:
        """
        prepare statement, i.e. parse statement and
        return its AST.

        :param command:
        :return:
        """
        self.frontend.parse(command)
        if not self.frontend.is_success():
            return Response(False, error_message=f"parse failed due to: [{self.frontend.error_summary()}]")
        return Response(True, body=self.frontend.get_parsed())

    def execute_statement(self, program: Program) -> Response:
        """
        execute statements in order; stop at the first failure.
        Output of statements is written to the pipe.

        :return: Response whose body is the number of statements executed
        """
        for count, stmnt in enumerate(program.statements):
            try:
                self.execute_one(stmnt)
            except TypeError as e:
                # raised when a key can't be compared with stored keys
                return Response(False, error_message=f"statement {count} [{stmnt}] failed due to: [{e}]",
                                body=count)
        return Response(True, body=len(program.statements))

    def execute_one(self, stmnt):
        if stmnt.command_type == CommandType.Insert:
            self.tree.insert(stmnt.key, stmnt.value)
        elif stmnt.command_type == CommandType.Search:
            value = self.tree.search(stmnt.key)
            self.pipe.write(NOT_FOUND_MSG if value is None else value)
        elif stmnt.command_type == CommandType.Empty:
            self.pipe.write(self.tree.is_empty())
        else:
            raise NotImplementedError


def repl(config: ShellConfig = None):
    """
    REPL (read-eval-print loop) for the btree
    """
    shell = IndexShell(config)

    print("Welcome to minibtree")
    print("For help use .help")
    while True:
        try:
            input_buffer = input(PROMPT)
        except EOFError:
            print("goodbye")
            return
        resp = shell.handle_input(input_buffer)
        if not resp.success:
            print(f"Command execution failed due to [{resp.error_message}] ")
            continue

        # get output pipe
        pipe = shell.get_pipe()

        while pipe.has_msgs():
            print(pipe.read())


def run_file(input_filepath: str, config: ShellConfig = None) -> Response:
    """
    Execute commands in file.
    """
    if not os.path.exists(input_filepath):
        return Response(False, error_message=f"Argument file [{input_filepath}] not found")

    shell = IndexShell(config)
    with open(input_filepath) as fp:
        contents = fp.read()

    resp = shell.handle_input(contents)
    if not resp.success:
        print(f"Command execution failed due to [{resp.error_message}] ")

    # get output pipe
    pipe = shell.get_pipe()

    while pipe.has_msgs():
        print(pipe.read())

    shell.close()
    return resp


def run_stress(config: ShellConfig = None):
    """
    Run stress test
    """
    shell = IndexShell(config)
    run_insert_stress_suite(shell)


def parse_args_and_start(args: List) -> int:
    """
    parse args and starts
    :return: exit code
    """
    args_description = """Usage:
python run.py [--degree <d>] [--verbose] repl
    // start repl
python run.py [--degree <d>] [--verbose] file <filepath>
    // run commands in file at <filepath>
python run.py [--degree <d>] [--verbose] stress
    // run the insert stress suite
    """
    config = ShellConfig()
    args = list(args)
    while args and args[0].startswith("--"):
        option = args.pop(0)
        if option == "--verbose":
            config.log_level = logging.DEBUG
        elif option == "--degree" and args:
            value = args.pop(0)
            if not value.isdigit():
                print(f"Error: Invalid degree [{value}]")
                return EXIT_FAILURE
            config.degree = int(value)
        else:
            print(f"Error: Invalid option [{option}]")
            print(args_description)
            return EXIT_FAILURE

    if len(args) < 1:
        print("Error: run-mode not specified")
        print(args_description)
        return EXIT_FAILURE

    runmode = args[0].lower()
    try:
        if runmode == "repl":
            repl(config)
        elif runmode == "stress":
            run_stress(config)
        elif runmode == "file":
            if len(args) < 2:
                print("Error: Expected input filepath")
                print(args_description)
                return EXIT_FAILURE
            resp = run_file(args[1], config)
            if not resp.success:
                return EXIT_FAILURE
        else:
            print(f"Error: Invalid run mode [{runmode}]")
            print(args_description)
            return EXIT_FAILURE
    except InvalidDegree as e:
        print(f"Error: {e}")
        return EXIT_FAILURE
    return EXIT_SUCCESS


def main():
    sys.exit(parse_args_and_start(sys.argv[1:]))
