"""Interactive command console driving a B+-tree of integers."""

import argparse
import logging
import sys
from typing import Callable, List, Optional, TextIO

from bplus_trees.base import InvalidConfig
from bplus_trees.bplus_tree_base import BPlusTreeBase
from bplus_trees.factory import DEFAULT_BRANCHING_FACTOR, create_bplustree
from bplus_trees.logging_config import get_logger, setup_logging

logger = get_logger("Console")

PROMPT = ">>> "
MUTATING_COMMANDS = ("ADD", "REMOVE", "CLEAR")


class TreeConsole:
    """
    Reads whitespace-separated commands and applies them to ``tree``.

    Output meant for the user goes to ``out``; input problems are reported
    through the logger and never stop the loop.
    """

    def __init__(
        self,
        tree: BPlusTreeBase,
        out: Optional[TextIO] = None,
        input_func: Callable[[str], str] = input,
    ):
        self.tree = tree
        self.out = out if out is not None else sys.stdout
        self.input_func = input_func
        self.verbose = False

    def _print(self, text: str) -> None:
        self.out.write(text)

    @staticmethod
    def _parse_ints(tokens: List[str]) -> List[int]:
        values = []
        for token in tokens:
            try:
                values.append(int(token, 10))
            except ValueError:
                logger.error("Invalid integer: %s", token)
        return values

    def execute(self, line: str) -> bool:
        """
        Run a single command line.

        Returns:
            bool: False once the console should stop, True otherwise.
        """
        tokens = line.split()
        if not tokens:
            return True

        command, args = tokens[0].upper(), tokens[1:]
        tree = self.tree

        if command in ("EXIT", "QUIT"):
            return False
        elif command == "PRINT":
            self._print(tree.render())
        elif command == "CLEAR":
            tree.clear()
        elif command == "CONTAINS":
            for val in self._parse_ints(args):
                self._print(f"{val}: {tree.contains(val)}\n")
        elif command == "FIRST":
            self._print(f"FIRST: {tree.first()}\n")
        elif command == "LAST":
            self._print(f"LAST: {tree.last()}\n")
        elif command == "IS":
            for condition in args:
                if condition.upper() == "EMPTY":
                    self._print(f"EMPTY: {tree.is_empty()}\n")
                else:
                    logger.warning("Unknown condition: %s", condition)
        elif command == "ADD":
            for val in self._parse_ints(args):
                tree.add(val)
                logger.debug("Added %d", val)
        elif command == "REMOVE":
            for val in self._parse_ints(args):
                removed = tree.remove(val)
                logger.debug("Removed %d? %s", val, removed)
        elif command == "SET":
            if args:
                param = args[0].upper()
                if param == "VERBOSE":
                    self.verbose = True
                elif param == "NOVERBOSE":
                    self.verbose = False
                else:
                    logger.warning("No such parameter: %s", args[0])
        else:
            logger.warning("Unknown command: %s", tokens[0])

        if self.verbose and command in MUTATING_COMMANDS:
            self._print(tree.render())
        return True

    def run(self) -> None:
        """Read and execute lines until EXIT, end of input or a double Ctrl+C."""
        interrupt_count = 0
        while True:
            try:
                line = self.input_func(PROMPT)
            except EOFError:
                break
            except KeyboardInterrupt:
                interrupt_count += 1
                if interrupt_count == 2:
                    logger.info("Interrupt received again, exiting...")
                    break
                logger.info("Press Ctrl+C again to exit")
                continue

            interrupt_count = 0
            if not self.execute(line):
                break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bplus-demo",
        description="A CLI application demonstrating B+ Tree operations.",
    )
    parser.add_argument(
        "-B", "--branching-factor",
        type=int,
        default=DEFAULT_BRANCHING_FACTOR,
        help=f"Branching factor of B+ Tree (default: {DEFAULT_BRANCHING_FACTOR})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the ``bplus-demo`` console. Returns the exit code."""
    args = build_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level)
    setup_logging(level=log_level)
    # Apply the chosen level even if logging was configured earlier
    logging.getLogger("bplus_trees").setLevel(log_level)

    try:
        tree = create_bplustree(args.branching_factor)
    except InvalidConfig as err:
        logger.error("Illegal argument passed: %s", err)
        return 1

    TreeConsole(tree).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
