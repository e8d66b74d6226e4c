"""A small command-line parser that dispatches each option to a handler."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Union

Handler = Union[Callable[[str], None], Callable[[], None]]


@dataclass(frozen=True)
class _Registration:
    handler: Handler
    takes_value: bool


class CommandLineUtility:
    """Parses options, calling the handler registered for each one.

    Options that take a value consume the next argument and pass it to their
    handler; flags call their handler with no arguments.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, _Registration] = {}
        self._mandatory: set[str] = set()
        self._received: set[str] = set()

    def register_handler(
        self,
        parameter: str,
        handler: Handler,
        takes_value: bool = False,
        mandatory: bool = False,
    ) -> None:
        """Assign ``handler`` to ``parameter``, replacing any earlier one."""
        self._handlers[parameter] = _Registration(handler, takes_value)
        if mandatory:
            self._mandatory.add(parameter)

    def parse(self, argv: Sequence[str] | None = None) -> bool:
        """Parse ``argv`` (without the program name; defaults to ``sys.argv[1:]``).

        Returns False, after printing the reason to stderr, on an unknown
        argument or a missing mandatory one. An option missing its value is
        reported but does not fail the parse.
        """
        args = list(sys.argv[1:] if argv is None else argv)
        tokens = iter(args)
        for token in tokens:
            registration = self._handlers.get(token)
            if registration is None:
                print(f"Unknown argument: {token}", file=sys.stderr)
                return False
            self._received.add(token)
            if registration.takes_value:
                value = next(tokens, None)
                if value is None:
                    print(f"{token} requires a value.", file=sys.stderr)
                else:
                    registration.handler(value)  # type: ignore[call-arg]
            else:
                registration.handler()  # type: ignore[call-arg]

        for parameter in sorted(self._mandatory):
            if parameter not in self._received:
                print(f"Missing mandatory argument: {parameter}", file=sys.stderr)
                return False
        return True