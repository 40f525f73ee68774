"""
Cmdargs faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings), grouped by domain.
- ArgumentException / ArgumentWarning: base types that carry message + options and
  know how to render themselves with rich.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

UX goals
- Position-first messages: parse-time messages include the ordinal argv position
  (“from second position”) whenever it is known.
- Every message names the offending argument by its short and/or long name.

Integration
- Arguments raise faults directly from Argument.parse(); the parser enriches them with
  the position and its own options, then calls trigger().
- In non-shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, both are rendered to stderr via rich (and errors exit with status 1).
"""
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, ordinal

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declaration (2110x): INVALID_DECLARATION, DUPLICATED_NAME
    - parsing (2111x): MISSING_VALUE, INVALID_VALUE
    - warnings (2211x): REPEATED_ARGUMENT
    """
    # --- declaration errors ---
    INVALID_DECLARATION = 21101
    DUPLICATED_NAME     = 21102

    # --- parsing errors ---
    MISSING_VALUE       = 21111
    INVALID_VALUE       = 21112

    # --- warnings ---
    REPEATED_ARGUMENT   = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette):
    """
    shared rich rendering for exceptions and warnings.

    layout
    - header: "[ prog | code | title ]"
    - body: the message (with position), then an optional "→ hint" line.
    - fancy: the body is wrapped in a Panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = getattr(main, "__prog__", options.get("prog") or "cmdargs")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " | ",
        text(type(fault).code.normalize(), "code"),
        " | ",
        text(type(fault).title.title(), "title"),
        " ]"
    )
    message = text(str(fault), "message")
    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class _Fault:
    """
    mixin shared by ArgumentException and ArgumentWarning.

    options (all optional)
    - argument: the Argument instance at fault.
    - position: 1-based argv position of the argument's name token.
    - hint: one short actionable sentence.
    - prog, shell, colorful, fancy: rendering switches merged in by the parser.
    """
    code = Unset
    title = Unset

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        if position := self.options.get("position"):
            return f"{self.message} (from {ordinal(position)} position)"
        return self.message

    @property
    def argument(self):
        return self.options.get("argument")

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replica = type(self)(self.message, **{**self.options, **overrides})
        # keep the chained converter failure (if any) on the replica
        replica.__cause__ = self.__cause__
        return replica


class ArgumentException(_Fault, Exception):
    """
    base class for every error raised by cmdargs.
    """
    code = FaultCode.INVALID_DECLARATION
    title = "argument error"

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from self.__cause__
        console.print(self)
        sys.exit(1)


class InvalidDeclarationError(ArgumentException, ValueError):
    """an argument was declared with no usable name (or an otherwise malformed declaration)."""
    code = FaultCode.INVALID_DECLARATION
    title = "invalid declaration"


class DuplicatedNameError(InvalidDeclarationError):
    """an argument was registered under a name token that is already taken."""
    code = FaultCode.DUPLICATED_NAME
    title = "duplicated name"


class MissingValueError(ArgumentException):
    """a value argument was named as the last token or right before another option."""
    code = FaultCode.MISSING_VALUE
    title = "missing value"


class InvalidValueError(ArgumentException):
    """the token following an argument's name could not be converted to its type."""
    code = FaultCode.INVALID_VALUE
    title = "invalid value"


class ArgumentWarning(_Fault, UserWarning):
    """
    base class for every warning emitted by cmdargs.
    """
    code = FaultCode.REPEATED_ARGUMENT
    title = "argument warning"

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=5)
        console.print(self)


class RepeatedArgumentWarning(ArgumentWarning):
    """an argument was named more than once in a single parse; the last occurrence wins."""
    code = FaultCode.REPEATED_ARGUMENT
    title = "repeated argument"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into a copy of the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, exceptions are raised
      and warnings are emitted through the warnings module.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentException",
    "InvalidDeclarationError",
    "DuplicatedNameError",
    "MissingValueError",
    "InvalidValueError",
    "ArgumentWarning",
    "RepeatedArgumentWarning",
    "trigger",
)
