"""
Cmdargs argument registry: registration, parsing and help rendering.

Lifecycle
- Register arguments once (add/value/implicit/flag); each call returns the argument
  itself, which the caller keeps to query values after parsing.
- parse(argv) walks the argument vector once; argv[0] (the program path) is skipped.
- render_help()/print_help() list visible (and optionally hidden) arguments.

Dispatch
- Every non-empty name of an argument ("-v", "--verbose") is a key of the name table;
  both keys reference the same argument object.
- Tokens that are not registered names are ignored (no positionals, no error).
- When an argument consumes the following token as its value, the parser steps over it,
  so a value is never looked up as a name itself.

Faults
- Declaration faults (InvalidDeclarationError, DuplicatedNameError) are always raised.
- Parse faults (MissingValueError, InvalidValueError, RepeatedArgumentWarning) go through
  trigger(): raised/warned normally, or rendered to stderr in shell mode.
"""
import os
import sys
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .arguments import Argument, FlagArgument, ImplicitArgument, ValueArgument, Visibility
from .faults import ArgumentException, DuplicatedNameError, RepeatedArgumentWarning, trigger
from .utils import Unset, coalesce


class ArgumentParser:
    """
    Owner of all declared arguments and the engine that dispatches input tokens to them.

    Options
    - prog: program name shown in fault headers (defaults to the basename of argv[0]).
    - shell: render parse faults to stderr (and exit with status 1 on errors) instead of raising.
    - colorful: style rich output (help and faults).
    - fancy: wrap rendered faults in a panel.
    """

    __introspectable__ = (
        "prog",
        "arguments",
        "shell",
        "colorful",
        "fancy",
    )

    def __init__(self, prog=Unset, *, shell=False, colorful=True, fancy=False):
        if not isinstance(prog, str | type(Unset)):
            raise TypeError("parser 'prog' must be a string")
        self._prog = prog
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)

        self._arguments = []
        self._names = {}
        self._visible = []
        self._hidden = []

    @property
    def prog(self):
        return coalesce(self._prog)

    @property
    def arguments(self):
        """
        Every registered argument, in registration order.
        """
        return tuple(self._arguments)

    def __repr__(self):
        return "argument-parser(%s)" % ", ".join("%s=%r" % item for item in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __getitem__(self, name):
        return self._names[name]

    def __contains__(self, name):
        return name in self._names

    def add(self, argument, /, *args, **kwargs):
        """
        Register an argument and return it.

        Forms
        - add(ValueArgument, "t", "threads", "worker count", 4): build, then register.
        - add(FlagArgument("v", "verbose")): register an already-built argument.

        Raises
        - TypeError: when the first argument is neither an Argument subclass nor instance.
        - InvalidDeclarationError: when the argument itself is malformed (raised by its constructor).
        - DuplicatedNameError: when one of its names is already registered; nothing is registered then.
        """
        if isinstance(argument, type) and issubclass(argument, Argument):
            argument = argument(*args, **kwargs)
        elif not isinstance(argument, Argument):
            raise TypeError("add() argument must be an argument type or instance")
        elif args or kwargs:
            raise TypeError("add() takes no construction arguments with an argument instance")

        for name in argument.names:
            if name in self._names:
                raise DuplicatedNameError(
                    f"argument name {name!r} is already registered by {self._names[name].label!r}",
                    argument=argument,
                )

        self._arguments.append(argument)
        self._names.update(dict.fromkeys(argument.names, argument))
        match argument.visibility:
            case Visibility.VISIBLE:
                self._visible.append(argument)
            case Visibility.HIDDEN:
                self._hidden.append(argument)
        return argument

    def value(self, *args, **kwargs):
        """
        Shortcut for add(ValueArgument, ...).
        """
        return self.add(ValueArgument, *args, **kwargs)

    def implicit(self, *args, **kwargs):
        """
        Shortcut for add(ImplicitArgument, ...).
        """
        return self.add(ImplicitArgument, *args, **kwargs)

    def flag(self, *args, **kwargs):
        """
        Shortcut for add(FlagArgument, ...).
        """
        return self.add(FlagArgument, *args, **kwargs)

    def trigger(self, fault, /, **options):
        """
        Surface a parse fault with this parser's rendering options merged in.
        """
        trigger(fault, **options, prog=self.prog, shell=self.shell, colorful=self.colorful, fancy=self.fancy)

    def parse(self, args=Unset, /):
        """
        Parse an argv-like sequence against the registered arguments.

        behavior
        - args[0] is the program path and is skipped; args defaults to sys.argv.
        - empty tokens are skipped; unknown tokens are ignored.
        - a matched argument receives the following token ("" when there is none).
        - a consumed value token is stepped over.

        faults
        - the first MissingValueError/InvalidValueError stops parsing (fail-fast). State
          set by earlier tokens is kept.
        - naming an argument twice emits RepeatedArgumentWarning; the last occurrence wins.
        """
        tokens = list(coalesce(args, sys.argv))
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a sequence of strings")
        if self._prog is Unset and tokens:
            self._prog = os.path.basename(tokens[0])

        seen = set()
        index = 1
        while index < len(tokens):
            position, token = index, tokens[index]
            index += 1
            if not token:
                continue
            try:
                argument = self._names[token]
            except KeyError:
                continue

            if argument in seen:
                self.trigger(
                    RepeatedArgumentWarning(
                        f"argument {argument.label!r} was given more than once, the last occurrence wins",
                        argument=argument,
                        hint=f"name {argument.label!r} only once",
                    ),
                    position=position,
                )
            seen.add(argument)

            following = tokens[index] if index < len(tokens) else ""
            try:
                consumed = argument.parse(following)
            except ArgumentException as fault:
                self.trigger(fault, position=position)
            else:
                if consumed:
                    index += 1
        return self

    def _layout(self, show_hidden):
        """
        Internal: group rows per section and compute the shared column widths.

        Rows are (short name, long name + " " + default string, description); widths
        span every row printed, so hidden rows share the visible rows' alignment.
        """
        sections = [("Allowed Arguments", self._visible)]
        if show_hidden:
            sections.append(("Hidden Arguments", self._hidden))

        rows = [
            (title, [
                (argument.short_name, argument.long_name + " " + argument.default_string(), argument.description)
                for argument in arguments
            ])
            for title, arguments in sections
        ]
        shorts = max((len(short) for _, items in rows for short, _, _ in items), default=0)
        longs = max((len(long) for _, items in rows for _, long, _ in items), default=0)
        return rows, shorts, longs

    def render_help(self, show_hidden=False):
        """
        Render the column-aligned help listing.

        format
            [[Allowed Arguments]]
              -x, --longname =default  description text

        - short names are right-aligned, long name + default left-aligned, both padded
          to the widest row being printed.
        - with show_hidden, a "[[Hidden Arguments]]" section follows with the same layout.
        - invisible arguments never appear.
        """
        rows, shorts, longs = self._layout(show_hidden)
        lines = []
        for title, items in rows:
            lines.append(f"[[{title}]]\n")
            for short, long, description in items:
                lines.append(f"  {short:>{shorts}}, {long:<{longs}}  {description}\n")
        return "".join(lines)

    def print_help(self, show_hidden=False):
        """
        Print the help listing to stdout through rich.

        The text is identical to render_help(); when colorful, section labels, names,
        defaults and descriptions are styled. Styles can be overridden with a
        __styles__ mapping in __main__ (keys: section-label, short-name, long-name,
        default-value, argument-description).
        """
        styles = defaultdict(str, {
            "section-label": "bold #FFFFFF",
            "short-name": "bold #00E6FF",
            "long-name": "bold #00E6FF",
            "default-value": "bold #FFD600",
            "argument-description": "#9CA3AF",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        rows, shorts, longs = self._layout(show_hidden)
        help = Text()
        for title, items in rows:
            help.append(f"[[{title}]]", styler("section-label")).append("\n")
            for short, long, description in items:
                name, _, default = long.partition(" ")
                help.append("  ")
                help.append(short.rjust(shorts), styler("short-name"))
                help.append(", ")
                help.append(name, styler("long-name"))
                help.append(" ")
                help.append(default, styler("default-value"))
                help.append(" " * (longs - len(long)) + "  ")
                help.append(description, styler("argument-description"))
                help.append("\n")

        Console(highlight=False, soft_wrap=True).print(help, end="")


__all__ = (
    "ArgumentParser",
)
