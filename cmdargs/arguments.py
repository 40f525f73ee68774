r"""
Cmdargs argument specifications.

Overview
- Argument[_T]: abstract base for one declared command-line option.
  • ValueArgument[_T]: requires an explicit value whenever named; an optional default
    is only a pre-parse fallback. A lenient one keeps its default when named bare.
  • ImplicitArgument[_T]: three observable states: never named (default), named bare
    (implicit value) and named with a value (parsed value).
  • FlagArgument: presence-only boolean switch.
- Visibility: controls inclusion in the help listing, independent of parsing.

Parsing contract
- Argument.parse(token) is called by the parser when the argument's name matched; token
  is the one immediately following the name ("" when the name was the last token).
- A token is "absent" when it is empty or starts with a dash; this is how a value is
  told apart from the next option.
- parse() returns True when the token was consumed as the argument's value, so the
  parser can skip over it.
- A fault raised by parse() is also recorded on the argument (fault, failed,
  missing_value, invalid_value) and stays there for the rest of its life.

Names
- Names are given bare: the short name gains "-" and the long name gains "--".
- At least one of them must be non-empty; names must look like r"[^\W_][\w-]*".

Quick example:
    >>> from cmdargs import ValueArgument, ImplicitArgument, FlagArgument
    >>> threads = ValueArgument("t", "threads", "worker count", 4)
    >>> level = ImplicitArgument("", "log", "log level", 1, 0)
    >>> verbose = FlagArgument("v", "verbose", "chatty output")
    >>> threads.parse("8")
    True
    >>> threads.value
    8
"""
import builtins
import enum
from abc import ABCMeta, abstractmethod
import functools
import operator
import re

from .conversions import ConversionError, string_to_type, type_to_string, typename
from .faults import InvalidDeclarationError, InvalidValueError, MissingValueError
from .utils import *


class Visibility(enum.Enum):
    """
    help-listing visibility of an argument.

    - VISIBLE: listed under "[[Allowed Arguments]]".
    - HIDDEN: listed under "[[Hidden Arguments]]" only when hidden arguments are requested.
    - INVISIBLE: never listed.
    """
    VISIBLE = "visible"
    HIDDEN = "hidden"
    INVISIBLE = "invisible"


class ArgumentType(ABCMeta):
    """
    Metaclass that turns argument classes into introspectable specs.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property mirroring
      the private "_{name}" backing field (see utils.mirror).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name ("ValueArgument" → "value-argument") for
      use in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
                if name not in namespace
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - value-argument(short_name='-t', long_name='--threads', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers (e.g., rich).
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, dashes, /):
    """
    Internal: validate a bare name and return it with its dash prefix ("" stays "").
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} names must be strings")
    if not name:
        return name
    if name.startswith("-"):
        raise InvalidDeclarationError(f"{cls.__typename__} name {name!r} must be given without dashes")
    if not re.fullmatch(r"[^\W_][\w-]*", name):
        raise InvalidDeclarationError(f"{cls.__typename__} name {name!r} is not a valid option name")
    return dashes + name


def _resolve_type(cls, type, *samples):
    """
    Internal: pick the value type of an argument.

    An explicit type wins; otherwise the type of the first provided sample
    (default or implicit value); otherwise str.
    """
    if type is Unset:
        for sample in samples:
            if sample is not Unset and sample is not None:
                return builtins.type(sample)
        return str
    if not callable(type):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")
    return type


def _absent(token):
    return not token or token.startswith("-")


class Argument[_T](metaclass=ArgumentType):
    """
    Abstract base of every declared command-line option.

    State
    - value: the parsed or default value (None until defined).
    - is_set: the name appeared in the input and a value was taken from it.
    - is_defined: the argument holds a meaningful value (default or parsed).
    - fault: the last parse fault raised by this argument (None while it never failed).

    Subclasses implement parse() and default_string().
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "description",
        "visibility",
        "value",
        "is_set",
        "is_defined",
        "fault",
    )

    def __init__(self, short_name="", long_name="", description="", *, visibility=Visibility.VISIBLE):
        cls = type(self)
        self._short_name = _sanitize_name(cls, short_name, "-")
        self._long_name = _sanitize_name(cls, long_name, "--")
        if not self._short_name and not self._long_name:
            raise InvalidDeclarationError(f"{cls.__typename__} must specify at least one name")

        if not isinstance(description, str):
            raise TypeError(f"{cls.__typename__} 'description' must be a string")
        self._description = description

        if not isinstance(visibility, Visibility):
            raise TypeError(f"{cls.__typename__} 'visibility' must be a Visibility member")
        self._visibility = visibility

        self._value = Unset
        self._is_set = False
        self._is_defined = False
        self._fault = None

    @property
    def names(self):
        """
        The non-empty dashed names of this argument, short name first.
        """
        return tuple(name for name in (self._short_name, self._long_name) if name)

    @property
    def label(self):
        """
        Display label used in messages: "-v/--verbose", "-v" or "--verbose".
        """
        return "/".join(self.names)

    @property
    def failed(self):
        return self._fault is not None

    @property
    def missing_value(self):
        """
        Whether this argument was named without the value it requires.
        """
        return isinstance(self._fault, MissingValueError)

    @property
    def invalid_value(self):
        """
        Whether the value given to this argument could not be converted.
        """
        return isinstance(self._fault, InvalidValueError)

    def _fail(self, fault, /):
        """
        Internal: record a parse fault on this argument and return it for raising.
        """
        self._fault = fault
        return fault

    @abstractmethod
    def parse(self, token, /):
        """
        Consume the token following this argument's name.

        Returns True when the token was used as this argument's value.
        """

    @abstractmethod
    def default_string(self):
        """
        Default-value rendition shown next to the long name in help output.
        """


class _Typed[_T](Argument[_T]):
    """
    Internal: shared conversion for value-bearing arguments.
    """

    def _convert(self, token):
        try:
            return string_to_type(token, self._type)
        except ConversionError as error:
            raise self._fail(InvalidValueError(
                f"argument {self.label!r} expects a value of type {typename(self._type)}, got {token!r}",
                argument=self,
                hint=f"pass a valid {typename(self._type)} right after {self.names[-1]!r}",
            )) from error


class ValueArgument[_T](_Typed[_T]):
    """
    Named option that requires an explicit value whenever it is named.

    When never named, it keeps its default (if any) and stays unset; without a
    default it also stays undefined. A lenient value argument tolerates being named
    bare: it keeps its default instead of failing with MissingValueError.

    Parameters
    - short_name, long_name: bare names (dashes are added automatically).
    - description: free text shown in help.
    - default: optional pre-parse value (required when lenient).
    - type: converter; inferred from default, else str.
    - lenient: keep the default when named without a value.
    - visibility: Visibility member.
    """

    __introspectable__ = Argument.__introspectable__ + (
        "type",
        "default",
        "has_default",
        "lenient",
    )

    def __init__(
            self,
            short_name="",
            long_name="",
            description="",
            default=Unset,
            *,
            type=Unset,
            lenient=False,
            visibility=Visibility.VISIBLE
    ):
        super().__init__(short_name, long_name, description, visibility=visibility)
        if lenient and default is Unset:
            raise InvalidDeclarationError(f"lenient {builtins.type(self).__typename__} {self.label!r} must specify a default")
        self._type = _resolve_type(builtins.type(self), type, default)
        self._default = default
        self._lenient = bool(lenient)
        if default is not Unset:
            self._value = default
            self._is_defined = True

    @property
    def has_default(self):
        return self._default is not Unset

    def parse(self, token, /):
        if _absent(token):
            if self._lenient:
                return False
            raise self._fail(MissingValueError(
                f"argument {self.label!r} requires a value",
                argument=self,
                hint=f"pass a {typename(self._type)} right after {self.names[-1]!r}",
            ))
        self._value = self._convert(token)
        self._is_set = True
        self._is_defined = True
        return True

    def default_string(self):
        if not self.has_default:
            return ""
        return "=" + type_to_string(self._value)


class ImplicitArgument[_T](_Typed[_T]):
    """
    Named option with three observable states.

    - never named: value is the default (defined only if a default was given).
    - named bare: value becomes the implicit value; is_set stays False.
    - named with a value: value is the converted token; is_set becomes True.
    """

    __introspectable__ = Argument.__introspectable__ + (
        "type",
        "implicit",
        "default",
        "has_default",
    )

    def __init__(
            self,
            short_name="",
            long_name="",
            description="",
            implicit=Unset,
            default=Unset,
            *,
            type=Unset,
            visibility=Visibility.VISIBLE
    ):
        super().__init__(short_name, long_name, description, visibility=visibility)
        if implicit is Unset:
            raise InvalidDeclarationError(f"{builtins.type(self).__typename__} {self.label!r} must specify an implicit value")
        self._type = _resolve_type(builtins.type(self), type, implicit, default)
        self._implicit = implicit
        self._default = default
        if default is not Unset:
            self._value = default
            self._is_defined = True

    @property
    def has_default(self):
        return self._default is not Unset

    def parse(self, token, /):
        if _absent(token):
            self._value = self._implicit
            self._is_defined = True
            return False
        self._value = self._convert(token)
        self._is_set = True
        self._is_defined = True
        return True

    def default_string(self):
        return "=arg(=" + type_to_string(self._implicit) + ")"


class FlagArgument(Argument[bool]):
    """
    Presence-only boolean switch: False until named, True afterwards.
    """

    def __init__(self, short_name="", long_name="", description="", *, visibility=Visibility.VISIBLE):
        super().__init__(short_name, long_name, description, visibility=visibility)
        self._value = False
        self._is_defined = True

    @property
    def type(self):
        return bool

    def parse(self, token, /):
        self._value = True
        self._is_set = True
        return False

    def default_string(self):
        return ""


__all__ = (
    "Visibility",
    "Argument",
    "ValueArgument",
    "ImplicitArgument",
    "FlagArgument",
)
