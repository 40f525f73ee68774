"""
Cmdargs type conversion layer.

Scope
- string_to_type(token, type): convert a raw command-line token to a typed value.
- type_to_string(value): stringify a typed value for help output (default display).

Conversion rules
- bool: the token is lower-cased; "true"/"1" → True, "false"/"0" → False; anything else fails.
- str: identity; the token is returned untouched (no trimming, no quote stripping).
- int, float: the whole token must be a plain ASCII numeral (sign, digits, and for float an
  optional fraction and exponent); whitespace, digit-group underscores, non-ASCII digits and
  the nan/inf spellings are rejected.
- any other type: the type itself is called as a converter (Decimal, Path, ...);
  a ValueError/TypeError/ArithmeticError from the converter means the token is not a valid
  rendition of that type.

Every failure surfaces as ConversionError. Arguments never let it escape raw: they chain it
under InvalidValueError (see cmdargs.faults).

Quick example:
    >>> string_to_type("2.5", float)
    2.5
    >>> string_to_type("TRUE", bool)
    True
    >>> type_to_string(False)
    'false'
"""
import functools
import re


class ConversionError(ValueError):
    """
    A token could not be converted to the requested type.

    Attributes
    - token: the raw text that failed to convert.
    - type: the requested target type (or converter callable).
    """

    def __init__(self, token, type, /):
        self.token = token
        self.type = type
        super().__init__(f"couldn't convert string {token!r} to type {typename(type)}")


def typename(type, /):
    """
    Return a short, readable name for a target type or converter callable.
    """
    return getattr(type, "__name__", None) or repr(type)


def _to_bool(token):
    match token.lower():
        case "true" | "1":
            return True
        case "false" | "0":
            return False
    raise ConversionError(token, bool)


def _to_str(token):
    return token


def _to_int(token):
    if not re.fullmatch(r"[+-]?[0-9]+", token):
        raise ValueError(f"not a plain integer numeral: {token!r}")
    return int(token)


def _to_float(token):
    if not re.fullmatch(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", token):
        raise ValueError(f"not a plain decimal numeral: {token!r}")
    return float(token)


# Target-type overrides; every other type is called as a converter.
_converters = {
    bool: _to_bool,
    str: _to_str,
    int: _to_int,
    float: _to_float,
}


def string_to_type(token, type, /):
    """
    Convert a raw token into a value of the given type.

    Parameters
    - token: str
      The raw command-line text.
    - type: Callable[[str], T]
      The target type or converter callable.

    Returns
    - T: the converted value.

    Raises
    - TypeError: if token is not a string or type is not callable.
    - ConversionError: if the token is not a valid rendition of type.
    """
    if not isinstance(token, str):
        raise TypeError("string_to_type() first argument must be a string")
    if not callable(type):
        raise TypeError("string_to_type() second argument must be callable")

    converter = _converters.get(type, type)
    try:
        return converter(token)
    except ConversionError:
        raise
    except (ValueError, TypeError, ArithmeticError) as error:
        raise ConversionError(token, type) from error


@functools.singledispatch
def type_to_string(value, /):
    """
    Stringify a value for display in help output.

    Generic objects use str(); bool renders as "true"/"false" and str is returned as-is.
    """
    return str(value)


@type_to_string.register
def _(value: bool, /):
    return "true" if value else "false"


@type_to_string.register
def _(value: str, /):
    return value


__all__ = (
    "ConversionError",
    "string_to_type",
    "type_to_string",
    "typename",
)
