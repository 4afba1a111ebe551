"""
Seriatim faults (per-occurrence option errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  the iterator can report. Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- OptionError: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- getdoc(): optional description lookup for a code from the host application.

Delivery
- The iterator never raises these for malformed input. Each fault is yielded
  as an ordinary element of the result sequence, at the position where it
  occurred, interleaved with successful results.
- Config.parse() raises the first one; Config.exit_error() renders one with
  rich and exits.

UX goals
- Option-first messages: every message starts with the offending option
  spelled as the user typed it ("option '-x': unrecognized").
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes reported by the iterator (stable identifiers).

    grouping (by high-level domain)
    - switches (options/flags) (1111x)
      • UNRECOGNIZED_OPTION, UNEXPECTED_ARGUMENT, MISSING_ARGUMENT
    - cardinals (positionals) (11121)
      • UNEXPECTED_CARDINAL
    - delegated errors (11131)
      • INVALID_PARAMETER (raised by a caller's build function)

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- switch/flag/option errors (11xxx) ---
    UNRECOGNIZED_OPTION         = 11112
    UNEXPECTED_ARGUMENT         = 11113
    MISSING_ARGUMENT            = 11117

    # --- positional/cardinal errors (11xxx) ---
    UNEXPECTED_CARDINAL         = 11121

    # --- delegated errors (11xxx) ---
    INVALID_PARAMETER           = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionError(Exception):
    """
    one malformed occurrence in the token sequence.

    attributes
    - message: the one-line, option-first description (also str(error)).
    - options: read-only mapping of context; the iterator always provides
      'code', 'title', 'hint', 'input' and 'index' (0-based token position),
      subclasses add their own keys (see below).

    rendering options (merged later through copy.replace)
    - prog: program name shown in the header (falls back to __prog__ in __main__).
    - colorful: apply the palette (default True).
    - fancy: wrap the body in a rich Panel (default False).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r})"

    @property
    def code(self):
        return self.options.get("code")

    @property
    def input(self):
        return self.options.get("input")

    @property
    def index(self):
        return self.options.get("index")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(self.options.get("prog", getattr(main, "__prog__", "")), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not None else "", styler("code")),
            " | ",
            text(self.options.get("title", "").title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", ""), styler("hint")))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedOptionError(OptionError):
    """no spec matches the short character, the long name, or the plain token."""


class MissingArgumentError(OptionError):
    """a parameter option had no inline value and no following token ('metavar' option)."""

    @property
    def metavar(self):
        return self.options.get("metavar")


class UnexpectedArgumentError(OptionError):
    """a flag received an inline '=value' ('value' option)."""

    @property
    def value(self):
        return self.options.get("value")


class InvalidParameterError(OptionError):
    """a build function raised while converting a value ('exception' option)."""

    @property
    def exception(self):
        return self.options.get("exception")


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be an fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "OptionError",
    "UnrecognizedOptionError",
    "MissingArgumentError",
    "UnexpectedArgumentError",
    "InvalidParameterError",
    "FaultCode",
    "getdoc",
)
