r"""
Seriatim argument specifications (the spec registry entries).

Overview
- Specs
  • Flag: named, presence-only switch (no payload), e.g., -v/--verbose.
  • Param: named, value-bearing option taking exactly one string, e.g., -b/--before.
  • OptionalParam: Param whose value is taken only when attached (-rVALUE, --rebase=VALUE).
  • Cardinal: unnamed, value-bearing positional matched by plain tokens.

- Factories
  • flag(build): Flag whose build function takes no argument.
  • parsed_param(metavar, build): Param whose build function receives the raw string.
  • optional_param(metavar, build): OptionalParam whose build function receives the string or None.
  • cardinal(metavar, build): Cardinal whose build function receives the raw token.

- Builders
  • .short(c) / .long(name) add one alias and may be chained or repeated.
  • .describe(text) sets the one-line help shown by Config.usage().
  Every builder returns a new spec (copy.replace); specs never change after
  construction, so a spec can be registered on several configs safely.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes selected
    fields via read-only properties declared in __introspectable__/__displayable__.

Metadata (sanitized on construction)
- Shared (all specs)
  • build: Callable (required), called by __call__.
  • descr: Unset | str (short help), non-empty when provided.
- Named (Flag/Param)
  • shorts: single characters other than '-', unique within the spec.
  • longs: words without a leading '-', '=' or whitespace, unique within the spec.
- Value-bearing (Param/Cardinal)
  • metavar: non-empty str naming the value in messages and usage.

Aliases are optional at this layer: a Flag or Param without aliases is only
rejected when registered on a Config.

Quick example:
    >>> from seriatim.arguments import flag, parsed_param
    >>> before = parsed_param("BEFORE", lambda value: ("before", value)).short("b").long("before")
    >>> verbose = flag(lambda: "verbose").short("v").long("verbose")
    >>> before("1")
    ('before', '1')

Public API
- Classes: Flag, Param, OptionalParam, Cardinal
- Factories: flag, parsed_param, optional_param, cardinal
"""
import copy
import functools
import operator
import re

from rich.text import Text

from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns spec classes into introspectable descriptors.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag(shorts=('v',), longs=('verbose',), descr=None)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate shared spec metadata.

    - build: must be callable. No further contract is enforced; its arity is
      the caller's business (no argument for flags, one string otherwise).
    - descr: optional short description. If omitted (Unset), it becomes None.
      If provided, it must be a non-empty string (or rich Text) after trimming.

    Raises
    - TypeError: if 'build' is not callable or 'descr' is not a string.
    - ValueError: if 'descr' is a string but empty after trimming.
    """
    if not callable(metadata["build"]):
        raise TypeError(f"{cls.__typename__} 'build' must be callable")

    if not isinstance(descr := metadata["descr"], str | Text | Unset | None):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")

    metadata["descr"] = coalesce(descr)


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate and normalize the aliases of named specs (Flag, Param).

    - shorts: each must be a one-character string other than '-'.
    - longs: each must match r"[^\s=-][^\s=]*" (no leading hyphen; the
      iterator adds '--' and splits on the first '=').
    - duplicates inside one spec are rejected; order of first registration
      is kept for usage output.

    Raises
    - TypeError: when an alias is not a string.
    - ValueError: when an alias is malformed or repeated.
    """
    shorts = []
    for short in metadata["shorts"]:
        if not isinstance(short, str):
            raise TypeError(f"{cls.__typename__} short aliases must be strings")
        elif len(short) != 1 or short == "-":
            raise ValueError(f"{cls.__typename__} short alias {short!r} must be a single character other than '-'")
        elif short in shorts:
            raise ValueError(f"{cls.__typename__} short aliases cannot contain duplicates")
        shorts.append(short)

    longs = []
    for long in metadata["longs"]:
        if not isinstance(long, str):
            raise TypeError(f"{cls.__typename__} long aliases must be strings")
        elif not re.fullmatch(r"[^\s=-][^\s=]*", long):
            raise ValueError(f"{cls.__typename__} long alias {long!r} must be a word without leading '-', '=' or spaces")
        elif long in longs:
            raise ValueError(f"{cls.__typename__} long aliases cannot contain duplicates")
        longs.append(long)

    metadata["shorts"] = tuple(shorts)
    metadata["longs"] = tuple(longs)


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate the metavar of value-bearing specs (Param, Cardinal).

    Raises
    - TypeError: if 'metavar' is not a string.
    - ValueError: if 'metavar' is empty after trimming.
    """
    if not isinstance(metavar := metadata["metavar"], str):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = metavar


class _Named:
    """
    Builder methods shared by the named specs.

    Each method returns a new spec of the same type; the receiver is left untouched.
    """

    def short(self, alias, /):
        """
        Return a copy with one more short alias (a single character, e.g. 'v' for -v).
        """
        return copy.replace(self, shorts=(*self._shorts, alias))

    def long(self, alias, /):
        """
        Return a copy with one more long alias (a word, e.g. 'verbose' for --verbose).
        """
        return copy.replace(self, longs=(*self._longs, alias))

    def describe(self, descr, /):
        """
        Return a copy with the one-line help shown by Config.usage().
        """
        return copy.replace(self, descr=descr)

    @property
    def aliases(self):
        """
        Every alias as typed on the command line: shorts first, then longs.
        """
        return tuple(f"-{short}" for short in self._shorts) + tuple(f"--{long}" for long in self._longs)


class Flag(_Named, metaclass=ArgumentType):
    """
    Named, presence-only option specification.

    On match the iterator calls the spec with no argument, which calls
    build() and yields its result. A flag never consumes a following token,
    and '--name=value' for a flag is an UnexpectedArgumentError.
    """

    __introspectable__ = (
        "shorts",
        "longs",
        "descr",
        "build",
    )
    __displayable__ = (
        "shorts",
        "longs",
        "descr",
    )

    metavar = None

    def __new__(cls, build, /, *, shorts=(), longs=(), descr=Unset):
        metadata = {
            "build": build,
            "shorts": shorts,
            "longs": longs,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self):
        return self._build()

    def __replace__(self, /, **overrides):
        metadata = {name: getattr(self, "_" + name) for name in type(self).__introspectable__} | overrides
        return type(self)(metadata.pop("build"), **metadata)


class Param(_Named, metaclass=ArgumentType):
    """
    Named, value-bearing option specification (exactly one string value).

    Value sources, in order of precedence
    - '--name=value': the text after the first '=' (possibly empty).
    - '-nVALUE': the rest of the short cluster after the alias.
    - otherwise the whole next token, consumed even if it looks like an option.

    On match the iterator calls the spec with the raw string, which calls
    build(value). Exceptions raised by build are reported as
    InvalidParameterError at that position.
    """

    __introspectable__ = (
        "metavar",
        "shorts",
        "longs",
        "descr",
        "build",
    )
    __displayable__ = (
        "metavar",
        "shorts",
        "longs",
        "descr",
    )

    def __new__(cls, metavar, build, /, *, shorts=(), longs=(), descr=Unset):
        metadata = {
            "metavar": metavar,
            "build": build,
            "shorts": shorts,
            "longs": longs,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self, value, /):
        return self._build(value)

    def __replace__(self, /, **overrides):
        metadata = {name: getattr(self, "_" + name) for name in type(self).__introspectable__} | overrides
        return type(self)(metadata.pop("metavar"), metadata.pop("build"), **metadata)


class OptionalParam(Param):
    """
    Named option whose value is recognized only when attached.

    Value sources
    - '--name=value': the text after the first '=' (possibly empty).
    - '-nVALUE': the rest of the short cluster after the alias.
    - a bare '-n' or '--name' builds with None; the next token is never
      consumed, so it is parsed on its own (e.g. git's --rebase[=mode]).
    """

    def __call__(self, value=None, /):
        return self._build(value)


class Cardinal(metaclass=ArgumentType):
    """
    Positional, value-bearing specification.

    A config holds at most one cardinal. When present it converts every plain
    token (one not starting with '-', a lone '-', or anything after '--');
    without one, plain tokens before '--' are unrecognized and tokens after
    '--' come back as Passthrough.
    """

    __introspectable__ = (
        "metavar",
        "descr",
        "build",
    )
    __displayable__ = (
        "metavar",
        "descr",
    )

    shorts = ()
    longs = ()
    aliases = ()

    def __new__(cls, metavar, build, /, *, descr=Unset):
        metadata = {
            "metavar": metavar,
            "build": build,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self, value, /):
        return self._build(value)

    def describe(self, descr, /):
        """
        Return a copy with the one-line help shown by Config.usage().
        """
        return copy.replace(self, descr=descr)

    def __replace__(self, /, **overrides):
        metadata = {name: getattr(self, "_" + name) for name in type(self).__introspectable__} | overrides
        return type(self)(metadata.pop("metavar"), metadata.pop("build"), **metadata)


def flag(build, /):
    """
    Define a presence-only option.

    Usage
        verbose = flag(lambda: Opt.VERBOSE).short("v").long("verbose")

    Parameters
    - build: Callable[[], T] producing the result yielded on every occurrence.
    """
    return Flag(build)


def parsed_param(metavar, build, /):
    """
    Define an option that takes exactly one string value.

    Usage
        before = parsed_param("BEFORE", Before).short("b").long("before")

    Parameters
    - metavar: name of the value, shown in usage and in MissingArgumentError.
    - build: Callable[[str], T] converting the raw value; if it raises, the
      occurrence is reported as InvalidParameterError.
    """
    return Param(metavar, build)


def optional_param(metavar, build, /):
    """
    Define an option whose value is optional and must be attached.

    Usage
        rebase = optional_param("MODE", Rebase).short("r").long("rebase")

    Parameters
    - metavar: name of the value, shown as [<METAVAR>] in usage.
    - build: Callable[[str | None], T]; receives None when no value is attached.
    """
    return OptionalParam(metavar, build)


def cardinal(metavar, build, /):
    """
    Define the positional spec that converts plain tokens.

    Parameters
    - metavar: name of the positional, shown in usage.
    - build: Callable[[str], T] converting each plain token.
    """
    return Cardinal(metavar, build)


__all__ = (
    "Flag",
    "Param",
    "OptionalParam",
    "Cardinal",
    "flag",
    "parsed_param",
    "optional_param",
    "cardinal",
)
