"""
Seriatim config: the spec registry, its builder API and the iteration factory.

What this module provides
- Config: owns an ordered tuple of specs plus program metadata and exposes
  • .arg(spec) / .args(*specs): register specs, returning an augmented config.
  • .iter(tokens): a lazy Iter over one token sequence.
  • .parse(tokens): every result as a list, raising the first OptionError.
  • .usage() / .exit_error(error): rich-rendered usage and error reporting.

Registration rules (checked eagerly, programmer errors)
- every Flag/Param needs at least one alias;
- no two specs in one config may share a short or long alias;
- at most one Cardinal per config.
Violations raise ValueError from .arg()/.args(); the iterator never sees a
malformed registry.

Quick start
    from seriatim import Config, flag, parsed_param

    config = (
        Config("build-string")
        .arg(parsed_param("BEFORE", lambda s: ("before", s)).short("b").long("before"))
        .arg(parsed_param("AFTER", lambda s: ("after", s)).short("a").long("after"))
        .arg(flag(lambda: ("verbose", None)).short("v").long("verbose"))
    )

    for result in config.iter(["-b1", "-va", "2"]):
        ...
"""
import copy
import sys
from collections import defaultdict

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .arguments import Flag, Param, OptionalParam, Cardinal
from .faults import OptionError
from .iterator import Iter
from .utils import *


def _sanitize_string(name, object, /):
    """
    Internal: validate an optional metadata string (version/author/about).
    """
    if not isinstance(object, str | Unset):
        raise TypeError(f"config {name!r} must be a string")
    elif isinstance(object, str) and not (object := object.strip()):
        raise ValueError(f"config {name!r} cannot be empty")
    return coalesce(object)


class Config:
    """
    Immutable registry of specs for one program.

    Properties
    - prog, version, author, about: program metadata (used by usage()).
    - specs: the registered specs, in registration order.
    - cardinal: the positional spec, or None.
    - aliases: every alias as typed ('-v', '--verbose', ...), in registration order.

    Builder methods never mutate the receiver; they return a new config
    (copy.replace), so an iterator already running over a config is never
    affected by later registrations.
    """

    prog = mirror("prog")
    version = mirror("version")
    author = mirror("author")
    about = mirror("about")
    specs = mirror("specs")
    cardinal = mirror("cardinal")

    def __init__(self, prog, /, *, version=Unset, author=Unset, about=Unset, specs=()):
        if not isinstance(prog, str):
            raise TypeError("config 'prog' must be a string")
        elif not (prog := prog.strip()):
            raise ValueError("config 'prog' cannot be empty")

        self._prog = prog
        self._version = _sanitize_string("version", version)
        self._author = _sanitize_string("author", author)
        self._about = _sanitize_string("about", about)

        self._specs = []
        self._shorts = {}
        self._longs = {}
        self._cardinal = None

        for spec in specs:
            self._register(spec)

    def _register(self, spec):
        if not isinstance(spec, Flag | Param | Cardinal):
            raise TypeError("config specs must be flags, params or cardinals, not %r" % type(spec).__name__)

        if isinstance(spec, Cardinal):
            if self._cardinal is not None:
                raise ValueError("config cannot have more than one cardinal")
            self._cardinal = spec
            self._specs.append(spec)
            return

        if not spec.shorts and not spec.longs:
            raise ValueError(f"config {spec.__typename__} must specify at least one short or long alias")

        for short in spec.shorts:
            if short in self._shorts:
                raise ValueError(f"config short alias '-{short}' is already in use")
        for long in spec.longs:
            if long in self._longs:
                raise ValueError(f"config long alias '--{long}' is already in use")

        self._shorts.update(dict.fromkeys(spec.shorts, spec))
        self._longs.update(dict.fromkeys(spec.longs, spec))
        self._specs.append(spec)

    def __replace__(self, /, **overrides):
        metadata = {
            "prog": self._prog,
            "version": self._version,
            "author": self._author,
            "about": self._about,
            "specs": self._specs,
        } | overrides
        # None means "not set" once stored; feed it back as Unset
        for name in ("version", "author", "about"):
            if metadata[name] is None:
                metadata[name] = Unset
        return type(self)(metadata.pop("prog"), **metadata)

    def __repr__(self):
        return "config(prog=%r, specs=%r)" % (self._prog, tuple(self._specs))

    @property
    def aliases(self):
        aliases = []
        for spec in self._specs:
            aliases.extend(spec.aliases)
        return tuple(aliases)

    def arg(self, spec, /):
        """
        Return a copy of this config with one more spec.
        """
        return copy.replace(self, specs=(*self._specs, spec))

    def args(self, *specs):
        """
        Return a copy of this config with several more specs, in order.
        """
        return copy.replace(self, specs=(*self._specs, *specs))

    def lookup_short(self, char, /):
        """
        Spec registered for the short alias char (e.g. 'v'), or None.
        """
        return self._shorts.get(char)

    def lookup_long(self, name, /):
        """
        Spec registered for the long alias name (e.g. 'verbose'), or None.
        """
        return self._longs.get(name)

    def lookup(self, alias, /):
        """
        Spec for an alias spelled as on the command line ('-v' or '--verbose'), or None.
        """
        if alias.startswith("--"):
            return self.lookup_long(alias[2:])
        if alias.startswith("-") and len(alias) == 2:
            return self.lookup_short(alias[1])
        return None

    def iter(self, tokens, /):
        """
        Lazy iterator over the results for tokens (typically sys.argv[1:]).

        Each element is the value built by a spec, a Passthrough, or an
        OptionError, in input order. The config itself is left untouched.
        """
        return Iter(self, tokens)

    def parse(self, tokens, /):
        """
        Collect every result for tokens into a list.

        Raises the first OptionError found; results after it are not built.
        """
        results = []
        for result in self.iter(tokens):
            if isinstance(result, OptionError):
                raise result
            results.append(result)
        return results

    def usage(self, *, colorful=True):
        """
        Build a rich renderable with the usage line, the about text and one
        row per spec.

        Palette keys
        - usage-label, program-name, usage-section, description-section, epilog-section
        - group-label, option-name, flag-name, metavar, argument-description

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        """
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "description-section": "italic #A3A3A3",  # Neutral gray
            "epilog-section": "#737373",  # Dim footer gray

            "group-label": "bold #FFFFFF",  # Pure white headers
            "argument-description": "#9CA3AF",  # Muted gray

            "option-name": "bold #00E6FF",  # CYAN for params
            "flag-name": "bold #22C55E",  # GREEN for flags
            "metavar": "bold #FFD600",  # AMBER for parameters
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), styler(style))

        renders = []

        options = [spec for spec in self._specs if not isinstance(spec, Cardinal)]

        usage = [text("usage: ", "usage-label"), text(self._prog, "program-name")]
        if self._version:
            usage.append(text(" " + self._version, "usage-section"))
        if options:
            usage.append(text(" [OPTIONS]", "usage-section"))
        if self._cardinal is not None:
            usage.append(text(" [%s]..." % self._cardinal.metavar, "metavar"))
        renders.append(Text.assemble(*usage))

        if self._about:
            renders.append(text(self._about, "description-section"))

        if options:
            renders.append(Text(""))
            renders.append(text("options", "group-label"))
            table = Table.grid(padding=(0, 3))
            table.add_column()
            table.add_column()
            for spec in options:
                names = Text(", ").join(
                    text(alias, "flag-name" if isinstance(spec, Flag) else "option-name")
                    for alias in spec.aliases
                )
                if isinstance(spec, OptionalParam):
                    names = Text.assemble(names, " ", text("[<%s>]" % spec.metavar, "metavar"))
                elif spec.metavar is not None:
                    names = Text.assemble(names, " ", text("<%s>" % spec.metavar, "metavar"))
                table.add_row(Text.assemble("  ", names), text(spec.descr, "argument-description"))
            renders.append(table)

        if self._cardinal is not None:
            renders.append(Text(""))
            renders.append(text("cardinals", "group-label"))
            table = Table.grid(padding=(0, 3))
            table.add_column()
            table.add_column()
            table.add_row(
                Text.assemble("  ", text(self._cardinal.metavar, "metavar")),
                text(self._cardinal.descr, "argument-description"),
            )
            renders.append(table)

        if self._author:
            renders.append(Text(""))
            renders.append(text(self._author, "epilog-section"))

        return Group(*renders)

    def exit_error(self, error, /, *, colorful=True, fancy=False):
        """
        Print error and the usage to stderr, then exit with status 1.
        """
        if not isinstance(error, OptionError):
            raise TypeError("exit_error() argument must be an option error")
        console = Console(stderr=True)
        console.print(copy.replace(error, prog=self._prog, colorful=colorful, fancy=fancy))
        console.print(self.usage(colorful=colorful))
        sys.exit(1)


__all__ = (
    "Config",
)
