"""
Config module behavioral tests (registration, lookup, immutability, usage).

Scope
- Validate eager registration checks (aliases required, no collisions, one cardinal).
- Validate builder immutability: .arg() never alters a config already in use.
- Validate lookups by short, long, and spelled alias.
- Validate usage rendering and exit_error() reporting through rich.

Conventions
- Test method names follow CamelCase per project convention.
- Rich output is captured with color disabled for deterministic comparison.
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stderr
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from seriatim import Config, flag, parsed_param, optional_param, cardinal, UnrecognizedOptionError


def _render(renderable):
    console = Console(color_system=None, force_terminal=False, width=100)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestRegistration(TestCase):
    """Registration is validated when the spec is added."""

    def testEmptyConfig(self):
        config = Config("tool")
        self.assertEqual(config.prog, "tool")
        self.assertEqual(config.specs, ())
        self.assertIsNone(config.cardinal)
        self.assertIsNone(config.version)

    def testProgRequired(self):
        with self.assertRaises(ValueError):
            Config("  ")
        with self.assertRaises(TypeError):
            Config(3)

    def testMetadataValidated(self):
        with self.assertRaises(TypeError):
            Config("tool", about=3)
        with self.assertRaises(ValueError):
            Config("tool", version="")

    def testSpecWithoutAliasRejected(self):
        with self.assertRaises(ValueError):
            Config("tool").arg(flag(lambda: 1))
        with self.assertRaises(ValueError):
            Config("tool").arg(parsed_param("N", int))

    def testDuplicateShortRejected(self):
        config = Config("tool").arg(flag(lambda: 1).short("v"))
        with self.assertRaises(ValueError):
            config.arg(parsed_param("V", str).short("v"))

    def testDuplicateLongRejected(self):
        config = Config("tool").arg(flag(lambda: 1).long("verbose"))
        with self.assertRaises(ValueError):
            config.arg(flag(lambda: 2).short("x").long("verbose"))

    def testSecondCardinalRejected(self):
        config = Config("tool").arg(cardinal("FILE", str))
        with self.assertRaises(ValueError):
            config.arg(cardinal("OTHER", str))

    def testNonSpecRejected(self):
        with self.assertRaises(TypeError):
            Config("tool").arg("-v")

    def testArgsRegistersInOrder(self):
        v = flag(lambda: "v").short("v")
        q = flag(lambda: "q").short("q")
        config = Config("tool").args(v, q)
        self.assertEqual(config.specs, (v, q))
        self.assertEqual(config.aliases, ("-v", "-q"))


class TestImmutability(TestCase):
    """Builder methods return new configs."""

    def testArgReturnsNewConfig(self):
        base = Config("tool", about="demo")
        derived = base.arg(flag(lambda: 1).short("v"))
        self.assertIsNot(base, derived)
        self.assertEqual(base.specs, ())
        self.assertEqual(len(derived.specs), 1)
        self.assertEqual(derived.about, "demo")
        self.assertEqual(derived.prog, "tool")

    def testRunningIteratorUnaffectedByLaterRegistration(self):
        config = Config("tool").arg(flag(lambda: "v").short("v"))
        iterator = config.iter(["-v", "-q"])
        self.assertEqual(next(iterator), "v")
        config.arg(flag(lambda: "q").short("q"))
        self.assertIsInstance(next(iterator), UnrecognizedOptionError)

    def testSpecsViewIsReadOnly(self):
        config = Config("tool").arg(flag(lambda: 1).short("v"))
        self.assertIsInstance(config.specs, tuple)


class TestLookup(TestCase):
    """Lookups by alias."""

    def setUp(self):
        self.verbose = flag(lambda: "v").short("v").long("verbose")
        self.count = parsed_param("N", int).short("n").long("count")
        self.config = Config("tool").args(self.verbose, self.count)

    def testLookupShort(self):
        self.assertIs(self.config.lookup_short("v"), self.verbose)
        self.assertIsNone(self.config.lookup_short("x"))

    def testLookupLong(self):
        self.assertIs(self.config.lookup_long("count"), self.count)
        self.assertIsNone(self.config.lookup_long("nothing"))

    def testLookupSpelled(self):
        self.assertIs(self.config.lookup("-n"), self.count)
        self.assertIs(self.config.lookup("--verbose"), self.verbose)
        self.assertIsNone(self.config.lookup("verbose"))
        self.assertIsNone(self.config.lookup("-vn"))


class TestUsage(TestCase):
    """Usage text is rendered from the registry."""

    def setUp(self):
        self.config = (
            Config("build-string", version="1.2", about="order-sensitive accumulator", author="the authors")
            .arg(parsed_param("BEFORE", str).short("b").long("before").describe("prepend to the accumulator"))
            .arg(flag(lambda: True).short("v").long("verbose"))
            .arg(cardinal("WORD", str).describe("appended word"))
        )

    def testUsageContents(self):
        output = _render(self.config.usage(colorful=False))
        self.assertIn("usage: build-string 1.2 [OPTIONS] [WORD]...", output)
        self.assertIn("order-sensitive accumulator", output)
        self.assertIn("-b, --before <BEFORE>", output)
        self.assertIn("prepend to the accumulator", output)
        self.assertIn("-v, --verbose", output)
        self.assertIn("appended word", output)
        self.assertIn("the authors", output)

    def testUsageMarksOptionalValue(self):
        config = self.config.arg(optional_param("MODE", str).short("r").long("rebase"))
        output = _render(config.usage(colorful=False))
        self.assertIn("-r, --rebase [<MODE>]", output)
        self.assertIn("-b, --before <BEFORE>", output)

    def testUsageOfEmptyConfig(self):
        output = _render(Config("tool").usage(colorful=False))
        self.assertEqual(output.strip(), "usage: tool")

    def testExitError(self):
        error, = self.config.iter(["-x"])
        stream = io.StringIO()
        with patch("seriatim.config.Console", lambda stderr: Console(file=stream, color_system=None, width=100)):
            with self.assertRaises(SystemExit) as context:
                self.config.exit_error(error, colorful=False)
        self.assertEqual(context.exception.code, 1)
        output = stream.getvalue()
        self.assertIn("build-string", output)
        self.assertIn("option '-x': unrecognized", output)
        self.assertIn("usage: build-string", output)

    def testExitErrorRejectsOtherObjects(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(TypeError):
                self.config.exit_error(ValueError("boom"))


if __name__ == "__main__":
    unittest.main()
