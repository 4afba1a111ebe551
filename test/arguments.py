"""
Arguments module behavioral tests (spec construction, builders, validation).

Scope
- Validate public specs (Flag, Param, OptionalParam, Cardinal): construction and normalization.
- Validate the value-returning builders (.short/.long/.describe) leave the receiver untouched.
- Validate alias and metadata constraints (single-char shorts, hyphen-free longs, duplicates).
- Validate calling a spec forwards to its build function.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from seriatim import Flag, Param, OptionalParam, Cardinal, flag, parsed_param, optional_param, cardinal


class TestFlag(TestCase):
    """Behavioral tests for Flag (presence-only) specifications."""

    def testFlagStartsWithoutAliases(self):
        f = flag(lambda: "v")
        self.assertEqual(f.shorts, ())
        self.assertEqual(f.longs, ())
        self.assertIsNone(f.descr)
        self.assertIsNone(f.metavar)

    def testFlagBuilderChain(self):
        f = flag(lambda: "v").short("v").long("verbose").long("loud")
        self.assertIsInstance(f, Flag)
        self.assertEqual(f.shorts, ("v",))
        self.assertEqual(f.longs, ("verbose", "loud"))
        self.assertEqual(f.aliases, ("-v", "--verbose", "--loud"))

    def testFlagBuildersReturnNewSpecs(self):
        base = flag(lambda: "v")
        derived = base.short("v")
        self.assertIsNot(base, derived)
        self.assertEqual(base.shorts, ())

    def testFlagCallInvokesBuild(self):
        self.assertEqual(flag(lambda: 42).short("x")(), 42)

    def testFlagBuildMustBeCallable(self):
        with self.assertRaises(TypeError):
            flag("not callable")

    def testFlagShortMustBeSingleCharacter(self):
        with self.assertRaises(ValueError):
            flag(lambda: 1).short("vv")
        with self.assertRaises(ValueError):
            flag(lambda: 1).short("")

    def testFlagShortCannotBeHyphen(self):
        with self.assertRaises(ValueError):
            flag(lambda: 1).short("-")

    def testFlagShortMustBeString(self):
        with self.assertRaises(TypeError):
            flag(lambda: 1).short(1)

    def testFlagLongRejectsLeadingHyphen(self):
        with self.assertRaises(ValueError):
            flag(lambda: 1).long("--verbose")

    def testFlagLongRejectsEqualsAndSpaces(self):
        with self.assertRaises(ValueError):
            flag(lambda: 1).long("a=b")
        with self.assertRaises(ValueError):
            flag(lambda: 1).long("a b")

    def testFlagLongAllowsI18N(self):
        self.assertIn("名-前", flag(lambda: 1).long("名-前").longs)

    def testFlagDuplicateAliasesRejected(self):
        with self.assertRaises(ValueError):
            flag(lambda: 1).short("v").short("v")
        with self.assertRaises(ValueError):
            flag(lambda: 1).long("verbose").long("verbose")

    def testFlagDescribe(self):
        f = flag(lambda: 1).short("v").describe("  be chatty ")
        self.assertEqual(f.descr, "be chatty")

    def testFlagDescribeEmptyRejected(self):
        with self.assertRaises(ValueError):
            flag(lambda: 1).describe("   ")

    def testFlagRepr(self):
        self.assertEqual(
            repr(flag(lambda: 1).short("v").long("verbose")),
            "flag(shorts=('v',), longs=('verbose',), descr=None)",
        )


class TestParam(TestCase):
    """Behavioral tests for Param (single-value) specifications."""

    def testParamMetadata(self):
        p = parsed_param("BEFORE", str).short("b").long("before")
        self.assertIsInstance(p, Param)
        self.assertEqual(p.metavar, "BEFORE")
        self.assertEqual(p.aliases, ("-b", "--before"))

    def testParamBuildersKeepMetavarAndBuild(self):
        p = parsed_param("N", int).short("n").describe("count")
        self.assertEqual(p.metavar, "N")
        self.assertIs(p.build, int)
        self.assertEqual(p.descr, "count")

    def testParamCallInvokesBuild(self):
        self.assertEqual(parsed_param("N", int).short("n")("7"), 7)

    def testParamMetavarRequired(self):
        with self.assertRaises(ValueError):
            parsed_param("  ", str)
        with self.assertRaises(TypeError):
            parsed_param(3, str)

    def testParamBuildMustBeCallable(self):
        with self.assertRaises(TypeError):
            parsed_param("N", 3)


class TestOptionalParam(TestCase):
    """Behavioral tests for OptionalParam (attached-value) specifications."""

    def testOptionalParamIsParam(self):
        p = optional_param("MODE", str).short("r").long("rebase")
        self.assertIsInstance(p, OptionalParam)
        self.assertIsInstance(p, Param)
        self.assertEqual(p.metavar, "MODE")
        self.assertEqual(p.aliases, ("-r", "--rebase"))

    def testOptionalParamCallDefaultsToNone(self):
        p = optional_param("MODE", lambda value: ("mode", value)).short("r")
        self.assertEqual(p(), ("mode", None))
        self.assertEqual(p("merges"), ("mode", "merges"))

    def testOptionalParamBuildersKeepKind(self):
        p = optional_param("MODE", str).short("r").describe("rebase mode")
        self.assertIsInstance(p, OptionalParam)
        self.assertEqual(p.descr, "rebase mode")

    def testOptionalParamRepr(self):
        self.assertEqual(
            repr(optional_param("MODE", str).long("rebase")),
            "optional-param(metavar='MODE', shorts=(), longs=('rebase',), descr=None)",
        )


class TestCardinal(TestCase):
    """Behavioral tests for Cardinal (positional) specifications."""

    def testCardinalHasNoAliases(self):
        c = cardinal("FILE", str)
        self.assertIsInstance(c, Cardinal)
        self.assertEqual(c.aliases, ())
        self.assertFalse(hasattr(c, "short"))

    def testCardinalCallInvokesBuild(self):
        self.assertEqual(cardinal("FILE", str.upper)("a.txt"), "A.TXT")

    def testCardinalDescribe(self):
        c = cardinal("FILE", str).describe("input file")
        self.assertEqual(c.descr, "input file")
        self.assertEqual(c.metavar, "FILE")


class TestBuilderDocs(TestCase):
    """Every public builder carries a help line (shown by help() and IDEs)."""

    def testBuildersAreDocumented(self):
        for builder in (Flag.short, Flag.long, Flag.describe, Param.describe, OptionalParam.describe, Cardinal.describe):
            with self.subTest(builder=builder.__qualname__):
                self.assertTrue(builder.__doc__ and builder.__doc__.strip())


if __name__ == "__main__":
    unittest.main()
