"""
Faults behavioral tests (codes, rendering, trigger dispatch).

Scope
- Validate fault code normalization and host remapping through __main__.
- Validate plain, colorful and fancy rendering of errors and warnings.
- Validate trigger(): option merging, fatal exit, type guard.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase, mock

from rich.console import Console
from rich.panel import Panel

from argscan import faults
from argscan.faults import (
    FaultCode,
    InvalidNumberError,
    MissingFlagNamesError,
    UnknownFlagsWarning,
    UsageError,
    FormatError,
    ArgumentFault,
    trigger,
)


def render(renderable):
    console = Console(width=120, color_system=None)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestFaultCode(TestCase):
    """FaultCode normalization."""

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.INVALID_NUMBER.normalize(), "22101")

    def testNormalizeHonorsHostCodes(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.INVALID_NUMBER: "E-NUM"}, create=True):
            self.assertEqual(FaultCode.INVALID_NUMBER.normalize(), "E-NUM")

    def testCategoriesAreGrouped(self):
        self.assertTrue(all(21000 < code < 22000 for code in (
            FaultCode.MISSING_FLAG_NAMES,
            FaultCode.MALFORMED_LONG_FLAG,
            FaultCode.FLAG_ONLY_DEFAULT,
            FaultCode.INVALID_INDEX,
        )))


class TestHierarchy(TestCase):
    """Fault classes fall into the usage and format categories."""

    def testUsageAndFormatAreDistinct(self):
        self.assertTrue(issubclass(MissingFlagNamesError, UsageError))
        self.assertTrue(issubclass(InvalidNumberError, FormatError))
        self.assertFalse(issubclass(InvalidNumberError, UsageError))
        self.assertTrue(issubclass(UsageError, ArgumentFault))

    def testWarningIsAWarning(self):
        self.assertTrue(issubclass(UnknownFlagsWarning, Warning))

    def testMessageIsTheExceptionText(self):
        self.assertEqual(str(InvalidNumberError("bad")), "bad")


class TestRendering(TestCase):
    """rich rendering of faults."""

    def testPlainHeaderMessageAndHint(self):
        fault = InvalidNumberError(
            "invalid integer 'x' after flag '-i'",
            program="prog", title="invalid number", code=FaultCode.INVALID_NUMBER, hint="use digits",
        )
        output = render(fault)
        self.assertIn("[ prog — 22101 | Invalid Number ]", output)
        self.assertIn("invalid integer 'x' after flag '-i'", output)
        self.assertIn("→ use digits", output)

    def testHintIsOptional(self):
        output = render(UnknownFlagsWarning("left over", program="prog", code=FaultCode.UNKNOWN_FLAGS))
        self.assertNotIn("→", output)

    def testHostProgramOverride(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__prog__", "tool", create=True):
            output = render(InvalidNumberError("bad", program="prog", code=FaultCode.INVALID_NUMBER))
        self.assertIn("[ tool — ", output)

    def testFancyUsesPanel(self):
        fault = InvalidNumberError("bad", program="prog", code=FaultCode.INVALID_NUMBER, fancy=True)
        self.assertIsInstance(fault.__rich__(), Panel)

    def testColorfulRendersSameText(self):
        plain = InvalidNumberError("bad", program="prog", code=FaultCode.INVALID_NUMBER, hint="h")
        colorful = copy.replace(plain, colorful=True)
        self.assertEqual(render(plain), render(colorful))

    def testReplaceMergesOptions(self):
        fault = InvalidNumberError("bad", code=FaultCode.INVALID_NUMBER)
        replaced = copy.replace(fault, fatal=True)
        self.assertIsInstance(replaced, InvalidNumberError)
        self.assertEqual(replaced.message, "bad")
        self.assertTrue(replaced.options["fatal"])
        self.assertNotIn("fatal", fault.options)


class TestTrigger(TestCase):
    """trigger() dispatch."""

    def testNonFatalPrintsAndReturns(self):
        with faults.console.capture() as capture:
            trigger(InvalidNumberError("bad", code=FaultCode.INVALID_NUMBER), program="prog")
        self.assertIn("bad", capture.get())

    def testFatalExits(self):
        with faults.console.capture(), self.assertRaises(SystemExit) as context:
            trigger(MissingFlagNamesError("none", code=FaultCode.MISSING_FLAG_NAMES), fatal=True)
        self.assertEqual(context.exception.code, 1)

    def testWarningIgnoresFatal(self):
        with faults.console.capture() as capture:
            trigger(UnknownFlagsWarning("left", code=FaultCode.UNKNOWN_FLAGS), fatal=True)
        self.assertIn("left", capture.get())

    def testNonTriggerableRejected(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


if __name__ == "__main__":
    unittest.main()
