"""
Tests for the internal helpers.

This module verifies the guarantees the other layers rely on:
- Unset is a falsy, printable, non-subclassable singleton.
- coalesce() only replaces Unset.
- mirror() hands out copies, never live state.
- ordinal() wording for position-first diagnostics.
"""
import copy
import unittest
from unittest import TestCase

from argscan.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testSubclassingForbidden(self) -> None:
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})


class CoalesceTest(TestCase):
    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testFalseyValuesArePreserved(self) -> None:
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertEqual(coalesce(value, "fallback"), value)

    def testDefaultIsNone(self) -> None:
        self.assertIsNone(coalesce(Unset))


class MirrorTest(TestCase):
    def testMirrorReturnsCopies(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [["a"], {"k": ["v"]}]

        holder = Holder()
        items = holder.items
        items[0].append("b")
        items[1]["k"].append("w")
        self.assertEqual(holder.items, [["a"], {"k": ["v"]}])

    def testMirrorIsReadOnly(self) -> None:
        class Holder:
            items = mirror("items")
            _items = []

        with self.assertRaises(AttributeError):
            Holder().items = [1]

    def testMirrorRequiresString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


class RenameTest(TestCase):
    def testFunctionForm(self) -> None:
        def f():
            pass

        rename(f, "g")
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testDecoratorForm(self) -> None:
        @rename("h")
        def f():
            pass

        self.assertEqual(f.__name__, "h")

    def testWrongArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()


class OrdinalTest(TestCase):
    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(112), "112th")


if __name__ == "__main__":
    unittest.main()
