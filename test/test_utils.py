"""
Tests for the internal helpers (Unset sentinel, coalesce, mirror, ordinal).
"""
import copy
import unittest
from unittest import TestCase

from cmdargs.utils import *


class UnsetTest(TestCase):
    """
    The Unset sentinel is a falsy, non-subclassable singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testUnionIsBuiltFromTheType(self) -> None:
        self.assertIsInstance(Unset, str | UnsetType)
        with self.assertRaises(TypeError):
            str | Unset  # NOQA: B-018

    def testCannotSubclass(self) -> None:
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass


class CoalesceTest(TestCase):

    def testUnsetResolvesToDefault(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesArePreserved(self) -> None:
        for value in (None, 0, False, ""):
            self.assertIs(coalesce(value, "fallback"), value)


class MirrorTest(TestCase):

    def testMirrorReadsBackingFieldAndHidesUnset(self) -> None:
        class Holder:
            value = mirror("value")

        holder = Holder()
        holder._value = Unset
        self.assertIsNone(holder.value)
        holder._value = 5
        self.assertEqual(holder.value, 5)
        with self.assertRaises(AttributeError):
            holder.value = 6

    def testMirrorRequiresString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(42)


class OrdinalTest(TestCase):

    def testWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")

    def testRejectsNonPositive(self) -> None:
        with self.assertRaises(ValueError):
            ordinal(0)


if __name__ == "__main__":
    unittest.main()
