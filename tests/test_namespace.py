from __future__ import annotations

import unittest

from risp.errors import InvalidArguments, UnableToEvalFunction
from risp.namespace import GlobalNamespace, PrimitiveFunction
from risp.values import ListValue, NumValue, StrValue


class GlobalNamespaceTests(unittest.TestCase):
    def test_empty_has_no_entries(self) -> None:
        namespace = GlobalNamespace.empty()
        self.assertEqual(len(namespace), 0)
        self.assertNotIn(b"+", namespace)

    def test_default_registers_builtin_primitives(self) -> None:
        namespace = GlobalNamespace.default()
        self.assertEqual(set(namespace), {b"+", b"*"})
        self.assertIn(b"+", namespace)
        self.assertIn("+", namespace)
        self.assertNotIn(1, namespace)

    def test_defaults_are_independent_instances(self) -> None:
        first = GlobalNamespace.default()
        second = GlobalNamespace.default()
        first.defn(b"extra", lambda _arguments: NumValue(0))
        self.assertIn(b"extra", first)
        self.assertNotIn(b"extra", second)

    def test_defn_overwrites_last_write_wins(self) -> None:
        namespace = GlobalNamespace.empty()
        namespace.defn(b"f", lambda _arguments: NumValue(1))
        namespace.defn("f", lambda _arguments: NumValue(2))
        self.assertEqual(len(namespace), 1)
        self.assertEqual(namespace.invoke(b"f", []), NumValue(2))

    def test_defn_can_replace_builtin(self) -> None:
        namespace = GlobalNamespace.default()
        namespace.defn(b"+", lambda _arguments: NumValue(99))
        self.assertEqual(namespace.invoke(b"+", [NumValue(1)]), NumValue(99))

    def test_defn_rejects_non_callable(self) -> None:
        with self.assertRaises(TypeError):
            GlobalNamespace.empty().defn(b"f", 3)

    def test_invoke_miss_raises(self) -> None:
        with self.assertRaises(UnableToEvalFunction) as cm:
            GlobalNamespace.default().invoke(b"nope", [])
        self.assertEqual(cm.exception.name, "nope")

    def test_invoke_passes_arguments_in_order(self) -> None:
        namespace = GlobalNamespace.empty()
        seen = []

        def capture(arguments):
            seen.extend(arguments)
            return NumValue(len(arguments))

        namespace.defn(b"capture", capture)
        args = [NumValue(3), StrValue(b"x"), NumValue(1)]
        self.assertEqual(namespace.invoke(b"capture", args), NumValue(3))
        self.assertEqual(seen, args)

    def test_mapping_lookup(self) -> None:
        namespace = GlobalNamespace.default()
        self.assertIsInstance(namespace[b"+"], PrimitiveFunction)
        with self.assertRaises(KeyError):
            namespace[b"missing"]

    def test_namespace_has_no_removal(self) -> None:
        namespace = GlobalNamespace.default()
        with self.assertRaises(TypeError):
            del namespace[b"+"]


class BuiltinPrimitiveTests(unittest.TestCase):
    def setUp(self) -> None:
        self.namespace = GlobalNamespace.default()

    def test_sum_identity_and_values(self) -> None:
        self.assertEqual(self.namespace.invoke(b"+", []), NumValue(0))
        self.assertEqual(self.namespace.invoke(b"+", [NumValue(2), NumValue(-5)]), NumValue(-3))

    def test_product_identity_and_values(self) -> None:
        self.assertEqual(self.namespace.invoke(b"*", []), NumValue(1))
        self.assertEqual(self.namespace.invoke(b"*", [NumValue(-2), NumValue(5)]), NumValue(-10))

    def test_non_numeric_arguments_are_rejected(self) -> None:
        for key in (b"+", b"*"):
            with self.subTest(key=key):
                with self.assertRaises(InvalidArguments) as cm:
                    self.namespace.invoke(key, [NumValue(1), StrValue(b"a")])
                self.assertIn("position 1", cm.exception.reason)

    def test_rejection_names_the_argument_kind(self) -> None:
        with self.assertRaises(InvalidArguments) as cm:
            self.namespace.invoke(b"+", [StrValue(b"a")])
        self.assertEqual(cm.exception.reason, 'non-number str value "a" at position 0 in + operation')

        with self.assertRaises(InvalidArguments) as cm:
            self.namespace.invoke(b"*", [NumValue(2), ListValue((NumValue(1),))])
        self.assertIn("non-number list value (1)", cm.exception.reason)

    def test_primitives_wrap_named_callables(self) -> None:
        plus = self.namespace[b"+"]
        self.assertIsInstance(plus, PrimitiveFunction)
        self.assertEqual(plus.name, "+")


if __name__ == "__main__":
    unittest.main()
