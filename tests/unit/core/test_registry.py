import abc
import unittest

from symkit.core import Registrant


class TestRegistrant(unittest.TestCase):
    def setUp(self):
        class Shape(Registrant):
            pass

        class Circle(Shape):
            pass

        class Square(Shape):
            registrant_name = "box"

        class Other(Registrant):
            pass

        self.Shape, self.Circle, self.Square, self.Other = Shape, Circle, Square, Other

    def test_subclasses_register_in_their_root(self):
        self.assertIs(self.Shape.get("circle"), self.Circle)
        self.assertIs(self.Shape.get("CIRCLE"), self.Circle)

    def test_registrant_name_overrides_class_name(self):
        self.assertIs(self.Shape.get("box"), self.Square)
        self.assertIsNone(self.Shape.find("square"))

    def test_sibling_hierarchies_do_not_share_registry(self):
        self.assertEqual(self.Other.all(), [])
        self.assertNotIn("shape", Registrant.registry)

    def test_get_unknown_raises(self):
        with self.assertRaises(KeyError):
            self.Shape.get("triangle")

    def test_lazy_registration(self):
        calls = []

        def triangle():
            calls.append(1)

            class Triangle(self.Shape):
                pass

            return Triangle

        self.Shape.lazy_register(triangle)
        self.assertEqual(calls, [])
        resolved = self.Shape.get("triangle")
        self.assertEqual(resolved.__name__, "Triangle")
        self.assertEqual(calls, [1])
        self.assertNotIn("triangle", self.Shape.lazy_registry)

    def test_abstract_subclasses_still_register(self):
        class Abstract(self.Shape):
            @abc.abstractmethod
            def area(self): ...

        self.assertIs(self.Shape.get("abstract"), Abstract)

    def test_all_lists_in_definition_order(self):
        self.assertEqual(self.Shape.all(), [self.Circle, self.Square])


if __name__ == "__main__":
    unittest.main()
