"""Tests for type hierarchy linearization."""

from lookup_engine.engine.hierarchy import linearize


class Animal:
    pass


class Dog(Animal):
    pass


class Swimmer:
    pass


class Labrador(Dog, Swimmer):
    pass


class TestLinearize:
    """Tests for linearize()."""

    def test_single_class_excludes_object(self):
        assert linearize(Animal) == [Animal]

    def test_most_derived_first(self):
        assert linearize(Dog) == [Dog, Animal]

    def test_include_root_appends_object(self):
        assert linearize(Dog, include_root=True) == [Dog, Animal, object]

    def test_object_alone_is_empty(self):
        assert linearize(object) == []
        assert linearize(object, include_root=True) == [object]

    def test_multiple_inheritance_follows_mro(self):
        assert linearize(Labrador) == [Labrador, Dog, Animal, Swimmer]

    def test_builtin_types(self):
        assert linearize(bool) == [bool, int]

    def test_does_not_mutate_on_repeat(self):
        first = linearize(Dog)
        first.append(int)
        assert linearize(Dog) == [Dog, Animal]
