"""Tests for factorik.attributes."""

from __future__ import annotations

import datetime
import itertools
import threading

from factorik.attributes import AttributeSpec, Producer, Static, attribute


class Widget:
    pass


class TestStatic:
    def test_resolve_returns_value(self):
        assert Static("Genin").resolve() == "Genin"

    def test_resolve_copies_mutable_values(self):
        spec = Static(["kunai", "shuriken"])
        first = spec.resolve()
        first.append("scroll")
        assert spec.resolve() == ["kunai", "shuriken"]
        assert spec.value == ["kunai", "shuriken"]

    def test_resolve_copies_nested_containers(self):
        spec = Static({"tools": ["kunai"], "ranks": {"Genin"}})
        first = spec.resolve()
        first["tools"].append("scroll")
        first["ranks"].add("Jonin")
        assert spec.resolve() == {"tools": ["kunai"], "ranks": {"Genin"}}

    def test_resolve_shares_uncopyable_value(self):
        lock = threading.Lock()
        assert Static(lock).resolve() is lock

    def test_resolve_shares_objects_inside_containers(self):
        lock = threading.Lock()
        result = Static({"locks": [lock]}).resolve()
        assert result["locks"][0] is lock

    def test_resolve_date(self):
        day = datetime.date(2020, 1, 1)
        assert Static(day).resolve() == day

    def test_equality(self):
        assert Static(1) == Static(1)
        assert Static(1) != Static(2)

    def test_repr(self):
        assert repr(Static("a")) == "Static('a')"


class TestProducer:
    def test_resolve_invokes_every_time(self):
        counter = itertools.count(1)
        spec = Producer(lambda: next(counter))
        assert spec.resolve() == 1
        assert spec.resolve() == 2

    def test_equality_by_function_identity(self):
        def func():
            return 1

        assert Producer(func) == Producer(func)
        assert Producer(func) != Producer(lambda: 1)

    def test_repr_uses_function_name(self):
        def make_name():
            return "Naruto"

        assert "make_name" in repr(Producer(make_name))


class TestAttribute:
    def test_literal_becomes_static(self):
        spec = attribute(42)
        assert isinstance(spec, Static)
        assert spec.value == 42

    def test_none_becomes_static(self):
        assert isinstance(attribute(None), Static)

    def test_callable_becomes_producer(self):
        spec = attribute(lambda: "value")
        assert isinstance(spec, Producer)
        assert spec.resolve() == "value"

    def test_class_is_kept_as_literal(self):
        spec = attribute(Widget)
        assert isinstance(spec, Static)
        assert spec.resolve() is Widget

    def test_spec_passes_through(self):
        spec = Producer(lambda: 1)
        assert attribute(spec) is spec

    def test_custom_spec_subclass(self):
        class Constant(AttributeSpec[int]):
            def resolve(self) -> int:
                return 7

        spec = Constant()
        assert attribute(spec) is spec
        assert spec.resolve() == 7
