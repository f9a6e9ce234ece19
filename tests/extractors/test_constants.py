"""Tests for the per-file constant table."""

from __future__ import annotations

from eventmeta.extractors.constants import collect_constants
from tests._fixtures.java import parse_java


def test_collects_static_final_string_literals() -> None:
    tree = parse_java(
        """
        public class OrderEvents {
            public static final String TOPIC = "orders.v1";
            private static final String PRODUCER = "sample-app", OTHER = "other";
            static final java.lang.String QUALIFIED = "q";
        }
        """
    )

    assert collect_constants(tree) == {
        "TOPIC": "orders.v1",
        "PRODUCER": "sample-app",
        "OTHER": "other",
        "QUALIFIED": "q",
    }


def test_ignores_fields_that_are_not_constant_strings() -> None:
    tree = parse_java(
        """
        public class Mixed {
            public static String NOT_FINAL = "a";
            public final String NOT_STATIC = "b";
            public static final int NUMBER = 1;
            public static final String CONCAT = "a" + "b";
            public static final String REFERENCE = NOT_FINAL;
            public static final String CALL = String.valueOf(1);
            public static final String UNINITIALIZED;
            public static final String ARRAY[] = {"x"};
            public static final CharSequence OTHER_TYPE = "c";
        }
        """
    )

    assert collect_constants(tree) == {}


def test_collects_from_every_top_level_type_last_write_wins() -> None:
    tree = parse_java(
        """
        class First {
            static final String SHARED = "first";
            static final String ONLY_FIRST = "1";
        }

        interface Second {
            static final String SHARED = "second";
        }

        enum Third {
            A, B;
            static final String ENUM_CONST = "enum";
        }
        """
    )

    assert collect_constants(tree) == {
        "SHARED": "second",
        "ONLY_FIRST": "1",
        "ENUM_CONST": "enum",
    }


def test_nested_type_constants_are_not_collected() -> None:
    tree = parse_java(
        """
        class Outer {
            static class Inner {
                static final String HIDDEN = "inner";
            }
        }
        """
    )

    assert collect_constants(tree) == {}


def test_interface_constants_need_explicit_modifiers() -> None:
    tree = parse_java(
        """
        interface Topics {
            String IMPLICIT = "implicit";
        }
        """
    )

    assert collect_constants(tree) == {}


def test_escapes_in_constants_are_decoded() -> None:
    tree = parse_java(
        r"""
        class Escaped {
            static final String VALUE = "a\"b";
        }
        """
    )

    assert collect_constants(tree) == {"VALUE": 'a"b'}
