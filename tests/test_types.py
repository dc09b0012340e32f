"""Type relation and rendering tests."""

import pytest

from tinyts.types import (
    BOOLEAN_T,
    NUMBER_T,
    ParamType,
    PropType,
    Type,
    find_prop,
    func_type,
    is_equal_type,
    is_subtype_of,
    object_type,
    type_show,
)


def fn(*param_types: Type, ret: Type) -> Type:
    params = [ParamType("p" + str(i), t) for i, t in enumerate(param_types)]
    return func_type(params, ret)


def obj(**props: Type) -> Type:
    return object_type([PropType(name, t) for name, t in props.items()])


# ── Equality ─────────────────────────────────────────────────

EQUAL_CASES = [
    (NUMBER_T, NUMBER_T, True),
    (BOOLEAN_T, BOOLEAN_T, True),
    (NUMBER_T, BOOLEAN_T, False),
    (fn(NUMBER_T, ret=BOOLEAN_T), fn(NUMBER_T, ret=BOOLEAN_T), True),
    (fn(NUMBER_T, ret=BOOLEAN_T), fn(BOOLEAN_T, ret=BOOLEAN_T), False),
    (fn(NUMBER_T, ret=BOOLEAN_T), fn(NUMBER_T, ret=NUMBER_T), False),
    (fn(NUMBER_T, ret=NUMBER_T), fn(NUMBER_T, NUMBER_T, ret=NUMBER_T), False),
    (fn(ret=NUMBER_T), NUMBER_T, False),
    (NUMBER_T, fn(ret=NUMBER_T), False),
    (obj(a=NUMBER_T, b=BOOLEAN_T), obj(a=NUMBER_T, b=BOOLEAN_T), True),
    (obj(a=NUMBER_T, b=BOOLEAN_T), obj(b=BOOLEAN_T, a=NUMBER_T), True),
    (obj(a=NUMBER_T), obj(a=BOOLEAN_T), False),
    (obj(a=NUMBER_T), obj(b=NUMBER_T), False),
    (obj(a=NUMBER_T, b=BOOLEAN_T), obj(a=NUMBER_T), False),
    (obj(a=NUMBER_T), obj(a=NUMBER_T, b=BOOLEAN_T), False),
    (obj(), obj(), True),
    (obj(), fn(ret=NUMBER_T), False),
    (obj(f=fn(NUMBER_T, ret=NUMBER_T)), obj(f=fn(NUMBER_T, ret=NUMBER_T)), True),
]


@pytest.mark.parametrize("a,b,expected", EQUAL_CASES)
def test_is_equal_type(a: Type, b: Type, expected: bool):
    assert is_equal_type(a, b) is expected


def test_equality_ignores_parameter_names():
    a = func_type([ParamType("x", NUMBER_T)], NUMBER_T)
    b = func_type([ParamType("y", NUMBER_T)], NUMBER_T)
    assert is_equal_type(a, b)
    assert a != b


def test_equality_rejects_unknown_kind():
    with pytest.raises(ValueError):
        is_equal_type(NUMBER_T, Type(kind="String"))


# ── Subtyping ────────────────────────────────────────────────

SUBTYPE_CASES = [
    (NUMBER_T, NUMBER_T, True),
    (BOOLEAN_T, NUMBER_T, False),
    (obj(a=NUMBER_T, b=BOOLEAN_T), obj(a=NUMBER_T), True),
    (obj(a=NUMBER_T), obj(a=NUMBER_T, b=BOOLEAN_T), False),
    (obj(a=NUMBER_T), obj(), True),
    (obj(), obj(a=NUMBER_T), False),
    (obj(a=BOOLEAN_T, b=NUMBER_T), obj(a=NUMBER_T), False),
    (obj(p=obj(x=NUMBER_T, y=NUMBER_T)), obj(p=obj(x=NUMBER_T)), True),
    (obj(p=obj(x=NUMBER_T)), obj(p=obj(x=NUMBER_T, y=NUMBER_T)), False),
    # parameters are contravariant
    (fn(obj(a=NUMBER_T), ret=NUMBER_T), fn(obj(a=NUMBER_T, b=NUMBER_T), ret=NUMBER_T), True),
    (fn(obj(a=NUMBER_T, b=NUMBER_T), ret=NUMBER_T), fn(obj(a=NUMBER_T), ret=NUMBER_T), False),
    # returns are covariant
    (fn(ret=obj(a=NUMBER_T, b=NUMBER_T)), fn(ret=obj(a=NUMBER_T)), True),
    (fn(ret=obj(a=NUMBER_T)), fn(ret=obj(a=NUMBER_T, b=NUMBER_T)), False),
    # arity must match
    (fn(NUMBER_T, ret=NUMBER_T), fn(ret=NUMBER_T), False),
    (fn(ret=NUMBER_T), fn(NUMBER_T, ret=NUMBER_T), False),
    (obj(), fn(ret=NUMBER_T), False),
    (fn(ret=NUMBER_T), obj(), False),
    (NUMBER_T, obj(), False),
]


@pytest.mark.parametrize("a,b,expected", SUBTYPE_CASES)
def test_is_subtype_of(a: Type, b: Type, expected: bool):
    assert is_subtype_of(a, b) is expected


def test_subtyping_rejects_unknown_kind():
    with pytest.raises(ValueError):
        is_subtype_of(NUMBER_T, Type(kind="String"))


# ── Rendering ────────────────────────────────────────────────

SHOW_CASES = [
    (BOOLEAN_T, "boolean"),
    (NUMBER_T, "number"),
    (func_type([], NUMBER_T), "() => number"),
    (
        func_type([ParamType("x", NUMBER_T), ParamType("y", BOOLEAN_T)], NUMBER_T),
        "(x: number, y: boolean) => number",
    ),
    (
        func_type([ParamType("f", func_type([ParamType("n", NUMBER_T)], NUMBER_T))], BOOLEAN_T),
        "(f: (n: number) => number) => boolean",
    ),
    (obj(a=NUMBER_T, b=BOOLEAN_T), "{ a: number, b: boolean }"),
    (obj(o=obj(x=NUMBER_T)), "{ o: { x: number } }"),
    (obj(), "{  }"),
]


@pytest.mark.parametrize("t,expected", SHOW_CASES)
def test_type_show(t: Type, expected: str):
    assert type_show(t) == expected


def test_type_show_rejects_unknown_kind():
    with pytest.raises(ValueError):
        type_show(Type(kind="String"))


def test_find_prop_returns_first_match():
    props = (PropType("a", NUMBER_T), PropType("a", BOOLEAN_T))
    assert find_prop(props, "a") == PropType("a", NUMBER_T)
    assert find_prop(props, "b") is None
