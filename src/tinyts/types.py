"""tinyts types — resolved type values and the relations between them."""

from __future__ import annotations

from dataclasses import dataclass


# ============================================================
# RESOLVED TYPE REPRESENTATION
# ============================================================

TY_BOOLEAN: str = "Boolean"
TY_NUMBER: str = "Number"
TY_FUNC: str = "Func"
TY_OBJECT: str = "Object"


@dataclass(frozen=True)
class Type:
    kind: str


@dataclass(frozen=True)
class ParamType:
    name: str
    type: Type


@dataclass(frozen=True)
class PropType:
    name: str
    type: Type


@dataclass(frozen=True)
class FuncT(Type):
    params: tuple[ParamType, ...]
    ret: Type


@dataclass(frozen=True)
class ObjectT(Type):
    props: tuple[PropType, ...]


# Primitive singletons
BOOLEAN_T: Type = Type(kind=TY_BOOLEAN)
NUMBER_T: Type = Type(kind=TY_NUMBER)


def func_type(params: list[ParamType] | tuple[ParamType, ...], ret: Type) -> FuncT:
    return FuncT(kind=TY_FUNC, params=tuple(params), ret=ret)


def object_type(props: list[PropType] | tuple[PropType, ...]) -> ObjectT:
    return ObjectT(kind=TY_OBJECT, props=tuple(props))


def find_prop(props: tuple[PropType, ...], name: str) -> PropType | None:
    """First property named `name`, or None."""
    for p in props:
        if p.name == name:
            return p
    return None


# ============================================================
# TYPE EQUALITY
# ============================================================


def is_equal_type(a: Type, b: Type) -> bool:
    """Structural equality. Parameter names and property order are ignored."""
    if b.kind == TY_NUMBER or b.kind == TY_BOOLEAN:
        return a.kind == b.kind
    if isinstance(b, FuncT):
        if not isinstance(a, FuncT):
            return False
        if len(a.params) != len(b.params):
            return False
        i = 0
        while i < len(a.params):
            if not is_equal_type(a.params[i].type, b.params[i].type):
                return False
            i += 1
        return is_equal_type(a.ret, b.ret)
    if isinstance(b, ObjectT):
        if not isinstance(a, ObjectT):
            return False
        if len(a.props) != len(b.props):
            return False
        for bp in b.props:
            ap = find_prop(a.props, bp.name)
            if ap is None or not is_equal_type(ap.type, bp.type):
                return False
        return True
    raise ValueError("unknown type kind: " + b.kind)


# ============================================================
# SUBTYPING
# ============================================================


def is_subtype_of(a: Type, b: Type) -> bool:
    """Is `a` usable where `b` is expected?

    Functions are contravariant in parameters (same count required) and
    covariant in the return type. Objects allow width subtyping: `a` may
    carry properties `b` does not mention.
    """
    if b.kind == TY_NUMBER or b.kind == TY_BOOLEAN:
        return a.kind == b.kind
    if isinstance(b, FuncT):
        if not isinstance(a, FuncT):
            return False
        if len(a.params) != len(b.params):
            return False
        i = 0
        while i < len(a.params):
            if not is_subtype_of(b.params[i].type, a.params[i].type):
                return False
            i += 1
        return is_subtype_of(a.ret, b.ret)
    if isinstance(b, ObjectT):
        if not isinstance(a, ObjectT):
            return False
        for bp in b.props:
            ap = find_prop(a.props, bp.name)
            if ap is None or not is_subtype_of(ap.type, bp.type):
                return False
        return True
    raise ValueError("unknown type kind: " + b.kind)


# ============================================================
# DISPLAY
# ============================================================


def type_show(t: Type) -> str:
    """Human-readable rendering, for diagnostics and CLI output."""
    if t.kind == TY_BOOLEAN:
        return "boolean"
    if t.kind == TY_NUMBER:
        return "number"
    if isinstance(t, FuncT):
        parts: list[str] = []
        for p in t.params:
            parts.append(p.name + ": " + type_show(p.type))
        return "(" + ", ".join(parts) + ") => " + type_show(t.ret)
    if isinstance(t, ObjectT):
        parts2: list[str] = []
        for p in t.props:
            parts2.append(p.name + ": " + type_show(p.type))
        return "{ " + ", ".join(parts2) + " }"
    raise ValueError("unknown type kind: " + t.kind)
