"""tinyts AST — term nodes produced by the parser and read by the checkers."""

from __future__ import annotations

from dataclasses import dataclass

from .types import ParamType, Type


# ============================================================
# POSITION
# ============================================================


@dataclass(frozen=True)
class Pos:
    """Source position, 1-indexed."""

    line: int
    col: int


# ============================================================
# TERMS
# ============================================================


@dataclass(frozen=True)
class Term:
    """Base for all term nodes."""

    pos: Pos


@dataclass(frozen=True)
class TTrue(Term):
    pass


@dataclass(frozen=True)
class TFalse(Term):
    pass


@dataclass(frozen=True)
class TNumber(Term):
    n: float


@dataclass(frozen=True)
class TAdd(Term):
    """left + right."""

    left: Term
    right: Term


@dataclass(frozen=True)
class TIf(Term):
    """cond ? thn : els."""

    cond: Term
    thn: Term
    els: Term


@dataclass(frozen=True)
class TVar(Term):
    name: str


@dataclass(frozen=True)
class TFunc(Term):
    """(params): ret_type => body — ret_type is None when not annotated."""

    params: tuple[ParamType, ...]
    body: Term
    ret_type: Type | None = None


@dataclass(frozen=True)
class TRecFunc(Term):
    """function func_name(params): ret_type { body } rest."""

    func_name: str
    params: tuple[ParamType, ...]
    ret_type: Type
    body: Term
    rest: Term | None


@dataclass(frozen=True)
class TCall(Term):
    """func(args)."""

    func: Term
    args: tuple[Term, ...]


@dataclass(frozen=True)
class TSeq(Term):
    """body; rest."""

    body: Term
    rest: Term


@dataclass(frozen=True)
class TConst(Term):
    """const name = init; rest — rest is None for a trailing binding."""

    name: str
    init: Term
    rest: Term | None


@dataclass(frozen=True)
class TProp:
    """Object literal entry: name: term."""

    name: str
    term: Term


@dataclass(frozen=True)
class TObjectNew(Term):
    """{ name: term, ... }."""

    props: tuple[TProp, ...]


@dataclass(frozen=True)
class TObjectGet(Term):
    """obj.prop_name."""

    obj: Term
    prop_name: str
