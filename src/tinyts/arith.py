"""Arithmetic dialect checker — booleans, numbers, `?:` and `+`.

Rules:
1. `+` only adds numbers.
2. The condition of `?:` is a boolean.
3. Both branches of `?:` have the same type.
"""

from __future__ import annotations

from .ast import TAdd, TFalse, TIf, TNumber, TTrue, Term
from .env import TypeEnv
from .errors import (
    BooleanExpected,
    BranchTypeMismatch,
    LeftOperandNotNumber,
    RightOperandNotNumber,
    UnreachableTerm,
)
from .types import BOOLEAN_T, NUMBER_T, TY_BOOLEAN, TY_NUMBER, Type


def typecheck(t: Term, env: TypeEnv | None = None) -> Type:
    """Type of an arithmetic term. There are no variables, so `env` is unused."""
    if isinstance(t, TTrue) or isinstance(t, TFalse):
        return BOOLEAN_T
    if isinstance(t, TNumber):
        return NUMBER_T
    if isinstance(t, TIf):
        cond_ty = typecheck(t.cond)
        if cond_ty.kind != TY_BOOLEAN:
            raise BooleanExpected(t.cond)
        thn_ty = typecheck(t.thn)
        els_ty = typecheck(t.els)
        # Only the tags are compared in this dialect.
        if thn_ty.kind != els_ty.kind:
            raise BranchTypeMismatch(t)
        return thn_ty
    if isinstance(t, TAdd):
        left_ty = typecheck(t.left)
        if left_ty.kind != TY_NUMBER:
            raise LeftOperandNotNumber(t.left)
        right_ty = typecheck(t.right)
        if right_ty.kind != TY_NUMBER:
            raise RightOperandNotNumber(t.right)
        return NUMBER_T
    raise UnreachableTerm(t)
