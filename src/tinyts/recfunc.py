"""Recursive-functions dialect checker.

Adds return type annotations and `function` declarations to the bindings
dialect. Two ways to recurse:

- `function f(x: number): number { return f(x); }` binds `f` inside its own
  body and in the rest of the program;
- `const f = (x: number): number => f(x)` binds `f` inside the arrow's body
  only, and only when the arrow declares its return type.

A declared return type must equal the type of the body.
"""

from __future__ import annotations

from typing import Mapping

from .ast import (
    TAdd,
    TCall,
    TConst,
    TFalse,
    TFunc,
    TIf,
    TNumber,
    TRecFunc,
    TSeq,
    TTrue,
    TVar,
    Term,
)
from .env import TypeEnv, as_env
from .errors import (
    ArgumentTypeMismatch,
    ArityMismatch,
    BooleanExpected,
    BranchTypeMismatch,
    LeftOperandNotNumber,
    NotAFunction,
    ReturnTypeMismatch,
    RightOperandNotNumber,
    UnknownVariable,
    UnreachableTerm,
)
from .types import (
    BOOLEAN_T,
    NUMBER_T,
    TY_BOOLEAN,
    TY_NUMBER,
    FuncT,
    Type,
    func_type,
    is_equal_type,
)


def typecheck(t: Term, env: TypeEnv | Mapping[str, Type] | None = None) -> Type:
    return check_term(t, as_env(env), None)


def check_term(t: Term, env: TypeEnv, parent: Term | None) -> Type:
    """Type of `t`. `parent` is the enclosing term when it matters: a `const` whose init is `t`."""
    if isinstance(t, TTrue) or isinstance(t, TFalse):
        return BOOLEAN_T
    if isinstance(t, TNumber):
        return NUMBER_T
    if isinstance(t, TIf):
        cond_ty = check_term(t.cond, env, None)
        if cond_ty.kind != TY_BOOLEAN:
            raise BooleanExpected(t.cond)
        thn_ty = check_term(t.thn, env, None)
        els_ty = check_term(t.els, env, None)
        if not is_equal_type(thn_ty, els_ty):
            raise BranchTypeMismatch(t)
        return thn_ty
    if isinstance(t, TAdd):
        left_ty = check_term(t.left, env, None)
        if left_ty.kind != TY_NUMBER:
            raise LeftOperandNotNumber(t.left)
        right_ty = check_term(t.right, env, None)
        if right_ty.kind != TY_NUMBER:
            raise RightOperandNotNumber(t.right)
        return NUMBER_T
    if isinstance(t, TVar):
        ty = env.lookup(t.name)
        if ty is None:
            raise UnknownVariable(t.name, t)
        return ty
    if isinstance(t, TFunc):
        return check_func(t, env, parent)
    if isinstance(t, TRecFunc):
        return check_rec_func(t, env)
    if isinstance(t, TCall):
        return check_call(t, env)
    if isinstance(t, TSeq):
        check_term(t.body, env, None)
        return check_term(t.rest, env, None)
    if isinstance(t, TConst):
        init_ty = check_term(t.init, env, t)
        if t.rest is None:
            return init_ty
        return check_term(t.rest, env.extend(t.name, init_ty), None)
    raise UnreachableTerm(t)


def check_func(t: TFunc, env: TypeEnv, parent: Term | None) -> Type:
    scope = env.extend_params(t.params)
    if t.ret_type is not None and isinstance(parent, TConst):
        # The const's own name is visible in the body, not outside it.
        scope = scope.extend(parent.name, func_type(t.params, t.ret_type))
    inferred = check_term(t.body, scope, None)
    if t.ret_type is None:
        return func_type(t.params, inferred)
    if not is_equal_type(t.ret_type, inferred):
        raise ReturnTypeMismatch(t)
    return func_type(t.params, t.ret_type)


def check_rec_func(t: TRecFunc, env: TypeEnv) -> Type:
    self_ty = func_type(t.params, t.ret_type)
    body_ty = check_term(t.body, env.extend_params(t.params).extend(t.func_name, self_ty), None)
    if not is_equal_type(t.ret_type, body_ty):
        raise ReturnTypeMismatch(t)
    if t.rest is None:
        return self_ty
    return check_term(t.rest, env.extend(t.func_name, self_ty), None)


def check_call(t: TCall, env: TypeEnv) -> Type:
    func_ty = check_term(t.func, env, None)
    if not isinstance(func_ty, FuncT):
        raise NotAFunction(t)
    if len(func_ty.params) != len(t.args):
        raise ArityMismatch(t)
    i = 0
    while i < len(t.args):
        arg_ty = check_term(t.args[i], env, None)
        if not is_equal_type(arg_ty, func_ty.params[i].type):
            raise ArgumentTypeMismatch(t)
        i += 1
    return func_ty.ret
