"""Bindings-and-functions dialect checker.

Adds variables, arrow functions, calls, sequencing and `const` to the
arithmetic dialect. Rules on top of arith:
- a variable must be bound before it is referenced;
- only functions can be called;
- a call passes as many arguments as there are parameters, each of exactly
  the parameter's type.
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
    return check_term(t, as_env(env))


def check_term(t: Term, env: TypeEnv) -> Type:
    if isinstance(t, TTrue) or isinstance(t, TFalse):
        return BOOLEAN_T
    if isinstance(t, TNumber):
        return NUMBER_T
    if isinstance(t, TIf):
        return check_if(t, env)
    if isinstance(t, TAdd):
        return check_add(t, env)
    if isinstance(t, TVar):
        ty = env.lookup(t.name)
        if ty is None:
            raise UnknownVariable(t.name, t)
        return ty
    if isinstance(t, TFunc) and t.ret_type is None:
        ret = check_term(t.body, env.extend_params(t.params))
        return func_type(t.params, ret)
    if isinstance(t, TCall):
        return check_call(t, env)
    if isinstance(t, TSeq):
        check_term(t.body, env)
        return check_term(t.rest, env)
    if isinstance(t, TConst):
        init_ty = check_term(t.init, env)
        if t.rest is None:
            return init_ty
        return check_term(t.rest, env.extend(t.name, init_ty))
    raise UnreachableTerm(t)


def check_if(t: TIf, env: TypeEnv) -> Type:
    cond_ty = check_term(t.cond, env)
    if cond_ty.kind != TY_BOOLEAN:
        raise BooleanExpected(t.cond)
    thn_ty = check_term(t.thn, env)
    els_ty = check_term(t.els, env)
    if not is_equal_type(thn_ty, els_ty):
        raise BranchTypeMismatch(t)
    return thn_ty


def check_add(t: TAdd, env: TypeEnv) -> Type:
    left_ty = check_term(t.left, env)
    if left_ty.kind != TY_NUMBER:
        raise LeftOperandNotNumber(t.left)
    right_ty = check_term(t.right, env)
    if right_ty.kind != TY_NUMBER:
        raise RightOperandNotNumber(t.right)
    return NUMBER_T


def check_call(t: TCall, env: TypeEnv) -> Type:
    func_ty = check_term(t.func, env)
    if not isinstance(func_ty, FuncT):
        raise NotAFunction(t)
    if len(func_ty.params) != len(t.args):
        raise ArityMismatch(t)
    i = 0
    while i < len(t.args):
        arg_ty = check_term(t.args[i], env)
        if not is_equal_type(arg_ty, func_ty.params[i].type):
            raise ArgumentTypeMismatch(t)
        i += 1
    return func_ty.ret
