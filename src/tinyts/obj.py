"""Objects dialect checker — the bindings dialect plus object literals and `.` access.

Object arguments must match the parameter type exactly: same property names,
same property types, nothing extra. Property order does not matter.
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
    TObjectGet,
    TObjectNew,
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
    NotAnObject,
    RightOperandNotNumber,
    UnknownProperty,
    UnknownVariable,
    UnreachableTerm,
)
from .types import (
    BOOLEAN_T,
    NUMBER_T,
    TY_BOOLEAN,
    TY_NUMBER,
    FuncT,
    ObjectT,
    PropType,
    Type,
    find_prop,
    func_type,
    is_equal_type,
    object_type,
)


def typecheck(t: Term, env: TypeEnv | Mapping[str, Type] | None = None) -> Type:
    return check_term(t, as_env(env))


def check_term(t: Term, env: TypeEnv) -> Type:
    if isinstance(t, TTrue) or isinstance(t, TFalse):
        return BOOLEAN_T
    if isinstance(t, TNumber):
        return NUMBER_T
    if isinstance(t, TIf):
        cond_ty = check_term(t.cond, env)
        if cond_ty.kind != TY_BOOLEAN:
            raise BooleanExpected(t.cond)
        thn_ty = check_term(t.thn, env)
        els_ty = check_term(t.els, env)
        if not is_equal_type(thn_ty, els_ty):
            raise BranchTypeMismatch(t)
        return thn_ty
    if isinstance(t, TAdd):
        left_ty = check_term(t.left, env)
        if left_ty.kind != TY_NUMBER:
            raise LeftOperandNotNumber(t.left)
        right_ty = check_term(t.right, env)
        if right_ty.kind != TY_NUMBER:
            raise RightOperandNotNumber(t.right)
        return NUMBER_T
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
    if isinstance(t, TObjectNew):
        return check_object_new(t, env)
    if isinstance(t, TObjectGet):
        return check_object_get(t, env)
    raise UnreachableTerm(t)


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


def check_object_new(t: TObjectNew, env: TypeEnv) -> Type:
    # A repeated property name yields a repeated entry, in literal order.
    props: list[PropType] = []
    for p in t.props:
        props.append(PropType(p.name, check_term(p.term, env)))
    return object_type(props)


def check_object_get(t: TObjectGet, env: TypeEnv) -> Type:
    obj_ty = check_term(t.obj, env)
    if not isinstance(obj_ty, ObjectT):
        raise NotAnObject(t)
    prop = find_prop(obj_ty.props, t.prop_name)
    if prop is None:
        raise UnknownProperty(t.prop_name, t)
    return prop.type
