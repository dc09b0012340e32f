"""Structural subtyping dialect checker.

The objects dialect without `?:`, where every compatibility check uses
`is_subtype_of` instead of exact equality: an argument may be any subtype of
its parameter's type, and a body may have any subtype of the declared return
type. Objects with extra properties are subtypes of objects with fewer.
"""

from __future__ import annotations

from typing import Mapping

from .ast import (
    TAdd,
    TCall,
    TConst,
    TFalse,
    TFunc,
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
    LeftOperandNotNumber,
    NotAFunction,
    NotAnObject,
    ReturnTypeMismatch,
    RightOperandNotNumber,
    UnknownProperty,
    UnknownVariable,
    UnreachableTerm,
)
from .types import (
    BOOLEAN_T,
    NUMBER_T,
    TY_NUMBER,
    FuncT,
    ObjectT,
    PropType,
    Type,
    find_prop,
    func_type,
    is_subtype_of,
    object_type,
)


def typecheck(t: Term, env: TypeEnv | Mapping[str, Type] | None = None) -> Type:
    return check_term(t, as_env(env))


def check_term(t: Term, env: TypeEnv) -> Type:
    if isinstance(t, TTrue) or isinstance(t, TFalse):
        return BOOLEAN_T
    if isinstance(t, TNumber):
        return NUMBER_T
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
    if isinstance(t, TFunc):
        return check_func(t, env)
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
        props: list[PropType] = []
        for p in t.props:
            props.append(PropType(p.name, check_term(p.term, env)))
        return object_type(props)
    if isinstance(t, TObjectGet):
        obj_ty = check_term(t.obj, env)
        if not isinstance(obj_ty, ObjectT):
            raise NotAnObject(t)
        prop = find_prop(obj_ty.props, t.prop_name)
        if prop is None:
            raise UnknownProperty(t.prop_name, t)
        return prop.type
    raise UnreachableTerm(t)


def check_func(t: TFunc, env: TypeEnv) -> Type:
    inferred = check_term(t.body, env.extend_params(t.params))
    if t.ret_type is None:
        return func_type(t.params, inferred)
    if not is_subtype_of(inferred, t.ret_type):
        raise ReturnTypeMismatch(t)
    return func_type(t.params, t.ret_type)


def check_call(t: TCall, env: TypeEnv) -> Type:
    func_ty = check_term(t.func, env)
    if not isinstance(func_ty, FuncT):
        raise NotAFunction(t)
    if len(func_ty.params) != len(t.args):
        raise ArityMismatch(t)
    i = 0
    while i < len(t.args):
        arg_ty = check_term(t.args[i], env)
        if not is_subtype_of(arg_ty, func_ty.params[i].type):
            raise ArgumentTypeMismatch(t)
        i += 1
    return func_ty.ret
