"""tinyts check errors — one exception class per kind of type error."""

from __future__ import annotations

from .ast import Term


# ============================================================
# CHECK ERROR
# ============================================================


class CheckError(Exception):
    """A type error. The first one found aborts the whole check."""

    def __init__(self, msg: str, term: Term):
        self.msg: str = msg
        self.term: Term = term
        self.line: int = term.pos.line
        self.col: int = term.pos.col
        super().__init__(msg + " at line " + str(self.line) + " col " + str(self.col))


class BooleanExpected(CheckError):
    def __init__(self, term: Term):
        super().__init__("boolean expected", term)


class BranchTypeMismatch(CheckError):
    def __init__(self, term: Term):
        super().__init__("branches must have the same type", term)


class LeftOperandNotNumber(CheckError):
    def __init__(self, term: Term):
        super().__init__("number expected on left side of `+`", term)


class RightOperandNotNumber(CheckError):
    def __init__(self, term: Term):
        super().__init__("number expected on right side of `+`", term)


class UnknownVariable(CheckError):
    def __init__(self, name: str, term: Term):
        self.name: str = name
        super().__init__("unknown variable: " + name, term)


class ReturnTypeMismatch(CheckError):
    def __init__(self, term: Term):
        super().__init__("return type mismatch", term)


class NotAFunction(CheckError):
    def __init__(self, term: Term):
        super().__init__("function expected", term)


class ArityMismatch(CheckError):
    def __init__(self, term: Term):
        super().__init__("wrong number of arguments", term)


class ArgumentTypeMismatch(CheckError):
    def __init__(self, term: Term):
        super().__init__("parameter type mismatch", term)


class NotAnObject(CheckError):
    def __init__(self, term: Term):
        super().__init__("object expected", term)


class UnknownProperty(CheckError):
    def __init__(self, prop_name: str, term: Term):
        self.prop_name: str = prop_name
        super().__init__("unknown property: " + prop_name, term)


# ============================================================
# INTERNAL FAULTS
# ============================================================


class UnreachableTerm(Exception):
    """A term outside the dialect's vocabulary reached the checker."""

    def __init__(self, term: object):
        self.term: object = term
        super().__init__("unknown term: " + repr(term))
