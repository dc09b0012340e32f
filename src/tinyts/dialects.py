"""tinyts dialects — the five checking modes and the syntax each accepts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from . import arith, basic, obj, recfunc, sub


@dataclass(frozen=True)
class Dialect:
    """A checking mode: which constructs parse, and which checker runs."""

    name: str
    typecheck: Callable
    conditional: bool = True
    bindings: bool = False
    objects: bool = False
    return_types: bool = False
    rec_funcs: bool = False


DIALECTS: dict[str, Dialect] = {
    "arith": Dialect("arith", arith.typecheck),
    "basic": Dialect("basic", basic.typecheck, bindings=True),
    "obj": Dialect("obj", obj.typecheck, bindings=True, objects=True),
    "rec-func": Dialect(
        "rec-func",
        recfunc.typecheck,
        bindings=True,
        return_types=True,
        rec_funcs=True,
    ),
    "sub": Dialect(
        "sub",
        sub.typecheck,
        conditional=False,
        bindings=True,
        objects=True,
        return_types=True,
    ),
}

DEFAULT_MODE: str = "arith"


class UnknownMode(Exception):
    def __init__(self, mode: str):
        self.mode: str = mode
        super().__init__("unknown mode: " + mode)


def get_dialect(mode: str) -> Dialect:
    if mode not in DIALECTS:
        raise UnknownMode(mode)
    return DIALECTS[mode]
