"""Type environments — persistent name-to-type maps threaded through checking."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from .types import ParamType, Type


class TypeEnv:
    """Immutable mapping from variable name to Type.

    Extending returns a new environment; the receiver is never changed, so an
    environment can be shared freely between scopes and between checks.
    """

    __slots__ = ("_bindings",)

    def __init__(self, bindings: Mapping[str, Type] | None = None):
        self._bindings: dict[str, Type] = dict(bindings) if bindings is not None else {}

    def lookup(self, name: str) -> Type | None:
        return self._bindings.get(name)

    def extend(self, name: str, typ: Type) -> TypeEnv:
        bindings = dict(self._bindings)
        bindings[name] = typ
        return TypeEnv(bindings)

    def extend_params(self, params: Iterable[ParamType]) -> TypeEnv:
        """Bind each parameter in order; a repeated name keeps the last type."""
        bindings = dict(self._bindings)
        for p in params:
            bindings[p.name] = p.type
        return TypeEnv(bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return "TypeEnv(" + repr(self._bindings) + ")"


EMPTY_ENV: TypeEnv = TypeEnv()


def as_env(env: TypeEnv | Mapping[str, Type] | None) -> TypeEnv:
    """Accept a TypeEnv, a plain mapping, or None (the empty environment)."""
    if env is None:
        return EMPTY_ENV
    if isinstance(env, TypeEnv):
        return env
    return TypeEnv(env)
