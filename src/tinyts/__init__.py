"""tinyts parser and typecheckers — public API."""

from __future__ import annotations

import logging
from typing import Mapping

from .ast import Term
from .dialects import DEFAULT_MODE, DIALECTS, UnknownMode as UnknownMode, get_dialect
from .env import TypeEnv as TypeEnv, as_env
from .errors import CheckError as CheckError, UnreachableTerm as UnreachableTerm
from .parse import ParseError as ParseError, Parser
from .tokens import TokenizeError as TokenizeError, tokenize
from .types import (
    Type as Type,
    is_equal_type as is_equal_type,
    is_subtype_of as is_subtype_of,
    type_show as type_show,
)

logger = logging.getLogger(__name__)

MODES: list[str] = list(DIALECTS)


def parse(source: str, mode: str = DEFAULT_MODE) -> Term:
    """Parse source text into a term tree using the grammar of `mode`."""
    dialect = get_dialect(mode)
    tokens = tokenize(source)
    parser = Parser(tokens, dialect)
    return parser.parse_program()


def typecheck(
    term: Term,
    mode: str = DEFAULT_MODE,
    env: TypeEnv | Mapping[str, Type] | None = None,
) -> Type:
    """Type of a term under `mode`'s checker. Raises CheckError on the first type error."""
    dialect = get_dialect(mode)
    try:
        ty = dialect.typecheck(term, as_env(env))
    except CheckError as e:
        logger.debug("%s check failed: %s", mode, e)
        raise
    logger.debug("%s check ok: %s", mode, type_show(ty))
    return ty


def check(source: str, mode: str = DEFAULT_MODE) -> Type:
    """Parse and type-check source text under `mode`, starting from an empty environment."""
    return typecheck(parse(source, mode), mode)
