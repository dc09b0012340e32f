"""tinyts parser — recursive descent, one method per grammar production.

The grammar accepted depends on the dialect: constructs a dialect does not
support are rejected here, so a checker only ever sees its own vocabulary.
"""

from __future__ import annotations

from .ast import (
    Pos,
    TAdd,
    TCall,
    TConst,
    TFalse,
    TFunc,
    TIf,
    TNumber,
    TObjectGet,
    TObjectNew,
    TProp,
    TRecFunc,
    TSeq,
    TTrue,
    TVar,
    Term,
)
from .dialects import Dialect
from .tokens import TK_EOF, TK_IDENT, TK_NUMBER, Token
from .types import (
    BOOLEAN_T,
    NUMBER_T,
    ParamType,
    PropType,
    Type,
    func_type,
    object_type,
)


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class _ConstHead:
    def __init__(self, pos: Pos, name: str, init: Term):
        self.pos = pos
        self.name = name
        self.init = init


class _FunctionHead:
    def __init__(self, pos: Pos, name: str, params: tuple[ParamType, ...], ret: Type, body: Term):
        self.pos = pos
        self.name = name
        self.params = params
        self.ret = ret
        self.body = body


def _fold_stmts(heads: list[object], last: Term | None) -> Term | None:
    """Fold a statement list right-to-left into nested const/recFunc/seq terms."""
    result = last
    i = len(heads) - 1
    while i >= 0:
        head = heads[i]
        if isinstance(head, _ConstHead):
            result = TConst(head.pos, head.name, head.init, result)
        elif isinstance(head, _FunctionHead):
            result = TRecFunc(head.pos, head.name, head.params, head.ret, head.body, result)
        elif result is None:
            result = head
        else:
            result = TSeq(head.pos, head, result)
        i -= 1
    return result


class Parser:
    """Recursive descent parser for one tinyts dialect."""

    def __init__(self, tokens: list[Token], dialect: Dialect):
        self.tokens: list[Token] = tokens
        self.dialect: Dialect = dialect
        self.pos: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[len(self.tokens) - 1]
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        return self.current().value == value

    def at_type(self, type_: str) -> bool:
        return self.current().type == type_

    def at_ident(self) -> bool:
        return self.current().type == TK_IDENT

    def expect(self, value: str) -> Token:
        tok = self.current()
        if not self.at(value):
            raise self.error("expected '" + value + "', got '" + tok.value + "'")
        return self.advance()

    def expect_ident(self) -> Token:
        tok = self.current()
        if tok.type != TK_IDENT:
            raise self.error("expected identifier, got '" + tok.value + "'")
        return self.advance()

    def error(self, msg: str) -> ParseError:
        tok = self.current()
        return ParseError(msg, tok.line, tok.col)

    def require(self, enabled: bool, construct: str) -> None:
        if not enabled:
            raise self.error(construct + " is not supported in " + self.dialect.name + " mode")

    def _pos(self) -> Pos:
        tok = self.current()
        return Pos(tok.line, tok.col)

    # ── Top Level ────────────────────────────────────────────

    def parse_program(self) -> Term:
        """Program = Stmts EOF"""
        heads = self.parse_stmt_heads()
        if not self.at_type(TK_EOF):
            raise self.error("unexpected '" + self.current().value + "'")
        if len(heads) == 0:
            raise self.error("expected expression")
        last: Term | None = None
        if isinstance(heads[-1], Term):
            last = heads.pop()
        result = _fold_stmts(heads, last)
        assert result is not None
        return result

    def parse_stmt_heads(self) -> list[object]:
        """Stmts = Stmt ( ';' Stmt )* ';'? — stops at EOF, '}' or 'return'."""
        heads: list[object] = []
        while not self._at_stmts_end():
            if len(heads) > 0:
                self.require(self.dialect.bindings, "statement sequences")
            head = self.parse_stmt()
            heads.append(head)
            if self.at(";"):
                self.advance()
            elif not isinstance(head, _FunctionHead) and not self._at_stmts_end():
                raise self.error("expected ';', got '" + self.current().value + "'")
        return heads

    def _at_stmts_end(self) -> bool:
        return self.at_type(TK_EOF) or self.at("}") or self.at("return")

    def parse_stmt(self) -> object:
        if self.at("const"):
            return self.parse_const()
        if self.at("function"):
            return self.parse_function_decl()
        return self.parse_expr()

    def parse_const(self) -> _ConstHead:
        """Const = 'const' IDENT '=' Expr"""
        self.require(self.dialect.bindings, "const declarations")
        pos = self._pos()
        self.expect("const")
        name_tok = self.expect_ident()
        self.expect("=")
        init = self.parse_expr()
        return _ConstHead(pos, name_tok.value, init)

    def parse_function_decl(self) -> _FunctionHead:
        """FunctionDecl = 'function' IDENT '(' Params ')' ':' Type Block"""
        self.require(self.dialect.rec_funcs, "function declarations")
        pos = self._pos()
        self.expect("function")
        name_tok = self.expect_ident()
        self.expect("(")
        params = self.parse_param_list()
        self.expect(")")
        self.expect(":")
        ret = self.parse_type()
        body = self.parse_block()
        return _FunctionHead(pos, name_tok.value, params, ret, body)

    def parse_block(self) -> Term:
        """Block = '{' ( Stmt ';' )* 'return' Expr ';'? '}'"""
        self.expect("{")
        heads = self.parse_stmt_heads()
        if not self.at("return"):
            raise self.error("expected 'return', got '" + self.current().value + "'")
        self.advance()
        ret = self.parse_expr()
        if self.at(";"):
            self.advance()
        self.expect("}")
        result = _fold_stmts(heads, ret)
        assert result is not None
        return result

    # ── Types ────────────────────────────────────────────────

    def parse_type(self) -> Type:
        """Type = 'number' | 'boolean' | FuncType | ObjectType"""
        if self.at("number"):
            self.advance()
            return NUMBER_T
        if self.at("boolean"):
            self.advance()
            return BOOLEAN_T
        if self.at("("):
            self.advance()
            params = self.parse_param_list()
            self.expect(")")
            self.expect("=>")
            ret = self.parse_type()
            return func_type(params, ret)
        if self.at("{"):
            self.require(self.dialect.objects, "object types")
            self.advance()
            props: list[PropType] = []
            while not self.at("}"):
                name_tok = self.expect_ident()
                self.expect(":")
                props.append(PropType(name_tok.value, self.parse_type()))
                if self.at(",") or self.at(";"):
                    self.advance()
                elif not self.at("}"):
                    raise self.error("expected ',' or '}', got '" + self.current().value + "'")
            self.expect("}")
            return object_type(props)
        raise self.error("expected type, got '" + self.current().value + "'")

    def parse_param_list(self) -> tuple[ParamType, ...]:
        """Params = ( IDENT ':' Type ( ',' IDENT ':' Type )* )?"""
        params: list[ParamType] = []
        if self.at(")"):
            return tuple(params)
        params.append(self.parse_param())
        while self.at(","):
            self.advance()
            params.append(self.parse_param())
        return tuple(params)

    def parse_param(self) -> ParamType:
        name_tok = self.expect_ident()
        self.expect(":")
        typ = self.parse_type()
        return ParamType(name_tok.value, typ)

    # ── Expressions ──────────────────────────────────────────

    def parse_expr(self) -> Term:
        """Expr = Sum ( '?' Expr ':' Expr )?"""
        expr = self.parse_sum()
        if self.at("?"):
            self.require(self.dialect.conditional, "conditional expressions")
            self.advance()
            thn = self.parse_expr()
            self.expect(":")
            els = self.parse_expr()
            return TIf(expr.pos, expr, thn, els)
        return expr

    def parse_sum(self) -> Term:
        """Sum = Postfix ( '+' Postfix )*"""
        left = self.parse_postfix()
        while self.at("+"):
            self.advance()
            right = self.parse_postfix()
            left = TAdd(left.pos, left, right)
        return left

    def parse_postfix(self) -> Term:
        """Postfix = Primary ( '(' Args ')' | '.' IDENT )*"""
        expr = self.parse_primary()
        while True:
            if self.at("("):
                self.require(self.dialect.bindings, "function calls")
                self.advance()
                args = self.parse_arg_list()
                self.expect(")")
                expr = TCall(expr.pos, expr, args)
            elif self.at("."):
                self.require(self.dialect.objects, "property access")
                self.advance()
                name_tok = self.expect_ident()
                expr = TObjectGet(expr.pos, expr, name_tok.value)
            else:
                break
        return expr

    def parse_arg_list(self) -> tuple[Term, ...]:
        """Args = ( Expr ( ',' Expr )* )?"""
        args: list[Term] = []
        if self.at(")"):
            return tuple(args)
        args.append(self.parse_expr())
        while self.at(","):
            self.advance()
            args.append(self.parse_expr())
        return tuple(args)

    def parse_primary(self) -> Term:
        """Parse a primary expression."""
        tok = self.current()
        pos = self._pos()

        if tok.type == TK_NUMBER:
            self.advance()
            return TNumber(pos, float(tok.value))
        if self.at("true"):
            self.advance()
            return TTrue(pos)
        if self.at("false"):
            self.advance()
            return TFalse(pos)

        if tok.type == TK_IDENT:
            self.require(self.dialect.bindings, "variables")
            self.advance()
            return TVar(pos, tok.value)

        # ( — arrow function or parens
        if self.at("("):
            if self._is_arrow():
                return self.parse_arrow()
            self.advance()
            inner = self.parse_expr()
            self.expect(")")
            return inner

        # { — object literal
        if self.at("{"):
            self.require(self.dialect.objects, "object literals")
            return self.parse_object_literal()

        raise self.error("expected expression, got '" + tok.value + "'")

    def _is_arrow(self) -> bool:
        """'(' begins an arrow function when followed by ')' or by IDENT ':'."""
        nxt = self.peek(1)
        if nxt.value == ")":
            return True
        return nxt.type == TK_IDENT and self.peek(2).value == ":"

    def parse_arrow(self) -> TFunc:
        """Arrow = '(' Params ')' ( ':' Type )? '=>' ( Block | Expr )"""
        self.require(self.dialect.bindings, "functions")
        pos = self._pos()
        self.expect("(")
        params = self.parse_param_list()
        self.expect(")")
        ret_type: Type | None = None
        if self.at(":"):
            self.require(self.dialect.return_types, "return type annotations")
            self.advance()
            ret_type = self.parse_type()
        self.expect("=>")
        if self.at("{"):
            body = self.parse_block()
        else:
            body = self.parse_expr()
        return TFunc(pos, params, body, ret_type)

    def parse_object_literal(self) -> TObjectNew:
        """Object = '{' ( IDENT ':' Expr ( ',' IDENT ':' Expr )* ','? )? '}'"""
        pos = self._pos()
        self.expect("{")
        props: list[TProp] = []
        while not self.at("}"):
            name_tok = self.expect_ident()
            self.expect(":")
            props.append(TProp(name_tok.value, self.parse_expr()))
            if self.at(","):
                self.advance()
            elif not self.at("}"):
                raise self.error("expected ',' or '}', got '" + self.current().value + "'")
        self.expect("}")
        return TObjectNew(pos, tuple(props))
