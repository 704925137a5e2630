"""Immutable symbolic expression trees and their transformations."""
from functools import singledispatch
import logging

logger = logging.getLogger(__name__)

# Number payloads are signed 32-bit integers.
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def _check_range(value):
    if not INT_MIN <= value <= INT_MAX:
        raise OverflowError(
            f"{value} does not fit in a signed 32-bit integer"
        )
    return value


class Expression:
    """Base class for all expression nodes."""

    def __init__(self, *operands):
        object.__setattr__(self, 'operands', tuple(operands))
        # Operand hashes are already cached, so this does not recurse.
        object.__setattr__(
            self, '_hash', hash((type(self).__name__, self.operands))
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        # Compared with an explicit stack so deep trees do not recurse.
        pairs = [(self, other)]
        while pairs:
            a, b = pairs.pop()
            if a is b:
                continue
            if type(a) is not type(b) or hash(a) != hash(b):
                return False
            if isinstance(a, Terminal):
                if a.value != b.value:
                    return False
            elif len(a.operands) != len(b.operands):
                return False
            else:
                pairs.extend(zip(a.operands, b.operands))
        return True

    def __hash__(self):
        return self._hash

    def __add__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return sub(self, other)

    def __mul__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return mul(self, other)

    def __truediv__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return div(self, other)


class Operator(Expression):
    """Base class for binary operator nodes."""

    symbol = None  # To be defined by subclasses

    def __init__(self, left, right):
        if not (isinstance(left, Expression)
                and isinstance(right, Expression)):
            raise ValueError("Operator operands must be Expressions")
        super().__init__(left, right)

    @property
    def left(self):
        return self.operands[0]

    @property
    def right(self):
        return self.operands[1]

    def __repr__(self):
        return postvisitor(self, _repr_node)

    def __str__(self):
        return render(self)


class Terminal(Expression):
    """Base class for terminal nodes (values with no operands)."""

    def __init__(self, value):
        super().__init__()
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, '_hash', hash((type(self).__name__, value)))

    def __eq__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    __hash__ = Expression.__hash__

    def __repr__(self):
        return f"{type(self).__name__}({repr(self.value)})"

    def __str__(self):
        return str(self.value)


class Number(Terminal):
    """Terminal node representing an integer constant."""

    def __init__(self, value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("Number value must be an integer")
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(
                f"Number value {value} is outside the signed 32-bit range"
            )
        super().__init__(value)


class Symbol(Terminal):
    """Terminal node representing a symbolic variable."""

    def __init__(self, value):
        if not isinstance(value, str):
            raise ValueError("Symbol value must be a string")
        super().__init__(value)


class Add(Operator):
    symbol = '+'


class Sub(Operator):
    symbol = '-'


class Mul(Operator):
    symbol = '*'


class Div(Operator):
    symbol = '/'


def expressify(value):
    """Convert an int or str to the matching terminal node.

    Expressions are returned unchanged. Anything else is a TypeError.
    """
    if isinstance(value, Expression):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Number(value)
    if isinstance(value, str):
        return Symbol(value)
    raise TypeError(
        f"Cannot convert a {type(value).__name__} to an Expression"
    )


def _build(cls, a, b):
    if not (isinstance(a, Expression) and isinstance(b, Expression)):
        raise TypeError(
            f"{cls.__name__} requires two Expressions, got "
            f"{type(a).__name__} and {type(b).__name__}"
        )
    return simplify(cls(a, b))


def add(a, b):
    """Return the simplified sum of two expressions."""
    return _build(Add, a, b)


def sub(a, b):
    """Return the simplified difference of two expressions."""
    return _build(Sub, a, b)


def mul(a, b):
    """Return the simplified product of two expressions."""
    return _build(Mul, a, b)


def div(a, b):
    """Return the simplified quotient of two expressions."""
    return _build(Div, a, b)


def _render_node(node, *operands):
    if not operands:
        return str(node)
    left, right = operands
    return f"({left} {node.symbol} {right})"


def _repr_node(node, *operands):
    if not operands:
        return repr(node)
    return f"{type(node).__name__}({', '.join(operands)})"


def render(expr):
    """Return the fully parenthesised text of an expression."""
    return postvisitor(expr, _render_node)


def postvisitor(expr, fn, **kwargs):
    '''Visit an Expression in postorder applying a function to every node.

    Parameters
    ----------
    expr: Expression
        The expression to be visited.
    fn: function(node, *o, **kwargs)
        A function to be applied at each node. The function should take the
        node to be visited as its first argument, and the results of visiting
        its operands as any further positional arguments. Any additional
        information that the visitor requires can be passed in as keyword
        arguments.
    **kwargs:
        Any additional keyword arguments to be passed to fn.

    Returns
    -------
    The result of applying fn to the expression and its visited operands.
    '''
    # Keyed by id() so lookups never fall back on structural comparison.
    # The nodes list keeps every visited node alive while its id is in use.
    visited = {}
    nodes = []
    stack = [(expr, False)]

    while stack:
        node, processed = stack.pop()

        if id(node) in visited:
            continue

        if processed:
            operand_results = tuple(visited[id(c)] for c in node.operands)
            visited[id(node)] = fn(node, *operand_results, **kwargs)
            nodes.append(node)
        else:
            stack.append((node, True))
            # Reversed so that operands are processed left to right.
            for child in reversed(node.operands):
                if id(child) not in visited:
                    stack.append((child, False))

    return visited[id(expr)]


# Differentiation Functions
@singledispatch
def _differentiate(expr, *operands, var):
    raise NotImplementedError(
        f"Cannot differentiate a {type(expr).__name__}"
    )


@_differentiate.register(Number)
def _(expr, *operands, var):
    return Number(0)


@_differentiate.register(Symbol)
def _(expr, *operands, var):
    return Number(1) if expr.value == var else Number(0)


@_differentiate.register(Add)
def _(expr, *operands, var):
    # (f + g)' = f' + g'
    return Add(*operands)


@_differentiate.register(Sub)
def _(expr, *operands, var):
    # (f - g)' = f' - g'
    return Sub(*operands)


@_differentiate.register(Mul)
def _(expr, *operands, var):
    # (f * g)' = f' * g + f * g'
    f, g = expr.operands
    df, dg = operands
    return Add(Mul(df, g), Mul(f, dg))


@_differentiate.register(Div)
def _(expr, *operands, var):
    # (f / g)' = (f' * g - f * g') / (g * g)
    f, g = expr.operands
    df, dg = operands
    return Div(Sub(Mul(df, g), Mul(f, dg)), Mul(g, g))


def differentiate(expr, *, var):
    """Differentiate an expression with respect to a given variable.

    ``var`` is a Symbol or a symbol name. The derivative is returned
    exactly as produced by the differentiation rules, without any
    simplification.
    """
    if isinstance(var, Symbol):
        var = var.value
    elif not isinstance(var, str):
        raise TypeError("var must be a Symbol or a symbol name")
    return postvisitor(expr, _differentiate, var=var)


# Simplification Functions
@singledispatch
def simplify(expr):
    """Fold an operator whose two operands are both Numbers.

    Only the node itself is inspected; operands are not simplified first.
    Division is never folded.
    """
    raise NotImplementedError(
        f"Cannot simplify a {type(expr).__name__}"
    )


@simplify.register(Terminal)
def _(expr):
    return expr


@simplify.register(Div)
def _(expr):
    return expr


def _fold(expr, op):
    left, right = expr.operands
    if isinstance(left, Number) and isinstance(right, Number):
        value = _check_range(op(left.value, right.value))
        logger.debug("folded %s to %d", expr, value)
        return Number(value)
    return expr


@simplify.register(Add)
def _(expr):
    return _fold(expr, lambda a, b: a + b)


@simplify.register(Sub)
def _(expr):
    return _fold(expr, lambda a, b: a - b)


@simplify.register(Mul)
def _(expr):
    return _fold(expr, lambda a, b: a * b)


# Substitution Functions
@singledispatch
def _substitute(expr, *operands, name, replacement):
    raise NotImplementedError(
        f"Cannot substitute into a {type(expr).__name__}"
    )


@_substitute.register(Number)
def _(expr, *operands, name, replacement):
    return expr


@_substitute.register(Symbol)
def _(expr, *operands, name, replacement):
    return replacement if expr.value == name else expr


@_substitute.register(Operator)
def _(expr, *operands, name, replacement):
    return simplify(type(expr)(*operands))


def substitute(expr, name, replacement):
    """Replace every Symbol called ``name`` with ``replacement``.

    Each rebuilt operator node is simplified once on the way back up.
    """
    if isinstance(name, Symbol):
        name = name.value
    elif not isinstance(name, str):
        raise TypeError("name must be a Symbol or a symbol name")
    if not isinstance(replacement, Expression):
        raise TypeError("replacement must be an Expression")
    return postvisitor(expr, _substitute, name=name,
                       replacement=replacement)
