"""Initialiser."""
from .expressions import (
    INT_MIN,
    INT_MAX,
    Expression,
    Operator,
    Terminal,
    Number,
    Symbol,
    Add,
    Sub,
    Mul,
    Div,
    expressify,
    add,
    sub,
    mul,
    div,
    render,
    postvisitor,
    differentiate,
    simplify,
    substitute
)
from .complex_numbers import Complex

__all__ = [
    'INT_MIN',
    'INT_MAX',
    'Expression',
    'Operator',
    'Terminal',
    'Number',
    'Symbol',
    'Add',
    'Sub',
    'Mul',
    'Div',
    'expressify',
    'add',
    'sub',
    'mul',
    'div',
    'render',
    'postvisitor',
    'differentiate',
    'simplify',
    'substitute',
    'Complex'
]
