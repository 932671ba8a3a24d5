from collections import deque
from functools import reduce
import operator
import math

from .lexer import Lexer
from .number import format as format_number, format_stack
from .util import InvalidToken, StackEmpty, IndexOutOfRange


# Python raises where IEEE 754 hands back inf or nan. Stack values are plain
# doubles, so fold those back into the IEEE result.

def _odd(n):
    return n.is_integer() and n % 2 == 1


def _truediv(left, right):
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _fmod(left, right):
    '''
    Remainder with the sign of the dividend, like C fmod.
    '''
    try:
        return math.fmod(left, right)
    except ValueError:
        # Zero divisor or infinite dividend
        return math.nan


def _pow(base, exponent):
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _odd(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            # Negative exponent
            if _odd(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # Negative base, fractional exponent
        return math.nan


def _sqrt(n):
    try:
        return math.sqrt(n)
    except ValueError:
        return math.nan


def _log2(n):
    try:
        return math.log2(n)
    except ValueError:
        if n == 0:
            return -math.inf
        return math.nan


def _inv(n):
    return _truediv(1.0, n)


def _integral(rounding):
    '''
    Float-valued floor/ceil; math's return ints and choke on inf and nan.
    '''
    def wrapped(n):
        if not math.isfinite(n):
            return n
        # Keep -0.0 for ceil(-0.5) and friends
        return math.copysign(float(rounding(n)), n)
    wrapped.__name__ = rounding.__name__
    wrapped.__doc__ = rounding.__doc__
    return wrapped


def _sum(values):
    # Plain left to right, no compensated summation
    return reduce(operator.__add__, values, 0.0)


def _prod(values):
    return reduce(operator.__mul__, values, 1.0)


def _parallel(values):
    '''
    Equivalent of resistances in parallel: 1 / (1/x1 + 1/x2 + ...).
    '''
    return _inv(_sum(map(_inv, values)))


class Machine:
    '''
    Arithmetic stack machine (RPN calculator).

    Takes tokens one at a time and runs them against a stack of floats.
    Never prints or logs while evaluating; bad tokens raise StakError and
    leave the stack as it was.
    '''

    LEXER = Lexer()

    # Binary operators. Left operand is the one pushed first.
    BINARY = {
        '+': operator.__add__,
        '-': operator.__sub__,
        '*': operator.__mul__,
        '/': _truediv,
        '^': _pow,
        '**': _pow,
        '%': _fmod,
    }

    UNARY = {
        'sqrt': _sqrt,
        'log2': _log2,
        'inv': _inv,
        'floor': _integral(math.floor),
        'ceil': _integral(math.ceil),
        'abs': math.fabs,
    }

    # Consume the entire stack, leave one value.
    REDUCTIONS = {
        'sum': _sum,
        'prod': _prod,
        '||': _parallel,
    }

    CONSTANTS = {
        'e': math.e,
        'pi': math.pi,
    }

    # Compound command prefix to (kind, default index when no suffix).
    COMPOUNDS = {
        '~': ('dupe', 0),
        '<<': ('rotl', 1),
        '>>': ('rotr', 1),
    }

    def __init__(self):
        '''
        Create empty stack machine.
        '''
        self._stack = deque()

    def __iter__(self):
        '''
        Iterate over the stack, bottom first.
        '''
        return iter(tuple(self._stack))

    def __len__(self):
        return len(self._stack)

    @property
    def values(self):
        '''
        Snapshot of the stack, bottom first.
        '''
        return tuple(self._stack)

    def apply_token(self, token):
        '''
        Run a single token against the stack.

        :param token: One token, no surrounding whitespace.
        :raises StakError: On any bad token; stack is left untouched.
        '''
        kind, argument = self.parse(token)
        if kind == 'number':
            self._pshstack(argument)
        elif kind == 'dupe':
            self.dupstack(argument)
        elif kind == 'rotl':
            self.rotstack(-argument)
        elif kind == 'rotr':
            self.rotstack(argument)
        else:
            self._apply(argument)

    def parse(self, token):
        '''
        Classify token into (kind, argument) without touching the stack.

        Kinds are number, dupe, rotl, rotr, and command.
        '''
        try:
            return 'number', float(token)
        except ValueError:
            pass
        match = self.LEXER.compound(token)
        if match is not None:
            kind, default = type(self).COMPOUNDS[match.group('prefix')]
            index = self.LEXER.index(match.group('suffix'))
            return kind, default if index is None else index
        if token in type(self).COMMANDS:
            return 'command', token
        raise InvalidToken(token)

    def arity(self, token):
        '''
        Return number of values token pops, None if it takes the whole stack.
        '''
        kind, argument = self.parse(token)
        if kind in {'number', 'dupe'}:
            return 0
        elif kind in {'rotl', 'rotr'}:
            return None
        cls = type(self)
        if argument in cls.BINARY:
            return 2
        elif argument in cls.UNARY:
            return 1
        elif argument in cls.CONSTANTS:
            return 0
        return cls.FUNCTION_ARITY[argument]

    def _apply(self, name):
        '''
        Run command by name, popping arguments as needed.

        Does the real work.
        '''
        cls = type(self)
        if name in cls.FUNCTIONS:
            cls.FUNCTIONS[name](self)
        elif name in cls.CONSTANTS:
            self._pshstack(cls.CONSTANTS[name])
        elif name in cls.REDUCTIONS:
            if not self._stack:
                raise StackEmpty()
            result = cls.REDUCTIONS[name](list(self._stack))
            self._stack.clear()
            self._pshstack(result)
        elif name in cls.UNARY:
            self._pshstack(cls.UNARY[name](*self._popstack(1)))
        else:
            # If you don't reverse, you'll do 2 - 5 when you say 5 2 -.
            args = reversed(self._popstack(2))
            self._pshstack(cls.BINARY[name](*args))

    def print_stack(self, fmt=format_number, file=None):
        '''
        Print all elements on the stack, bottom first, in brackets.

        :param fmt: Renders one value, SI prefixed by default.
        '''
        print(format_stack(self._stack, fmt), file=file)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self._stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.

        Checks before popping anything, so a short stack stays intact.
        '''
        if len(self._stack) < n:
            raise StackEmpty()
        return [self._stack.pop() for _ in range(n)]

    def clrstack(self):
        '''
        Clear everything from the stack.
        '''
        self._stack.clear()

    def dropstack(self):
        '''
        Discard element at top of stack, if any.
        '''
        if self._stack:
            self._stack.pop()

    def revstack(self):
        '''
        Swap two elements at top of stack. Nothing to do with less than two.
        '''
        if len(self._stack) >= 2:
            self._pshstack(*self._popstack(n=2))

    def dupstack(self, depth=0):
        '''
        Push a copy of the element depth places below the top.
        '''
        if not self._stack:
            raise StackEmpty()
        if depth >= len(self._stack):
            raise IndexOutOfRange(depth)
        self._pshstack(self._stack[-1 - depth])

    def rotstack(self, n):
        '''
        Rotate the entire stack by n, rightwards; negative goes left.
        '''
        if self._stack:
            self._stack.rotate(n % len(self._stack))

    # Stack management, by token.
    FUNCTIONS = {
        '.': dropstack,
        '..': clrstack,
        '<>': revstack,
    }
    FUNCTION_ARITY = {
        '.': 1,
        '..': None,
        '<>': 2,
        'sum': None,
        'prod': None,
        '||': None,
    }

    # Every fixed-name command.
    COMMANDS = set().union(FUNCTIONS, BINARY, UNARY, REDUCTIONS, CONSTANTS)
