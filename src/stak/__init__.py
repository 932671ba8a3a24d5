'''
stak: command line based RPN calculator.

Numbers, arithmetic operators and stack commands, one whitespace separated
token at a time, against a single stack of floats. Not intended to be
Turing-complete!

Run with tokens as arguments for a one-shot calculation, or without for an
interactive session. Stack values print with SI prefixes: 1024 shows as
1.024k, 0.5 as 500m.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine
from .util import (StakError, InvalidToken, StackEmpty, IndexOutOfRange,
                   InvalidIndex)


__all__ = ('Machine', 'Lexer', 'CLI', 'StakError', 'InvalidToken',
           'StackEmpty', 'IndexOutOfRange', 'InvalidIndex')
