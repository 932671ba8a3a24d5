'''
SI prefix display of stack values.

Purely cosmetic: nothing in here feeds back into evaluation.
'''

from collections import OrderedDict, namedtuple
import math


class Number(namedtuple('Number', 'value symbol factor')):
    '''
    Value scaled down by an SI prefix: value * factor is the real number.
    '''

    # Largest first; first fit wins.
    PREFIXES = OrderedDict([
        ('Y', 1e24),
        ('Z', 1e21),
        ('E', 1e18),
        ('T', 1e15),
        ('P', 1e12),
        ('G', 1e9),
        ('M', 1e6),
        ('k', 1e3),
        ('', 1e0),
        ('m', 1e-3),
        ('u', 1e-6),
        ('n', 1e-9),
        ('p', 1e-12),
        ('f', 1e-15),
        ('a', 1e-18),
        ('z', 1e-21),
        ('y', 1e-24),
    ])

    @classmethod
    def from_float(cls, n):
        '''
        Pick the prefix that brings n into [1, 1000).

        Zero, negatives, NaN, infinities and anything too big or too small
        for every prefix come back unscaled.
        '''
        for symbol, factor in cls.PREFIXES.items():
            x = n / factor
            if 1 <= x < 1000:
                return cls(x, symbol, factor)
        return cls(n, '', 1e0)

    def __float__(self):
        return self.value * self.factor

    def __str__(self):
        return _plain(self.value) + self.symbol


def _plain(value):
    # 6.0 as 6, like a calculator would
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def format(value):
    '''
    Render one stack value with an SI prefix, e.g. 1024 as 1.024k.
    '''
    return str(Number.from_float(value))


def format_stack(values, fmt=format):
    '''
    Render values bottom to top, in brackets.
    '''
    return '[' + ', '.join(map(fmt, values)) + ']'
