from functools import reduce
import operator

import regex

from .util import InvalidIndex


class Lexer:
    '''
    Lexer for the stak *regular* grammar.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Stack commands taking an optional depth or count right after them.
    PREFIX = r'''
              (?:
                  # Duplicate at depth
                  ~
                  |
                  # Rotate left, rotate right
                  <<
                  |
                  >>
              )
              '''
    # Whatever follows the prefix. Validated separately, so that a bad suffix
    # is reported as a bad index rather than a bad token.
    SUFFIX = r'.*'
    COMPOUND = r'(?<prefix>' + PREFIX + r')(?<suffix>' + SUFFIX + r')'
    # Depth or count: unsigned decimal, optional leading plus. No minus, no
    # underscores.
    INDEX = r'\+?[0-9]+'
    SPACE = r'\s+'

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield all tokens, skipping empty ones.
        '''
        for token in regex.split(type(self).SPACE, line,
                                 flags=type(self).FLAGS):
            if token:
                yield token

    def compound(self, token):
        '''
        Return match with prefix and suffix groups, or None if not compound.
        '''
        return regex.fullmatch(type(self).COMPOUND, token,
                               flags=type(self).FLAGS)

    def index(self, suffix):
        '''
        Parse compound command suffix.

        None if empty, meaning the command's default. A leading + is fine,
        as in ~+2; a minus is not.
        '''
        if not suffix:
            return None
        if regex.fullmatch(type(self).INDEX, suffix,
                           flags=type(self).FLAGS) is None:
            raise InvalidIndex(suffix)
        try:
            return int(suffix)
        except ValueError:
            # Past the interpreter's digit limit for int()
            raise InvalidIndex(suffix)
