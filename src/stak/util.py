class StakError(Exception):
    '''
    Root of every error the machine reports to its driver.

    The stack is left untouched and usable after any of these.
    '''
    message = 'stak error'

    def __str__(self):
        return self.message


class InvalidToken(StakError):
    '''
    Token matched no number, compound command, or command name.
    '''
    def __init__(self, token):
        super().__init__(token)
        self.token = token

    def __str__(self):
        return 'invalid token `{}`'.format(self.token)


class StackEmpty(StakError):
    '''
    Operation needed more values than the stack holds.
    '''
    message = 'not enough values on the stack'


class IndexOutOfRange(StakError):
    def __init__(self, index):
        super().__init__(index)
        self.index = index

    def __str__(self):
        return 'index {} is out of range'.format(self.index)


class InvalidIndex(StakError):
    '''
    Suffix of a compound command isn't a non-negative integer.
    '''
    def __init__(self, text):
        super().__init__(text)
        self.text = text

    def __str__(self):
        return 'index `{}` is invalid'.format(self.text)
