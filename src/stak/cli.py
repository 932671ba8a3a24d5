from os import path
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory

from .util import StakError
from .machine import Machine
from .lexer import Lexer
from .number import format as format_number


log = logging.getLogger(__name__)


def _isnumber(arg):
    try:
        float(arg)
    except ValueError:
        return False
    return True


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def _history(self):
        if self.history is None:
            return InMemoryHistory()
        return FileHistory(path.expanduser(self.history))

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    history=self._history(),
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the stak calculator.
    '''

    DEFAULT_PROMPT = '> '
    # Lines that end an interactive session, besides EOF.
    QUIT = {'q', 'quit', 'exit'}
    # Options followed by a value, always or unless it looks like an option.
    VALUED = {'--history'}
    MAYBE_VALUED = {'-p', '--prompt'}

    def dumper(self):
        '''
        Dump every token with its kind and arity, without running anything.
        '''
        machine = Machine()
        lexer = Lexer()
        print('<kind>\t<repr(token)>\t<arity>')
        for line in self._lines():
            for token in lexer.lex(line):
                try:
                    kind, _ = machine.parse(token)
                    arity = machine.arity(token)
                except StakError as e:
                    kind, arity = 'invalid', e
                print(kind, repr(token), arity, sep='\t')

    def executor(self):
        '''
        Run machine (RPN calculator).

        One-shot if tokens were given on the command line, interactive
        otherwise.
        '''
        if self.args.tokens:
            return self._oneshot()
        return self._interactive()

    def _feed(self, machine, line):
        '''
        Apply every token of line, stopping on the first bad one.

        Return whether the whole line went through.
        '''
        for token in self.lexer.lex(line):
            log.debug('token %r', token)
            try:
                machine.apply_token(token)
            # Abort entire rest of line, makes sense anyway
            except StakError as e:
                log.debug('rejected %r', token, exc_info=True)
                print('Error: {}'.format(e), file=sys.stderr)
                return False
            log.debug('stack %r', machine.values)
        return True

    def _interactive(self):
        machine = Machine()
        for line in self._prompting_input():
            if line.strip() in type(self).QUIT:
                break
            self._feed(machine, line)
            machine.print_stack(self._fmt())

    def _oneshot(self):
        '''
        Each argument is a line; first error is fatal.
        '''
        machine = Machine()
        for line in self.args.tokens:
            if not self._feed(machine, line):
                sys.exit(1)
        machine.print_stack(self._fmt())

    def _fmt(self):
        return repr if self.args.raw else format_number

    def _lines(self):
        if self.args.tokens:
            return self.args.tokens
        return self._prompting_input()

    def _guard_numbers(self, args):
        '''
        Put -- in front of a leading token argparse would take for an option.

        argparse only knows plain negative integers and decimals as numbers,
        so -1e5 or -inf first in line is an unrecognized option otherwise.
        '''
        args = list(args)
        i = 0
        while i < len(args):
            arg = args[i]
            if arg in {'-', '--'} or not arg.startswith('-'):
                break
            if _isnumber(arg):
                args.insert(i, '--')
                break
            if arg in type(self).VALUED:
                i += 1
            elif arg in type(self).MAYBE_VALUED and i + 1 < len(args) and \
                    not args[i + 1].startswith('-'):
                i += 1
            i += 1
        return args

    def _prompting_input(self):
        '''
        Return a prompting session, or plain stdin.

        Prompts if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=self.args.history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.lexer = Lexer()
        self.argument_parser = ArgumentParser(
            prog='stak',
            description='Command line based RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log every token and stack')
        self.argument_parser.add_argument('-r', '--raw',
                                          action='store_true',
                                          help='print values unprefixed')
        self.argument_parser.add_argument('-p', '--prompt',
                                          nargs=OPTIONAL,
                                          const=self.DEFAULT_PROMPT,
                                          help='force interactive prompt')
        self.argument_parser.add_argument('--history',
                                          metavar='FILE',
                                          help='keep input history in FILE')
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action',
                                          help='show how tokens parse')
        # REMAINDER, so that tokens after the first never look like options.
        # A leading one gets a -- from _guard_numbers.
        self.argument_parser.add_argument('tokens',
                                          nargs=REMAINDER,
                                          metavar='TOKEN',
                                          help='numbers and operators')
        self.argument_parser.set_defaults(action=self.executor)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        if args is None:
            args = sys.argv[1:]
        self.args = self.argument_parser.parse_args(self._guard_numbers(args))
        if self.args.tokens[:1] == ['--']:
            del self.args.tokens[0]
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(name)s: %(levelname)s: %(message)s',
            stream=sys.stderr)
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)


def main():
    CLI().run()
