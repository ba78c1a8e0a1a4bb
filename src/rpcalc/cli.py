from os import environ, isatty, path
import sys
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import RPCalcError
from .display import TerminalDisplay
from .lexer import Lexer
from .logging_config import setup_logging
from .machine import Machine
from .persistence import JSONStore, MemoryStore


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, toolbar=None, history=None):
        self.prompt = prompt
        self.toolbar = toolbar
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=self.history,
                                    # fix/sci, places, angle unit
                                    bottom_toolbar=self.toolbar,
                                    prompt_continuation=' ' * len(self.prompt),
                                    mouse_support=False,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.rpcalc_history'
    STATE_FILE = environ.get('RPCALC_STATE', '~/.rpcalc.json')
    # An empty line is the enter key, like on the real thing.
    EMPTY_LINE_KEY = 'ent'

    def dumper(self):
        '''
        Dump all lexemes matches and the keys they select.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<key>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                matched = match.group(0)  # the lexeme text itself
                groups = lexer.matchedgroups(match)
                key = Machine.KEYS.get(groups.get('key', '').lower())
                print(*groups.keys(),
                      repr(matched),
                      type(key).__name__ if key else '',
                      sep='\t')

    def executor(self):
        '''
        Run machine (RPN calculator).
        '''
        self.display = TerminalDisplay()
        self.machine = Machine(display=self.display, store=self._store())
        self._apply_options()
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                if not line.strip():
                    self.machine.press(self.EMPTY_LINE_KEY)
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        self.machine.press(match.group('key'))
            # Abort entire rest of line, makes sense anyway
            except RPCalcError as e:
                print(e.args[0], file=sys.stderr)
            print(*self.display.lines(), sep='\n', flush=True)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _store(self):
        if self.args.no_state:
            return MemoryStore()
        logger.debug('State in %s', self.args.state)
        return JSONStore(self.args.state)

    def _apply_options(self):
        options = {name: getattr(self.args, name)
                   for name
                   in ['show_registers', 'scientific', 'persist_stack',
                       'places', 'angle_unit']
                   if getattr(self.args, name) is not None}
        if options:
            self.machine.apply_options(**options)

    def _toolbar(self):
        return self.machine.status() if self.machine else ''

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    toolbar=self._toolbar,
                                    history=history)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.machine = None
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')

        state_groups = self.argument_parser.add_mutually_exclusive_group()
        state_groups.add_argument('-s', '--state',
                                  default=self.STATE_FILE,
                                  help='settings, memory and stack file')
        state_groups.add_argument('--no-state', action='store_true',
                                  help='neither load nor save state')

        options = self.argument_parser.add_argument_group('display options')
        options.add_argument('--places', type=int,
                             help='decimal places, 0 to 9')
        options.add_argument('--angle', dest='angle_unit',
                             choices=['deg', 'rad', 'grad'])
        for name, dest in [('sci', 'scientific'),
                           ('registers', 'show_registers'),
                           ('persist-stack', 'persist_stack')]:
            flags = options.add_mutually_exclusive_group()
            flags.add_argument('--' + name, dest=dest,
                               action='store_const', const=True)
            flags.add_argument('--no-' + name, dest=dest,
                               action='store_const', const=False)
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        setup_logging(logging.DEBUG if self.args.verbose else logging.WARNING)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
