from os import isatty, path
from sys import stdin, stdout, exit
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import CalcError
from .machine import Machine
from .lexer import Lexer


class InteractiveInput:
    def __init__(self, prompt, toolbar=None, history_file=None):
        self.prompt = prompt
        self.toolbar = toolbar
        self.history_file = history_file

    def __iter__(self):
        try:
            history = None
            if self.history_file is not None:
                history = FileHistory(path.expanduser(self.history_file))
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    # Persistent
                                    history=history,
                                    # Pending operation, e.g. 12 ×
                                    bottom_toolbar=self.toolbar,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.

    Every input line is a run of keys (see Lexer); the display is printed
    after each line.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.pocketcalc_history'

    def dumper(self):
        '''
        Dump all lexemes matches and the actions they parse to.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<action>')
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    matched = match.group(0)  # the lexeme text itself
                    groups = lexer.matchedgroups(match)
                    action = lexer.parse(groups) \
                        if lexer.isfeedable(match) else None
                    print(*groups.keys(),
                          repr(matched),
                          action,
                          sep='\t')
            except CalcError as e:
                print(e.args[0], file=sys.stderr)

    def executor(self):
        '''
        Run machine (calculator).
        '''
        machine = self.machine
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                for action in lexer.actions(line):
                    machine.apply(action)
                    if self.args.verbose:
                        print(action, machine.state, file=sys.stderr)
            # Abort entire rest of line, keys already pressed stay pressed
            except CalcError as e:
                print(e.args[0], file=sys.stderr)
            self.show(machine.view())

    def show(self, view):
        '''
        Print the display, after the pending operation if asked to.
        '''
        if self.args.show_history:
            print(view.history, view.display, sep='\t')
        else:
            print(view.display)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _toolbar(self):
        return self.machine.view().history

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    toolbar=self._toolbar,
                                    history_file=self.HISTORY_FILE)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.machine = Machine()
        self.argument_parser = ArgumentParser(
            description='Four function calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='trace every key to stderr')
        self.argument_parser.add_argument('-H', '--show-history',
                                          action='store_true',
                                          help='print the pending operation '
                                               'before the display')
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
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
