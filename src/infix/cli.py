from os import isatty
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import traceback

from prompt_toolkit import PromptSession

from .util import EvaluationError
from .evaluator import Evaluator, mapping_resolver
from .values import normalize, parse_number, to_text


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


def definition(text):
    '''
    Parse a NAME=VALUE command line definition.
    '''
    name, sep, value = text.partition('=')
    if not sep or not name.strip():
        raise ValueError(text)
    value = value.strip()
    number = parse_number(value)
    return name.strip(), normalize(value if number is None else number)


class CLI:
    '''
    Command line interface to the expression evaluator.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all lexemes matched, with their kind.
        '''
        lexer = self.evaluator().lexer
        print('<kind>\t<repr(lexeme)>')
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line.rstrip('\n')):
                    if lexer.isfeedable(match):
                        print(lexer.kind(match), repr(match.group(0)),
                              sep='\t')
            except EvaluationError as e:
                self.report(e)

    def executor(self):
        '''
        Evaluate each line, printing its value.
        '''
        evaluator = self.evaluator()
        for line in self.args.expressions:
            if not line.strip():
                continue
            try:
                print(to_text(evaluator.evaluate(line.strip())))
            # Abort the line; the next one gets a clean slate anyway.
            except EvaluationError as e:
                self.report(e)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(self.evaluator().lexer.LEXEME)

    def report(self, error):
        # FIXME: prompt_toolkit moves the cursor when writing to stderr
        # underneath it.
        if self.args.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__, file=sys.stderr)
        else:
            print(error.message, file=sys.stderr)

    def evaluator(self):
        return Evaluator(mapping_resolver(dict(self.args.definitions)),
                         max_depth=self.args.max_depth)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Infix expression '
                                                          'evaluator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-d', '--define',
                                          metavar='NAME=VALUE',
                                          type=definition,
                                          action='append',
                                          dest='definitions',
                                          default=[])
        self.argument_parser.add_argument('--max-depth',
                                          type=int,
                                          default=Evaluator.DEFAULT_MAX_DEPTH)
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
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)


def main():
    CLI().run()
