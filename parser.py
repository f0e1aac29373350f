import collections
import logging

logger = logging.getLogger(__name__)

# Token kinds
PROGRAM_START=0
PROGRAM_END=1
LOOP_START=2
LOOP_END=3

# Shared by tokens and expressions
INC=4
DEC=5
FORWARD=6
BACK=7
INPUT=8
OUTPUT=9

# Expression only
LOOP=10

MERGEABLE = (INC, DEC, FORWARD, BACK)

OPCODES = {
    '[': LOOP_START,
    ']': LOOP_END,
    '>': FORWARD,
    '<': BACK,
    '+': INC,
    '-': DEC,
    '.': OUTPUT,
    ',': INPUT,
}

Token = collections.namedtuple('Token', 'kind pos')
Expr = collections.namedtuple('Expr', 'kind value')


class BFError(Exception):
    """Base class for all errors raised while loading or running a program."""


class InvalidProgramError(BFError):
    """The brackets of the program do not balance."""

    def __init__(self, pos):
        super().__init__(pos)
        self.pos = pos


class ExcessiveOpeningBrackets(InvalidProgramError):
    def __str__(self):
        return 'unmatched "[" at position %d' % self.pos


class UnexpectedClosingBracket(InvalidProgramError):
    def __str__(self):
        return 'unexpected "]" at position %d' % self.pos


def tokenize(code):
    tokens = [Token(PROGRAM_START, None)]
    for pos, char in enumerate(code):
        if char in OPCODES:
            tokens.append(Token(OPCODES[char], pos))
    tokens.append(Token(PROGRAM_END, None))
    logger.debug('tokenized %d characters into %d tokens',
                 len(code), len(tokens))
    return tokens

def parse(tokens):
    """Build the expression tree for a token sequence.

    Raises UnexpectedClosingBracket for a "]" with no open loop and
    ExcessiveOpeningBrackets when the program ends inside a loop. The
    first error found is the one raised.
    """
    exprs = _parse(iter(tokens), None)
    logger.debug('parsed %d top level expressions', len(exprs))
    return exprs

def _parse(tokens, opened):
    # opened is the LOOP_START token of the enclosing loop, None at top level.
    # Every level shares the same iterator, so a nested call leaves it
    # just past the "]" it consumed.
    exprs = []
    for token, pos in tokens:
        if token == LOOP_START:
            exprs.append(Expr(LOOP, _parse(tokens, Token(token, pos))))
        elif token == LOOP_END:
            if opened is None:
                raise UnexpectedClosingBracket(pos)
            return exprs
        elif token in (INPUT, OUTPUT):
            exprs.append(Expr(token, None))
        elif token in MERGEABLE:
            exprs.append(Expr(token, 1))
        elif token == PROGRAM_END:
            if opened is not None:
                raise ExcessiveOpeningBrackets(opened.pos)
        elif token != PROGRAM_START:
            raise ValueError('What is this ' + str(token) + ' doing here?')

    # Token sequences without a PROGRAM_END sentinel still need balancing
    if opened is not None:
        raise ExcessiveOpeningBrackets(opened.pos)
    return exprs

def optimize(exprs):
    # Fold runs of the same unit step into one node with a count. Only
    # count-1 nodes are folded in, so a second pass changes nothing.
    newexprs = []
    for expr, value in exprs:
        if expr == LOOP:
            newexprs.append(Expr(LOOP, optimize(value)))
        elif (expr in MERGEABLE and value == 1 and
              newexprs and newexprs[-1].kind == expr):
            newexprs[-1] = Expr(expr, newexprs[-1].value + 1)
        else:
            newexprs.append(Expr(expr, value))
    return newexprs
