import os
import sys
import logging
import collections

from parser import tokenize, parse, optimize
from parser import INC, DEC, FORWARD, BACK, INPUT, OUTPUT, LOOP

FIELDS = {
    FORWARD: 'fwd',
    BACK: 'bwd',
    INC: 'inc',
    DEC: 'dec',
    OUTPUT: 'output',
    INPUT: 'input',
    LOOP: 'loop',
}


class Stats(collections.namedtuple('Stats', 'fwd bwd inc dec output input loop')):
    """Number of expression nodes of each kind in a tree."""
    __slots__ = ()

    def __new__(cls, fwd=0, bwd=0, inc=0, dec=0, output=0, input=0, loop=0):
        return super().__new__(cls, fwd, bwd, inc, dec, output, input, loop)


def merge(a, b):
    return Stats(*(x + y for x, y in zip(a, b)))

def stats(exprs):
    counts = collections.Counter(FIELDS[expr] for expr, value in exprs)
    acc = Stats(**counts)
    for expr, value in exprs:
        if expr == LOOP:
            acc = merge(acc, stats(value))
    return acc

if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get('BFDEBUG') else logging.WARNING)
    with open(sys.argv[1]) as bffile:
        exprs = optimize(parse(tokenize(bffile.read())))
    for name, count in stats(exprs)._asdict().items():
        print('%s: %d' % (name, count))
