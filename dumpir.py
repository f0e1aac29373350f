#!/usr/bin/env python

import os
import sys
import logging

from parser import tokenize, parse, optimize
from parser import INC, DEC, FORWARD, BACK, INPUT, OUTPUT, LOOP
from bfstats import stats


def format_ir(exprs, depth=0):
    indent = '  ' * depth
    for expr, value in exprs:
        if expr == INPUT:
            yield indent + 'input'
        elif expr == OUTPUT:
            yield indent + 'output'
        elif expr == LOOP:
            yield indent + 'loop'
            yield from format_ir(value, depth + 1)
            yield indent + 'endloop'
        elif expr == INC:
            yield indent + 'inc(count=%d)' % value
        elif expr == DEC:
            yield indent + 'dec(count=%d)' % value
        elif expr == FORWARD:
            yield indent + 'forward(count=%d)' % value
        elif expr == BACK:
            yield indent + 'back(count=%d)' % value
        else:
            yield indent + 'EXPR %r NOT HANDLED' % (expr,)

def dumpir(code):
    exprs = optimize(parse(tokenize(code)))
    for line in format_ir(exprs):
        print(line)
    print('; ' + ' '.join('%s=%d' % i for i in stats(exprs)._asdict().items()))

if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get('BFDEBUG') else logging.WARNING)
    with open(sys.argv[1]) as bffile:
        dumpir(bffile.read())
