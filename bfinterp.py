import io
import os
import sys
import logging

import getch

from parser import tokenize, parse, optimize
from parser import INC, DEC, FORWARD, BACK, INPUT, OUTPUT, LOOP
from parser import BFError

logger = logging.getLogger(__name__)

TAPE_SIZE = 30000


class BFIOError(BFError):
    """Reading from or writing to a program stream failed."""


class InputExhausted(BFIOError):
    def __str__(self):
        return 'end of input reached while reading a byte'


class OutOfRangeAccess(BFError):
    def __init__(self, ptr, size):
        super().__init__(ptr, size)
        self.ptr = ptr
        self.size = size

    def __str__(self):
        return 'cell %d is outside the tape (size %d)' % (self.ptr, self.size)


class Tape:
    """Cells of the program memory and the pointer into them.

    Moving the pointer is never checked; touching a cell while the
    pointer is off either end raises OutOfRangeAccess.
    """

    def __init__(self, size=TAPE_SIZE):
        self.cells = bytearray(size)
        self.ptr = 0

    @classmethod
    def from_cells(cls, cells):
        tape = cls(0)
        tape.cells = bytearray(cells)
        return tape

    def __len__(self):
        return len(self.cells)

    def _check(self):
        if not 0 <= self.ptr < len(self.cells):
            raise OutOfRangeAccess(self.ptr, len(self.cells))

    def forward(self, n=1):
        self.ptr += n

    def backward(self, n=1):
        self.ptr -= n

    def increment(self, n=1):
        self._check()
        self.cells[self.ptr] = (self.cells[self.ptr] + n) % 256

    def decrement(self, n=1):
        self._check()
        self.cells[self.ptr] = (self.cells[self.ptr] - n) % 256

    def read(self):
        self._check()
        return self.cells[self.ptr]

    def write(self, value):
        self._check()
        self.cells[self.ptr] = value % 256


def read_byte(infile=None):
    if infile is None and not sys.stdin.isatty():
        infile = sys.stdin.buffer
    try:
        if infile is None:
            # One keystroke at a time, without waiting for a newline
            data = getch.getch()
        else:
            data = infile.read(1)
    except OSError as e:
        raise BFIOError('reading input failed: %s' % e) from e
    if not data:
        raise InputExhausted()
    return _byte_value(data)

def write_byte(value, outfile=None):
    if outfile is None:
        outfile = sys.stdout.buffer
    value %= 256
    try:
        if isinstance(outfile, io.TextIOBase):
            if hasattr(outfile, 'buffer'):
                # Bypass the encoder so the byte goes out unchanged
                outfile.flush()
                outfile.buffer.write(bytes((value,)))
                outfile.buffer.flush()
            else:
                # In-memory text: one character per byte, as latin-1
                outfile.write(chr(value))
        else:
            outfile.write(bytes((value,)))
        outfile.flush()
    except OSError as e:
        raise BFIOError('writing output failed: %s' % e) from e

def _byte_value(data):
    if isinstance(data, str):
        return ord(data) % 256
    return data[0]

def execute(exprs, infile=None, outfile=None, size=TAPE_SIZE):
    """Run an expression tree on a fresh tape and return the final tape."""
    tape = Tape(size)
    logger.debug('executing on a tape of %d cells', size)
    _execute(exprs, tape, infile, outfile)
    return tape

def _execute(exprs, tape, infile, outfile):
    for expr, value in exprs:
        if expr == FORWARD:
            tape.forward(value)
        elif expr == BACK:
            tape.backward(value)
        elif expr == INC:
            tape.increment(value)
        elif expr == DEC:
            tape.decrement(value)
        elif expr == OUTPUT:
            write_byte(tape.read(), outfile)
        elif expr == INPUT:
            tape.write(read_byte(infile))
        elif expr == LOOP:
            while tape.read():
                _execute(value, tape, infile, outfile)
        else:
            raise ValueError('Expression not handled')

def interp(code, infile=None, outfile=None, optimized=True, size=TAPE_SIZE):
    exprs = parse(tokenize(code))
    if optimized:
        exprs = optimize(exprs)
    return execute(exprs, infile, outfile, size)

if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get('BFDEBUG') else logging.WARNING)
    with open(sys.argv[1]) as bffile:
        interp(bffile.read())
