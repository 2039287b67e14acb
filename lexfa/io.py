# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Minimal printing helpers for diagnostics.
Debug and statistics output goes to stderr; regular output to stdout.
The standard streams are looked up at call time so that redirection is respected.
'''

import sys
from typing import Any, TextIO


def writeL(file:TextIO, *items:Any, sep='', flush=False) -> None:
  "Write `items` to file; sep='', end='\\n'."
  print(*items, sep=sep, end='\n', file=file, flush=flush)

def writeSL(file:TextIO, *items:Any, flush=False) -> None:
  "Write `items` to file; sep=' ', end='\\n'."
  print(*items, sep=' ', end='\n', file=file, flush=flush)


def outL(*items:Any, sep='', flush=False) -> None:
  "Write `items` to std out; sep='', end='\\n'."
  writeL(sys.stdout, *items, sep=sep, flush=flush)

def outZ(*items:Any, sep='', end='', flush=False) -> None:
  "Write `items` to std out; sep='', end=''."
  print(*items, sep=sep, end=end, file=sys.stdout, flush=flush)


def errL(*items:Any, sep='', flush=False) -> None:
  "Write `items` to std err; sep='', end='\\n'."
  writeL(sys.stderr, *items, sep=sep, flush=flush)

def errSL(*items:Any, flush=False) -> None:
  "Write `items` to std err; sep=' ', end='\\n'."
  writeSL(sys.stderr, *items, flush=flush)

def errZ(*items:Any, sep='', end='', flush=False) -> None:
  "Write `items` to std err; sep='', end=''."
  print(*items, sep=sep, end=end, file=sys.stderr, flush=flush)
