# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
lexfa compiles an ordered set of token patterns into a single deterministic finite automaton,
and scans text with longest match semantics, breaking ties by declaration priority.

Pipeline: patterns -> RegexParser (Thompson NFA fragments) -> build_nfa (merge) -> build_dfa (subset construction)
-> minimize_dfa (partition refinement) -> scan / Scanner.
'''

from .alphabet import Alphabet, default_alphabet
from .build import DefinitionError, Pattern, build_dfa, build_nfa, compile_patterns, normalize_patterns
from .dfa import DFA, StateDesc, minimize_dfa
from .nfa import NFA, Fragment
from .parse import (CompileError, DanglingEscapeError, EmptyCharsetError, InvalidRangeError, OutsideAlphabetError,
  RegexParser, TrailingInputError, UnmatchedBracketError, UnmatchedParenError, UnterminatedStringError, parse_pattern)
from .scan import LexError, ScanCursor, Scanner, Token, scan, tokenize


__all__ = [
  'Alphabet',
  'CompileError',
  'DFA',
  'DanglingEscapeError',
  'DefinitionError',
  'EmptyCharsetError',
  'Fragment',
  'InvalidRangeError',
  'LexError',
  'NFA',
  'OutsideAlphabetError',
  'Pattern',
  'RegexParser',
  'ScanCursor',
  'Scanner',
  'StateDesc',
  'Token',
  'TrailingInputError',
  'UnmatchedBracketError',
  'UnmatchedParenError',
  'UnterminatedStringError',
  'build_dfa',
  'build_nfa',
  'compile_patterns',
  'default_alphabet',
  'minimize_dfa',
  'normalize_patterns',
  'parse_pattern',
  'scan',
  'tokenize',
]
