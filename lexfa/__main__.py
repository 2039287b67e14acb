#!/usr/bin/env python3
# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from argparse import ArgumentParser, Namespace
from sys import exit

from .alphabet import Alphabet
from .build import DefinitionError, build_dfa, build_nfa, normalize_patterns
from .dfa import DFA, minimize_dfa
from .io import errL, errZ, outL, outZ
from .nfa import NFA
from .parse import CompileError
from .scan import LexError, Scanner, error_policies


def main(argv:list[str]|None=None) -> None:
  parser = ArgumentParser(prog='lexfa', description='Compile token patterns to a DFA and scan strings with it.')
  parser.add_argument('-patterns', nargs='+', required=True, metavar='KIND=REGEX',
    help='Token patterns in priority order (first declared wins ties).')
  parser.add_argument('-match', nargs='+', default=[], metavar='STRING', help='Scan each argument string.')
  parser.add_argument('-check', action='store_true',
    help='Cross-check the NFA, DFA and minimized DFA against each `-match` string as a whole.')
  parser.add_argument('-on-error', choices=error_policies, default='abort', help='Lexical error policy.')
  parser.add_argument('-drop', nargs='+', default=[], metavar='KIND', help='Token kinds to omit from the output.')
  parser.add_argument('-alphabet', nargs=2, type=int, metavar=('LO', 'HI'),
    help='Alphabet code range [LO, HI); tab, newline and carriage return are always included.')
  parser.add_argument('-fat', action='store_true', help='Scan with the unminimized DFA.')
  parser.add_argument('-table', action='store_true', help='Print the transition table of the scanning DFA.')
  parser.add_argument('-stats', action='store_true', help='Print statistics about the generated automata.')
  parser.add_argument('-dbg', action='store_true', help='Verbose debug printing.')
  args = parser.parse_args(argv)

  try: alphabet = Alphabet(*args.alphabet) if args.alphabet else Alphabet()
  except ValueError as e: exit(f'lexfa error: {e}')

  try:
    patterns = normalize_patterns(parse_pattern_arg(arg) for arg in args.patterns)
    nfa = build_nfa(patterns, alphabet=alphabet)
  except DefinitionError as e: exit(f'lexfa error: {e}')
  except CompileError as e:
    errZ(e.diagnostic())
    exit(1)

  if args.dbg: nfa.describe('NFA')
  if args.dbg or args.stats: nfa.describe_stats('NFA Stats')
  for msg in nfa.validate():
    errL(msg)

  fat_dfa = build_dfa(nfa)
  if args.dbg: fat_dfa.describe('Fat DFA')
  if args.dbg or args.stats: fat_dfa.describe_stats('Fat DFA Stats')

  min_dfa = minimize_dfa(fat_dfa)
  if args.dbg: min_dfa.describe('Min DFA')
  if args.dbg or args.stats: min_dfa.describe_stats('Min DFA Stats')

  dfa = fat_dfa if args.fat else min_dfa
  if args.table: outZ(dfa.transition_table())

  status = 0
  for string in args.match:
    if args.check: check_string(nfa, fat_dfa, min_dfa, string)
    if not scan_string(dfa, string, args): status = 1
  exit(status)


def parse_pattern_arg(arg:str) -> tuple[str,str]:
  kind, sep, regex = arg.partition('=')
  if not sep: exit(f'lexfa error: pattern argument must have the form KIND=REGEX: {arg!r}')
  return (regex, kind)


def scan_string(dfa:DFA, string:str, args:Namespace) -> bool:
  'Print the tokens of `string`; return False if scanning aborted or reported errors.'
  outL(f'\nmatch: {string!r}')
  try: scanner = Scanner(dfa, string, on_error=args.on_error, drop=args.drop, name='match')
  except ValueError as e: exit(f'lexfa error: {e}')
  try:
    for token in scanner:
      outL(f'  {token}: {token.text!r}')
  except LexError as e:
    errZ(e.diagnostic())
    return False
  for e in scanner.errors:
    errZ(e.diagnostic())
  return not scanner.errors


def check_string(nfa:NFA, fat_dfa:DFA, min_dfa:DFA, string:str) -> None:
  'Test `nfa`, `fat_dfa`, and `min_dfa` against each other by attempting to match all of `string`.'
  nfa_match = nfa.match(string)
  fat_dfa_match = fat_dfa.match(string)
  if fat_dfa_match != nfa_match:
    exit(f'match: {string!r} inconsistent match: NFA: {nfa_match}; fat DFA: {fat_dfa_match}.')
  min_dfa_match = min_dfa.match(string)
  if min_dfa_match != nfa_match:
    exit(f'match: {string!r} inconsistent match: NFA: {nfa_match}; min DFA: {min_dfa_match}.')
  outL(f'check: {string!r} -> {nfa_match or "no match"}')


if __name__ == '__main__': main()
