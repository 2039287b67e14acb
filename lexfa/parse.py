# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Recursive descent parser for token patterns.
Each pattern is parsed directly into a Thompson fragment within a shared NFA arena.

Grammar, from loosest to tightest binding:
  choice  : seq ('|' seq)*
  seq     : factor*                  (the empty sequence matches the empty string)
  factor  : base ('*' | '+' | '?')*
  base    : '(' choice ')' | charset | string | '\\' any | any
  charset : '[' '^'? (item | item '-' item)* ']'
  string  : '"' ('\\' any | any)* '"'

Escapes `\\n`, `\\t` and `\\r` denote newline, tab and carriage return;
any other escaped character denotes itself.
'''

from typing import NoReturn

from .alphabet import Alphabet, code_desc, default_alphabet
from .nfa import Fragment, NFA
from .source import Source


class CompileError(Exception):
  'A malformed pattern. `pos` is the offset of the error within the pattern text.'

  desc = 'invalid pattern'

  def __init__(self, pattern:str, pos:int, msg:str='', kind:str='') -> None:
    self.pattern = pattern
    self.pos = pos
    self.msg = msg or self.desc
    self.kind = kind
    super().__init__(pattern, pos, self.msg, kind)

  def __str__(self) -> str:
    k = f'{self.kind}: ' if self.kind else ''
    return f'{k}{self.msg} at offset {self.pos}: {self.pattern!r}'

  def diagnostic(self) -> str:
    end = min(self.pos + 1, len(self.pattern))
    return Source(name=self.kind or '<pattern>', text=self.pattern).diagnostic_for_pos(self.pos, end=end, msg=self.msg)


class UnmatchedParenError(CompileError):
  desc = 'unmatched parenthesis'

class UnmatchedBracketError(CompileError):
  desc = 'unmatched bracket'

class TrailingInputError(CompileError):
  desc = 'unexpected trailing input'

class DanglingEscapeError(CompileError):
  desc = 'dangling escape at end of pattern'

class UnterminatedStringError(CompileError):
  desc = 'unterminated string literal'

class EmptyCharsetError(CompileError):
  desc = 'empty character class'

class InvalidRangeError(CompileError):
  desc = 'invalid character range'

class OutsideAlphabetError(CompileError):
  desc = 'character is outside of the alphabet'


escape_codes:dict[str,int] = {
  'n': ord('\n'),
  'r': ord('\r'),
  't': ord('\t'),
}


class RegexParser:

  def __init__(self, nfa:NFA, pattern:str, *, alphabet:Alphabet=default_alphabet, kind:str='') -> None:
    self.nfa = nfa
    self.pattern = pattern
    self.alphabet = alphabet
    self.kind = kind
    self.pos = 0


  def parse(self) -> Fragment:
    'Parse the entire pattern, returning its fragment or raising a CompileError subclass.'
    fragment = self.parse_choice()
    if self.pos < len(self.pattern): # Only an unbalanced `)` stops the choice before the end.
      self.fail(TrailingInputError, msg=f'unexpected trailing input: {self.pattern[self.pos:]!r}')
    return fragment


  def parse_choice(self) -> Fragment:
    fragment = self.parse_seq()
    while self.match('|'):
      fragment = self.nfa.union(fragment, self.parse_seq())
    return fragment


  def parse_seq(self) -> Fragment:
    fragment:Fragment|None = None
    while self.pos < len(self.pattern) and self.peek() not in '|)':
      factor = self.parse_factor()
      fragment = factor if fragment is None else self.nfa.concat(fragment, factor)
    return self.nfa.epsilon() if fragment is None else fragment


  def parse_factor(self) -> Fragment:
    fragment = self.parse_base()
    while True:
      if self.match('*'): fragment = self.nfa.star(fragment)
      elif self.match('+'): fragment = self.nfa.plus(fragment)
      elif self.match('?'): fragment = self.nfa.optional(fragment)
      else: return fragment


  def parse_base(self) -> Fragment:
    char = self.peek()
    if char == '(':
      open_pos = self.pos
      self.pos += 1
      fragment = self.parse_choice()
      if not self.match(')'): self.fail(UnmatchedParenError, pos=open_pos, msg='unmatched `(`')
      return fragment
    if char == '[': return self.parse_charset()
    if char == ']': self.fail(UnmatchedBracketError, msg='unmatched `]`')
    if char == '"': return self.parse_string()
    pos = self.pos
    return self.nfa.literal(self.check_code(self.consume_code(), pos))


  def parse_charset(self) -> Fragment:
    open_pos = self.pos
    self.pos += 1 # '['.
    negate = self.match('^')
    codes:set[int] = set()
    while True:
      if self.pos >= len(self.pattern): self.fail(UnmatchedBracketError, pos=open_pos, msg='unmatched `[`')
      if self.match(']'): break
      lo_pos = self.pos
      lo = self.check_code(self.consume_code(), lo_pos)
      if self.peek() == '-' and self.peek(1) not in ('', ']'):
        self.pos += 1 # '-'.
        hi_pos = self.pos
        hi = self.check_code(self.consume_code(), hi_pos)
        if hi < lo:
          self.fail(InvalidRangeError, pos=lo_pos, msg=f'invalid character range: {code_desc(lo)}-{code_desc(hi)}')
        codes.update(c for c in range(lo, hi + 1) if c in self.alphabet)
      else:
        codes.add(lo)
    if negate: codes = set(self.alphabet.complement(codes))
    if not codes: self.fail(EmptyCharsetError, pos=open_pos)
    return self.nfa.charset(codes)


  def parse_string(self) -> Fragment:
    open_pos = self.pos
    self.pos += 1 # '"'.
    fragment:Fragment|None = None
    while True:
      if self.pos >= len(self.pattern): self.fail(UnterminatedStringError, pos=open_pos)
      if self.match('"'): break
      pos = self.pos
      lit = self.nfa.literal(self.check_code(self.consume_code(), pos))
      fragment = lit if fragment is None else self.nfa.concat(fragment, lit)
    return self.nfa.epsilon() if fragment is None else fragment


  # Utilities.

  def peek(self, offset:int=0) -> str:
    'Return the character at the current position plus `offset`, or the empty string past the end.'
    i = self.pos + offset
    return self.pattern[i] if i < len(self.pattern) else ''


  def match(self, char:str) -> bool:
    if self.peek() == char:
      self.pos += 1
      return True
    return False


  def consume_code(self) -> int:
    'Consume a single character or escape sequence and return its code.'
    char = self.pattern[self.pos]
    if char == '\\':
      if self.pos + 1 >= len(self.pattern): self.fail(DanglingEscapeError)
      escaped = self.pattern[self.pos + 1]
      self.pos += 2
      try: return escape_codes[escaped]
      except KeyError: return ord(escaped)
    self.pos += 1
    return ord(char)


  def check_code(self, code:int, pos:int) -> int:
    if code not in self.alphabet:
      self.fail(OutsideAlphabetError, pos=pos, msg=f'character is outside of the alphabet: {chr(code)!r}')
    return code


  def fail(self, error_type:type[CompileError], pos:int|None=None, msg:str='') -> NoReturn:
    raise error_type(self.pattern, self.pos if pos is None else pos, msg, kind=self.kind)


def parse_pattern(nfa:NFA, pattern:str, *, alphabet:Alphabet=default_alphabet, kind:str='') -> Fragment:
  'Parse `pattern` into a new fragment of `nfa`.'
  return RegexParser(nfa, pattern, alphabet=alphabet, kind=kind).parse()
