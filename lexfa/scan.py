# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Maximal munch scanning over a compiled DFA.

From the current offset, the scanner walks the DFA one character at a time,
recording the end offset and kind each time an accepting node is entered.
It stops at the end of input or when the current node has no transition for the next character,
then emits a token for the last record.
If nothing was recorded, no pattern matches at that offset and a LexError is raised, consuming nothing.
'''

from dataclasses import dataclass
from typing import Container, Iterator, Literal

from .dfa import DFA
from .source import Source


ErrorPolicy = Literal['abort', 'skip', 'invalid']
error_policies:tuple[str,...] = ('abort', 'skip', 'invalid')


@dataclass(frozen=True)
class Token:
  kind:str
  text:str
  pos:int

  def __str__(self) -> str:
    return f'{self.pos}-{self.end}:{self.kind}'

  @property
  def end(self) -> int: return self.pos + len(self.text)

  @property
  def length(self) -> int: return len(self.text)


class LexError(Exception):
  'No pattern matches any prefix of the input at `pos`.'

  def __init__(self, text:str, pos:int, name:str='') -> None:
    self.text = text
    self.pos = pos
    self.name = name
    self.context = Source(name, text).snippet(pos)
    super().__init__(pos, self.context)

  def __str__(self) -> str:
    n = f'{self.name}: ' if self.name else ''
    return f'{n}lexical error at offset {self.pos}: no pattern matches; context: {self.context!r}'

  def diagnostic(self) -> str:
    return Source(self.name, self.text).diagnostic_for_pos(self.pos, end=self.pos+1, msg='no pattern matches')


class ScanCursor:
  'The current offset into an input text; the cursor does not own the text.'

  __slots__ = ('text', 'pos')

  def __init__(self, text:str, pos:int=0) -> None:
    if not (0 <= pos <= len(text)): raise IndexError(pos)
    self.text = text
    self.pos = pos

  def __repr__(self) -> str:
    return f'{type(self).__name__}(pos={self.pos}, len={len(self.text)})'


def scan(dfa:DFA, text:str, pos:int, *, eof_kind:str='EOF', name:str='') -> tuple[Token,int]:
  '''
  Scan a single token starting at `pos`; return the token and the new cursor offset.
  At the end of the text, return a zero-length `eof_kind` token and the same offset.
  '''
  len_text = len(text)
  if pos == len_text: return (Token(kind=eof_kind, text='', pos=pos), pos)
  if not (0 <= pos < len_text): raise IndexError(pos)
  transitions = dfa.transitions
  match_node_kinds = dfa.match_node_kinds

  node = dfa.start_node
  end:int|None = None
  kind = ''
  i = pos
  while i < len_text:
    try: node = transitions[node][ord(text[i])]
    except KeyError: break
    i += 1
    try: kind = match_node_kinds[node]
    except KeyError: pass
    else: end = i
  if end is None: raise LexError(text, pos, name=name) # Never reached a match node.
  return (Token(kind=kind, text=text[pos:end], pos=pos), end)


class Scanner(Iterator[Token]):
  '''
  Iterate over the tokens of `text`, ending with a single `eof_kind` token.

  `on_error` selects the lexical error policy:
  * 'abort': raise the LexError, leaving the cursor at the failing offset.
  * 'skip': record the error in `errors`, skip one character, and retry.
  * 'invalid': record the error and emit a single character token of `invalid_kind`.
  Tokens whose kind is in `drop` are consumed but not emitted; this includes `invalid_kind`.
  `eof_kind` and, under the 'invalid' policy, `invalid_kind` must not collide with a pattern kind of `dfa`.
  '''

  def __init__(self, dfa:DFA, text:str, *, pos:int=0, on_error:ErrorPolicy='abort', drop:Container[str]=(),
   eof_kind:str='EOF', invalid_kind:str='invalid', name:str='') -> None:
    if on_error not in error_policies:
      raise ValueError(f'invalid error policy: {on_error!r}; expected one of {error_policies}')
    pattern_kinds = set(dfa.match_node_kinds.values())
    if eof_kind in pattern_kinds:
      raise ValueError(f'end of input kind collides with a pattern kind: {eof_kind!r}')
    if on_error == 'invalid':
      if invalid_kind in pattern_kinds:
        raise ValueError(f'invalid token kind collides with a pattern kind: {invalid_kind!r}')
      if invalid_kind == eof_kind:
        raise ValueError(f'invalid token kind is the same as the end of input kind: {invalid_kind!r}')
    self.dfa = dfa
    self.cursor = ScanCursor(text, pos)
    self.on_error = on_error
    self.drop = drop
    self.eof_kind = eof_kind
    self.invalid_kind = invalid_kind
    self.name = name
    self.errors:list[LexError] = []
    self.is_done = False

  def __iter__(self) -> Iterator[Token]: return self

  def __next__(self) -> Token:
    cursor = self.cursor
    while not self.is_done:
      try: token, end = scan(self.dfa, cursor.text, cursor.pos, eof_kind=self.eof_kind, name=self.name)
      except LexError as e:
        if self.on_error == 'abort': raise
        self.errors.append(e)
        token = Token(kind=self.invalid_kind, text=cursor.text[cursor.pos], pos=cursor.pos)
        cursor.pos += 1
        if self.on_error == 'skip' or token.kind in self.drop: continue
        return token
      if not token.text: # Only the end of input token is empty.
        self.is_done = True
        return token
      cursor.pos = end
      if token.kind in self.drop: continue
      return token
    raise StopIteration

  @property
  def pos(self) -> int: return self.cursor.pos


def tokenize(dfa:DFA, text:str, **kwargs) -> list[Token]:
  'Return the complete token list for `text`; keyword arguments are passed to Scanner.'
  return list(Scanner(dfa, text, **kwargs))
