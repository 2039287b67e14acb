# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
The finite symbol alphabet that bounds negated charsets, and code description utilities.

Symbols are integer code points, as produced by `ord`.
Ranges are half-open `(start, end)` tuples.
'''

from typing import Iterable, Iterator


CodeRange = tuple[int,int]


class Alphabet:
  '''
  A fixed, explicit set of symbol codes: `range(lo, hi)` plus the `extra` codes.
  The default is printable ASCII (0x20-0x7E) plus tab, newline and carriage return.
  Negated charsets are complemented against this set,
  and pattern literals outside of it are rejected at compile time.
  '''

  def __init__(self, lo:int=0x20, hi:int=0x7F, extra:Iterable[int]=(0x09, 0x0A, 0x0D)) -> None:
    if lo < 0: raise ValueError(f'alphabet lower bound is negative: {lo}')
    if hi <= lo: raise ValueError(f'alphabet range is empty: {lo}-{hi}')
    self.lo = lo
    self.hi = hi
    self.extra = frozenset(extra)
    if any(c < 0 for c in self.extra): raise ValueError(f'alphabet extra codes contain a negative value: {sorted(self.extra)}')
    self.codes = frozenset(range(lo, hi)) | self.extra

  def __repr__(self) -> str:
    extra = ', '.join(f'0x{c:02X}' for c in sorted(self.extra))
    return f'{type(self).__name__}(lo=0x{self.lo:02X}, hi=0x{self.hi:02X}, extra=({extra}))'

  def __eq__(self, other:object) -> bool:
    return isinstance(other, Alphabet) and self.codes == other.codes

  def __hash__(self) -> int: return hash(self.codes)

  def __contains__(self, code:object) -> bool: return code in self.codes

  def __iter__(self) -> Iterator[int]: return iter(sorted(self.codes))

  def __len__(self) -> int: return len(self.codes)

  @property
  def ranges(self) -> tuple[CodeRange,...]: return tuple(ranges_for_codes(sorted(self.codes)))

  def complement(self, codes:Iterable[int]) -> frozenset[int]:
    'Return the alphabet codes that are not in `codes`.'
    return self.codes.difference(codes)


default_alphabet = Alphabet()


def ranges_for_codes(codes:Iterable[int]) -> Iterator[CodeRange]:
  'Given monotonically increasing `codes`, yield the half-open ranges that cover them.'
  it = iter(codes)
  try: start = next(it)
  except StopIteration: return
  end = start + 1
  for code in it:
    if code < end: raise ValueError('ranges_for_codes requires monotonically increasing codes', end, code)
    if code == end:
      end += 1
    else:
      yield (start, end)
      start = code
      end = code + 1
  yield (start, end)


def codes_desc(code_ranges:Iterable[CodeRange]) -> str:
  return ' '.join(codes_range_desc(*p) for p in code_ranges)

def codes_range_desc(l:int, h:int) -> str:
  if l + 1 == h: return code_desc(l)
  return f'{code_desc(l)}-{code_desc(h - 1)}'

def code_desc(c:int) -> str:
  try: return code_descriptions[c]
  except KeyError: return f'{c:02x}'


code_descriptions:dict[int,str] = {
  -1: 'Ø',
  ord('\t'): '\\t',
  ord('\n'): '\\n',
  ord('\r'): '\\r',
  ord(' '): '\\s',
}
code_descriptions.update((i, chr(i)) for i in range(ord('!'), 0x7F))
