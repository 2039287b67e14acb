# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from pytest import mark, raises

from lexfa import (Alphabet, CompileError, DanglingEscapeError, EmptyCharsetError, InvalidRangeError, NFA,
  OutsideAlphabetError, TrailingInputError, UnmatchedBracketError, UnmatchedParenError, UnterminatedStringError,
  build_dfa, build_nfa, compile_patterns, default_alphabet, normalize_patterns, parse_pattern)


def matches(pattern:str, text:str, alphabet:Alphabet=default_alphabet) -> bool:
  'Return True if `pattern` matches all of `text`, checked against both the NFA and the DFA.'
  nfa = build_nfa(normalize_patterns([(pattern, 'X')]), alphabet=alphabet)
  dfa = build_dfa(nfa)
  nfa_match = nfa.match(text)
  assert nfa_match == dfa.match(text), (pattern, text)
  return nfa_match == 'X'


@mark.parametrize('pattern, yes, no', [
  ('abc', ['abc'], ['', 'ab', 'abcd']),
  ('a|b', ['a', 'b'], ['', 'ab']),
  ('ab|cd', ['ab', 'cd'], ['abd', 'acd']),
  ('a*', ['', 'a', 'aaaa'], ['b']),
  ('a+', ['a', 'aaa'], ['']),
  ('a?b', ['b', 'ab'], ['aab']),
  ('(ab)+', ['ab', 'abab'], ['aba', '']),
  ('(a|b)*c', ['c', 'abbac'], ['ab']),
  ('a**', ['', 'aa'], ['b']),
  ('a|', ['a', ''], ['aa']),
  ('()', [''], ['a']),
  ('.', ['.'], ['a']),
  ('\\*\\|\\(', ['*|('], ['*']),
  ('*', ['*'], ['']),
])
def test_operators(pattern:str, yes:list[str], no:list[str]) -> None:
  for text in yes:
    assert matches(pattern, text), (pattern, text)
  for text in no:
    assert not matches(pattern, text), (pattern, text)


def test_escapes() -> None:
  assert matches('\\n', '\n')
  assert matches('\\t', '\t')
  assert matches('\\r', '\r')
  assert matches('\\q', 'q')
  assert matches('\\\\', '\\')


def test_charsets() -> None:
  assert matches('[abc]', 'b')
  assert not matches('[abc]', 'd')
  assert matches('[a-cx]+', 'abcx')
  assert matches('[-a]', '-')
  assert matches('[a-]', '-')
  assert matches('[\\]]', ']')
  # Inside a charset the backslash escapes, so a lone backslash must itself be escaped.
  assert matches('[\\\\]', '\\')
  assert matches('[ \\t\\n]+', ' \t\n')
  assert matches('[^a]', 'b')
  assert not matches('[^a]', 'a')
  assert matches('[^]', 'z') # The complement of nothing is the whole alphabet.


def test_negated_charset_alphabet() -> None:
  dfa = compile_patterns([('[^a-z]', 'X')])
  lowercase = set(range(ord('a'), ord('z') + 1))
  for code in default_alphabet:
    exp = None if code in lowercase else 'X'
    assert dfa.match(chr(code)) == exp, chr(code)
  assert dfa.match('\x7f') is None # Outside of the alphabet.


def test_negated_charset_configured_alphabet() -> None:
  alphabet = Alphabet(ord('a'), ord('e'), extra=())
  dfa = compile_patterns([('[^b]+', 'X')], alphabet=alphabet)
  assert dfa.alphabet == {ord('a'), ord('c'), ord('d')}


def test_range_interior_is_bounded_by_alphabet() -> None:
  dfa = compile_patterns([('[\\t-!]', 'X')])
  assert dfa.alphabet == {ord('\t'), ord('\n'), ord('\r'), ord(' '), ord('!')}


def test_strings() -> None:
  assert matches('"a|b"', 'a|b')
  assert not matches('"a|b"', 'a')
  assert matches('"ab"+', 'abab')
  assert matches('"a\\"b"', 'a"b')
  assert matches('"\\n"', '\n')
  assert matches('x""y', 'xy')
  assert matches('""', '')


@mark.parametrize('pattern, error_type, pos', [
  ('(ab', UnmatchedParenError, 0),
  ('a(b(c)', UnmatchedParenError, 1),
  ('ab)', TrailingInputError, 2),
  ('a)b', TrailingInputError, 1),
  ('[ab', UnmatchedBracketError, 0),
  ('[a-', UnmatchedBracketError, 0),
  ('[\\]', UnmatchedBracketError, 0),
  ('a]', UnmatchedBracketError, 1),
  ('ab\\', DanglingEscapeError, 2),
  ('[a\\', DanglingEscapeError, 2),
  ('"ab\\', DanglingEscapeError, 3),
  ('"abc', UnterminatedStringError, 0),
  ('x"', UnterminatedStringError, 1),
  ('[]', EmptyCharsetError, 0),
  ('a[^\\t-~]', EmptyCharsetError, 1),
  ('[z-a]', InvalidRangeError, 1),
  ('ab\x01', OutsideAlphabetError, 2),
  ('[é]', OutsideAlphabetError, 1),
  ('"é"', OutsideAlphabetError, 1),
])
def test_errors(pattern:str, error_type:type[CompileError], pos:int) -> None:
  nfa = NFA()
  with raises(error_type) as info:
    parse_pattern(nfa, pattern, kind='K')
  e = info.value
  assert isinstance(e, CompileError)
  assert e.pos == pos
  assert e.pattern == pattern
  assert e.kind == 'K'


def test_error_diagnostic() -> None:
  with raises(UnmatchedParenError) as info:
    compile_patterns([('[a-z]+', 'ID'), ('(ab', 'X')])
  e = info.value
  assert e.kind == 'X'
  assert str(e) == "X: unmatched `(` at offset 0: '(ab'"
  assert e.diagnostic() == 'X:1:1-2: unmatched `(`\n| (ab\n  ~\n'


def test_parse_fragment() -> None:
  nfa = NFA()
  fragment = parse_pattern(nfa, 'ab')
  # Two literals joined by an epsilon edge.
  assert nfa.node_count == 4
  assert fragment.start == 0
  assert fragment.accept == 3
  assert nfa.epsilon_closure({1}) == {1, 2}
