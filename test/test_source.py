# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from pytest import raises

from lexfa.source import Source


def test_line_index() -> None:
  source = Source('t', 'ab\ncd\n')
  assert [source.get_line_index(i) for i in range(7)] == [0, 0, 0, 1, 1, 1, 1]
  assert Source('t', 'ab\n').get_line_index(3) == 0
  with raises(IndexError): source.get_line_index(7)


def test_line_bounds() -> None:
  source = Source('t', 'ab\ncd')
  assert source.get_line_start(4) == 3
  assert source.get_line_end(4) == 5
  assert source.get_line_start(1) == 0
  assert source.get_line_end(1) == 3


def test_snippet() -> None:
  source = Source('t', 'abcdefghij')
  assert source.snippet(5, radius=2) == 'defg'
  assert source.snippet(0, radius=2) == 'ab'


def test_diagnostic_span() -> None:
  assert Source('p', 'ab(c').diagnostic_for_pos(2, end=3, msg='unmatched') == 'p:1:3-4: unmatched\n| ab(c\n    ~\n'


def test_diagnostic_caret() -> None:
  assert Source('t', 'ab\ncd').diagnostic_for_pos(4) == 't:2:2:\n| cd\n   ^\n'


def test_diagnostic_unnamed() -> None:
  assert Source('', 'x').diagnostic_for_pos(1, msg='end') == '1:2: end\n| x\n   ^\n'
