# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from pytest import mark, raises

from lexfa import (DFA, DefinitionError, Pattern, UnterminatedStringError, build_dfa, build_nfa, compile_patterns,
  normalize_patterns, scan)


pattern_sets = [
  [('[ \\t\\n]+', 'SKIP'), ('[a-z]+', 'IDENT'), ('[0-9]+', 'INT')],
  [('[0-9]+', 'INT', 2), ('0|1', 'BOOL', 3)],
  [('[a-z_]+', 'ID'), ('[0-9]+\\.[0-9]+', 'DEC'), ('[0-9]+', 'INT'), ('0|1', 'BOOL'), ('[a-z]', 'CHAR'),
    ('=|\\+|-|\\*|/|%|\\^', 'OP'), ('[(){};,]', 'PUNCT')],
  [('(a|b)*abb', 'ABB')],
  [('if', 'IF'), ('[a-z]+', 'ID'), ('"=="|=', 'EQ')],
  [('a*b?', 'X'), ('(ab)+', 'Y')],
]


def reachable(dfa:DFA) -> set[int]:
  nodes = set()
  remaining = [dfa.start_node]
  while remaining:
    node = remaining.pop()
    if node in nodes: continue
    nodes.add(node)
    remaining.extend(dfa.transitions[node].values())
  return nodes


@mark.parametrize('patterns', pattern_sets)
def test_subset_construction(patterns) -> None:
  nfa = build_nfa(normalize_patterns(patterns))
  dfa = build_dfa(nfa)
  assert dfa.start_node == 0
  assert dfa.nfa_states[0] == nfa.epsilon_closure({nfa.start})
  # No two DFA nodes stand for the same NFA subset.
  assert len(set(dfa.nfa_states)) == len(dfa.nfa_states) == dfa.node_count
  # Every node is reachable from the start.
  assert reachable(dfa) == dfa.all_nodes
  for node, d in dfa.transitions.items():
    state = dfa.nfa_states[node]
    # Exactly the symbols that leave the subset have transitions, each to the closure of the move.
    assert set(d) == nfa.symbols_from(state)
    for code, dst in d.items():
      assert isinstance(dst, int)
      assert dfa.nfa_states[dst] == nfa.advance(state, code)
    # The tag is the kind of the lowest priority match node in the subset.
    assert dfa.match_kind(node) == nfa.match_kind(state)


def test_tie_break_priority() -> None:
  dfa = compile_patterns([('[0-9]+', 'INT', 2), ('0|1', 'BOOL', 3)])
  token, end = scan(dfa, '1', 0)
  assert (token.kind, token.length, end) == ('INT', 1, 1)
  dfa = compile_patterns([('[0-9]+', 'INT', 3), ('0|1', 'BOOL', 2)])
  token, end = scan(dfa, '1', 0)
  assert (token.kind, token.length) == ('BOOL', 1)
  token, end = scan(dfa, '10', 0)
  assert (token.kind, token.length) == ('INT', 2)


def test_declaration_order_priority() -> None:
  assert compile_patterns([('if', 'IF'), ('[a-z]+', 'ID')]).match('if') == 'IF'
  assert compile_patterns([('[a-z]+', 'ID'), ('if', 'IF')]).match('if') == 'ID'


def test_normalize_patterns() -> None:
  assert normalize_patterns([('a', 'A'), ('b', 'B', 7), Pattern('c', 'C', 5)]) == [
    Pattern('a', 'A', 0), Pattern('b', 'B', 7), Pattern('c', 'C', 5)]


@mark.parametrize('patterns', [
  [],
  [('a',)],
  ['ab'],
  [(1, 'A')],
  [('a', '')],
  [('a', 'A', 'high')],
  [('a', 'A', 1), ('b', 'B', 1)],
  [('a', 'A'), ('b', 'B', 0)],
])
def test_definition_errors(patterns) -> None:
  with raises(DefinitionError):
    compile_patterns(patterns)


def test_compile_error_aborts() -> None:
  with raises(UnterminatedStringError):
    compile_patterns([('[a-z]+', 'ID'), ('"abc', 'STR')])


def test_compile_dbg(capsys) -> None:
  compile_patterns([('a', 'A')], dbg=True)
  err = capsys.readouterr().err
  assert 'main: NFA:' in err
  assert 'main: DFA:' in err
  assert 'main: Min DFA:' in err
