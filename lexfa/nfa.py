# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Nondeterministic Finite Automata.

Terminology:
Node: a discrete position in the automaton graph, represented as an integer.
  This is traditionally referred to as a 'state'.
State: the state of the algorithm while matching an input string against an automaton.
  For NFAs, the state is a set of nodes;
  traditionally this is referred to as "simulating the NFA",
  or the NFA being "in multiple states at once".

The NFA is an arena: nodes are allocated from a single monotonic counter and never reused,
and all edges refer to nodes by id.
`transitions` maps a source node to a dictionary of symbol to destination node set.
`empty_symbol` is a reserved value (-1 is not a legitimate code point)
that represents a nondeterministic jump between NFA nodes.

Fragments are built with Thompson's construction:
each combinator allocates fresh nodes and links existing fragments by adding epsilon edges;
nodes are never copied.
'''

from collections import defaultdict
from typing import Iterable, NamedTuple

from .alphabet import code_desc, codes_desc, ranges_for_codes
from .io import errL, errSL


NfaState = frozenset[int]
NfaMutableTransitions = dict[int, dict[int, set[int]]]


empty_symbol = -1 # not a legitimate code point.


class Fragment(NamedTuple):
  'A Thompson fragment: the start and accept nodes of a sub-automaton within an NFA arena.'
  start:int
  accept:int


class NFA:
  'Nondeterministic Finite Automaton.'

  def __init__(self, name:str='main') -> None:
    assert name
    self.name = name
    self.node_count = 0
    self.start = 0 # master start node; see build_nfa.
    self.transitions:NfaMutableTransitions = {} # only nodes with outgoing edges are present.
    self.match_node_kinds:dict[int,str] = {}
    self.match_node_priorities:dict[int,int] = {}


  def mk_node(self) -> int:
    node = self.node_count
    self.node_count += 1
    return node


  def add_edge(self, src:int, symbol:int, dst:int) -> None:
    assert 0 <= src < self.node_count, src
    assert 0 <= dst < self.node_count, dst
    self.transitions.setdefault(src, {}).setdefault(symbol, set()).add(dst)


  def add_empty(self, src:int, dst:int) -> None:
    self.add_edge(src, empty_symbol, dst)


  def add_match(self, node:int, kind:str, priority:int) -> None:
    'Tag `node` as accepting for `kind` with declaration `priority`.'
    if node in self.match_node_kinds:
      raise ValueError(f'node {node} already matches {self.match_node_kinds[node]!r}')
    self.match_node_kinds[node] = kind
    self.match_node_priorities[node] = priority


  # Thompson construction.

  def literal(self, code:int) -> Fragment:
    start = self.mk_node()
    accept = self.mk_node()
    self.add_edge(start, code, accept)
    return Fragment(start, accept)

  def charset(self, codes:Iterable[int]) -> Fragment:
    'A flat union of literals: one edge per code from a single start to a single accept.'
    start = self.mk_node()
    accept = self.mk_node()
    for code in sorted(codes):
      self.add_edge(start, code, accept)
    return Fragment(start, accept)

  def epsilon(self) -> Fragment:
    start = self.mk_node()
    accept = self.mk_node()
    self.add_empty(start, accept)
    return Fragment(start, accept)

  def concat(self, a:Fragment, b:Fragment) -> Fragment:
    self.add_empty(a.accept, b.start)
    return Fragment(a.start, b.accept)

  def union(self, a:Fragment, b:Fragment) -> Fragment:
    start = self.mk_node()
    accept = self.mk_node()
    self.add_empty(start, a.start)
    self.add_empty(start, b.start)
    self.add_empty(a.accept, accept)
    self.add_empty(b.accept, accept)
    return Fragment(start, accept)

  def star(self, a:Fragment) -> Fragment:
    start = self.mk_node()
    accept = self.mk_node()
    self.add_empty(start, a.start)
    self.add_empty(start, accept)
    self.add_empty(a.accept, a.start)
    self.add_empty(a.accept, accept)
    return Fragment(start, accept)

  def plus(self, a:Fragment) -> Fragment:
    return self.concat(a, self.star(a))

  def optional(self, a:Fragment) -> Fragment:
    return self.union(self.epsilon(), a)


  # Queries.

  @property
  def alphabet(self) -> frozenset[int]:
    s:set[int] = set()
    for d in self.transitions.values():
      s.update(d)
    s.discard(empty_symbol)
    return frozenset(s)

  def symbols_from(self, state:Iterable[int]) -> set[int]:
    'Return the distinct non-epsilon symbols on edges leaving any node of `state`.'
    symbols:set[int] = set()
    for node in state:
      try: d = self.transitions[node]
      except KeyError: continue
      symbols.update(d)
    symbols.discard(empty_symbol)
    return symbols


  # Simulation.

  def advance_empties(self, mut_state:set[int]) -> NfaState:
    'Return the epsilon closure of `mut_state`, which is consumed.'
    expanded:set[int] = set()
    while mut_state:
      node = mut_state.pop()
      expanded.add(node)
      try: dst_nodes = self.transitions[node][empty_symbol]
      except KeyError: continue
      mut_state.update(dst_nodes - expanded)
    return frozenset(expanded)

  def epsilon_closure(self, nodes:Iterable[int]) -> NfaState:
    return self.advance_empties(set(nodes))

  def move(self, state:Iterable[int], symbol:int) -> set[int]:
    'Return the set of nodes reachable from `state` by a single edge labeled `symbol`.'
    assert symbol != empty_symbol
    next_state:set[int] = set()
    for node in state:
      try: dst_nodes = self.transitions[node][symbol]
      except KeyError: pass
      else: next_state.update(dst_nodes)
    return next_state

  def advance(self, state:Iterable[int], symbol:int) -> NfaState:
    return self.advance_empties(self.move(state, symbol))

  def match_kind(self, state:Iterable[int]) -> str|None:
    'Return the kind of the highest priority (lowest value) match node in `state`, or None.'
    best:tuple[int,str]|None = None
    for node in state:
      try: kind = self.match_node_kinds[node]
      except KeyError: continue
      p = (self.match_node_priorities[node], kind)
      if best is None or p < best: best = p
    return None if best is None else best[1]

  def match(self, text:str) -> str|None:
    'Simulate the NFA over all of `text`; return the winning kind if the entire text is matched.'
    state = self.advance_empties({self.start})
    for char in text:
      state = self.advance(state, ord(char))
      if not state: return None
    return self.match_kind(state)

  def validate(self) -> list[str]:
    'Return notes for patterns that match the empty string; such patterns can never produce a token.'
    start = self.advance_empties({self.start})
    msgs = []
    for node, kind in sorted(self.match_node_kinds.items()):
      if node in start:
        msgs.append(f'note: pattern matches the empty string, which never produces a token: {kind}.')
    return msgs


  # Diagnostics.

  def describe(self, label='') -> None:
    errL(self.name, (label and f': {label}'), ':')
    errL(' match_node_kinds:')
    for node, kind in sorted(self.match_node_kinds.items()):
      errL(f'  {node}: {kind} (priority {self.match_node_priorities[node]})')
    errL(' transitions:')
    for src, d in sorted(self.transitions.items()):
      kind = self.match_node_kinds.get(src)
      errL(f'  {src}:', (f' {kind}' if kind else ''))
      try: empty_dsts = d[empty_symbol]
      except KeyError: pass
      else: errL(f'    {code_desc(empty_symbol)} ==> ', ' '.join(str(n) for n in sorted(empty_dsts)))
      dst_codes = defaultdict[frozenset[int], list[int]](list)
      for code, dsts in d.items():
        if code != empty_symbol: dst_codes[frozenset(dsts)].append(code)
      for dsts, codes in sorted(dst_codes.items(), key=lambda p: min(p[1])):
        codes.sort()
        errL(f'    {codes_desc(ranges_for_codes(codes))} ==> ', ' '.join(str(n) for n in sorted(dsts)))
    errL(f' total nodes: {self.node_count}')
    errL()

  def describe_stats(self, label='') -> None:
    errL(self.name, (label and f': {label}'), ':')
    errSL('  nodes:', self.node_count)
    errSL('  match nodes:', len(self.match_node_kinds))
    errSL('  transitions:', sum(len(dsts) for d in self.transitions.values() for dsts in d.values()))
    errL()
