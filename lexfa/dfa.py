# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Deterministic Finite Automata.
See nfa.py for the node/state terminology.

A DFA consists of:
* transitions: dictionary of source node to (dictionary of symbol to destination node).
  Every node is present as a key, including nodes with no outgoing transitions.
  Because each symbol maps to a single destination, determinism holds by construction.
* match_node_kinds: dictionary of accepting nodes to the token kind that each recognizes.
* match_node_priorities: dictionary of accepting nodes to the declaration priority of that kind.
* nfa_states: for DFAs built by subset construction, the NFA node set that each DFA node stands for.

The start node is always 0.
A DFA is never mutated after construction; it may be shared by any number of scanners.
'''

from collections import defaultdict
from itertools import chain
from typing import Iterator, NamedTuple

from .alphabet import code_desc, codes_desc, ranges_for_codes
from .io import errL, errSL
from .nfa import NfaState


DfaStateTransitions = dict[int,int]
DfaTransitions = dict[int,DfaStateTransitions]


class StateDesc(NamedTuple):
  node:int
  is_match:bool
  kind:str|None
  transitions:dict[str,int]


class DFA:
  'Deterministic Finite Automaton.'

  def __init__(self, name:str, transitions:DfaTransitions, match_node_kinds:dict[int,str],
   match_node_priorities:dict[int,int], nfa_states:tuple[NfaState,...]=()) -> None:
    assert name
    assert 0 in transitions, 'DFA must contain the start node 0'
    assert set(match_node_kinds) == set(match_node_priorities)
    self.name = name
    self.transitions = transitions
    self.match_node_kinds = match_node_kinds
    self.match_node_priorities = match_node_priorities
    self.nfa_states = nfa_states
    self.start_node = 0

  def __repr__(self) -> str:
    return f'<{type(self).__name__} {self.name!r}: {len(self.transitions)} nodes>'

  @property
  def node_count(self) -> int: return len(self.transitions)

  @property
  def alphabet(self) -> frozenset[int]:
    return frozenset(chain.from_iterable(self.transitions.values()))

  @property
  def all_nodes(self) -> frozenset[int]: return frozenset(self.transitions)

  def match_kind(self, node:int) -> str|None:
    return self.match_node_kinds.get(node)

  def match(self, text:str) -> str|None:
    'Return the kind recognized after consuming all of `text`, or None.'
    node = self.start_node
    for char in text:
      try: node = self.transitions[node][ord(char)]
      except KeyError: return None
    return self.match_kind(node)


  # Diagnostics.

  def state_descs(self) -> Iterator[StateDesc]:
    'Yield a description of each node in id order, with the full symbol to destination map.'
    for node, d in sorted(self.transitions.items()):
      kind = self.match_kind(node)
      yield StateDesc(node=node, is_match=(kind is not None), kind=kind,
        transitions={ chr(code): dst for code, dst in sorted(d.items()) })

  def transition_descs(self) -> Iterator[tuple[int,list[tuple[int,str]]]]:
    'Yield (src, [(dst, ranges_desc)]) tuples.'
    for src, d in sorted(self.transitions.items()):
      dst_codes = defaultdict[int,list[int]](list)
      for code, dst in sorted(d.items()):
        dst_codes[dst].append(code)
      pairs = [(dst, codes_desc(ranges_for_codes(codes))) for dst, codes in sorted(dst_codes.items(), key=lambda p: p[1])]
      yield (src, pairs)

  def transition_table(self, width:int=6) -> str:
    '''
    Render a fixed-width transition table: one row per node, one column per alphabet symbol in ascending order.
    Missing transitions are shown as `-`; accepting nodes are suffixed with their kind.
    '''
    alphabet = sorted(self.alphabet)
    def cell(s:str) -> str: return s.ljust(width)
    lines = [''.join([cell('node'), *(cell(code_desc(c)) for c in alphabet), 'kind']).rstrip()]
    for node, d in sorted(self.transitions.items()):
      cells = [cell(str(node))]
      cells.extend(cell(str(d[c]) if c in d else '-') for c in alphabet)
      cells.append(self.match_kind(node) or '')
      lines.append(''.join(cells).rstrip())
    return '\n'.join(lines) + '\n'

  def describe(self, label='') -> None:
    errL(self.name, (label and f': {label}'), ':')
    errL(' match_node_kinds:')
    for node, kind in sorted(self.match_node_kinds.items()):
      errL(f'  {node}: {kind} (priority {self.match_node_priorities[node]})')
    errL(' transitions:')
    for src, pairs in self.transition_descs():
      errSL(f'  {src}:', self.match_kind(src) or '')
      for dst, ranges_desc in pairs:
        errSL(f'    {ranges_desc} ==> {dst}', self.match_kind(dst) or '')
    errL(f' total nodes: {self.node_count}')
    errL()

  def describe_stats(self, label='') -> None:
    errL(self.name, (label and f': {label}'), ':')
    errSL('  nodes:', self.node_count)
    errSL('  match nodes:', len(self.match_node_kinds))
    errSL('  transitions:', sum(len(d) for d in self.transitions.values()))
    errL()


def minimize_dfa(dfa:DFA) -> DFA:
  '''
  Optimize a DFA by coalescing equivalent nodes, using Hopcroft-style partition refinement.
  sources:
  * http://www.cs.sun.ac.za/rw711/resources/dfa-minimization.pdf.
  * https://en.wikipedia.org/wiki/DFA_minimization.

  The initial partition has one block for the non-matching nodes and one block per match kind,
  so two nodes are only merged if they recognize the same kind and are equivalent for every suffix.
  Missing transitions are treated as transitions to an implicit dead node;
  starting with every initial block in the worklist makes the refinement exact for such partial DFAs.
  Blocks are addressed by index into `blocks`; block contents mutate as they split.
  '''

  alphabet = sorted(dfa.alphabet)

  init_parts = defaultdict[str|None, set[int]](set)
  for node in dfa.transitions:
    init_parts[dfa.match_kind(node)].add(node)
  blocks:list[set[int]] = [init_parts[k] for k in sorted(init_parts, key=lambda k: (k is not None, k or ''))]
  node_blocks = { node: i for i, block in enumerate(blocks) for node in block }

  rev_transitions:defaultdict[int, defaultdict[int, set[int]]] = defaultdict(lambda: defaultdict(set))
  for src, d in dfa.transitions.items():
    for code, dst in d.items():
      rev_transitions[dst][code].add(src)

  def split(preds:set[int]) -> Iterator[tuple[int,int]]:
    '''
    Split each block Y that `preds` partially covers into Y & preds (a new block) and Y - preds (the mutated original).
    Yield (original index, new index) pairs.
    '''
    intersections = defaultdict[int, set[int]](set)
    for node in preds:
      intersections[node_blocks[node]].add(node)
    for y, intersection in intersections.items():
      block = blocks[y]
      if len(intersection) == len(block): continue # Not a proper subset.
      block -= intersection
      new = len(blocks)
      blocks.append(intersection)
      for node in intersection:
        node_blocks[node] = new
      yield (y, new)

  # Refinement.
  remaining = list(range(len(blocks))) # indices of distinguishing blocks.
  pending = set(remaining)
  while remaining:
    a = remaining.pop()
    pending.remove(a)
    splitter = tuple(blocks[a]) # Snapshot; the block itself may split while iterating over the alphabet.
    for code in alphabet:
      preds = set(chain.from_iterable(rev_transitions[node][code] for node in splitter if node in rev_transitions))
      if not preds: continue
      for y, new in split(preds):
        if y in pending: # Both halves must remain pending; `y` already is.
          push = new
        else:
          push = new if len(blocks[new]) <= len(blocks[y]) else y
        remaining.append(push)
        pending.add(push)

  validate_partition(blocks, node_blocks)

  # Map old nodes to new nodes; ordering by lowest member keeps the start node at 0.
  ordered = sorted(blocks, key=min)
  mapping = { old: new for new, block in enumerate(ordered) for old in block }

  transitions:DfaTransitions = {}
  match_node_kinds:dict[int,str] = {}
  match_node_priorities:dict[int,int] = {}
  for new, block in enumerate(ordered):
    rep = min(block)
    transitions[new] = { code: mapping[dst] for code, dst in dfa.transitions[rep].items() }
    kind = dfa.match_kind(rep)
    if kind is not None:
      match_node_kinds[new] = kind
      match_node_priorities[new] = min(dfa.match_node_priorities[node] for node in block)

  return DFA(name=dfa.name, transitions=transitions, match_node_kinds=match_node_kinds,
    match_node_priorities=match_node_priorities)


def validate_partition(blocks:list[set[int]], node_blocks:dict[int,int]) -> None:
  for node, i in node_blocks.items():
    assert node in blocks[i], (node, blocks[i])
  assert sum(len(b) for b in blocks) == len(node_blocks)
  assert all(blocks)
