# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from collections import deque
from typing import Iterable, NamedTuple

from .alphabet import Alphabet, default_alphabet
from .dfa import DFA, DfaTransitions, minimize_dfa
from .nfa import NFA, NfaState
from .parse import parse_pattern


class Pattern(NamedTuple):
  '''
  A token pattern: regex source, token kind, and declaration priority.
  When the patterns of a set match the same longest span, the lowest priority value wins.
  '''
  regex:str
  kind:str
  priority:int


PatternArg = Pattern | tuple[str,str] | tuple[str,str,int]


class DefinitionError(Exception):
  'An invalid pattern set, as opposed to an invalid individual pattern.'


def normalize_patterns(patterns:Iterable[PatternArg]) -> list[Pattern]:
  '''
  Convert `(regex, kind)` and `(regex, kind, priority)` tuples to Pattern objects.
  A missing priority is the position of the pattern in the list.
  '''
  result:list[Pattern] = []
  priorities:dict[int,str] = {}
  for index, p in enumerate(patterns):
    if not isinstance(p, tuple):
      raise DefinitionError(f'pattern {index} must be a tuple; found {p!r}')
    if len(p) == 2:
      regex, kind = p # type: ignore[misc]
      priority = index
    elif len(p) == 3:
      regex, kind, priority = p # type: ignore[misc]
    else:
      raise DefinitionError(f'pattern {index} must be a (regex, kind) or (regex, kind, priority) tuple; found {p!r}')
    if not isinstance(regex, str):
      raise DefinitionError(f'pattern {index} {kind!r} regex must be a string; found {regex!r}')
    if not isinstance(kind, str) or not kind:
      raise DefinitionError(f'pattern {index} kind must be a nonempty string; found {kind!r}')
    if not isinstance(priority, int):
      raise DefinitionError(f'pattern {index} {kind!r} priority must be an integer; found {priority!r}')
    try: other = priorities[priority]
    except KeyError: pass
    else: raise DefinitionError(f'pattern {index} {kind!r} has the same priority as {other!r}: {priority}')
    priorities[priority] = kind
    result.append(Pattern(regex, kind, priority))
  if not result: raise DefinitionError('pattern set must contain at least one pattern')
  return result


def build_nfa(patterns:Iterable[Pattern], *, alphabet:Alphabet=default_alphabet, name:str='main') -> NFA:
  '''
  Generate a single NFA from a set of patterns.
  The master start node is always 0, with an epsilon edge to the start of each pattern fragment;
  the accept node of each fragment is tagged with the pattern's kind and priority.
  Parsing aborts on the first CompileError; no partial NFA is returned.
  '''
  nfa = NFA(name)
  start = nfa.mk_node()
  assert start == nfa.start
  for pattern in patterns:
    fragment = parse_pattern(nfa, pattern.regex, alphabet=alphabet, kind=pattern.kind)
    nfa.add_empty(start, fragment.start)
    nfa.add_match(fragment.accept, pattern.kind, pattern.priority)
  return nfa


def build_dfa(nfa:NFA) -> DFA:
  '''
  Build a DFA from an NFA by subset construction.

  Conceptually, a DFA node is equivalent to a set of NFA nodes.
  Note that this is easily confused with an NFA state (also a set of NFA nodes).
  A DFA has a node for every reachable subset of nodes in the corresponding NFA.
  In the worst case, there will be an exponential increase in number of nodes.

  Nodes are discovered breadth-first from the start, so every node is reachable.
  Subsets are deduplicated by the exact frozenset of NFA node ids.
  An accepting DFA node recognizes the kind of its lowest priority NFA match node.
  '''
  nfa_states_to_dfa_nodes:dict[NfaState,int] = {}
  nfa_states:list[NfaState] = []
  remaining = deque[int]()

  def mk_node(state:NfaState) -> int:
    node = len(nfa_states)
    nfa_states_to_dfa_nodes[state] = node
    nfa_states.append(state)
    remaining.append(node)
    return node

  start_node = mk_node(nfa.advance_empties({nfa.start}))
  assert start_node == 0

  transitions:DfaTransitions = {}
  while remaining:
    node = remaining.popleft()
    state = nfa_states[node]
    d = transitions[node] = {}
    for code in sorted(nfa.symbols_from(state)):
      dst_state = nfa.advance(state, code)
      if not dst_state: continue # do not add empty sets.
      try: dst_node = nfa_states_to_dfa_nodes[dst_state]
      except KeyError: dst_node = mk_node(dst_state)
      d[code] = dst_node

  match_node_kinds:dict[int,str] = {}
  match_node_priorities:dict[int,int] = {}
  for node, state in enumerate(nfa_states):
    matches = [(nfa.match_node_priorities[n], nfa.match_node_kinds[n]) for n in state if n in nfa.match_node_kinds]
    if not matches: continue
    priority, kind = min(matches)
    match_node_kinds[node] = kind
    match_node_priorities[node] = priority

  return DFA(name=nfa.name, transitions=transitions, match_node_kinds=match_node_kinds,
    match_node_priorities=match_node_priorities, nfa_states=tuple(nfa_states))


def compile_patterns(patterns:Iterable[PatternArg], *, alphabet:Alphabet=default_alphabet, minimize:bool=True,
 name:str='main', dbg:bool=False) -> DFA:
  '''
  Compile an ordered list of patterns into a single DFA.
  Raises CompileError for malformed pattern syntax, or DefinitionError for an invalid pattern set.
  '''
  nfa = build_nfa(normalize_patterns(patterns), alphabet=alphabet, name=name)
  if dbg: nfa.describe('NFA')
  dfa = build_dfa(nfa)
  if dbg: dfa.describe('DFA')
  if not minimize: return dfa
  min_dfa = minimize_dfa(dfa)
  if dbg: min_dfa.describe('Min DFA')
  return min_dfa
