# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Symbol recognizer: a byte-driven deterministic automaton that maps UTF-8 symbol bytes to 6-bit values.

Terminology follows the `legs` automata:
Node: a position in the automaton graph, represented as an index into the node arena.
State: the node reached after consuming some input bytes.

Every node has a kind, stored in `values`:
* ROOT: a point between symbols that consumes no quantum slot; either the start node, or the gap node after padding.
* MID: a partial symbol; more bytes are required.
* 0-63: a complete alphabet symbol with that 6-bit value.
* PAD: a complete padding symbol.

Nodes that complete an alphabet symbol carry a copy of the root's transitions,
so decoding continues with the next symbol without returning to the root.
The padding node only transitions on further padding bytes and on CR/LF.
CR and LF loop back to the root between symbols. After padding they lead to the gap node,
which accepts only more padding or more newlines.
'''

from sys import stderr
from typing import Dict, Iterator, List, Optional, Sequence, TextIO, Tuple


ROOT = -1
MID = -2
PAD = 64

CR = 0x0d
LF = 0x0a

NodeTransitions = Dict[int,int] # byte -> dst node.


class Recognizer:
  'Deterministic byte automaton recognizing the symbols of one alphabet and its padding symbol.'

  def __init__(self, transitions:List[NodeTransitions], values:List[int]) -> None:
    assert len(transitions) == len(values)
    self.transitions = transitions
    self.values = values
    self.start_node = 0

  def __len__(self) -> int: return len(self.values)

  def advance(self, node:int, byte:int) -> Optional[int]:
    'Return the node reached from `node` by `byte`, or None if the byte is rejected.'
    return self.transitions[node].get(byte)

  def match(self, data:bytes) -> Optional[int]:
    '''
    Run the automaton over `data` from the start node.
    Return the kind of the final node (ROOT, MID, PAD, or a 6-bit value), or None if any byte is rejected.
    '''
    node = self.start_node
    for byte in data:
      dst = self.advance(node, byte)
      if dst is None: return None
      node = dst
    return self.values[node]

  def transition_descs(self) -> Iterator[Tuple[int,List[Tuple[int,str]]]]:
    'Yield (src, [(dst, ranges_desc)]) tuples.'
    for src, d in enumerate(self.transitions):
      dst_bytes:Dict[int,List[int]] = {}
      for byte, dst in sorted(d.items()):
        dst_bytes.setdefault(dst, []).append(byte)
      pairs = [(dst, ' '.join(_range_desc(l, h) for l, h in _byte_ranges(bs))) for dst, bs in dst_bytes.items()]
      pairs.sort(key=lambda p: p[1])
      yield (src, pairs)

  def describe(self, label='', file:TextIO=stderr) -> None:
    print('recognizer', (label and f': {label}'), ':', sep='', file=file)
    print(f' nodes: {len(self)}; transitions: {sum(len(d) for d in self.transitions)}', file=file)
    for src, pairs in self.transition_descs():
      print(f'  {src}: {kind_desc(self.values[src])}', file=file)
      for dst, ranges_desc in pairs:
        print(f'    {ranges_desc} ==> {dst}', file=file)
    print(file=file)


def kind_desc(value:int) -> str:
  if value == ROOT: return 'root'
  if value == MID: return 'mid'
  if value == PAD: return 'pad'
  return f'value {value}'


def build_recognizer(symbols:Sequence[bytes], pad:bytes) -> Recognizer:
  '''
  Build the recognizer for the UTF-8 encoded `symbols` (index is the 6-bit value) and padding symbol `pad`.
  An empty `pad` means the encoding has no padding.
  UTF-8 is prefix-free, so no symbol can end on a node that another symbol passes through.
  '''
  assert len(symbols) == 64
  transitions:List[NodeTransitions] = [{}]
  values:List[int] = [ROOT]

  def add_node(value:int) -> int:
    transitions.append({})
    values.append(value)
    return len(values) - 1

  def add_path(src:int, seq:bytes) -> int:
    'Walk or create MID nodes for all but the last byte of `seq`; return the final source node.'
    node = src
    for byte in seq[:-1]:
      dst = transitions[node].get(byte)
      if dst is None:
        dst = add_node(MID)
        transitions[node][byte] = dst
      node = dst
    return node

  symbol_nodes:List[int] = []
  for value, seq in enumerate(symbols):
    node = add_path(0, seq)
    leaf = add_node(value)
    transitions[node][seq[-1]] = leaf
    symbol_nodes.append(leaf)

  if pad:
    pad_node = add_node(PAD)
    for src in (0, pad_node): # Padding can begin a run or continue one.
      transitions[add_path(src, pad)][pad[-1]] = pad_node
    # A newline after padding leads to a gap node, which is skipped like the root but only continues with padding.
    gap_node = add_node(ROOT)
    transitions[gap_node] = dict(transitions[pad_node])
    for node in (pad_node, gap_node):
      transitions[node][LF] = gap_node
      transitions[node][CR] = gap_node

  transitions[0][LF] = 0
  transitions[0][CR] = 0

  # Completed symbols continue exactly as the root does; the root is final at this point.
  root_transitions = transitions[0]
  for leaf in symbol_nodes:
    transitions[leaf] = dict(root_transitions)

  return Recognizer(transitions=transitions, values=values)


def _byte_ranges(bs:List[int]) -> Iterator[Tuple[int,int]]:
  'Yield (low, end) pairs for runs of consecutive bytes in the sorted list `bs`.'
  it = iter(bs)
  try: low = next(it)
  except StopIteration: return
  end = low + 1
  for b in it:
    if b == end:
      end += 1
    else:
      yield (low, end)
      low = b
      end = b + 1
  yield (low, end)


def _range_desc(l:int, h:int) -> str:
  if l + 1 == h: return _byte_desc(l)
  return f'{_byte_desc(l)}-{_byte_desc(h-1)}'


def _byte_desc(b:int) -> str:
  if b == LF: return '\\n'
  if b == CR: return '\\r'
  if 0x21 <= b < 0x7f: return chr(b)
  return f'\\{b:02x}/'
