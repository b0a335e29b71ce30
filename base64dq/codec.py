# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
One-shot encoding and decoding.

Encoded text is a sequence of symbols, each a member of the alphabet or the padding symbol,
optionally interleaved with CR and LF at symbol boundaries (ignored when decoding).
When padding is enabled the symbols form complete 4-symbol quanta, and a padded quantum ends the text.
'''

from typing import List

from typing_extensions import Buffer

from .alphabet import Encoding
from .block import decode_quantum, encode_blocks, encode_tail
from .exceptions import CorruptInput
from .recognizer import CR, LF, MID, PAD


def encoded_len(enc:Encoding, n:int) -> int:
  '''
  Return an upper bound on the byte length of the encoding of `n` bytes.
  The bound assumes every symbol has the maximal width of the encoding;
  output is shorter when symbol widths vary.
  '''
  if enc.pad is None:
    count = (n * 8 + 5) // 6 # Minimum number of symbols at 6 bits per symbol.
  else:
    count = (n + 2) // 3 * 4 # Number of 4-symbol quanta, 3 bytes each.
  return count * enc.max_width


def decoded_len(enc:Encoding, n:int) -> int:
  'Return an upper bound on the decoded length of `n` bytes of encoded data.'
  if enc.pad is None: return n * 6 // 8 # Unpadded data may end with a partial quantum of 2-3 symbols.
  return n // 4 * 3


def encode_to_utf8(enc:Encoding, src:Buffer) -> bytes:
  'Encode `src`, returning the UTF-8 bytes of the encoded text.'
  s = memoryview(src).cast('B')
  dst = bytearray()
  full = len(s) - len(s) % 3
  encode_blocks(dst, enc.symbol_bytes, s, full)
  encode_tail(dst, enc.symbol_bytes, enc.pad_bytes, s[full:])
  return bytes(dst)


def encode(enc:Encoding, src:Buffer) -> str:
  'Encode `src`, returning the encoded text.'
  return encode_to_utf8(enc, src).decode('utf8')


def encode_into(enc:Encoding, dst:Buffer, src:Buffer) -> int:
  '''
  Encode `src` into the writable buffer `dst`, returning the number of bytes written.
  Size `dst` with `encoded_len`; a buffer too small for the output raises ValueError and is left unmodified.
  '''
  out = encode_to_utf8(enc, src)
  return _copy_into(dst, out)


def decode(enc:Encoding, src:str|Buffer) -> bytes:
  '''
  Decode the encoded text `src`, which may be a str or its UTF-8 bytes.
  Raises CorruptInput with the byte offset of the first irrecoverable problem.
  '''
  if isinstance(src, str): src = src.encode('utf8', errors='surrogatepass') # Lone surrogates are rejected as corrupt bytes.
  dst = bytearray()
  cursor = DecodeCursor(enc)
  cursor.feed(dst, src)
  cursor.finish(dst)
  return bytes(dst)


def decode_into(enc:Encoding, dst:Buffer, src:str|Buffer) -> int:
  '''
  Decode `src` into the writable buffer `dst`, returning the number of bytes written.
  Size `dst` with `decoded_len`. Nothing is written if decoding fails.
  '''
  out = decode(enc, src)
  return _copy_into(dst, out)


def _copy_into(dst:Buffer, out:bytes) -> int:
  d = memoryview(dst).cast('B')
  n = len(out)
  if n > len(d): raise ValueError(f'destination buffer too small: {len(d)} < {n}')
  d[:n] = out
  return n


class DecodeCursor:
  '''
  Incremental decoding state for one encoded text.
  Bytes may be fed in arbitrary pieces; symbols may span pieces.
  All offsets are absolute byte positions in the encoded text.
  After a padded quantum only CR and LF may follow.
  '''

  def __init__(self, enc:Encoding) -> None:
    recognizer = enc.recognizer
    self.strict = enc.strict
    self.padded = enc.pad is not None
    self.transitions = recognizer.transitions
    self.values = recognizer.values
    self.node = recognizer.start_node
    self.offset = 0 # Total bytes consumed.
    self.quantum:List[int] = [0, 0, 0, 0]
    self.count = 0 # Number of filled quantum slots.
    self.pad_count = 0
    self.last_block = 0 # Offset of the last quantum boundary.
    self.last_symbol = 0 # Offset just past the last alphabet symbol.
    self.is_terminated = False # A padded quantum has been decoded.

  def feed(self, dst:bytearray, data:Buffer) -> None:
    'Decode all of `data`, appending output bytes to `dst`.'
    d = memoryview(data).cast('B')
    if self.is_terminated:
      self._expect_newlines(d, 0)
      return

    transitions = self.transitions
    values = self.values
    quantum = self.quantum
    node = self.node
    count = self.count
    last_symbol = self.last_symbol
    base = self.offset
    n = len(d)
    i = 0
    while i < n:
      dst_node = transitions[node].get(d[i])
      if dst_node is None: raise CorruptInput(last_symbol)
      node = dst_node
      v = values[node]
      if v < 0:
        i += 1
        continue
      if v == PAD:
        if count < 2: raise CorruptInput(last_symbol) # Padding cannot fill the first or second slot.
        self.pad_count += 1
        v = 0
      quantum[count] = v
      count += 1
      if count == 4:
        count = 0
        self.last_block = base + i + 1
        pad_count = self.pad_count
        if pad_count > 2: raise CorruptInput(last_symbol)
        if not decode_quantum(dst, quantum, 3 - pad_count, self.strict): raise CorruptInput(last_symbol)
        if pad_count:
          self.node = node
          self.count = 0
          self.last_symbol = last_symbol
          self.is_terminated = True
          self.offset = base + i + 1
          self._expect_newlines(d, i + 1)
          return
      if values[node] < PAD:
        last_symbol = base + i + 1
      i += 1

    self.node = node
    self.count = count
    self.last_symbol = last_symbol
    self.offset = base + n

  def finish(self, dst:bytearray) -> None:
    'Signal the end of the encoded text, decoding any unpadded final quantum into `dst`.'
    if self.is_terminated: return
    if self.values[self.node] == MID: raise CorruptInput(self.offset) # Truncated symbol.
    count = self.count
    if not count: return
    if self.padded:
      # A dangling quantum without padding is blamed on its start; with partial padding, on the end.
      raise CorruptInput(self.last_block if self.pad_count == 0 else self.offset)
    if count == 1: raise CorruptInput(self.offset) # A single symbol cannot encode a whole byte.
    quantum = self.quantum
    for j in range(count, 4): quantum[j] = 0
    if not decode_quantum(dst, quantum, count - 1, self.strict): raise CorruptInput(self.last_symbol)
    self.count = 0
    self.is_terminated = True

  def _expect_newlines(self, d:memoryview, start:int) -> None:
    for j in range(start, len(d)):
      if d[j] != LF and d[j] != CR: raise CorruptInput(self.offset + j - start) # Trailing garbage.
    self.offset += len(d) - start
