# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Quantum arithmetic shared by the one-shot and streaming paths.
A quantum is 3 bytes (24 bits) packed big-endian and split into four 6-bit values, most significant first.
'''

from typing import Sequence

from typing_extensions import Buffer


def encode_blocks(dst:bytearray, symbols:Sequence[bytes], src:Buffer, end:int) -> None:
  'Append the symbols for the complete quanta of `src[:end]` to `dst`. `end` must be a multiple of 3.'
  assert end % 3 == 0
  s = memoryview(src)
  for i in range(0, end, 3):
    val = s[i] << 16 | s[i+1] << 8 | s[i+2]
    dst += symbols[val >> 18 & 0x3f]
    dst += symbols[val >> 12 & 0x3f]
    dst += symbols[val >> 6 & 0x3f]
    dst += symbols[val & 0x3f]


def encode_tail(dst:bytearray, symbols:Sequence[bytes], pad:bytes, tail:Buffer) -> None:
  '''
  Append the final short quantum for the 1 or 2 bytes of `tail` to `dst`:
  two or three symbols, followed by padding to a full quantum when `pad` is not empty.
  '''
  t = memoryview(tail)
  remain = len(t)
  if remain == 0: return
  assert remain < 3
  val = t[0] << 16
  if remain == 2: val |= t[1] << 8
  dst += symbols[val >> 18 & 0x3f]
  dst += symbols[val >> 12 & 0x3f]
  if remain == 2:
    dst += symbols[val >> 6 & 0x3f]
    dst += pad
  else:
    dst += pad
    dst += pad


# Low bits discarded by a short quantum, keyed by the number of output bytes.
_slack_masks = (0, 0xffff, 0xff, 0)


def decode_quantum(dst:bytearray, quantum:Sequence[int], count:int, strict:bool) -> bool:
  '''
  Reassemble the four 6-bit values of `quantum` and append the leading `count` (1-3) bytes to `dst`.
  Unused slots must already be zero.
  If `strict` and the discarded low bits are not all zero, append nothing and return False.
  '''
  val = quantum[0] << 18 | quantum[1] << 12 | quantum[2] << 6 | quantum[3]
  if strict and val & _slack_masks[count]: return False
  if count == 3:
    dst += val.to_bytes(3, 'big')
  elif count == 2:
    dst += (val >> 8).to_bytes(2, 'big')
  else:
    assert count == 1
    dst.append(val >> 16)
  return True
