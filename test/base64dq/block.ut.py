# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from base64dq.block import decode_quantum, encode_blocks, encode_tail
from utest import utest_call, utest_val
from vectors import ascii_alphabet


symbols = [c.encode() for c in ascii_alphabet]


def blocks(src:bytes) -> bytes:
  dst = bytearray()
  encode_blocks(dst, symbols, src, len(src) - len(src) % 3)
  return bytes(dst)


def tail(src:bytes, pad=b'=') -> bytes:
  dst = bytearray()
  encode_tail(dst, symbols, pad, src)
  return bytes(dst)


utest_val(b'', blocks(b''))
utest_val(b'Zm9v', blocks(b'foo'))
utest_val(b'Zm9vYmFy', blocks(b'foobar'))
utest_val(b'Zm9v', blocks(b'foob')) # Only complete quanta.
utest_val(b'////', blocks(b'\xff\xff\xff'))
utest_val(b'AAAA', blocks(b'\x00\x00\x00'))

utest_val(b'', tail(b''))
utest_val(b'Zg==', tail(b'f'))
utest_val(b'Zm8=', tail(b'fo'))
utest_val(b'Zg', tail(b'f', pad=b''))
utest_val(b'Zm8', tail(b'fo', pad=b''))
utest_val('Zg・・'.encode(), tail(b'f', pad='・'.encode()))

@utest_call
def test_wide_symbols() -> None:
  wide = [chr(0x1f600 + i).encode() for i in range(64)]
  dst = bytearray()
  encode_blocks(dst, wide, b'\x00\x00\x00', 3)
  utest_val(wide[0] * 4, bytes(dst))
  encode_tail(dst, wide, b'=', b'\xff')
  utest_val(wide[0] * 4 + wide[63] + wide[48] + b'==', bytes(dst))


@utest_call
def test_decode_quantum() -> None:
  dst = bytearray()
  utest_val(True, decode_quantum(dst, [25, 38, 61, 47], 3, strict=True)) # 'Zm9v'.
  utest_val(bytearray(b'foo'), dst)
  utest_val(True, decode_quantum(dst, [25, 38, 60, 0], 2, strict=True)) # 'Zm8'.
  utest_val(bytearray(b'foofo'), dst)
  utest_val(True, decode_quantum(dst, [25, 32, 0, 0], 1, strict=True)) # 'Zg'.
  utest_val(bytearray(b'foofof'), dst)

  # Nonzero discarded bits.
  utest_val(True, decode_quantum(dst, [25, 33, 0, 0], 1, strict=False))
  utest_val(bytearray(b'foofoff'), dst)
  utest_val(False, decode_quantum(dst, [25, 33, 0, 0], 1, strict=True))
  utest_val(False, decode_quantum(dst, [25, 38, 61, 0], 2, strict=True))
  utest_val(bytearray(b'foofoff'), dst) # Nothing appended on failure.
