# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from io import StringIO

from base64dq.alphabet import new_encoding, NO_PADDING, RAW_STD_ENCODING, STD_ENCODING
from base64dq.recognizer import build_recognizer, MID, PAD, ROOT
from utest import utest, utest_call, utest_val


rec = STD_ENCODING.recognizer

utest(ROOT, rec.match, b'')
utest(ROOT, rec.match, b'\n')
utest(ROOT, rec.match, b'\r\n\r\n')
utest(0, rec.match, 'あ'.encode())
utest(63, rec.match, 'ぼ'.encode())
utest(1, rec.match, 'あい'.encode())
utest(1, rec.match, 'あ\nい'.encode())
utest(ROOT, rec.match, 'あ\n'.encode())
utest(MID, rec.match, 'あ'.encode()[:1])
utest(MID, rec.match, 'あ'.encode()[:2])
utest(MID, rec.match, '・'.encode()[:2])
utest(PAD, rec.match, '・'.encode())
utest(PAD, rec.match, 'ああ・'.encode())
utest(PAD, rec.match, '・・'.encode())
utest(ROOT, rec.match, '・\r\n・\n'.encode()) # The gap after padding consumes no slot.
utest(PAD, rec.match, '・\r\n・'.encode())
utest(None, rec.match, '・\nあ'.encode())
utest(None, rec.match, '・あ'.encode()) # Only padding or newlines may follow padding.
utest(None, rec.match, b'!')
utest(None, rec.match, 'ア'.encode()) # Katakana shares a lead byte with hiragana.
utest(None, rec.match, 'ぱ'.encode()) # Hiragana outside of the alphabet.

# Root, four shared prefixes, 64 symbols, padding, two prefixes continuing from padding, and the gap after padding.
utest_val(73, len(rec))

utest(None, RAW_STD_ENCODING.recognizer.match, '・'.encode())
utest(0, RAW_STD_ENCODING.recognizer.match, 'あ'.encode())


@utest_call
def test_single_byte() -> None:
  alphabet = 'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/'
  r = new_encoding(alphabet, pad='=').recognizer
  utest_val(1 + 64 + 2, len(r))
  for v, c in enumerate(alphabet):
    utest(v, r.match, c.encode())
  utest(PAD, r.match, b'AA==')
  utest(None, r.match, b'=A')
  utest(None, r.match, b'-')
  r_raw = new_encoding(alphabet, pad=NO_PADDING).recognizer
  utest(None, r_raw.match, b'=')


@utest_call
def test_mixed_widths() -> None:
  symbols = [chr(0x41 + i) for i in range(16)] + [chr(0x3b1 + i) for i in range(16)] \
   + [chr(0x3042 + 2*i) for i in range(16)] + [chr(0x1f600 + i) for i in range(16)]
  r = build_recognizer([s.encode() for s in symbols], '🍀'.encode())
  for v, s in enumerate(symbols):
    utest(v, r.match, s.encode())
  utest(PAD, r.match, 'A🍀🍀'.encode())
  utest(MID, r.match, '😀'.encode()[:3])
  utest(None, r.match, '🍀'.encode()[:3] + b'A')


@utest_call
def test_describe() -> None:
  f = StringIO()
  rec.describe(label='std', file=f)
  lines = f.getvalue().splitlines()
  utest_val('recognizer: std:', lines[0])
  utest_val(' nodes: 73; transitions: ' + str(sum(len(d) for d in rec.transitions)), lines[1])
  utest_val('  0: root', lines[2])
  utest_val(True, '    \\n ==> 0' in lines or '    \\n \\r ==> 0' in lines)
  utest_val(True, any(line.endswith(': pad') for line in lines))
  utest_val(True, any(line.endswith(': value 63') for line in lines))
