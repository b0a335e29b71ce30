# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from io import BytesIO

from base64dq.alphabet import NAME_ENCODING, new_encoding, RAW_NAME_ENCODING, RAW_STD_ENCODING, STD_ENCODING
from base64dq.bin.dq64 import decode_stream, encode_stream, encoding_for_args
from base64dq.exceptions import CorruptInput, InvalidAlphabet, InvalidPadding
from utest import utest, utest_call, utest_exc, utest_val
from vectors import ascii_alphabet, bigtest


def encode_bytes(enc, data:bytes) -> bytes:
  dst = BytesIO()
  encode_stream(enc, BytesIO(data), dst)
  return dst.getvalue()


def decode_bytes(enc, data:bytes) -> bytes:
  dst = BytesIO()
  decode_stream(enc, BytesIO(data), dst)
  return dst.getvalue()


utest('はらぶげあきこめへむ・・'.encode(), encode_bytes, STD_ENCODING, b'foo\x00bar')
utest(b'foo\x00bar', decode_bytes, STD_ENCODING, 'はらぶげあきこめへむ・・\n'.encode())
utest(bigtest[1].encode(), encode_bytes, STD_ENCODING, bigtest[0])
utest(b'', encode_bytes, STD_ENCODING, b'')
utest(b'', decode_bytes, STD_ENCODING, b'')
utest_exc(CorruptInput(3), decode_bytes, STD_ENCODING, 'あ・ああ'.encode())


@utest_call
def test_round_trip() -> None:
  data = bytes(range(256)) * 40
  for enc in (STD_ENCODING, RAW_NAME_ENCODING, new_encoding(ascii_alphabet, pad='=')):
    utest(data, decode_bytes, enc, encode_bytes(enc, data))


# Flag mapping.
utest(STD_ENCODING, encoding_for_args, alphabet=None, name=False, pad=None, raw=False, strict=False)
utest(NAME_ENCODING, encoding_for_args, alphabet=None, name=True, pad=None, raw=False, strict=False)
utest(RAW_STD_ENCODING, encoding_for_args, alphabet=None, name=False, pad=None, raw=True, strict=False)
utest(RAW_NAME_ENCODING.with_strict(), encoding_for_args, alphabet=None, name=True, pad=None, raw=True, strict=True)
utest(STD_ENCODING.with_padding('='), encoding_for_args, alphabet=None, name=False, pad='=', raw=False, strict=False)
utest(new_encoding(ascii_alphabet), encoding_for_args, alphabet=ascii_alphabet, name=False, pad=None, raw=False, strict=False)
utest(new_encoding(ascii_alphabet, pad='='), encoding_for_args, alphabet=ascii_alphabet, name=False, pad='=', raw=False, strict=False)
utest(new_encoding(ascii_alphabet, pad=None), encoding_for_args, alphabet=ascii_alphabet, name=False, pad='=', raw=True, strict=False)

# A raw custom alphabet may contain the standard padding character.
utest_val(None, encoding_for_args(alphabet=ascii_alphabet[:63] + '・', name=False, pad=None, raw=True, strict=False).pad)

utest_exc(InvalidAlphabet, encoding_for_args, alphabet='abc', name=False, pad=None, raw=False, strict=False)
utest_exc(InvalidPadding, encoding_for_args, alphabet=None, name=False, pad='あ', raw=False, strict=False)
