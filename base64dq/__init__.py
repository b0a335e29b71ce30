# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
base64dq implements base64 over a configurable alphabet of 64 arbitrary Unicode code points,
each of which may occupy 1-4 bytes in UTF-8.
The standard alphabet is inspired by the Revival Password (ふっかつのじゅもん) of Dragon Quest.
'''

from .__about__ import __version__
from .alphabet import (Encoding, NAME_ENCODING, name_alphabet, new_encoding, NO_PADDING, RAW_NAME_ENCODING, RAW_STD_ENCODING,
  std_alphabet, STD_ENCODING, STD_PADDING)
from .codec import decode, decode_into, decoded_len, encode, encode_into, encode_to_utf8, encoded_len
from .exceptions import CorruptInput, InvalidAlphabet, InvalidPadding
from .stream import open_decode_stream, open_encode_stream, StreamDecoder, StreamEncoder
