# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Alphabet configuration for base64dq.

An `Encoding` is an immutable value holding 64 symbols (the index of each symbol is its 6-bit value),
an optional padding symbol, and the strict decoding flag.
Each symbol is a single code point that may occupy 1-4 bytes in UTF-8.

The standard encoding is inspired by the Revival Password (ふっかつのじゅもん) of the Dragon Quest series,
which is written with 64 characters from the Japanese hiragana syllabary.
'''

from bisect import bisect_left
from dataclasses import dataclass, field, replace
from threading import Lock
from typing import Optional, Tuple

from typing_extensions import Buffer

from .exceptions import InvalidAlphabet, InvalidPadding
from .recognizer import build_recognizer, PAD, Recognizer


STD_PADDING = '・'
NO_PADDING = None

std_alphabet = 'あいうえおかきくけこさしすせそたちつてとなにぬねのはひふへほまみむめもやゆよらりるれろわがぎぐげござじずぜぞだぢづでどばびぶべぼ'

# The name alphabet is used to encode a player name.
name_alphabet = '０１２３４５６７８９あいうえおかきくけこさしすせそたちつてとなにぬねのはひふへほまみむめもやゆよらりるれろわをんっゃゅょ゛゜ー　'


@dataclass(frozen=True)
class Encoding:
  '''
  A base64 encoding over an arbitrary alphabet of 64 code points.
  `pad` is a single-character padding symbol, or None (NO_PADDING) to omit padding.
  In `strict` mode the decoder requires that the unused low bits of a short final quantum are zero.

  Instances are immutable and safe to share between threads and streams.
  The decoding recognizer is built at most once, on first use.
  '''
  symbols:Tuple[str,...]
  pad:Optional[str] = STD_PADDING
  strict:bool = False

  symbol_bytes:Tuple[bytes,...] = field(init=False, repr=False, compare=False)
  pad_bytes:bytes = field(init=False, repr=False, compare=False)
  max_width:int = field(init=False, repr=False, compare=False)
  _sorted_chars:Tuple[str,...] = field(init=False, repr=False, compare=False)
  _sorted_values:Tuple[int,...] = field(init=False, repr=False, compare=False)
  _recognizer:Optional[Recognizer] = field(init=False, repr=False, compare=False)
  _lock:Lock = field(init=False, repr=False, compare=False)

  def __post_init__(self) -> None:
    symbols = tuple(self.symbols)
    if len(symbols) != 64:
      raise InvalidAlphabet(f'encoding alphabet is not 64 code points long: {len(symbols)}')
    for s in symbols:
      if not isinstance(s, str) or len(s) != 1:
        raise InvalidAlphabet(f'encoding alphabet symbol is not a single code point: {s!r}')
      if s == '\ufffd' or _is_surrogate(s):
        raise InvalidAlphabet('encoding alphabet contains invalid UTF-8 sequence')
      if s in '\r\n':
        raise InvalidAlphabet(f'encoding alphabet contains a newline character: {s!r}')
    if len(set(symbols)) != 64:
      dups = sorted({s for s in symbols if symbols.count(s) > 1})
      raise InvalidAlphabet(f'encoding alphabet contains repeated code points: {"".join(dups)!r}')

    pad = self.pad
    if pad is not None:
      if not isinstance(pad, str) or len(pad) != 1: raise InvalidPadding(f'padding is not a single code point: {pad!r}')
      if pad in '\r\n': raise InvalidPadding('invalid padding')
      if pad == '\ufffd' or _is_surrogate(pad): raise InvalidPadding('padding is not a valid code point')
      if pad in symbols: raise InvalidPadding(f'padding contained in alphabet: {pad!r}')

    symbol_bytes = tuple(s.encode('utf8') for s in symbols)
    pad_bytes = pad.encode('utf8') if pad is not None else b''
    pairs = sorted((s, v) for v, s in enumerate(symbols))

    set_ = object.__setattr__ # Frozen dataclass.
    set_(self, 'symbols', symbols)
    set_(self, 'symbol_bytes', symbol_bytes)
    set_(self, 'pad_bytes', pad_bytes)
    set_(self, 'max_width', max(len(pad_bytes), *(len(b) for b in symbol_bytes)))
    set_(self, '_sorted_chars', tuple(s for s, _ in pairs))
    set_(self, '_sorted_values', tuple(v for _, v in pairs))
    set_(self, '_recognizer', None)
    set_(self, '_lock', Lock())

  @property
  def alphabet(self) -> str: return ''.join(self.symbols)

  @property
  def has_padding(self) -> bool: return self.pad is not None

  def with_padding(self, pad:Optional[str]) -> 'Encoding':
    '''
    Return a new encoding identical to this one except with the specified padding character,
    or NO_PADDING to disable padding.
    The padding character must not be '\\r' or '\\n', and must not be contained in the alphabet.
    '''
    return replace(self, pad=pad)

  def with_strict(self, strict=True) -> 'Encoding':
    '''
    Return a new encoding identical to this one except with strict decoding enabled (or disabled).
    Note that strict input is still malleable, as CR and LF are always ignored.
    '''
    enc = replace(self, strict=strict)
    if self._recognizer is not None: # Same alphabet and padding; share the immutable recognizer.
      object.__setattr__(enc, '_recognizer', self._recognizer)
    return enc

  def value_of(self, char:str) -> Optional[int]:
    'Return the 6-bit value of `char`, PAD for the padding symbol, or None if `char` is not a symbol of this encoding.'
    i = bisect_left(self._sorted_chars, char)
    if i < 64 and self._sorted_chars[i] == char: return self._sorted_values[i]
    if char == self.pad: return PAD
    return None

  @property
  def recognizer(self) -> Recognizer:
    r = self._recognizer
    if r is None:
      with self._lock:
        r = self._recognizer
        if r is None:
          r = build_recognizer(self.symbol_bytes, self.pad_bytes)
          object.__setattr__(self, '_recognizer', r)
    return r


def new_encoding(alphabet:str|Buffer, pad:Optional[str]=STD_PADDING) -> Encoding:
  '''
  Return a new padded Encoding defined by the 64 code points of `alphabet`.
  A bytes alphabet is decoded as UTF-8; malformed sequences are rejected.
  '''
  if not isinstance(alphabet, str):
    alphabet = bytes(alphabet).decode('utf8', errors='replace')
  return Encoding(symbols=tuple(alphabet), pad=pad)


def _is_surrogate(char:str) -> bool: return 0xd800 <= ord(char) <= 0xdfff


# Base64 encoding used for the Revival Password.
STD_ENCODING = new_encoding(std_alphabet)

# Base64 encoding used for a player name.
NAME_ENCODING = new_encoding(name_alphabet)

RAW_STD_ENCODING = STD_ENCODING.with_padding(NO_PADDING)

RAW_NAME_ENCODING = NAME_ENCODING.with_padding(NO_PADDING)
