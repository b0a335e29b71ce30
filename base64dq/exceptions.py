# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Exception classes raised by base64dq.
Misconfiguration is reported when an `Encoding` is built; corruption is reported while decoding.
'''


class InvalidAlphabet(ValueError):
  'Raised when an alphabet is not exactly 64 distinct, valid code points.'


class InvalidPadding(ValueError):
  'Raised when a padding symbol is CR, LF, not a single valid code point, or a member of the alphabet.'


class CorruptInput(ValueError):
  '''
  Raised when encoded input is malformed.
  `offset` is a byte position in the UTF-8 encoded input, never a symbol count,
  because symbols vary in width.
  '''

  def __init__(self, offset:int) -> None:
    self.offset = offset
    super().__init__(offset)

  def __str__(self) -> str:
    return f'illegal base64dq data at input byte {self.offset}'
