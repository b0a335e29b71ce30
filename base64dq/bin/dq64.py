# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'Encode or decode data using the base64dq encoding.'

from argparse import ArgumentParser
from shutil import copyfileobj
from sys import stderr, stdin, stdout
from typing import BinaryIO

from base64dq.alphabet import Encoding, NAME_ENCODING, new_encoding, STD_ENCODING, STD_PADDING
from base64dq.exceptions import CorruptInput, InvalidAlphabet, InvalidPadding
from base64dq.stream import StreamDecoder, StreamEncoder


def main() -> None:
  parser = ArgumentParser(description='Encode standard input (or a file) to standard output using base64dq; decode with `-d`.')
  parser.add_argument('-d', '-decode', dest='decode', action='store_true', help='Decode data.')
  parser.add_argument('-name', action='store_true', help='Use the name alphabet instead of the standard alphabet.')
  parser.add_argument('-alphabet', help='Use a custom alphabet of 64 characters.')
  parser.add_argument('-pad', help='Padding character.')
  parser.add_argument('-raw', action='store_true', help='Omit padding.')
  parser.add_argument('-strict', action='store_true', help='Require zero trailing padding bits when decoding.')
  parser.add_argument('-dbg', action='store_true', help='Describe the decoding recognizer on stderr.')
  parser.add_argument('path', nargs='?', help='Input file; defaults to standard input.')
  args = parser.parse_args()

  try: enc = encoding_for_args(alphabet=args.alphabet, name=args.name, pad=args.pad, raw=args.raw, strict=args.strict)
  except (InvalidAlphabet, InvalidPadding) as e: exit(f'dq64: error: {e}')

  if args.dbg: enc.recognizer.describe(label=repr(enc.alphabet))

  try:
    src = open(args.path, 'rb') if args.path else stdin.buffer
  except OSError as e: exit(f'dq64: error: {e}')

  with src:
    try:
      if args.decode: decode_stream(enc, src, stdout.buffer)
      else: encode_stream(enc, src, stdout.buffer)
    except (CorruptInput, OSError) as e:
      stdout.flush()
      print(f'dq64: error: {e}', file=stderr)
      exit(1)


def encoding_for_args(alphabet:str|None, name:bool, pad:str|None, raw:bool, strict:bool) -> Encoding:
  if alphabet is not None:
    # Pad at construction, so that an alphabet containing the standard padding character can be used raw.
    enc = new_encoding(alphabet, pad=(None if raw else STD_PADDING if pad is None else pad))
  else:
    enc = NAME_ENCODING if name else STD_ENCODING
    if raw: enc = enc.with_padding(None)
    elif pad is not None: enc = enc.with_padding(pad)
  if strict: enc = enc.with_strict()
  return enc


def encode_stream(enc:Encoding, src:BinaryIO, dst:BinaryIO) -> None:
  encoder = StreamEncoder(enc, dst)
  copyfileobj(src, encoder)
  encoder.close() # Flush the final partial quantum.
  dst.flush()


def decode_stream(enc:Encoding, src:BinaryIO, dst:BinaryIO) -> None:
  decoder = StreamDecoder(enc, src)
  copyfileobj(decoder, dst)
  dst.flush()


if __name__ == '__main__': main()
