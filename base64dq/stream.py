# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Streaming encoder and decoder.

`StreamEncoder` wraps a binary sink and buffers input to 3-byte boundaries across calls to `write`;
`close` flushes the final, possibly padded quantum.
`StreamDecoder` wraps a binary source and decodes on demand; `read` returns b'' only at the end of input.

Streams are not thread safe. Any exception raised by the wrapped sink or source,
and any CorruptInput, poisons the stream: every later call raises the same exception.
'''

from enum import Enum
from typing import Any, BinaryIO, Iterable, NoReturn

from typing_extensions import Buffer

from .alphabet import Encoding
from .block import encode_blocks, encode_tail
from .codec import DecodeCursor


class StreamState(Enum):
  OPEN = 0
  POISONED = 1 # A sink, source, or decoding error was raised; it is re-raised by every later call.
  DONE = 2 # Decoder only: the end of the encoded text was reached.
  CLOSED = 3


OPEN = StreamState.OPEN
POISONED = StreamState.POISONED
DONE = StreamState.DONE
CLOSED = StreamState.CLOSED


out_buffer_size = 1024 # Encoded bytes produced per sink write.
window_size = 4096 # Maximum encoded bytes requested from the source per refill.


class StreamBase:

  def __init__(self, enc:Encoding) -> None:
    self.enc = enc
    self.state = OPEN
    self.error:BaseException|None = None

  def __enter__(self) -> Any: return self

  def __exit__(self, exc_type:Any, exc_value:Any, traceback:Any) -> None:
    self.close()

  @property
  def closed(self) -> bool: return self.state is CLOSED

  def close(self) -> None: raise NotImplementedError

  def seekable(self) -> bool: return False

  def isatty(self) -> bool: return False

  def _poison(self, exc:BaseException) -> None:
    self.state = POISONED
    self.error = exc

  def _raise_error(self) -> NoReturn:
    assert self.error is not None
    raise self.error

  def _check_open(self) -> None:
    if self.state is POISONED: self._raise_error()
    if self.state is CLOSED: raise ValueError('I/O operation on closed stream.')


class StreamEncoder(StreamBase):
  '''
  Encode bytes written to this stream, writing the encoded text to `sink`.
  The stream must be closed to flush any partial quantum. Closing does not close the sink.
  '''

  def __init__(self, enc:Encoding, sink:BinaryIO) -> None:
    super().__init__(enc)
    self.sink = sink
    self.pending = bytearray() # At most 2 bytes waiting for a complete quantum.
    self.input_byte_count = 0
    self.output_byte_count = 0
    # Bytes per interior chunk, so that each chunk's encoding fits in the output buffer.
    self.chunk_size = max(3, out_buffer_size // enc.max_width // 4 * 3)

  def __enter__(self) -> 'StreamEncoder': return self

  def readable(self) -> bool: return False

  def writable(self) -> bool: return True

  def read(self, size=-1) -> NoReturn: raise TypeError('StreamEncoder is not readable')

  def write(self, data:Buffer, /) -> int:
    'Encode `data`, returning the number of input bytes consumed, which is always all of them.'
    self._check_open()
    p = memoryview(data).cast('B')
    n = len(p)
    pending = self.pending
    symbols = self.enc.symbol_bytes

    # Leading fringe.
    if pending:
      take = 3 - len(pending)
      pending += p[:take]
      p = p[take:]
      if len(pending) < 3:
        self.input_byte_count += n
        return n
      out = bytearray()
      encode_blocks(out, symbols, bytes(pending), 3)
      self._emit(out)
      pending.clear()

    # Large interior chunks.
    chunk_size = self.chunk_size
    while len(p) >= 3:
      nn = min(chunk_size, len(p) - len(p) % 3)
      out = bytearray()
      encode_blocks(out, symbols, p, nn)
      self._emit(out)
      p = p[nn:]

    # Trailing fringe.
    pending += p
    self.input_byte_count += n
    return n

  def writelines(self, lines:Iterable[Buffer]) -> None:
    for line in lines: self.write(line)

  def flush(self) -> None:
    'Flush the sink. A pending partial quantum is only written by `close`.'
    self._check_open()
    try: self.sink.flush()
    except Exception as exc:
      self._poison(exc)
      raise

  def close(self) -> None:
    'Flush any pending partial quantum. It is an error to call `write` after `close`.'
    if self.state is CLOSED: return
    if self.state is POISONED: self._raise_error()
    if self.pending:
      out = bytearray()
      encode_tail(out, self.enc.symbol_bytes, self.enc.pad_bytes, bytes(self.pending))
      self._emit(out)
      self.pending.clear()
    self.state = CLOSED

  def _emit(self, out:bytearray) -> None:
    try: self.output_byte_count += self.sink.write(out)
    except Exception as exc:
      self._poison(exc)
      raise


class StreamDecoder(StreamBase):
  '''
  Decode the encoded text read from `source`.
  Partial symbols may span reads from the source.
  Bytes decoded before an error is detected are returned first; the error is raised by the following read.
  Closing does not close the source.
  '''

  def __init__(self, enc:Encoding, source:BinaryIO) -> None:
    super().__init__(enc)
    self.source = source
    self.cursor = DecodeCursor(enc)
    self.out = bytearray() # Decoded bytes not yet returned to the caller.
    self.min_window = 4 * enc.max_width # Enough for one quantum of maximal-width symbols.

  def __enter__(self) -> 'StreamDecoder': return self

  def readable(self) -> bool: return True

  def writable(self) -> bool: return False

  def write(self, data:Buffer, /) -> NoReturn: raise TypeError('StreamDecoder is not writable')

  @property
  def offset(self) -> int:
    'The number of encoded bytes consumed from the source.'
    return self.cursor.offset

  def read(self, size:int|None=-1) -> bytes:
    'Return up to `size` decoded bytes, or all remaining bytes if `size` is negative or None; b"" at the end of input.'
    if size is None or size < 0: return self.readall()
    if self.state is CLOSED: raise ValueError('I/O operation on closed stream.')
    if self.state is POISONED and not self.out: self._raise_error()
    if size == 0: return b''
    if len(self.out) < size and self.state is OPEN:
      self._fill(size)
    out = self.out
    if out:
      res = bytes(out[:size])
      del out[:size]
      return res
    if self.state is POISONED: self._raise_error()
    return b''

  def read1(self, size:int|None=-1) -> bytes:
    return self.read(window_size if size is None or size < 0 else size)

  def readinto(self, buffer:Buffer) -> int:
    'Read decoded bytes into the writable `buffer`, returning the number of bytes read; 0 at the end of input.'
    b = memoryview(buffer).cast('B')
    data = self.read(len(b))
    n = len(data)
    b[:n] = data
    return n

  def readall(self) -> bytes:
    chunks = []
    while chunk := self.read(window_size):
      chunks.append(chunk)
    return b''.join(chunks)

  def __iter__(self) -> 'StreamDecoder': return self

  def __next__(self) -> bytes:
    chunk = self.read(window_size)
    if not chunk: raise StopIteration
    return chunk

  def close(self) -> None:
    self.state = CLOSED
    self.out.clear()

  def _fill(self, size:int) -> None:
    'Decode from the source until at least `size` bytes are available, or the stream ends or fails.'
    w = self.enc.max_width
    want = min(max(size // 3 * 4 * w, self.min_window), window_size)
    while len(self.out) < size and self.state is OPEN:
      window = bytearray()
      at_end = False
      try:
        while len(window) < self.min_window:
          chunk = self.source.read(want - len(window))
          if not chunk:
            at_end = True
            break
          window += chunk
        self.cursor.feed(self.out, window)
        if at_end:
          self.cursor.finish(self.out)
          self.state = DONE
      except Exception as exc: # Includes CorruptInput.
        self._poison(exc)
        if not self.out: raise


def open_encode_stream(enc:Encoding, sink:BinaryIO) -> StreamEncoder:
  'Return a new stream encoder writing to `sink`. Close it when finished to flush any partial quantum.'
  return StreamEncoder(enc, sink)


def open_decode_stream(enc:Encoding, source:BinaryIO) -> StreamDecoder:
  'Return a new stream decoder reading from `source`.'
  return StreamDecoder(enc, source)
