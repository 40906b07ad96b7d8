"""
Alphanumeric message packing.

Characters are 7-bit ASCII sent LSB first, packed back to back into the
20-bit payloads of message codewords. A character may straddle two words.
"""

from typing import Iterator, List, Union

from . import (
    BATCH_SIZE,
    MESSAGE_FLAG,
    SYNC_WORD,
    TEXT_BITS_PER_CHAR,
    TEXT_BITS_PER_WORD,
)
from .codeword import encode_codeword


def to_bytes(text: Union[str, bytes]) -> bytes:
    """
    Message text as bytes.

    Strings map one character to one byte (latin-1), so text read as
    latin-1 gets its original bytes back. Characters above U+00FF become '?'.
    """
    if isinstance(text, str):
        return text.encode("latin-1", errors="replace")
    return bytes(text)


def char_bits(char: int) -> Iterator[int]:
    """Yield the low 7 bits of a character, LSB first."""
    for i in range(TEXT_BITS_PER_CHAR):
        yield (char >> i) & 1


class BitAccumulator:
    """
    Collects bits MSB first into a fixed-width word.

    Each push shifts the word left and appends the new bit.
    """

    def __init__(self, width: int = TEXT_BITS_PER_WORD):
        self.width = width
        self.value = 0
        self.count = 0

    def __len__(self) -> int:
        return self.count

    @property
    def full(self) -> bool:
        return self.count == self.width

    def push(self, bit: int) -> bool:
        """Append a bit. Returns True once the word is full."""
        self.value = (self.value << 1) | (bit & 1)
        self.count += 1
        return self.full

    def take(self) -> int:
        """Return the current word and reset."""
        value = self.value
        self.value = 0
        self.count = 0
        return value

    def flush(self) -> int:
        """Return a partial word padded with zero bits to full width."""
        self.value <<= self.width - self.count
        return self.take()


class TextPacker:
    """
    Packs text into message codewords.

    Tracks the position of each word within its batch so a sync word can
    be inserted whenever a batch fills up.
    """

    def __init__(self, initial_word_position: int = 0):
        """
        Args:
            initial_word_position: Batch slot of the first message word (0-15)
        """
        self.word_position = initial_word_position
        self.bits = BitAccumulator()
        self.words: List[int] = []

    def _emit(self, payload: int):
        self.words.append(encode_codeword(payload | MESSAGE_FLAG))
        self.word_position += 1
        if self.word_position == BATCH_SIZE:
            self.words.append(SYNC_WORD)
            self.word_position = 0

    def feed(self, data: bytes):
        for char in data:
            for bit in char_bits(char):
                if self.bits.push(bit):
                    self._emit(self.bits.take())

    def finish(self) -> List[int]:
        """Flush any partial word and return every codeword emitted."""
        if len(self.bits):
            self._emit(self.bits.flush())
        return self.words


def encode_ascii(initial_word_position: int, text: Union[str, bytes]) -> List[int]:
    """
    Encode text as message codewords, with sync words inline.

    Args:
        initial_word_position: Batch slot of the first message word (0-15)
        text: Message text; only the low 7 bits of each byte are sent

    Returns:
        List of codewords
    """
    packer = TextPacker(initial_word_position)
    packer.feed(to_bytes(text))
    return packer.finish()
