"""
POCSAG transmission framing.

Transmission structure:
- Preamble: 576 bits of alternating 1,0 (18 words of 0xAAAAAAAA)
- Batches: one sync word followed by 16 words (8 frames of 2 words)

The address word sits in the frame selected by the address's low 3 bits,
preceded by idle words. Message words follow it, then one idle word marks
the end of the message and more idle words fill out the last batch.
When the message already ends on a batch boundary no idle batch is
added, unlike encoders that always pad with at least one idle word.
"""

import logging
from typing import List, Union

from . import (
    BATCH_SIZE,
    FRAME_SIZE,
    FUNC_ALPHA,
    IDLE_WORD,
    PREAMBLE_WORD,
    PREAMBLE_WORDS,
    SYNC_WORD,
    TEXT_BITS_PER_CHAR,
    TEXT_BITS_PER_WORD,
)
from .codeword import address_word
from .text import encode_ascii, to_bytes


_logger = logging.getLogger(__name__)


class TransmissionLengthError(RuntimeError):
    """The framed transmission does not match its predicted length."""


def address_offset(address: int) -> int:
    """Number of idle words before the address word."""
    return (address & 0x7) * FRAME_SIZE


def message_length(address: int, num_chars: int, function_code: int = FUNC_ALPHA) -> int:
    """
    Predict the length in words of a transmission.

    The function code does not change the length of a text message.

    Args:
        address: Pager address (0 to 2097151)
        num_chars: Message length in characters
        function_code: Function code (0-3)

    Returns:
        Word count including preamble and sync words
    """
    words = address_offset(address)
    words += 1  # address word
    words += (num_chars * TEXT_BITS_PER_CHAR + TEXT_BITS_PER_WORD - 1) // TEXT_BITS_PER_WORD
    words += 1  # idle word ending the message

    # Fill out the last batch
    words += -words % BATCH_SIZE

    # One sync word per batch
    words += words // BATCH_SIZE

    return words + PREAMBLE_WORDS


def encode_transmission(
    address: int,
    message: Union[str, bytes],
    function_code: int = FUNC_ALPHA,
) -> List[int]:
    """
    Encode a full transmission to a pager.

    Args:
        address: Pager address (0 to 2097151)
        message: Message text
        function_code: Function code (0-3)

    Returns:
        List of 32-bit words, preamble first

    Raises:
        TransmissionLengthError: If the result disagrees with message_length()
    """
    data = to_bytes(message)
    out = [PREAMBLE_WORD] * PREAMBLE_WORDS

    start = len(out)
    out.append(SYNC_WORD)

    offset = address_offset(address)
    out.extend([IDLE_WORD] * offset)
    out.append(address_word(address, function_code))

    out.extend(encode_ascii(offset + 1, data))
    out.append(IDLE_WORD)

    # Pad to a whole number of sync + batch blocks
    written = len(out) - start
    out.extend([IDLE_WORD] * (-written % (BATCH_SIZE + 1)))

    expected = message_length(address, len(data), function_code)
    if len(out) != expected:
        _logger.error(
            f"Framing mismatch for address {address}: "
            f"{len(out)} words, expected {expected}"
        )
        raise TransmissionLengthError(
            f"Transmission is {len(out)} words, expected {expected}"
        )

    _logger.debug(
        f"Framed address={address} function={function_code} "
        f"chars={len(data)} words={len(out)}"
    )
    return out
