"""
POCSAG - Paging transmission encoder.
Turns pager messages into baseband FSK audio for a transmitter.
"""

__version__ = "0.1.0"

# Audio parameters
SYMBOL_RATE = 38400  # Hz - internal rate before resampling
SAMPLE_RATE = 22050  # Hz - output rate
BAUD_RATE = 512  # bits per second
SAMPLE_LEVEL = 32767 // 2  # bit 0 -> +level, bit 1 -> -level

# Silence between messages (seconds)
MIN_DELAY = 1
MAX_DELAY = 10

# Special codewords
SYNC_WORD = 0x7CD215D8  # starts every batch
IDLE_WORD = 0x7A89C197  # padding and end-of-message marker
PREAMBLE_WORD = 0xAAAAAAAA  # alternating 1,0,1,0...
PREAMBLE_BITS = 576

# Framing
FRAME_SIZE = 2  # words per frame
BATCH_SIZE = 16  # words per batch, not counting the sync word
PREAMBLE_WORDS = PREAMBLE_BITS // 32

# Codeword layout
ADDRESS_FLAG = 0x000000
MESSAGE_FLAG = 0x100000
TEXT_BITS_PER_WORD = 20
TEXT_BITS_PER_CHAR = 7
CRC_BITS = 10
CRC_GENERATOR = 0b11101101001

MAX_ADDRESS = (1 << 21) - 1  # 2097151

# Function codes (two low bits of the address word)
FUNC_ALERT = 0
FUNC_NUMERIC_1 = 1
FUNC_NUMERIC_2 = 2
FUNC_ALPHA = 3

from .codeword import BCHCode, parity, encode_codeword, is_valid_codeword, address_word
from .text import BitAccumulator, TextPacker, char_bits, encode_ascii, to_bytes
from .framer import (
    TransmissionLengthError,
    address_offset,
    encode_transmission,
    message_length,
)
from .encoder import PocsagEncoder, WaveformSynthesizer, pcm_transmission_length
from .page import Page, parse_line, read_pages

__all__ = [
    "BCHCode",
    "parity",
    "encode_codeword",
    "is_valid_codeword",
    "address_word",
    "BitAccumulator",
    "TextPacker",
    "char_bits",
    "encode_ascii",
    "to_bytes",
    "TransmissionLengthError",
    "address_offset",
    "encode_transmission",
    "message_length",
    "PocsagEncoder",
    "WaveformSynthesizer",
    "pcm_transmission_length",
    "Page",
    "parse_line",
    "read_pages",
]
