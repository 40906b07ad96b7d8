"""
POCSAG Encoder - Generates baseband FSK audio for pager transmissions.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

import numpy as np
import soundfile as sf

from . import (
    BAUD_RATE,
    MAX_DELAY,
    MIN_DELAY,
    SAMPLE_LEVEL,
    SAMPLE_RATE,
    SYMBOL_RATE,
)
from .framer import encode_transmission
from .page import Page


_logger = logging.getLogger(__name__)

RAW_SUFFIXES = (".raw", ".pcm")


def pcm_transmission_length(sample_rate: int, baud_rate: int, word_count: int) -> int:
    """
    Length in bytes of the PCM audio for a transmission.

    32 bits per word * (sample_rate / baud_rate) samples * 2 bytes per sample
    """
    return word_count * 32 * sample_rate // baud_rate * 2


class WaveformSynthesizer:
    """
    Two-level baseband modulator.

    Each bit is held for symbol_rate / baud_rate samples at the internal
    symbol rate, then the signal is resampled to the output rate by
    nearest-neighbour decimation.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        baud_rate: int = BAUD_RATE,
        symbol_rate: int = SYMBOL_RATE,
    ):
        """
        Initialize synthesizer.

        Args:
            sample_rate: Output audio sample rate (Hz)
            baud_rate: Bit rate (bits per second)
            symbol_rate: Internal rate before resampling (Hz)
        """
        if symbol_rate % baud_rate:
            raise ValueError(
                f"Baud rate {baud_rate} must divide symbol rate {symbol_rate}"
            )

        self.sample_rate = sample_rate
        self.baud_rate = baud_rate
        self.symbol_rate = symbol_rate

        # Samples per bit at the symbol rate
        self.repeats_per_bit = symbol_rate // baud_rate

    def output_length(self, word_count: int) -> int:
        """Number of output samples for a transmission."""
        return pcm_transmission_length(self.sample_rate, self.baud_rate, word_count) // 2

    def _symbols(self, transmission: Sequence[int]) -> np.ndarray:
        """Expand words to samples at the symbol rate."""
        words = np.asarray(transmission, dtype=np.uint32).reshape(-1)
        shifts = np.arange(31, -1, -1, dtype=np.uint32)

        # MSB first
        bits = (words[:, np.newaxis] >> shifts) & 1

        # Negative level represents 1, positive represents 0
        levels = np.where(bits.reshape(-1) == 0, SAMPLE_LEVEL, -SAMPLE_LEVEL).astype(np.int16)
        return np.repeat(levels, self.repeats_per_bit)

    def synthesize(self, transmission: Sequence[int]) -> np.ndarray:
        """
        Modulate a transmission.

        Args:
            transmission: 32-bit words

        Returns:
            int16 samples at the output rate
        """
        symbols = self._symbols(transmission)

        # Nearest-neighbour resample
        count = self.output_length(len(transmission))
        index = np.arange(count, dtype=np.int64) * self.symbol_rate // self.sample_rate

        _logger.debug(
            f"Synthesized {len(transmission)} words: "
            f"{len(symbols)} symbols -> {count} samples"
        )
        return symbols[index]

    @staticmethod
    def to_bytes(samples: np.ndarray) -> bytes:
        """Serialize samples as little-endian signed 16-bit PCM."""
        return samples.astype("<i2").tobytes()


class PocsagEncoder:
    """
    Encodes pages to audio.

    Frames each page, modulates it, and separates consecutive pages with
    a random amount of silence.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        baud_rate: int = BAUD_RATE,
        symbol_rate: int = SYMBOL_RATE,
        min_delay: float = MIN_DELAY,
        max_delay: float = MAX_DELAY,
        seed: Optional[int] = None,
    ):
        """
        Initialize encoder.

        Args:
            sample_rate: Output audio sample rate (Hz)
            baud_rate: Bit rate (bits per second)
            symbol_rate: Internal rate before resampling (Hz)
            min_delay: Shortest silence after a page (seconds)
            max_delay: Longest silence after a page (seconds)
            seed: Seed for the silence length generator
        """
        if not 0 <= min_delay <= max_delay:
            raise ValueError(
                f"Invalid delays: {min_delay}, {max_delay}. "
                "Must satisfy 0 <= min_delay <= max_delay."
            )

        self.synthesizer = WaveformSynthesizer(sample_rate, baud_rate, symbol_rate)
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.rng = np.random.default_rng(seed)

    @property
    def sample_rate(self) -> int:
        return self.synthesizer.sample_rate

    def encode(self, page: Page) -> np.ndarray:
        """
        Encode a single page to audio samples.

        Args:
            page: Page to encode

        Returns:
            int16 samples
        """
        transmission = encode_transmission(page.address, page.message, page.function_code)
        return self.synthesizer.synthesize(transmission)

    def encode_bytes(self, page: Page) -> bytes:
        """Encode a single page to little-endian 16-bit PCM bytes."""
        return self.synthesizer.to_bytes(self.encode(page))

    def silence(self) -> np.ndarray:
        """Zero samples lasting between min_delay and max_delay seconds."""
        low = int(self.min_delay * self.sample_rate)
        high = int(self.max_delay * self.sample_rate)
        length = int(self.rng.integers(low, high)) if high > low else low
        return np.zeros(length, dtype=np.int16)

    def stream(self, pages: Iterable[Page], silence: bool = True) -> Iterable[np.ndarray]:
        """Yield sample blocks for each page, each followed by its silence."""
        for page in pages:
            yield self.encode(page)
            if silence:
                yield self.silence()

    def generate(self, pages: Iterable[Page], silence: bool = True) -> tuple[np.ndarray, int]:
        """
        Generate audio for a sequence of pages.

        Args:
            pages: Pages to encode
            silence: Insert random silence after each page

        Returns:
            Tuple of (audio_samples, sample_rate)
        """
        blocks = list(self.stream(pages, silence))
        if not blocks:
            return np.zeros(0, dtype=np.int16), self.sample_rate
        return np.concatenate(blocks), self.sample_rate

    def generate_to_file(
        self,
        output_path: str | Path,
        pages: Iterable[Page],
        silence: bool = True,
    ):
        """
        Generate and save audio to file.

        WAV and other formats soundfile knows are written with a header;
        .raw and .pcm files get headerless little-endian 16-bit samples.

        Args:
            output_path: Output file path
            pages: Pages to encode
            silence: Insert random silence after each page
        """
        with open_output(output_path, self.sample_rate) as out:
            for block in self.stream(pages, silence):
                out.write(block)


def open_output(output_path: str | Path, sample_rate: int) -> sf.SoundFile:
    """Open a mono PCM_16 sound file for writing."""
    path = Path(output_path)
    if path.suffix.lower() in RAW_SUFFIXES:
        return sf.SoundFile(
            str(path), "w",
            samplerate=sample_rate,
            channels=1,
            subtype="PCM_16",
            endian="LITTLE",
            format="RAW",
        )
    return sf.SoundFile(
        str(path), "w",
        samplerate=sample_rate,
        channels=1,
        subtype="PCM_16",
    )
