"""
Tests for transmission framing and length prediction.
"""

import pytest

from pocsag import (
    IDLE_WORD,
    PREAMBLE_WORD,
    SYNC_WORD,
    TransmissionLengthError,
    address_offset,
    address_word,
    encode_transmission,
    is_valid_codeword,
    message_length,
)
from pocsag import framer


PREAMBLE_WORDS = 18
MESSAGE_TEXT = "POCSAG test page 0123456789 abcdefghijklmnopqrstuvwxyz " * 3


class TestAddressOffset:
    """Test frame placement of the address word."""

    def test_all_addresses(self):
        """Test every 21-bit address maps to an even offset below 16."""
        for address in range(2097152):
            offset = address_offset(address)
            assert offset == (address % 8) * 2
        assert {address_offset(a) for a in range(16)} == {0, 2, 4, 6, 8, 10, 12, 14}

    @pytest.mark.parametrize("address", [7, 15, 1234567, 2097151])
    def test_last_frame(self, address):
        assert address_offset(address) == 14


class TestMessageLength:
    """Test length prediction."""

    def test_empty_message_address_zero(self):
        assert message_length(0, 0, 0) == 35

    def test_function_code_ignored(self):
        for function_code in range(4):
            assert message_length(1234567, 42, function_code) == message_length(1234567, 42)

    def test_full_batch_not_padded_again(self):
        """Test that data ending on a batch boundary adds no idle batch."""
        # 14 idle + address + terminator = 16 words
        assert message_length(7, 0) == PREAMBLE_WORDS + 17

    def test_multiple_of_seventeen(self):
        for address in range(8):
            for num_chars in range(0, 200, 7):
                assert (message_length(address, num_chars) - PREAMBLE_WORDS) % 17 == 0


class TestEncodeTransmission:
    """Test transmission framing."""

    def test_scenario_address_zero_empty(self):
        """Test the minimal transmission."""
        words = encode_transmission(0, "", 0)

        assert len(words) == 35
        assert words[:PREAMBLE_WORDS] == [PREAMBLE_WORD] * PREAMBLE_WORDS
        assert words[18] == SYNC_WORD
        assert words[19] == 0x00000000  # address word
        assert words[20:] == [IDLE_WORD] * 15

    def test_scenario_last_frame(self):
        """Test that address 7 is preceded by 14 idle words."""
        words = encode_transmission(7, "hi", 3)

        assert words[18] == SYNC_WORD
        assert words[19:33] == [IDLE_WORD] * 14
        assert words[33] == address_word(7, 3)
        # Text starts in slot 15 and fills the batch
        assert words[34] >> 31 == 1
        assert words[35] == SYNC_WORD
        assert words[36] == IDLE_WORD
        assert len(words) == message_length(7, 2, 3) == 52

    @pytest.mark.parametrize("address", [15, 1234567])
    def test_last_frame_addresses(self, address):
        words = encode_transmission(address, "", 3)
        assert words[19:33] == [IDLE_WORD] * 14
        assert words[33] == address_word(address, 3)

    def test_preamble(self):
        words = encode_transmission(1234, "hello")
        assert words[:PREAMBLE_WORDS] == [0xAAAAAAAA] * 18

    def test_sync_cadence(self):
        """Test a sync word at the start of every batch, and nowhere else."""
        for address in range(8):
            words = encode_transmission(address, MESSAGE_TEXT)
            body = words[PREAMBLE_WORDS:]
            assert len(body) % 17 == 0
            syncs = [i for i, word in enumerate(body) if word == SYNC_WORD]
            assert syncs == list(range(0, len(body), 17))

    def test_codewords_valid(self):
        """Test that every address and message word checks out."""
        words = encode_transmission(2097151, MESSAGE_TEXT, 2)
        for word in words[PREAMBLE_WORDS:]:
            if word not in (SYNC_WORD, IDLE_WORD):
                assert is_valid_codeword(word)

    def test_ends_with_idle(self):
        words = encode_transmission(3, "abc")
        assert words[-1] == IDLE_WORD

    def test_deterministic(self):
        assert encode_transmission(99, "same") == encode_transmission(99, "same")

    def test_length_mismatch_raises(self, monkeypatch):
        """Test that a wrong prediction is reported, not ignored."""
        monkeypatch.setattr(framer, "message_length", lambda *args: 0)
        with pytest.raises(TransmissionLengthError):
            encode_transmission(0, "")


class TestLengthAgreement:
    """Test that prediction and framing agree word for word."""

    @pytest.mark.parametrize("function_code", [0, 1, 2, 3])
    @pytest.mark.parametrize("low_bits", range(8))
    def test_every_frame_and_length(self, low_bits, function_code):
        """Test every frame offset with messages spanning several batches."""
        for high in (0, 0x3FFFF):
            address = (high << 3) | low_bits
            for num_chars in range(0, 120):
                words = encode_transmission(address, "z" * num_chars, function_code)
                assert len(words) == message_length(address, num_chars, function_code)

    def test_batch_boundaries(self):
        """Test message lengths that land near batch boundaries."""
        for address in range(8):
            for num_chars in range(120, 260):
                words = encode_transmission(address, b"\x55" * num_chars)
                assert len(words) == message_length(address, num_chars)
