"""
POCSAG codeword construction.

Codeword structure (MSB first):
- Flag: 1 bit - 0 for an address word, 1 for a message word
- Payload: 20 bits
- CRC: 10 bits - BCH(31,21) check bits
- Parity: 1 bit - even parity over the other 31 bits

Total: 32 bits
"""

from . import ADDRESS_FLAG, CRC_BITS, CRC_GENERATOR


class BCHCode:
    """
    BCH(31,21) check bits, computed as a CRC.
    Generator: x^10 + x^9 + x^8 + x^6 + x^5 + x^3 + 1
    """

    GENERATOR = CRC_GENERATOR

    @classmethod
    def compute(cls, payload: int) -> int:
        """Compute the 10 check bits for a 21-bit payload."""
        # Align the generator's MSB with the top of the 31-bit message
        divisor = cls.GENERATOR << 20
        remainder = payload << CRC_BITS

        for column in range(21):
            if (remainder >> (30 - column)) & 1:
                remainder ^= divisor
            divisor >>= 1

        return remainder & 0x3FF

    @classmethod
    def verify(cls, payload: int, check: int) -> bool:
        """Verify a payload against its check bits."""
        return cls.compute(payload) == check


def parity(value: int) -> int:
    """Even parity of a 32-bit value: 1 if it has an odd number of set bits."""
    p = 0
    for _ in range(32):
        p ^= value & 1
        value >>= 1
    return p


def encode_codeword(payload: int) -> int:
    """
    Encode a 21-bit payload (flag + 20 data bits) as a 32-bit codeword.

    Args:
        payload: Flag bit and data bits, 0 to 0x1FFFFF

    Returns:
        Codeword with CRC and parity appended
    """
    full = (payload << CRC_BITS) | BCHCode.compute(payload)
    return (full << 1) | parity(full)


def is_valid_codeword(word: int) -> bool:
    """Check the CRC and parity fields of a codeword."""
    payload = word >> 11
    check = (word >> 1) & 0x3FF
    if not BCHCode.verify(payload, check):
        return False
    return parity(word >> 1) == word & 1


def address_word(address: int, function_code: int) -> int:
    """
    Build the address codeword.

    Only the top 18 address bits are sent; the low 3 bits are carried by
    the frame the word is placed in.
    """
    return encode_codeword(ADDRESS_FLAG | ((address >> 3) << 2) | function_code)
