"""
Binary Block Implementation

This module provides the Block type, an immutable fixed-length bit
vector stored most-significant bit first, together with the bit-level
conversions, XOR and shift primitives, GF(2^n) modular multiplication
and the Rijndael key-schedule 'g' transformation built on top of them.
"""

from typing import Callable, Iterable, List, Optional, Sequence, Union

from ..field.gf256 import check_irreducible, default_polynomial, degree, reduction_constant


HEX_DIGITS = '0123456789ABCDEF'
HEX_VALUES = {digit: value for value, digit in enumerate(HEX_DIGITS)}

# Number of byte segments in a key-schedule word
WORD_SEGMENTS = 4

Substitution = Callable[['Block'], 'Block']


class Block:
    """
    Fixed-length sequence of bits, most-significant bit first.

    Bit 0 is the most significant bit. Blocks are immutable: every
    operation returns a new instance and construction always copies
    the bits it is given.
    """

    __slots__ = ('_bits',)

    def __init__(self, bits: Iterable = ()):
        """
        Initialize the block from an iterable of truth values.

        Args:
            bits: Bits in MSB-first order (copied)
        """
        if isinstance(bits, (str, bytes, bytearray)):
            raise TypeError(
                f"Cannot build a Block from {type(bits).__name__}; "
                f"use Block.from_bit_string or Block.from_bytes")
        self._bits = tuple(bool(bit) for bit in bits)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_size(cls, size: int) -> 'Block':
        """
        Create an all-zero block.

        Args:
            size: Number of bits

        Returns:
            A block of `size` false bits
        """
        if size < 0:
            raise ValueError(f"Block size must be non-negative, got {size}")
        return cls((False,) * size)

    @classmethod
    def from_value(cls, size: int, value: int) -> 'Block':
        """
        Create a block holding the unsigned value of an integer.

        Bits above `size` are discarded and missing high bits are zero.

        Args:
            size: Number of bits
            value: Non-negative integer to encode

        Returns:
            The `size`-bit big-endian representation of `value`
        """
        if size < 0:
            raise ValueError(f"Block size must be non-negative, got {size}")
        if value < 0:
            raise ValueError(f"Block value must be non-negative, got {value}")
        return cls((value >> (size - 1 - i)) & 1 for i in range(size))

    @classmethod
    def from_bit_string(cls, bit_string: str, strict: bool = True) -> 'Block':
        """
        Create a block from a string of '0' and '1' characters.

        Args:
            bit_string: The bits, MSB first
            strict: Reject characters other than '0' and '1'. When False,
                any character other than '1' is read as a zero bit.

        Returns:
            A block with one bit per character
        """
        if strict:
            invalid = set(bit_string) - {'0', '1'}
            if invalid:
                raise ValueError(f"Bit string contains invalid characters: {sorted(invalid)}")
        return cls(char == '1' for char in bit_string)

    @classmethod
    def from_bits(cls, bits: Sequence[bool]) -> 'Block':
        """Create a block from a copy of the given bit sequence."""
        return cls(bits)

    @classmethod
    def from_concatenation(cls, blocks: Iterable['Block']) -> 'Block':
        """
        Concatenate blocks in order into a single block.

        Args:
            blocks: The parts, each contiguous in the result

        Returns:
            A block whose length is the sum of the part lengths
        """
        bits = []
        for block in blocks:
            if not isinstance(block, Block):
                raise TypeError(f"Expected Block, got {type(block).__name__}")
            bits.extend(block._bits)
        return cls(bits)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Block':
        """Create a block from bytes, 8 bits per byte, MSB first."""
        return cls((byte >> (7 - i)) & 1 for byte in data for i in range(8))

    @classmethod
    def from_hex_string(cls, hex_string: str) -> 'Block':
        """Create a block from hexadecimal digits, 4 bits per digit."""
        bits = []
        for digit in hex_string:
            nibble = HEX_VALUES.get(digit.upper())
            if nibble is None:
                raise ValueError(f"Invalid hexadecimal digit: {digit!r}")
            bits.extend((nibble >> (3 - i)) & 1 for i in range(4))
        return cls(bits)

    def clone(self) -> 'Block':
        """Return an independent copy of this block."""
        return Block(self._bits)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def length(self) -> int:
        return len(self._bits)

    @property
    def bits(self) -> tuple:
        return self._bits

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_decimal(self, max_bits: Optional[int] = None) -> int:
        """
        Interpret the block as a big-endian unsigned integer.

        Args:
            max_bits: Optional ceiling on the block length, for callers that
                need the result to fit a fixed-width integer

        Returns:
            The integer value of the bits
        """
        if max_bits is not None and self.length > max_bits:
            raise ValueError(f"Block of {self.length} bits exceeds the {max_bits}-bit limit")
        value = 0
        for bit in self._bits:
            value = (value << 1) | bit
        return value

    def to_hex_string(self) -> str:
        """
        Convert the block to uppercase hexadecimal, one digit per 4 bits.

        Returns:
            The hexadecimal string, most significant digit first
        """
        if self.length % 4:
            raise ValueError(f"Block length must be a multiple of 4 for hex output, got {self.length}")
        digits = []
        for i in range(0, self.length, 4):
            nibble = 0
            for bit in self._bits[i:i + 4]:
                nibble = (nibble << 1) | bit
            digits.append(HEX_DIGITS[nibble])
        return ''.join(digits)

    def to_bit_string(self) -> str:
        return ''.join('1' if bit else '0' for bit in self._bits)

    def to_bytes(self) -> bytes:
        """Convert the block to bytes, 8 bits per byte, MSB first."""
        if self.length % 8:
            raise ValueError(f"Block length must be a multiple of 8 for byte output, got {self.length}")
        return self.to_decimal().to_bytes(self.length // 8, byteorder='big')

    # ------------------------------------------------------------------
    # Segment, XOR, shift
    # ------------------------------------------------------------------

    def segment(self, number_segments: int, index: int) -> 'Block':
        """
        Get one of `number_segments` equal contiguous parts of the block.

        Args:
            number_segments: Number of equal parts to divide the block into
            index: Position of the requested part

        Returns:
            A new block holding the requested part
        """
        if number_segments <= 0:
            raise ValueError(f"Number of segments must be positive, got {number_segments}")
        if self.length % number_segments:
            raise ValueError(
                f"Block length {self.length} is not divisible into {number_segments} segments")
        if not 0 <= index < number_segments:
            raise ValueError(f"Segment index {index} out of range for {number_segments} segments")
        segment_length = self.length // number_segments
        start = index * segment_length
        return Block(self._bits[start:start + segment_length])

    def segments(self, number_segments: int) -> List['Block']:
        """Split the block into `number_segments` equal parts, in order."""
        return [self.segment(number_segments, i) for i in range(number_segments)]

    def xor(self, other: 'Block') -> 'Block':
        """
        Perform an exclusive OR with another block of the same length.

        Args:
            other: The other operand

        Returns:
            The bitwise XOR of both blocks
        """
        self._check_same_length(other, 'XOR')
        return Block(a ^ b for a, b in zip(self._bits, other._bits))

    def left_shift(self) -> 'Block':
        """Shift every bit one position towards the MSB, filling the LSB with zero."""
        if not self._bits:
            return Block()
        return Block(self._bits[1:] + (False,))

    # ------------------------------------------------------------------
    # GF(2^n) arithmetic
    # ------------------------------------------------------------------

    def modular_multiply_by_x(self, polynomial: Optional[int] = None) -> 'Block':
        """
        Multiply the block by x in GF(2^n) (the 'xtime' operation).

        The block is read as a polynomial with bit 0 as the x^(n-1)
        coefficient. When that coefficient overflows during the shift,
        the result is reduced by XOR with the polynomial's lower terms.

        Args:
            polynomial: Reduction polynomial of degree n, where n is the
                block length (default: the configured field polynomial)

        Returns:
            The reduced product
        """
        polynomial = self._resolve_polynomial(polynomial)
        shifted = self.left_shift()
        if self._bits[0]:
            return shifted.xor(Block.from_value(self.length, reduction_constant(polynomial)))
        return shifted

    def modular_multiply(self, other: 'Block', polynomial: Optional[int] = None) -> 'Block':
        """
        Multiply two field elements using double-and-add.

        The coefficients of `other` are consumed from x^0 upwards while
        the multiplier is doubled with xtime after each one.

        Args:
            other: The second operand (same length as this block)
            polynomial: Reduction polynomial (default: the configured field polynomial)

        Returns:
            The product in GF(2^n)
        """
        self._check_same_length(other, 'modular multiplication')
        polynomial = self._resolve_polynomial(polynomial)

        result = Block.from_size(self.length)
        multiplier = self
        for bit in reversed(other._bits):
            if bit:
                result = result.xor(multiplier)
            multiplier = multiplier.modular_multiply_by_x(polynomial)
        return result

    # ------------------------------------------------------------------
    # Key schedule
    # ------------------------------------------------------------------

    def g(self, substitution: Substitution, round_constant: 'Block') -> 'Block':
        """
        Perform the key-schedule 'g' operation on a word.

        The word is split into four segments which are rotated left by
        one position, passed through the substitution and concatenated
        before the round constant is XORed in.

        Args:
            substitution: Callable mapping a segment to its substitute
            round_constant: Block of the same length as this word

        Returns:
            The transformed word
        """
        self._check_same_length(round_constant, "the 'g' round constant")
        parts = self.segments(WORD_SEGMENTS)

        substituted = []
        for i in range(WORD_SEGMENTS):
            source = parts[(i + 1) % WORD_SEGMENTS]
            result = substitution(source)
            if not isinstance(result, Block) or result.length != source.length:
                raise ValueError(
                    f"Substitution must map a {source.length}-bit block to a {source.length}-bit block")
            substituted.append(result)

        return Block.from_concatenation(substituted).xor(round_constant)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_same_length(self, other: 'Block', operation: str) -> None:
        if not isinstance(other, Block):
            raise TypeError(f"Expected Block for {operation}, got {type(other).__name__}")
        if self.length != other.length:
            raise ValueError(
                f"Block lengths differ for {operation}: {self.length} != {other.length}")

    def _resolve_polynomial(self, polynomial: Optional[int]) -> int:
        if polynomial is None:
            return default_polynomial(self.length)
        if degree(polynomial) != self.length:
            raise ValueError(
                f"Polynomial {polynomial:#x} has degree {degree(polynomial)}, "
                f"expected {self.length} for this block")
        return check_irreducible(polynomial)

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self):
        return iter(self._bits)

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return Block(self._bits[index])
        return self._bits[index]

    def __eq__(self, other):
        if not isinstance(other, Block):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self):
        return hash(self._bits)

    def __xor__(self, other):
        if not isinstance(other, Block):
            return NotImplemented
        return self.xor(other)

    def __mul__(self, other):
        if not isinstance(other, Block):
            return NotImplemented
        return self.modular_multiply(other)

    def __copy__(self):
        return self.clone()

    def __deepcopy__(self, memo):
        return self.clone()

    def __str__(self):
        return self.to_bit_string()

    def __repr__(self):
        if self.length % 4 == 0 and self.length:
            return f"Block(length={self.length}, hex={self.to_hex_string()})"
        return f"Block(length={self.length}, bits={self.to_bit_string()!r})"


def block_to_decimal(block: Block) -> int:
    """Convert a block to its decimal representation."""
    return block.to_decimal()


if __name__ == "__main__":
    a = Block.from_value(8, 0x57)
    b = Block.from_value(8, 0x83)
    print(f"{a} * x = {a.modular_multiply_by_x()}")
    print(f"{a.to_hex_string()} * {b.to_hex_string()} = {(a * b).to_hex_string()}")

    word = Block.from_hex_string('09CF4F3C')
    rotated = word.g(lambda segment: segment, Block.from_size(32))
    print(f"g(identity) on {word.to_hex_string()} = {rotated.to_hex_string()}")
