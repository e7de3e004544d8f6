"""
Substitution Box Adapter

This module wraps a lookup table as a substitution capability that maps
one Block to another, as consumed by the key-schedule 'g' operation,
and measures the cryptographic properties of such tables.
"""

import logging
from typing import Dict, Sequence, Union

import numpy as np

from ..block_core.block import Block

logger = logging.getLogger(__name__)

# Default S-box size
SBOX_WIDTH = 8  # 8-bit S-box (256 entries)

# Rijndael S-box (FIPS-197, Figure 7)
AES_SBOX = (
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16,
)


class SubstitutionBox:
    """
    Table-driven substitution mapping a `width`-bit Block to another.

    Instances are callable, so they can be passed wherever a
    substitution capability is expected.
    """

    def __init__(self, table: Sequence[int], width: int = SBOX_WIDTH):
        """
        Initialize the S-box from a lookup table.

        Args:
            table: Output value for every input value 0..2^width-1
            width: Input and output size in bits (default: 8)
        """
        size = 1 << width
        if len(table) != size:
            raise ValueError(f"S-box table must have {size} entries, got {len(table)}")
        for value in table:
            if not 0 <= value < size:
                raise ValueError(f"S-box entry {value} out of range for a {width}-bit S-box")

        self.width = width
        self.table = tuple(table)

    @classmethod
    def aes(cls) -> 'SubstitutionBox':
        """Return the Rijndael S-box."""
        logger.info("Using pre-computed Rijndael S-box")
        return cls(AES_SBOX)

    @classmethod
    def identity(cls, width: int = SBOX_WIDTH) -> 'SubstitutionBox':
        """Return the S-box that maps every value to itself."""
        return cls(range(1 << width), width)

    def substitute(self, block: Block) -> Block:
        """
        Look up the substitute of a block.

        Args:
            block: Input block of `width` bits

        Returns:
            The substituted block of `width` bits
        """
        if block.length != self.width:
            raise ValueError(f"S-box expects a {self.width}-bit block, got {block.length} bits")
        return Block.from_value(self.width, self.table[block.to_decimal()])

    __call__ = substitute

    def is_bijective(self) -> bool:
        return len(set(self.table)) == len(self.table)

    def inverse(self) -> 'SubstitutionBox':
        """
        Create the inverse S-box.

        Returns:
            The S-box undoing this one

        Raises:
            ValueError: If the table is not a permutation
        """
        if not self.is_bijective():
            raise ValueError("S-box is not bijective and has no inverse")
        inv_table = [0] * len(self.table)
        for i, val in enumerate(self.table):
            inv_table[val] = i
        return SubstitutionBox(inv_table, self.width)

    def __repr__(self):
        return f"SubstitutionBox(width={self.width})"


def calculate_differential_uniformity(table: Sequence[int]) -> int:
    """
    Calculate the differential uniformity of an S-box.

    Lower values indicate better resistance to differential cryptanalysis.

    Args:
        table: The S-box to evaluate

    Returns:
        The maximum entry of the difference distribution table (dx != 0)
    """
    size = len(table)
    sbox = np.asarray(table, dtype=np.int64)
    x = np.arange(size)

    # dy[dx, x] = S(x ^ dx) ^ S(x)
    dy = sbox[x[None, :] ^ x[:, None]] ^ sbox[None, :]

    ddt = np.zeros((size, size), dtype=np.int32)
    np.add.at(ddt, (np.repeat(x, size), dy.ravel()), 1)

    return int(np.max(ddt[1:, :]))


def calculate_linear_bias(table: Sequence[int]) -> float:
    """
    Calculate the linear bias of an S-box.

    Lower values indicate better resistance to linear cryptanalysis.

    Args:
        table: The S-box to evaluate

    Returns:
        The largest absolute linear approximation table entry, normalized to [0, 1]
    """
    size = len(table)
    sbox = np.asarray(table, dtype=np.int64)
    masks = np.arange(size)
    parity = np.array([bin(i).count('1') & 1 for i in range(size)], dtype=np.int32)

    # +1/-1 encoding of <mask, x> and <mask, S(x)>
    input_signs = 1 - 2 * parity[masks[:, None] & masks[None, :]]
    output_signs = 1 - 2 * parity[masks[:, None] & sbox[None, :]]

    # LAT entry = (#matching parities) - size/2 = correlation / 2
    lat = (input_signs @ output_signs.T) // 2

    max_bias = int(np.max(np.abs(lat[1:, 1:])))
    return max_bias / (size / 2)


def count_fixed_points(table: Sequence[int]) -> int:
    return sum(1 for i, val in enumerate(table) if i == val)


def evaluate_sbox(table: Union[Sequence[int], SubstitutionBox]) -> Dict[str, Union[int, float, bool]]:
    """
    Evaluate an S-box for cryptographic properties.

    Args:
        table: The S-box or its lookup table

    Returns:
        A dictionary of scores (lower is better for differential and linear)
    """
    if not isinstance(table, SubstitutionBox):
        size = len(table)
        width = size.bit_length() - 1
        if size == 0 or 1 << width != size:
            raise ValueError(f"S-box table size must be a power of two, got {size}")
        table = SubstitutionBox(table, width)
    table = table.table

    return {
        'differential': calculate_differential_uniformity(table),
        'linear': calculate_linear_bias(table),
        'fixed_points': count_fixed_points(table),
        'bijective': len(set(table)) == len(table),
    }


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    metrics = evaluate_sbox(SubstitutionBox.aes())

    print(f"Differential uniformity: {metrics['differential']}")
    print(f"Linear bias: {metrics['linear']}")
    print(f"Fixed points: {metrics['fixed_points']}")
    print(f"Bijective: {metrics['bijective']}")
