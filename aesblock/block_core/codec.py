"""
Text and Byte Codec

This module converts text and byte strings to sequences of fixed-size
Blocks and back. Every character or byte becomes 8 bits, MSB first.
"""

import logging
from typing import Iterable, List

from .block import Block

logger = logging.getLogger(__name__)

BITS_PER_BYTE = 8


def _chunk_count(length: int, block_size_in_bytes: int, allow_truncation: bool) -> int:
    if block_size_in_bytes <= 0:
        raise ValueError(f"Block size must be positive, got {block_size_in_bytes}")

    number_blocks, remainder = divmod(length, block_size_in_bytes)
    if remainder:
        if not allow_truncation:
            raise ValueError(
                f"Input length {length} is not a multiple of the block size "
                f"{block_size_in_bytes} ({remainder} trailing bytes)")
        logger.warning(f"Dropping {remainder} trailing bytes that do not fill a block")
    return number_blocks


def bytes_to_blocks(data: bytes, block_size_in_bytes: int,
                    allow_truncation: bool = False) -> List[Block]:
    """
    Split bytes into Blocks of `block_size_in_bytes` bytes each.

    Args:
        data: The bytes to convert
        block_size_in_bytes: Number of bytes per block
        allow_truncation: Drop a trailing partial block instead of failing

    Returns:
        A list of blocks of 8 * block_size_in_bytes bits
    """
    number_blocks = _chunk_count(len(data), block_size_in_bytes, allow_truncation)
    blocks = [
        Block.from_bytes(data[i * block_size_in_bytes:(i + 1) * block_size_in_bytes])
        for i in range(number_blocks)
    ]
    logger.debug(f"Converted {len(data)} bytes into {len(blocks)} blocks")
    return blocks


def blocks_to_bytes(blocks: Iterable[Block]) -> bytes:
    """Concatenate the byte values of the given blocks."""
    return b''.join(block.to_bytes() for block in blocks)


def text_to_blocks(text: str, block_size_in_bytes: int,
                   allow_truncation: bool = False) -> List[Block]:
    """
    Split text into Blocks of `block_size_in_bytes` characters each.

    Each character must have a code point in 0..255 and contributes one
    8-bit segment to its block.

    Args:
        text: The text to convert
        block_size_in_bytes: Number of characters per block
        allow_truncation: Drop a trailing partial block instead of failing

    Returns:
        A list of blocks of 8 * block_size_in_bytes bits
    """
    try:
        data = text.encode('latin-1')
    except UnicodeEncodeError as e:
        raise ValueError(
            f"Character {text[e.start]!r} at position {e.start} is outside the 8-bit range")
    return bytes_to_blocks(data, block_size_in_bytes, allow_truncation)


def blocks_to_text(blocks: Iterable[Block]) -> str:
    """
    Convert blocks back to text, one character per 8-bit group.

    Args:
        blocks: Blocks whose lengths are multiples of 8

    Returns:
        The decoded text, in block order
    """
    return blocks_to_bytes(blocks).decode('latin-1')
