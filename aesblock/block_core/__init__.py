"""
Block Core Package

This package implements the binary Block type with its conversions,
XOR and shift primitives, GF(2^n) modular multiplication and the
key-schedule 'g' transformation, plus the text and byte codec.
"""

from .block import Block, block_to_decimal
from .codec import text_to_blocks, blocks_to_text, bytes_to_blocks, blocks_to_bytes

__all__ = [
    'Block', 'block_to_decimal',
    'text_to_blocks', 'blocks_to_text', 'bytes_to_blocks', 'blocks_to_bytes',
]
