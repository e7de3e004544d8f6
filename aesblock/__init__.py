"""
aesblock - Binary Block Arithmetic for Rijndael

This library implements the fixed-width binary block used to build
Rijndael (AES) style ciphers, with the field arithmetic and key-schedule
helper that operate on it.

Key Features:
- Immutable MSB-first bit blocks with integer, hex, bit-string and byte conversions
- Segment, XOR and shift primitives
- GF(2^8) modular multiplication (configurable reduction polynomial)
- Key-schedule 'g' transformation over a pluggable substitution
- Text and byte codec to and from fixed-size blocks
- Table-backed S-box adapter with property evaluation

"""

__version__ = '0.1.0'
__author__ = 'aesblock Team'
