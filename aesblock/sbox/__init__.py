"""
S-box Package

This package provides a table-backed substitution capability for
Blocks, the Rijndael S-box table, and tools for measuring the
cryptographic strength of substitution tables.
"""

from .substitution import AES_SBOX, SubstitutionBox, evaluate_sbox

__all__ = ['AES_SBOX', 'SubstitutionBox', 'evaluate_sbox']
