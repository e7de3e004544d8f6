"""
Finite Field Package

This package defines the GF(2^n) fields used for block arithmetic,
including the Rijndael reduction polynomial and integer reference
implementations of the field operations.
"""

from .gf256 import (
    RIJNDAEL_POLYNOMIAL,
    IRREDUCIBLE_POLYNOMIALS,
    FIELD_DEFAULT_PARAMS,
    POLYNOMIAL_ENV_VAR,
    degree,
    reduction_constant,
    is_irreducible,
    check_irreducible,
    default_polynomial,
    xtime,
    gf_multiply,
    gf_power,
    gf_inverse,
    field_summary,
)

__all__ = [
    'RIJNDAEL_POLYNOMIAL', 'IRREDUCIBLE_POLYNOMIALS', 'FIELD_DEFAULT_PARAMS',
    'POLYNOMIAL_ENV_VAR', 'degree', 'reduction_constant', 'default_polynomial',
    'is_irreducible', 'check_irreducible',
    'xtime', 'gf_multiply', 'gf_power', 'gf_inverse', 'field_summary',
]
