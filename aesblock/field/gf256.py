"""
Binary Field Parameters and Reference Arithmetic

This module holds the irreducible polynomials that define the GF(2^n)
fields used by the block arithmetic, and a plain-integer implementation
of the field operations that the Block type is checked against.
"""

import os
import functools
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# x^8 + x^4 + x^3 + x + 1
RIJNDAEL_POLYNOMIAL = 0x11B

# Known irreducible polynomials, keyed by field degree
IRREDUCIBLE_POLYNOMIALS = {
    4: 0x13,    # x^4 + x + 1 (Mini-AES)
    8: RIJNDAEL_POLYNOMIAL,
}

# Default parameters for the AES field
FIELD_DEFAULT_PARAMS = {
    'degree': 8,                        # Element size in bits
    'polynomial': RIJNDAEL_POLYNOMIAL,  # Reduction polynomial
}

POLYNOMIAL_ENV_VAR = 'AESBLOCK_FIELD_POLYNOMIAL'


def degree(polynomial: int) -> int:
    """
    Return the degree of a polynomial over GF(2).

    Args:
        polynomial: Polynomial with coefficient i stored in bit i

    Returns:
        The degree (position of the highest set bit)
    """
    if polynomial <= 0:
        raise ValueError(f"Polynomial must be positive, got {polynomial}")
    return polynomial.bit_length() - 1


def reduction_constant(polynomial: int) -> int:
    """
    Return the polynomial without its leading term.

    This is the value XORed into a shifted element when the
    highest-degree coefficient overflows (0x1B for Rijndael).
    """
    return polynomial ^ (1 << degree(polynomial))


def _polynomial_mod(dividend: int, divisor: int) -> int:
    divisor_degree = degree(divisor)
    while dividend and dividend.bit_length() - 1 >= divisor_degree:
        dividend ^= divisor << (dividend.bit_length() - 1 - divisor_degree)
    return dividend


@functools.lru_cache(maxsize=None)
def is_irreducible(polynomial: int) -> bool:
    """
    Check whether a polynomial over GF(2) has no non-trivial factor.

    Trial division by every polynomial of degree 1..n/2, which is
    enough to find a factor of a reducible polynomial of degree n.

    Args:
        polynomial: Polynomial with coefficient i stored in bit i

    Returns:
        True if the polynomial is irreducible
    """
    n = degree(polynomial)
    if n < 1:
        return False
    for divisor in range(2, 1 << (n // 2 + 1)):
        if _polynomial_mod(polynomial, divisor) == 0:
            return False
    return True


def check_irreducible(polynomial: int) -> int:
    """Return the polynomial, or raise ValueError if it cannot define a field."""
    if not is_irreducible(polynomial):
        raise ValueError(f"Polynomial {polynomial:#x} is reducible and does not define a field")
    return polynomial


def _parse_polynomial(value: str) -> int:
    try:
        polynomial = int(value, 0)
    except ValueError:
        raise ValueError(f"{POLYNOMIAL_ENV_VAR} must be an integer, got {value!r}")
    if polynomial < 2:
        raise ValueError(f"{POLYNOMIAL_ENV_VAR} must have degree >= 1, got {value!r}")
    if not is_irreducible(polynomial):
        raise ValueError(f"{POLYNOMIAL_ENV_VAR} must be an irreducible polynomial, got {value!r}")
    return polynomial


def default_polynomial(field_degree: Optional[int] = None) -> int:
    """
    Resolve the reduction polynomial to use when none is given explicitly.

    The environment variable AESBLOCK_FIELD_POLYNOMIAL overrides the
    built-in table when its degree matches the requested one.

    Args:
        field_degree: Degree of the field (default: FIELD_DEFAULT_PARAMS['degree'])

    Returns:
        The reduction polynomial

    Raises:
        ValueError: If no irreducible polynomial is known for the degree
    """
    if field_degree is None:
        field_degree = FIELD_DEFAULT_PARAMS['degree']

    env_value = os.environ.get(POLYNOMIAL_ENV_VAR)
    if env_value:
        polynomial = _parse_polynomial(env_value)
        if degree(polynomial) == field_degree:
            logger.debug(f"Using polynomial {polynomial:#x} from {POLYNOMIAL_ENV_VAR}")
            return polynomial

    if field_degree == FIELD_DEFAULT_PARAMS['degree']:
        return FIELD_DEFAULT_PARAMS['polynomial']
    try:
        return IRREDUCIBLE_POLYNOMIALS[field_degree]
    except KeyError:
        raise ValueError(f"No irreducible polynomial known for degree {field_degree}")


def xtime(value: int, polynomial: int = RIJNDAEL_POLYNOMIAL) -> int:
    """
    Multiply a field element by x.

    Args:
        value: Field element
        polynomial: Reduction polynomial

    Returns:
        value * x reduced modulo the polynomial
    """
    value <<= 1
    if value >> degree(polynomial):
        value ^= polynomial
    return value


def gf_multiply(a: int, b: int, polynomial: int = RIJNDAEL_POLYNOMIAL) -> int:
    """
    Multiply two field elements with the shift-and-add method.

    Args:
        a: First operand
        b: Second operand
        polynomial: Reduction polynomial

    Returns:
        The product in GF(2^n)
    """
    result = 0
    while b:
        if b & 1:
            result ^= a
        a = xtime(a, polynomial)
        b >>= 1
    return result


def gf_power(a: int, exponent: int, polynomial: int = RIJNDAEL_POLYNOMIAL) -> int:
    """Raise a field element to a non-negative integer power."""
    if exponent < 0:
        raise ValueError(f"Exponent must be non-negative, got {exponent}")
    result = 1
    while exponent:
        if exponent & 1:
            result = gf_multiply(result, a, polynomial)
        a = gf_multiply(a, a, polynomial)
        exponent >>= 1
    return result


def gf_inverse(a: int, polynomial: int = RIJNDAEL_POLYNOMIAL) -> int:
    """
    Return the multiplicative inverse of a non-zero field element.

    Uses a^(2^n - 2) = a^-1, which holds in every GF(2^n).
    """
    check_irreducible(polynomial)
    if a == 0:
        raise ValueError("Zero has no multiplicative inverse")
    return gf_power(a, (1 << degree(polynomial)) - 2, polynomial)


def field_summary(polynomial: int = RIJNDAEL_POLYNOMIAL) -> Dict[str, int]:
    """Describe a field by its polynomial, degree, order and reduction constant."""
    n = degree(polynomial)
    return {
        'polynomial': polynomial,
        'degree': n,
        'order': 1 << n,
        'reduction_constant': reduction_constant(polynomial),
    }


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    summary = field_summary()
    print(f"Field GF(2^{summary['degree']}) modulo {summary['polynomial']:#x}")
    print(f"xtime(0x57) = {xtime(0x57):#04x}")
    print(f"0x57 * 0x83 = {gf_multiply(0x57, 0x83):#04x}")
    print(f"inverse(0x53) = {gf_inverse(0x53):#04x}")
