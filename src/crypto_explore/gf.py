"""
Arithmetic in GF(2^8) under the AES reduction polynomial.

Elements are bytes interpreted as polynomials over GF(2):
  bit i  <->  coefficient of x^i

Reduction polynomial: x^8 + x^4 + x^3 + x + 1 (0x11b). When a left shift
overflows bit 7 the x^8 term is replaced by x^4 + x^3 + x + 1 = 0x1b.
"""

AES_REDUCTION = 0x1B


def xtime(a: int) -> int:
    """Multiply by x (i.e. by 0x02) with reduction."""
    a <<= 1
    if a & 0x100:
        a ^= 0x100 | AES_REDUCTION
    return a & 0xFF


def gf_mul(a: int, b: int) -> int:
    """
    Multiply two field elements with the shift-and-reduce algorithm.

    Args:
        a: First operand (0-255)
        b: Second operand (0-255)

    Returns:
        a * b in GF(2^8)
    """
    a &= 0xFF
    b &= 0xFF
    product = 0
    for _ in range(8):
        if b & 1:
            product ^= a
        high = a & 0x80
        a = (a << 1) & 0xFF
        if high:
            a ^= AES_REDUCTION
        b >>= 1
    return product
