"""Tests for GF(2^8) arithmetic."""

import pytest

from crypto_explore.gf import gf_mul, xtime


class TestGfMul:
    """Tests for the shift-and-reduce multiplier."""

    def test_fips197_examples(self):
        """FIPS-197 section 4.2: {57} * {83} = {c1}, {57} * {13} = {fe}."""
        assert gf_mul(0x57, 0x83) == 0xC1
        assert gf_mul(0x57, 0x13) == 0xFE

    def test_xtime_chain(self):
        """FIPS-197 section 4.2.1 xtime sequence starting at {57}."""
        values = [0x57]
        for _ in range(3):
            values.append(xtime(values[-1]))
        assert values == [0x57, 0xAE, 0x47, 0x8E]

    @pytest.mark.parametrize("a", range(256))
    def test_xtime_matches_mul_by_two(self, a):
        assert xtime(a) == gf_mul(a, 2)

    def test_identity_and_zero(self):
        for a in range(256):
            assert gf_mul(a, 1) == a
            assert gf_mul(1, a) == a
            assert gf_mul(a, 0) == 0

    def test_commutative(self):
        for a in range(0, 256, 7):
            for b in range(0, 256, 11):
                assert gf_mul(a, b) == gf_mul(b, a)

    def test_every_nonzero_element_has_inverse(self):
        """The multiplier must be a field multiplication."""
        for a in range(1, 256):
            assert any(gf_mul(a, b) == 1 for b in range(1, 256)), f"{a:02x} has no inverse"

    def test_result_is_byte(self):
        for a in range(256):
            assert 0 <= gf_mul(a, 0xFF) <= 0xFF
