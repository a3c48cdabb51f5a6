"""Tests for welchstats.kernel.math._welch module.

    - welch_statistic: compiled and pure-Python paths
    - welch_kernel: row-wise kernel
    - student_t_sf, two_sided_pvalue: p-values from scipy.special.stdtr
"""

import math

import pytest
import numpy as np
import scipy.stats

from welchstats.kernel.math import (
    welch_statistic,
    welch_kernel,
    student_t_sf,
    two_sided_pvalue,
)


# =============================================================================
# Test Statistic and Degrees of Freedom
# =============================================================================

class TestWelchStatistic:
    """Test welch_statistic."""

    def test_basic_computation(self):
        t_stat, df, degenerate = welch_statistic.py_func(1.0, 4.0, 10.0, 2.0, 9.0, 10.0)

        # SE = sqrt(4/10 + 9/10) = sqrt(1.3)
        np.testing.assert_allclose(t_stat, -1.0 / np.sqrt(1.3), rtol=1e-12)
        # df = 1.3^2 / (0.16/9 + 0.81/9)
        np.testing.assert_allclose(df, 1.69 / (0.97 / 9.0), rtol=1e-12)
        assert degenerate is False

    @pytest.mark.numba
    def test_compiled_matches_python(self):
        args = (17.1474, 14.4299, 19.0, 24.3923, 33.5238, 13.0)

        compiled = welch_statistic(*args)
        python = welch_statistic.py_func(*args)

        np.testing.assert_allclose(compiled[0], python[0], rtol=1e-14)
        np.testing.assert_allclose(compiled[1], python[1], rtol=1e-14)
        assert bool(compiled[2]) is python[2]

    def test_zero_variances(self):
        t_stat, df, degenerate = welch_statistic.py_func(1.0, 0.0, 5.0, 1.0, 0.0, 5.0)
        assert (t_stat, degenerate) == (0.0, True)
        assert math.isnan(df)

        t_stat, df, degenerate = welch_statistic.py_func(0.0, 0.0, 5.0, 1.0, 0.0, 5.0)
        assert t_stat == -math.inf
        assert degenerate

    def test_squares_underflow(self):
        """Tiny variances still give df = n - 1 for the non-constant group."""
        t_stat, df, degenerate = welch_statistic.py_func(0.0, 1e-170, 10.0, 1.0, 0.0, 10.0)

        assert not degenerate
        assert math.isfinite(t_stat)
        np.testing.assert_allclose(df, 9.0, rtol=1e-12)

    def test_squares_overflow(self):
        """Huge equal variances still give df = n1 + n2 - 2."""
        t_stat, df, degenerate = welch_statistic.py_func(0.0, 1e200, 10.0, 1.0, 1e200, 10.0)

        assert not degenerate
        np.testing.assert_allclose(df, 18.0, rtol=1e-12)


@pytest.mark.numba
class TestWelchKernel:
    """Test welch_kernel."""

    def test_batch(self):
        n = 5
        mean1 = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        var1 = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        n1 = np.full(n, 10.0)
        mean2 = np.zeros(n)
        var2 = np.array([5.0, 4.0, 3.0, 2.0, 1.0])
        n2 = np.full(n, 20.0)

        t_out = np.empty(n)
        df_out = np.empty(n)
        degenerate_out = np.zeros(n, dtype=np.bool_)
        welch_kernel(mean1, var1, n1, mean2, var2, n2, t_out, df_out, degenerate_out)

        se = np.sqrt(var1 / n1 + var2 / n2)
        np.testing.assert_allclose(t_out, (mean1 - mean2) / se, rtol=1e-12)

        a = var1 / n1
        b = var2 / n2
        expected_df = (a + b) ** 2 / (a ** 2 / (n1 - 1) + b ** 2 / (n2 - 1))
        np.testing.assert_allclose(df_out, expected_df, rtol=1e-12)
        assert not degenerate_out.any()

    def test_degenerate_row(self):
        ones = np.ones(2)
        t_out = np.empty(2)
        df_out = np.empty(2)
        degenerate_out = np.zeros(2, dtype=np.bool_)

        welch_kernel(
            np.array([1.0, 1.0]), np.array([0.0, 1.0]), ones * 5,
            np.array([3.0, 3.0]), np.array([0.0, 1.0]), ones * 5,
            t_out, df_out, degenerate_out,
        )

        np.testing.assert_array_equal(degenerate_out, [True, False])
        assert t_out[0] == -np.inf
        assert np.isnan(df_out[0])
        assert np.isfinite(t_out[1])


# =============================================================================
# Test P-Values
# =============================================================================

class TestPValues:
    """Test student_t_sf and two_sided_pvalue."""

    def test_sf_matches_scipy(self):
        for df in [1.0, 2.5, 10.0, 18.33, 100.0]:
            for x in [0.0, 0.5, 1.0, 3.767, 10.0]:
                np.testing.assert_allclose(
                    student_t_sf(x, df), scipy.stats.t.sf(x, df), rtol=1e-12
                )

    def test_sf_upper_tail_precision(self):
        """The far tail keeps relative precision instead of cancelling to 0."""
        p = student_t_sf(40.0, 30.0)
        assert p > 0.0
        np.testing.assert_allclose(p, scipy.stats.t.sf(40.0, 30.0), rtol=1e-10)

    def test_two_sided(self):
        np.testing.assert_allclose(
            two_sided_pvalue(-2.0, 12.0), 2.0 * scipy.stats.t.sf(2.0, 12.0), rtol=1e-12
        )

    def test_sign_invariant(self):
        assert two_sided_pvalue(2.5, 7.0) == two_sided_pvalue(-2.5, 7.0)

    def test_zero_t(self):
        assert two_sided_pvalue(0.0, 5.0) == 1.0

    def test_clamped(self):
        t = np.array([0.0, 1e-300, 1e3, 1e300])
        p = two_sided_pvalue(t, np.full(4, 3.0))

        assert np.all(p >= 0.0)
        assert np.all(p <= 1.0)

    def test_array_input(self):
        t = np.array([0.5, 1.0, 2.0])
        df = np.array([5.0, 10.0, 20.0])
        np.testing.assert_allclose(
            two_sided_pvalue(t, df), 2.0 * scipy.stats.t.sf(t, df), rtol=1e-12
        )
