import numpy as np
import pytest

from ukf_fusion.common.consistency import nis_exceedance_ratio, nis_threshold, normalized_innovation_squared


@pytest.mark.parametrize("df, expected", [(2, 5.991), (3, 7.815)])
def test_nis_threshold_95(df, expected):
    assert nis_threshold(df) == pytest.approx(expected, abs=1e-3)


def test_nis_threshold_rejects_bad_confidence():
    with pytest.raises(AssertionError):
        nis_threshold(2, confidence=1.0)


def test_normalized_innovation_squared():
    innovation = np.array([1.0, 2.0])
    S = np.diag([0.5, 4.0])
    assert normalized_innovation_squared(innovation, S) == pytest.approx(1.0 / 0.5 + 4.0 / 4.0)


def test_normalized_innovation_squared_zero_innovation():
    assert normalized_innovation_squared(np.zeros(3), np.eye(3)) == 0.0


def test_nis_exceedance_ratio():
    values = [0.1, 1.0, 6.5, 10.0]
    assert nis_exceedance_ratio(values, df=2) == pytest.approx(0.5)
    assert nis_exceedance_ratio(values, df=3) == pytest.approx(0.25)
    assert nis_exceedance_ratio([], df=2) == 0.0
