import numpy as np
from scipy.stats import chi2


def normalized_innovation_squared(innovation: np.ndarray, S: np.ndarray) -> float:
    """NIS = y^T S^-1 y, chi-squared distributed with len(y) degrees of freedom for a consistent filter"""
    return float(innovation @ np.linalg.solve(S, innovation))


def nis_threshold(df: int, confidence: float = 0.95) -> float:
    assert 0.0 < confidence < 1.0, "Confidence level must be in (0, 1)"
    return float(chi2.ppf(confidence, df=df))


def nis_exceedance_ratio(nis_values, df: int, confidence: float = 0.95) -> float:
    """Share of NIS values above the chi-squared bound, about 1 - confidence when the noise is tuned well"""
    nis_values = np.asarray(nis_values, dtype=float)
    if nis_values.size == 0:
        return 0.0
    return float(np.mean(nis_values > nis_threshold(df, confidence)))
