import numpy as np
import pytest

from mcmcscan.core.errors import InvalidArgumentError, NotPositiveDefiniteError
from mcmcscan.core.sample import Sample
from mcmcscan.core.statistics import EnsembleStatistics
from mcmcscan.utils.tools import is_positive_definite


def make_sample(parameters) -> Sample:
    return Sample(parameters=parameters, measurements=[0.0], likelihood=1.0)


@pytest.fixture
def square_ensemble():
    return [make_sample(p) for p in ([0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0])]


def test_from_samples_population_statistics(square_ensemble):
    stats = EnsembleStatistics.from_samples(square_ensemble)
    assert stats.dimension == 2
    assert np.allclose(stats.mean, [[0.5], [0.5]])
    # Population covariance: divisor n, not n - 1
    assert np.allclose(stats.covariance, 0.25 * np.eye(2))
    assert np.isclose(stats.covariance_det, 0.0625)
    assert np.allclose(stats.covariance_inv, 4.0 * np.eye(2))


def test_from_samples_matches_numpy():
    rng = np.random.default_rng(0)
    points = rng.normal(size=(7, 3))
    stats = EnsembleStatistics.from_samples([make_sample(p) for p in points])
    assert np.allclose(stats.mean.ravel(), points.mean(axis=0))
    assert np.allclose(stats.covariance, np.cov(points, rowvar=False, bias=True))
    assert np.isclose(stats.covariance_det, np.linalg.det(stats.covariance))
    assert np.allclose(stats.covariance_inv, np.linalg.inv(stats.covariance))


def test_from_samples_rejects_degenerate_ensemble():
    # Collinear points have a singular covariance
    samples = [make_sample([t, 2.0 * t]) for t in (0.0, 1.0, 2.0, 3.0)]
    with pytest.raises(NotPositiveDefiniteError):
        EnsembleStatistics.from_samples(samples)


def test_from_samples_rejects_too_few_chains():
    samples = [make_sample([0.0, 0.0]), make_sample([1.0, 1.0])]
    with pytest.raises(NotPositiveDefiniteError):
        EnsembleStatistics.from_samples(samples)


def test_from_samples_rejects_bad_input():
    with pytest.raises(InvalidArgumentError):
        EnsembleStatistics.from_samples([])
    with pytest.raises(InvalidArgumentError):
        EnsembleStatistics.from_samples([make_sample([0.0]), make_sample([0.0, 1.0])])


def test_not_positive_definite_is_a_linalg_error():
    assert issubclass(NotPositiveDefiniteError, np.linalg.LinAlgError)


def test_replace_member_square_scenario(square_ensemble):
    stats = EnsembleStatistics.from_samples(square_ensemble)
    new = make_sample([2.0, 2.0])

    updated = stats.replace_member(square_ensemble[0], new, num_chains=4)

    assert np.allclose(updated.mean, [[1.0], [1.0]])
    assert np.allclose(updated.covariance, updated.covariance.T)
    assert is_positive_definite(updated.covariance)

    expected = EnsembleStatistics.from_samples([new] + square_ensemble[1:])
    assert np.allclose(updated.covariance, expected.covariance)
    assert np.isclose(updated.covariance_det, expected.covariance_det)
    assert np.allclose(updated.covariance_inv, expected.covariance_inv)

    # The original value is untouched
    assert np.allclose(stats.mean, [[0.5], [0.5]])
    assert np.allclose(stats.covariance, 0.25 * np.eye(2))


def test_replace_member_with_itself_is_identity(square_ensemble):
    stats = EnsembleStatistics.from_samples(square_ensemble)
    updated = stats.replace_member(square_ensemble[2], square_ensemble[2], num_chains=4)
    assert np.allclose(updated.mean, stats.mean)
    assert np.allclose(updated.covariance, stats.covariance)
    assert np.isclose(updated.covariance_det, stats.covariance_det)
    assert np.allclose(updated.covariance_inv, stats.covariance_inv)


def test_replace_member_rejects_indefinite_update(square_ensemble):
    # Replacing a point that is not an ensemble member breaks the covariance
    stats = EnsembleStatistics.from_samples(square_ensemble)
    outsider = make_sample([10.0, 10.0])
    with pytest.raises(NotPositiveDefiniteError):
        stats.replace_member(outsider, make_sample([0.5, 0.5]), num_chains=4)


def test_replace_member_rejects_dimension_mismatch(square_ensemble):
    stats = EnsembleStatistics.from_samples(square_ensemble)
    with pytest.raises(InvalidArgumentError):
        stats.replace_member(square_ensemble[0], make_sample([1.0, 2.0, 3.0]), num_chains=4)


def test_statistics_arrays_are_read_only(square_ensemble):
    stats = EnsembleStatistics.from_samples(square_ensemble)
    with pytest.raises(ValueError):
        stats.covariance[0, 0] = 1.0
    with pytest.raises(AttributeError):
        stats.covariance_det = 1.0


def test_thousand_updates_keep_inverse_consistent():
    rng = np.random.default_rng(1234)
    num_chains, dim = 10, 3
    members = [make_sample(rng.normal(size=dim)) for _ in range(num_chains)]
    stats = EnsembleStatistics.from_samples(members)

    accepted = 0
    while accepted < 1000:
        i = int(rng.integers(num_chains))
        new = make_sample(rng.normal(size=dim))
        try:
            stats = stats.replace_member(members[i], new, num_chains)
        except NotPositiveDefiniteError:
            continue
        members[i] = new
        accepted += 1

    assert stats.inverse_residual() < 1e-6
    assert np.allclose(stats.covariance, stats.covariance.T)
    assert is_positive_definite(stats.covariance)

    # The running values still agree with a fresh computation
    fresh = EnsembleStatistics.from_samples(members)
    assert np.allclose(stats.mean, fresh.mean, atol=1e-8)
    assert np.allclose(stats.covariance, fresh.covariance, atol=1e-8)
    assert np.isclose(stats.covariance_det, fresh.covariance_det, rtol=1e-6)


def test_cholesky_reconstructs_covariance(square_ensemble):
    stats = EnsembleStatistics.from_samples(square_ensemble)
    L = stats.cholesky()
    assert np.allclose(np.triu(L, 1), 0.0)
    assert np.allclose(L @ L.T, stats.covariance)
