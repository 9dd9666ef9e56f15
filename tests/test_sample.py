import numpy as np
import pytest

from mcmcscan.core.errors import InvalidArgumentError
from mcmcscan.core.sample import Sample


def test_sample_stores_column_parameters():
    sample = Sample(parameters=[1.0, 2.0], measurements=[0.5, 0.1, 3.0], likelihood=0.2)
    assert sample.parameters.shape == (2, 1)
    assert sample.measurements.shape == (3,)
    assert sample.likelihood == 0.2
    assert sample.dimension == 2
    assert sample.num_measurements == 3


def test_sample_accepts_column_vector_input():
    sample = Sample(parameters=np.array([[1.0], [2.0]]), measurements=np.array([[1.0]]), likelihood=0.0)
    assert sample.parameters.shape == (2, 1)
    assert sample.measurements.shape == (1,)


def test_sample_rejects_negative_likelihood():
    with pytest.raises(InvalidArgumentError):
        Sample(parameters=[1.0], measurements=[1.0], likelihood=-0.1)


def test_sample_rejects_nan_likelihood():
    with pytest.raises(InvalidArgumentError):
        Sample(parameters=[1.0], measurements=[1.0], likelihood=float("nan"))


@pytest.mark.parametrize("parameters", [None, [], np.empty((0, 1))])
def test_sample_rejects_null_or_empty_parameters(parameters):
    with pytest.raises(InvalidArgumentError):
        Sample(parameters=parameters, measurements=[1.0], likelihood=0.5)


@pytest.mark.parametrize("measurements", [None, [], np.empty(0)])
def test_sample_rejects_null_or_empty_measurements(measurements):
    with pytest.raises(InvalidArgumentError):
        Sample(parameters=[1.0], measurements=measurements, likelihood=0.5)


def test_sample_rejects_matrix_parameters():
    with pytest.raises(InvalidArgumentError):
        Sample(parameters=np.eye(2), measurements=[1.0], likelihood=0.5)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        Sample(parameters=[1.0], measurements=[1.0], likelihood=-1.0)


def test_sample_is_immutable():
    sample = Sample(parameters=[1.0, 2.0], measurements=[3.0], likelihood=0.5)
    with pytest.raises(AttributeError):
        sample.likelihood = 1.0
    with pytest.raises(ValueError):
        sample.parameters[0, 0] = 5.0


def test_sample_copies_its_inputs():
    parameters = np.array([1.0, 2.0])
    sample = Sample(parameters=parameters, measurements=[3.0], likelihood=0.5)
    parameters[0] = 10.0
    assert sample.parameters[0, 0] == 1.0


def test_sample_equality_is_by_identity():
    a = Sample(parameters=[1.0, 2.0], measurements=[3.0], likelihood=0.5)
    b = Sample(parameters=[1.0, 2.0], measurements=[3.0], likelihood=0.5)
    assert a == a
    assert a != b
    assert len({a, b}) == 2


def test_sample_repr():
    sample = Sample(parameters=[1.0, 2.0], measurements=[3.0], likelihood=0.5)
    rep = repr(sample)
    assert "dimension=2" in rep
    assert "likelihood=0.5" in rep
