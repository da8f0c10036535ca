import numpy as np
import pytest

from msfusion.quaternion import Quaternion
from msfusion.similarity import From6DoF, Pose


def _random_unit_quaternion(rng):
    return Quaternion.from_coeffs(rng.uniform(-1, 1, 4)).normalized()


def _quaternion_distance(a, b):
    return min(
        np.max(np.abs(a.coeffs() - b.coeffs())),
        np.max(np.abs(a.coeffs() + b.coeffs())),
    )


def _build(rng, p, q, scale, count, s_p, s_q):
    transform = From6DoF()
    for _ in range(count):
        p1 = p + rng.uniform(-1, 1, 3) * 0.1 + np.array([3.0, 4.0, 5.0])
        q1 = _random_unit_quaternion(rng)
        p2 = (q1.rotate(p) + p1) / scale
        q2 = q1 * q
        p2 = p2 + rng.uniform(-1, 1, 3) * s_p
        noise = Quaternion.from_coeffs(
            Quaternion.identity().coeffs() + rng.uniform(-1, 1, 4) * s_q
        ).normalized()
        q2 = q2 * noise
        transform.add_measurement(Pose(p1, q1), Pose(p2, q2))
    return transform


def test_similarity_transform_recovers_pose():
    rng = np.random.default_rng(7)
    s_p = 1e-2
    s_q = 1e-2
    p = rng.uniform(-1, 1, 3)
    q = _random_unit_quaternion(rng)
    transform = _build(rng, p, q, 2.0, 100, s_p, s_q)

    result = transform.compute()

    assert np.max(np.abs(result.pose.position - p)) < s_p
    assert _quaternion_distance(result.pose.orientation, q) < s_q


def test_noise_free_data_is_recovered_exactly():
    rng = np.random.default_rng(3)
    p = rng.uniform(-1, 1, 3)
    q = _random_unit_quaternion(rng)
    transform = _build(rng, p, q, 2.0, 10, 0.0, 0.0)

    result = transform.compute()

    np.testing.assert_allclose(result.pose.position, p, atol=1e-8)
    assert result.scale == pytest.approx(2.0, abs=1e-8)
    assert _quaternion_distance(result.pose.orientation, q) < 1e-8
    assert result.condition >= 1.0


def test_result_orientation_is_unit():
    rng = np.random.default_rng(11)
    transform = _build(rng, rng.uniform(-1, 1, 3), _random_unit_quaternion(rng), 1.5, 20, 1e-3, 1e-3)
    result = transform.compute()
    assert result.pose.orientation.norm() == pytest.approx(1.0)


def test_too_few_measurements_raise():
    transform = From6DoF()
    with pytest.raises(ValueError):
        transform.compute()
    transform.add_measurement(Pose(), Pose())
    assert len(transform) == 1
    with pytest.raises(ValueError):
        transform.compute()


def test_pose_rejects_bad_position():
    with pytest.raises(ValueError):
        Pose(position=[1.0, 2.0])