import math

import numpy as np
import pytest

from photoweb.core.errors import InconsistentPlaneAnglesError
from photoweb.photometry.plane import Plane, PlaneOrientation, PlaneWidth
from photoweb.photometry.web import PhotometricWeb

THETA_DEG = np.linspace(0.0, 180.0, 181)


def _unit_plane(angle_deg: float) -> Plane:
    return Plane.from_degrees(angle_deg, THETA_DEG, np.ones_like(THETA_DEG))


def test_plane_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Plane(angle=0.0, angles=np.array([0.0, 1.0]), intensities=np.array([1.0]))


def test_plane_rejects_non_increasing_angles():
    with pytest.raises(ValueError):
        Plane(angle=0.0, angles=np.array([0.0, 1.0, 1.0]), intensities=np.zeros(3))


def test_plane_arrays_are_read_only_copies():
    src = np.array([0.0, 0.5, 1.0])
    p = Plane(angle=0.0, angles=src, intensities=np.ones(3))
    src[0] = -1.0
    assert p.angles[0] == 0.0
    with pytest.raises(ValueError):
        p.intensities[0] = 5.0


def test_plane_delta_angle_edges_and_interior():
    p = Plane.from_degrees(0.0, [0.0, 10.0, 30.0, 60.0], [1.0, 1.0, 1.0, 1.0])
    assert p.delta_angle(0) == pytest.approx(math.radians(10.0))
    assert p.delta_angle(1) == pytest.approx(math.radians(15.0))
    assert p.delta_angle(3) == pytest.approx(math.radians(30.0))


def test_single_sample_plane_integrates_to_zero():
    p = Plane.from_degrees(0.0, [90.0], [100.0])
    assert p.delta_angle(0) == 0.0
    assert p.integrate_intensity() == 0.0


def test_plane_integral_of_unit_intensity():
    assert _unit_plane(0.0).integrate_intensity() == pytest.approx(2.0, rel=1e-4)


def test_plane_width_helpers():
    w = PlaneWidth.symmetric(0.25)
    assert w.total == 0.5
    assert w.is_symmetric
    assert PlaneWidth.full_circle().total == pytest.approx(2 * math.pi)
    assert not PlaneWidth(0.1, 0.2).is_symmetric


def test_plane_mirrored():
    p = Plane.from_degrees(30.0, [0.0, 90.0], [1.0, 2.0], orientation=PlaneOrientation.HORIZONTAL)
    m = p.mirrored(math.pi)
    assert m.angle_deg == pytest.approx(330.0)
    assert m.orientation is PlaneOrientation.HORIZONTAL
    assert m.intensities.tolist() == [1.0, 2.0]


def test_spherical_web_total_is_four_pi():
    web = PhotometricWeb((_unit_plane(0.0),))
    assert web.is_spherically_symmetric()
    assert web.plane_width(0).total == pytest.approx(2 * math.pi)
    assert web.total_intensity() == pytest.approx(4 * math.pi, rel=1e-4)


def test_regular_web_total_is_four_pi():
    web = PhotometricWeb(tuple(_unit_plane(10.0 * i) for i in range(36)))
    assert web.n_planes() == 36
    assert len(web.angles()) == 36
    assert web.total_intensity() == pytest.approx(4 * math.pi, rel=1e-4)
    for i in range(36):
        w = web.plane_width(i)
        assert w.is_symmetric
        assert w.lower == pytest.approx(math.radians(5.0))


def test_irregular_spacing_gives_asymmetric_widths():
    web = PhotometricWeb(tuple(_unit_plane(a) for a in (0.0, 90.0, 180.0, 300.0)))
    w0 = web.plane_width(0)
    assert not w0.is_symmetric
    assert w0.lower == pytest.approx(math.radians(30.0))
    assert w0.upper == pytest.approx(math.radians(45.0))
    w1 = web.plane_width(1)
    assert w1.is_symmetric
    total = sum(web.plane_width(i).total for i in range(web.n_planes()))
    assert total == pytest.approx(2 * math.pi)


def test_given_widths_are_replaced():
    planes = tuple(_unit_plane(a).with_width(PlaneWidth.symmetric(1.0)) for a in (0.0, 180.0))
    web = PhotometricWeb(planes)
    assert web.plane_width(0).total == pytest.approx(math.pi)


def test_circular_adjacency():
    web = PhotometricWeb(tuple(_unit_plane(a) for a in (0.0, 120.0, 240.0)))
    assert web.plane_at(3) is web.planes[0]
    assert web.plane_at(-1) is web.planes[2]
    lower, upper = web.neighbours(0)
    assert lower.angle_deg == pytest.approx(240.0)
    assert upper.angle_deg == pytest.approx(120.0)


def test_empty_web():
    web = PhotometricWeb()
    assert web.n_planes() == 0
    assert web.total_intensity() == 0.0
    assert web.secondary_angles() is None
    assert web.intensity_matrix().shape == (0, 0)
    with pytest.raises(IndexError):
        web.plane_at(0)


def test_intensity_matrix_requires_shared_secondary_angles():
    a = Plane.from_degrees(0.0, [0.0, 90.0], [1.0, 2.0])
    b = Plane.from_degrees(180.0, [0.0, 45.0], [3.0, 4.0])
    web = PhotometricWeb((a, b))
    assert web.secondary_angles() is None
    with pytest.raises(InconsistentPlaneAnglesError):
        web.intensity_matrix()

    regular = PhotometricWeb((a, a.with_angle(math.pi).with_intensities([5.0, 6.0])))
    assert regular.intensity_matrix().tolist() == [[1.0, 2.0], [5.0, 6.0]]
    assert np.allclose(regular.angles_deg(), [0.0, 180.0])


def test_package_exposes_lazy_names():
    import photoweb.photometry as photometry

    assert photometry.PhotometricWeb is PhotometricWeb
    assert photometry.Plane is Plane
    with pytest.raises(AttributeError):
        photometry.not_a_name
