import pytest

from photoweb.core.errors import (
    InconsistentPlaneAnglesError,
    NoWebsError,
    OperationError,
    PlaneCountMismatchError,
)
from photoweb.ops import average_photometric_webs
from photoweb.photometry.plane import Plane, PlaneOrientation
from photoweb.photometry.web import PhotometricWeb

G = [0.0, 45.0, 90.0]


def _web(levels, angles=G, orientation=PlaneOrientation.VERTICAL):
    n = len(levels)
    return PhotometricWeb(
        tuple(
            Plane.from_degrees(360.0 * i / n, angles, [lv] * len(angles), orientation=orientation)
            for i, lv in enumerate(levels)
        )
    )


def test_average_of_two_single_plane_webs():
    out = average_photometric_webs([_web([2.0]), _web([4.0])])
    assert out.n_planes() == 1
    assert out.planes[0].intensities.tolist() == [3.0, 3.0, 3.0]


def test_average_keeps_first_web_structure():
    a = _web([1.0, 2.0, 3.0, 4.0], orientation=PlaneOrientation.HORIZONTAL)
    b = _web([3.0, 4.0, 5.0, 6.0])
    out = average_photometric_webs([a, b])
    assert out.angles_deg().tolist() == pytest.approx(a.angles_deg().tolist())
    assert [p.intensities[0] for p in out.planes] == [2.0, 3.0, 4.0, 5.0]
    assert all(p.orientation is PlaneOrientation.HORIZONTAL for p in out.planes)
    assert out.plane_width(0).total == pytest.approx(a.plane_width(0).total)


def test_average_of_one_web_is_a_copy():
    a = _web([1.0, 5.0])
    out = average_photometric_webs([a])
    assert out is not a
    assert out.intensity_matrix().tolist() == a.intensity_matrix().tolist()


def test_average_no_webs():
    with pytest.raises(NoWebsError):
        average_photometric_webs([])


def test_average_plane_count_mismatch():
    webs = [_web([1.0, 1.0]), _web([1.0, 1.0]), _web([1.0, 1.0, 1.0])]
    with pytest.raises(PlaneCountMismatchError) as ei:
        average_photometric_webs(webs)
    err = ei.value
    assert (err.expected, err.found, err.index) == (2, 3, 2)
    assert "Expected 2 planes, found 3 planes" in str(err)
    assert err.kind == "incompatible-webs"
    assert isinstance(err, OperationError)


def test_average_inconsistent_secondary_angles():
    with pytest.raises(InconsistentPlaneAnglesError):
        average_photometric_webs([_web([1.0, 1.0]), _web([1.0, 1.0], angles=[0.0, 30.0, 90.0])])


def test_plane_count_checked_before_angles():
    with pytest.raises(PlaneCountMismatchError):
        average_photometric_webs([_web([1.0]), _web([1.0, 1.0], angles=[0.0, 10.0])])
