import math
from dataclasses import replace

import numpy as np
import pytest

from photoweb.models.ies import IesDocument, PhotometricType
from photoweb.models.ldt import EulumdatDocument, EulumdatSymmetry
from photoweb.photometry.ldt import web_from_ldt
from photoweb.photometry.ies import web_from_ies
from photoweb.photometry.plane import Plane
from photoweb.photometry.symmetry import expand_ies_planes, expand_ldt_planes, mirror_planes

G = (0.0, 45.0, 90.0)


def _ldt(symmetry, stored_c, n_cplanes=36):
    c = tuple(10.0 * i for i in range(n_cplanes))
    intens = tuple(float(a) for a in stored_c for _ in G)
    return EulumdatDocument(
        symmetry=symmetry,
        n_cplanes=n_cplanes,
        n_gamma=len(G),
        c_angles=c,
        g_angles=G,
        intensities=intens,
    )


def _angles_deg(planes):
    return [round(p.angle_deg, 6) for p in planes]


def _levels(planes):
    return [float(p.intensities[0]) for p in planes]


def test_mirror_planes_skips_boundary_and_reverses():
    planes = [Plane.from_degrees(a, G, [a] * 3) for a in (0.0, 45.0, 90.0)]
    out = mirror_planes(planes, math.radians(90.0))
    assert _angles_deg(out) == [0.0, 45.0, 90.0, 135.0, 180.0]
    assert _levels(out) == [0.0, 45.0, 90.0, 45.0, 0.0]


def test_mirror_planes_drop_wrapped():
    planes = [Plane.from_degrees(a, G, [1.0] * 3) for a in (0.0, 90.0, 180.0)]
    assert _angles_deg(mirror_planes(planes, math.pi)) == [0.0, 90.0, 180.0, 270.0, 360.0]
    assert _angles_deg(mirror_planes(planes, math.pi, drop_wrapped=True)) == [0.0, 90.0, 180.0, 270.0]


def test_ldt_c0_c180_expansion():
    stored = [10.0 * i for i in range(19)]
    planes = expand_ldt_planes(_ldt(EulumdatSymmetry.C0_C180, stored))
    assert len(planes) == 36
    assert _angles_deg(planes) == [10.0 * i for i in range(36)]
    levels = _levels(planes)
    assert levels == stored + [180.0 - 10.0 * i for i in range(1, 18)]
    by_angle = dict(zip(_angles_deg(planes), levels))
    for a in range(10, 180, 10):
        assert by_angle[360.0 - a] == by_angle[float(a)]


def test_ldt_c90_c270_expansion():
    stored = [90.0 + 10.0 * i for i in range(19)]
    planes = expand_ldt_planes(_ldt(EulumdatSymmetry.C90_C270, stored))
    assert len(planes) == 36
    assert _angles_deg(planes) == [10.0 * i for i in range(36)]
    expected = (
        [180.0 - 10.0 * i for i in range(9)]
        + stored
        + [260.0 - 10.0 * i for i in range(8)]
    )
    assert _levels(planes) == expected
    assert _levels(planes)[0] == 180.0


def test_ldt_c0_c180_c90_c270_expansion():
    stored = [10.0 * i for i in range(10)]
    planes = expand_ldt_planes(_ldt(EulumdatSymmetry.C0_C180_C90_C270, stored))
    assert _angles_deg(planes) == [10.0 * i for i in range(36)]
    expected = (
        [10.0 * i for i in range(10)]
        + [80.0 - 10.0 * i for i in range(9)]
        + [10.0 * i for i in range(1, 10)]
        + [80.0 - 10.0 * i for i in range(8)]
    )
    assert _levels(planes) == expected


def test_ldt_vertical_axis_is_spherical():
    doc = EulumdatDocument(
        symmetry=EulumdatSymmetry.VERTICAL_AXIS,
        n_cplanes=36,
        n_gamma=3,
        c_angles=tuple(10.0 * i for i in range(36)),
        g_angles=G,
        intensities=(1.0, 1.0, 1.0),
    )
    web = web_from_ldt(doc)
    assert web.n_planes() == 1
    assert web.is_spherically_symmetric()
    assert web.planes[0].angle == 0.0
    assert web.planes[0].intensities.tolist() == [1.0, 1.0, 1.0]


def test_ldt_no_symmetry_unchanged():
    stored = [10.0 * i for i in range(36)]
    planes = expand_ldt_planes(_ldt(EulumdatSymmetry.NONE, stored))
    assert _levels(planes) == stored


def test_ldt_conversion_factor_applied():
    doc = EulumdatDocument(
        symmetry=EulumdatSymmetry.VERTICAL_AXIS,
        n_cplanes=1,
        n_gamma=3,
        conversion_factor=2.5,
        c_angles=(0.0,),
        g_angles=G,
        intensities=(1.0, 2.0, 3.0),
    )
    (plane,) = expand_ldt_planes(doc)
    assert plane.intensities.tolist() == [2.5, 5.0, 7.5]


def _ies_doc(horizontal, ptype=PhotometricType.TYPE_C, multiplier=1.0):
    v = (0.0, 45.0, 90.0)
    cd = tuple(float(h) for h in horizontal for _ in v)
    return IesDocument(
        candela_multiplier=multiplier,
        n_vertical_angles=len(v),
        n_horizontal_angles=len(horizontal),
        photometric_type=ptype,
        vertical_angles=v,
        horizontal_angles=tuple(float(h) for h in horizontal),
        candela_values=cd,
    )


def test_ies_single_plane_is_spherical():
    web = web_from_ies(_ies_doc([0.0], multiplier=3.0))
    assert web.is_spherically_symmetric()
    assert web.planes[0].intensities.tolist() == [0.0, 0.0, 0.0]


def test_ies_quadrant_symmetry():
    planes = expand_ies_planes(_ies_doc([0.0, 45.0, 90.0]))
    assert _angles_deg(planes) == [0.0, 45.0, 90.0, 135.0, 180.0, 225.0, 270.0, 315.0]
    assert _levels(planes) == [0.0, 45.0, 90.0, 45.0, 0.0, 45.0, 90.0, 45.0]


def test_ies_bilateral_symmetry():
    planes = expand_ies_planes(_ies_doc([0.0, 90.0, 180.0]))
    assert _angles_deg(planes) == [0.0, 90.0, 180.0, 270.0]
    assert _levels(planes) == [0.0, 90.0, 180.0, 90.0]


def test_ies_full_sweep_drops_duplicate_360():
    planes = expand_ies_planes(_ies_doc([0.0, 90.0, 180.0, 270.0, 360.0]))
    assert _angles_deg(planes) == [0.0, 90.0, 180.0, 270.0]


def test_ies_partial_sweep_unchanged():
    planes = expand_ies_planes(_ies_doc([0.0, 90.0, 180.0, 270.0]))
    assert len(planes) == 4


def test_ies_type_b_not_expanded():
    planes = expand_ies_planes(_ies_doc([0.0, 45.0, 90.0], ptype=PhotometricType.TYPE_B))
    assert len(planes) == 3
    assert planes[0].orientation.value == "horizontal"


def test_ies_candela_multiplier_applied():
    doc = replace(_ies_doc([0.0], multiplier=2.0), candela_values=(1.0, 2.0, 3.0))
    (scaled,) = expand_ies_planes(doc)
    assert np.allclose(scaled.intensities, [2.0, 4.0, 6.0])
    assert scaled.n_samples == 3


@pytest.mark.parametrize("symmetry", list(EulumdatSymmetry))
def test_expanded_webs_have_one_angle_per_plane(symmetry):
    stored_count = {
        EulumdatSymmetry.NONE: 36,
        EulumdatSymmetry.VERTICAL_AXIS: 1,
        EulumdatSymmetry.C0_C180: 19,
        EulumdatSymmetry.C90_C270: 19,
        EulumdatSymmetry.C0_C180_C90_C270: 10,
    }[symmetry]
    start = 9 if symmetry is EulumdatSymmetry.C90_C270 else 0
    stored = [10.0 * (start + i) for i in range(stored_count)]
    web = web_from_ldt(_ldt(symmetry, stored))
    assert web.n_planes() == len(web.angles())
    assert web.n_planes() in (1, 36)
