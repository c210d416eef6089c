from __future__ import annotations

from typing import Sequence

import numpy as np

from photoweb.core.errors import InconsistentPlaneAnglesError, NoWebsError, PlaneCountMismatchError
from photoweb.photometry.web import PhotometricWeb


def _check_compatible(webs: Sequence[PhotometricWeb]) -> None:
    if not webs:
        raise NoWebsError()

    expected = webs[0].n_planes()
    for i, web in enumerate(webs):
        if web.n_planes() != expected:
            raise PlaneCountMismatchError(expected=expected, found=web.n_planes(), index=i)

    if expected == 0:
        return
    reference = webs[0].planes[0]
    for web in webs:
        for p in web.planes:
            if not reference.same_secondary_angles(p):
                raise InconsistentPlaneAnglesError()


def average_photometric_webs(webs: Sequence[PhotometricWeb]) -> PhotometricWeb:
    """
    Sample-wise mean of structurally identical webs.

    Primary angles, orientation and secondary angles come from the first web.
    """
    webs = list(webs)
    _check_compatible(webs)

    first = webs[0]
    planes = []
    for j, p in enumerate(first.planes):
        stack = np.vstack([w.planes[j].intensities for w in webs])
        planes.append(p.with_intensities(stack.mean(axis=0)))
    return PhotometricWeb(tuple(planes))
