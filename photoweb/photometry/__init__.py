from __future__ import annotations

from typing import Any

__all__ = [
    "Plane",
    "PlaneWidth",
    "PlaneOrientation",
    "IntensityUnits",
    "PhotometricWeb",
    "mirror_planes",
    "expand_ies_planes",
    "expand_ldt_planes",
    "web_from_ies",
    "web_from_ldt",
    "PhotometricWebBuilder",
    "PhotometricWebReader",
    "PhotometricWebWriter",
    "read_photometric_web",
    "write_photometric_web",
]


def __getattr__(name: str) -> Any:
    if name in {"Plane", "PlaneWidth", "PlaneOrientation", "IntensityUnits"}:
        from photoweb.photometry.plane import IntensityUnits, Plane, PlaneOrientation, PlaneWidth
        return {
            "Plane": Plane,
            "PlaneWidth": PlaneWidth,
            "PlaneOrientation": PlaneOrientation,
            "IntensityUnits": IntensityUnits,
        }[name]
    if name == "PhotometricWeb":
        from photoweb.photometry.web import PhotometricWeb
        return PhotometricWeb
    if name in {"mirror_planes", "expand_ies_planes", "expand_ldt_planes"}:
        from photoweb.photometry.symmetry import expand_ies_planes, expand_ldt_planes, mirror_planes
        return {
            "mirror_planes": mirror_planes,
            "expand_ies_planes": expand_ies_planes,
            "expand_ldt_planes": expand_ldt_planes,
        }[name]
    if name == "web_from_ies":
        from photoweb.photometry.ies import web_from_ies
        return web_from_ies
    if name == "web_from_ldt":
        from photoweb.photometry.ldt import web_from_ldt
        return web_from_ldt
    if name in {
        "PhotometricWebBuilder",
        "PhotometricWebReader",
        "PhotometricWebWriter",
        "read_photometric_web",
        "write_photometric_web",
    }:
        from photoweb.photometry.builder import (
            PhotometricWebBuilder,
            PhotometricWebReader,
            PhotometricWebWriter,
            read_photometric_web,
            write_photometric_web,
        )
        return {
            "PhotometricWebBuilder": PhotometricWebBuilder,
            "PhotometricWebReader": PhotometricWebReader,
            "PhotometricWebWriter": PhotometricWebWriter,
            "read_photometric_web": read_photometric_web,
            "write_photometric_web": write_photometric_web,
        }[name]
    raise AttributeError(name)
