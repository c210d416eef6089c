from photoweb.core.angles import angular_distance, degrees_to_radians, normalize_radians, radians_to_degrees
from photoweb.core.settings import DEFAULT_READ_OPTIONS, ReadOptions

__all__ = [
    "angular_distance",
    "degrees_to_radians",
    "normalize_radians",
    "radians_to_degrees",
    "ReadOptions",
    "DEFAULT_READ_OPTIONS",
]
