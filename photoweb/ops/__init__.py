from photoweb.ops.average import average_photometric_webs

__all__ = ["average_photometric_webs"]
