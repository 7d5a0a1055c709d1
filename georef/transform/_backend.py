# -*- coding: utf-8 -*-
"""
Transform Backend Detection - Detect the optional rasterio package.

Checks for ``rasterio.transform.Affine`` at import time. Provides a boolean
flag and a helper that the rasterio interop functions use to verify the
package is installed before converting transforms.

Dependencies
------------
rasterio

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# GeoRef internal
from georef.exceptions import DependencyError

_HAS_RASTERIO = False

try:
    from rasterio.transform import Affine  # noqa: F401
    _HAS_RASTERIO = True
except ImportError:
    pass


def require_rasterio() -> None:
    """Verify that rasterio is installed.

    Raises
    ------
    DependencyError
        If rasterio is not installed. The message includes the install
        command.
    """
    if not _HAS_RASTERIO:
        raise DependencyError(
            "Affine interop requires rasterio. "
            "Install with: pip install georef[rasterio]"
        )
