# -*- coding: utf-8 -*-
"""
Coordinate Transform Builder - Validate GeoTIFF georeferencing tags.

Turns the raw ModelPixelScaleTag, ModelTiePointTag and
ModelTransformationTag arrays decoded from a TIFF directory into exactly
one ``CoordinateTransform`` variant. Validation is all-or-nothing: either a
complete variant is returned or ``MalformedTagError`` is raised naming the
tag and the violated constraint.

Precedence: a transformation matrix excludes the other two tags; without
one, a single tie point requires a pixel scale, and multiple tie points
stand on their own (a pixel scale given alongside them is ignored).

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

# Standard library
import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

# Third-party
import numpy as np

# GeoRef internal
from georef.exceptions import MalformedTagError
from georef.transform.models import (
    AffineTransform,
    CoordinateTransform,
    TiePoint,
    TiePointAndPixelScale,
    TiePoints,
)
from georef.vocabulary import GeoTiffTag

logger = logging.getLogger(__name__)

MODEL_PIXEL_SCALE_TAG = GeoTiffTag.ModelPixelScaleTag.name
MODEL_TIE_POINT_TAG = GeoTiffTag.ModelTiePointTag.name
MODEL_TRANSFORMATION_TAG = GeoTiffTag.ModelTransformationTag.name


def _coerce(
    values: Optional[Sequence[float]],
    tag: str,
) -> Optional[Tuple[float, ...]]:
    """Flatten tag values to a tuple of floats, keeping ``None`` as absent."""
    if values is None:
        return None
    try:
        arr = np.asarray(values, dtype=np.float64).ravel()
    except (TypeError, ValueError) as exc:
        raise MalformedTagError(
            f"Values in {tag} must be numeric: {exc}"
        ) from exc
    if not np.all(np.isfinite(arr)):
        raise MalformedTagError(
            f"Values in {tag} must be finite, got NaN or infinity"
        )
    return tuple(float(v) for v in arr)


def from_tag_data(
    pixel_scale: Optional[Sequence[float]],
    tie_points: Optional[Sequence[float]],
    transformation: Optional[Sequence[float]],
) -> CoordinateTransform:
    """Validate raw georeferencing tag values and build the transform.

    Parameters
    ----------
    pixel_scale : sequence of float, optional
        ModelPixelScaleTag values ``[ScaleX, ScaleY, ScaleZ]``.
    tie_points : sequence of float, optional
        ModelTiePointTag values, repeating ``[I, J, K, X, Y, Z]`` groups.
    transformation : sequence of float, optional
        ModelTransformationTag values, a row-major 4x4 matrix.

    Returns
    -------
    CoordinateTransform
        ``AffineTransform`` when a transformation is given,
        ``TiePointAndPixelScale`` for a single tie point, otherwise
        ``TiePoints``.

    Raises
    ------
    MalformedTagError
        If a tag has the wrong number of values, tags conflict, or a
        required tag is missing.

    Examples
    --------
    >>> from_tag_data([2.0, 2.0, 0.0], [0, 0, 0, 100.0, 200.0, 0.0], None)
    TiePointAndPixelScale(tie_point=TiePoint(i=0.0, ...), pixel_scale=(2.0, 2.0, 0.0))
    """
    scale = _coerce(pixel_scale, MODEL_PIXEL_SCALE_TAG)
    if scale is not None and len(scale) != 3:
        raise MalformedTagError(
            f"Number of values in {MODEL_PIXEL_SCALE_TAG} must be equal to 3, "
            f"got {len(scale)}"
        )

    ties = _coerce(tie_points, MODEL_TIE_POINT_TAG)
    if ties is not None:
        if len(ties) == 0:
            raise MalformedTagError(
                f"Number of values in {MODEL_TIE_POINT_TAG} must be greater than 0"
            )
        if len(ties) % 6 != 0:
            raise MalformedTagError(
                f"Number of values in {MODEL_TIE_POINT_TAG} must be divisible "
                f"by 6, got {len(ties)}"
            )

    matrix = _coerce(transformation, MODEL_TRANSFORMATION_TAG)
    if matrix is not None and len(matrix) != 16:
        raise MalformedTagError(
            f"Number of values in {MODEL_TRANSFORMATION_TAG} must be equal "
            f"to 16, got {len(matrix)}"
        )

    if matrix is not None:
        if scale is not None:
            raise MalformedTagError(
                f"{MODEL_PIXEL_SCALE_TAG} must not be specified when "
                f"{MODEL_TRANSFORMATION_TAG} is present (mutually exclusive)"
            )
        if ties is not None:
            raise MalformedTagError(
                f"{MODEL_TIE_POINT_TAG} must not be specified when "
                f"{MODEL_TRANSFORMATION_TAG} is present (mutually exclusive)"
            )
        logger.debug("Georeferencing from %s", MODEL_TRANSFORMATION_TAG)
        return AffineTransform(matrix)

    if ties is None:
        raise MalformedTagError(
            f"{MODEL_TIE_POINT_TAG} must be present when "
            f"{MODEL_TRANSFORMATION_TAG} is missing"
        )

    if len(ties) == 6:
        if scale is None:
            raise MalformedTagError(
                f"{MODEL_PIXEL_SCALE_TAG} must be specified when "
                f"{MODEL_TIE_POINT_TAG} contains 6 values"
            )
        logger.debug("Georeferencing from one tie point and pixel scale")
        return TiePointAndPixelScale(TiePoint.from_sequence(ties), scale)

    if scale is not None:
        logger.debug(
            "Ignoring %s alongside %d tie points",
            MODEL_PIXEL_SCALE_TAG, len(ties) // 6,
        )
    logger.debug("Georeferencing from %d tie points", len(ties) // 6)
    return TiePoints(ties)


def _lookup(tags: Mapping[Any, Any], tag: GeoTiffTag) -> Any:
    """Find *tag* in *tags* by enum member, numeric code, or name."""
    for key in (tag, int(tag), tag.name):
        if key in tags:
            value = tags[key]
            # tifffile-style TiffTag objects carry the payload in .value
            return getattr(value, 'value', value)
    return None


def from_tags(tags: Mapping[Any, Any]) -> CoordinateTransform:
    """Build a transform from a mapping of decoded TIFF tags.

    Keys may be ``GeoTiffTag`` members, numeric tag codes (33550, 33922,
    34264) or tag names. Tags absent from the mapping are treated as
    absent from the file.

    Parameters
    ----------
    tags : Mapping
        Decoded TIFF tags.

    Returns
    -------
    CoordinateTransform

    Raises
    ------
    MalformedTagError
        See ``from_tag_data``.
    """
    return from_tag_data(
        _lookup(tags, GeoTiffTag.ModelPixelScaleTag),
        _lookup(tags, GeoTiffTag.ModelTiePointTag),
        _lookup(tags, GeoTiffTag.ModelTransformationTag),
    )
