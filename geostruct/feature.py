from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import msgspec

from .crs import CRS, DEFAULT_CRS
from .geometry import BoundingBox, Geometry, check_common, is_coordinate

__all__ = ("Feature", "FeatureCollection")


def is_identifier(obj) -> bool:
    return obj is None or isinstance(obj, str) or is_coordinate(obj)


class Feature(msgspec.Struct, frozen=True, kw_only=True, tag_field="type", tag="Feature"):
    """A geometry (or none) with properties.

    Parameters
    ----------
    geometry : Geometry, optional
        The feature geometry. ``None`` for an unlocated feature.
    properties : dict, optional
        Arbitrary JSON object members. Defaults to an empty dict. The mapping
        is copied on construction, later changes to the caller's dict don't
        reach the feature.
    id : str or number, optional
        An identifier for the feature.
    bbox : tuple of float, optional
    crs : CRS, optional
    """

    geometry: Optional[Geometry] = None
    properties: Dict[str, Any] = msgspec.field(default_factory=dict)
    id: Union[str, int, float, None] = None
    bbox: Optional[BoundingBox] = None
    crs: CRS = DEFAULT_CRS

    def __post_init__(self):
        check_common(self)
        if self.geometry is not None and not isinstance(self.geometry, Geometry):
            name = type(self.geometry).__name__
            raise TypeError(f"`geometry` must be a Geometry or None, got {name}")
        if not isinstance(self.properties, dict):
            name = type(self.properties).__name__
            raise TypeError(f"`properties` must be a dict, got {name}")
        if not is_identifier(self.id):
            raise TypeError(f"`id` must be a str, a finite number or None, got {self.id!r}")
        msgspec.structs.force_setattr(self, "properties", dict(self.properties))


class FeatureCollection(
    msgspec.Struct, frozen=True, kw_only=True, tag_field="type", tag="FeatureCollection"
):
    """An ordered collection of features"""

    features: Tuple[Feature, ...] = ()
    bbox: Optional[BoundingBox] = None
    crs: CRS = DEFAULT_CRS

    def __post_init__(self):
        check_common(self)
        if not isinstance(self.features, tuple):
            name = type(self.features).__name__
            raise TypeError(f"`features` must be a tuple, got {name}")
        for feature in self.features:
            if not isinstance(feature, Feature):
                raise TypeError(f"Expected a `Feature`, got {type(feature).__name__}")
