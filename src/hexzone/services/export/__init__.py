"""Export services."""

from .geojson import cell_polygon, grid_feature_collection

__all__ = [
    "cell_polygon",
    "grid_feature_collection",
]
