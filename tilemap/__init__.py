from tilemap.config import TerrainConfig, config_from_mapping, config_to_mapping
from tilemap.grid import Grid, GridGeometry, GridSampler, Tile, TileClass, recompute
from tilemap.params import (
    ParameterSpec,
    ParameterStore,
    SamplingParameters,
    default_parameters,
    parameter_bounds,
    parameter_specs,
)
from tilemap.policy import (
    Classification,
    ElevationPolicy,
    GradientClassifier,
    ThresholdClassifier,
    blend_factor,
    make_policy,
)
from tilemap.session import TerrainSession

__all__ = [
    "Classification",
    "ElevationPolicy",
    "GradientClassifier",
    "Grid",
    "GridGeometry",
    "GridSampler",
    "ParameterSpec",
    "ParameterStore",
    "SamplingParameters",
    "TerrainConfig",
    "TerrainSession",
    "ThresholdClassifier",
    "Tile",
    "TileClass",
    "blend_factor",
    "config_from_mapping",
    "config_to_mapping",
    "default_parameters",
    "make_policy",
    "parameter_bounds",
    "parameter_specs",
    "recompute",
]
