"""
Core package for geonav_transform.

Pure transform chain: no ROS imports, no I/O, no hidden state.

Usage:
    from geonav_transform.core import (
        GeonavContext,
        GeonavOptions,
        establish_datum_from_config,
        process_sample,
    )

    ctx = GeonavContext()
    ctx, tf_record, report = establish_datum_from_config(ctx, datum, options)
    ctx, outputs, report = process_sample(ctx, sample, options)
"""

from __future__ import annotations

from geonav_transform.core.state import (
    CovarianceRotation,
    DatumState,
    GeonavContext,
    GeonavOptions,
    covariance_rotation_matrix,
)
from geonav_transform.core.datum import (
    datum_orientation,
    establish_datum,
    establish_datum_from_config,
)
from geonav_transform.core.validation import has_empty_frame, validate_sample
from geonav_transform.core.sample_transform import NavTransform, build_nav_transform
from geonav_transform.core.composer import (
    compose_outputs,
    compose_utm_output,
    compose_world_output,
)
from geonav_transform.core.pipeline import describe_fix, process_sample, process_samples

__all__ = [
    # State
    "CovarianceRotation",
    "DatumState",
    "GeonavContext",
    "GeonavOptions",
    "covariance_rotation_matrix",
    # Datum
    "datum_orientation",
    "establish_datum",
    "establish_datum_from_config",
    # Samples
    "has_empty_frame",
    "validate_sample",
    "NavTransform",
    "build_nav_transform",
    # Composition
    "compose_outputs",
    "compose_utm_output",
    "compose_world_output",
    # Pipeline
    "describe_fix",
    "process_sample",
    "process_samples",
]
