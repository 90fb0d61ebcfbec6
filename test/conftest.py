import os
import pytest
from typing import Dict, Any

import numpy as np

# =============================================================================
# Production Config Fixtures
# =============================================================================


def _load_yaml_file(path: str) -> Dict[str, Any]:
    """Load a YAML parameter file, handling the ros__parameters wrapper."""
    import yaml
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    for key in ("geonav_transform", "/**"):
        if key in data and "ros__parameters" in data.get(key, {}):
            return data[key]["ros__parameters"]
    return data


@pytest.fixture
def config_path() -> str:
    test_dir = os.path.dirname(__file__)
    pkg_root = os.path.dirname(test_dir)
    return os.path.join(pkg_root, "config", "geonav_transform.yaml")


@pytest.fixture
def prod_config(config_path) -> Dict[str, Any]:
    """
    Parameters shipped in config/geonav_transform.yaml.

    Usage:
        def test_something(prod_config):
            assert prod_config["frequency"] == 10.0
    """
    if not os.path.exists(config_path):
        pytest.skip("config/geonav_transform.yaml not found")
    return _load_yaml_file(config_path)


# =============================================================================
# Core Fixtures
# =============================================================================

@pytest.fixture
def numpy_seed():
    """Set numpy random seed for reproducible tests."""
    np.random.seed(42)
    yield


@pytest.fixture
def options():
    from geonav_transform.core import GeonavOptions
    return GeonavOptions()


@pytest.fixture
def datum():
    """Datum at (45, -93), zone 15T."""
    from geonav_transform.common.types import DatumConfig, GeodeticPoint
    return DatumConfig(point=GeodeticPoint(45.0, -93.0, 0.0), heading=0.0)


@pytest.fixture
def active_context(datum, options):
    """Context with the (45, -93) datum established."""
    from geonav_transform.core import GeonavContext, establish_datum_from_config
    context, _, _ = establish_datum_from_config(GeonavContext(), datum, options)
    return context


@pytest.fixture
def make_sample():
    """Factory for NavigationSample with sensible defaults."""
    from geonav_transform.common.types import GeodeticPoint, NavigationSample

    def _make(lat=45.0, lon=-93.0, alt=10.0, stamp=1.0, frame_id="gps",
              orientation=(0.0, 0.0, 0.0, 1.0), covariance=None):
        cov = np.diag([1.0, 2.0, 3.0, 0.1, 0.2, 0.3]) if covariance is None else covariance
        return NavigationSample(
            stamp=stamp,
            frame_id=frame_id,
            position=GeodeticPoint(lat, lon, alt),
            orientation=np.array(orientation, dtype=float),
            pose_covariance=cov,
        )

    return _make


@pytest.fixture
def random_spd_covariance(numpy_seed):
    """Random symmetric positive-definite 6x6."""
    A = np.random.randn(6, 6)
    return A @ A.T + 0.1 * np.eye(6)
