import copy

import numpy as np
import pytest

from house_infill.config import InfillConfig, SamplingRange, get_config, validate_config
from house_infill.errors import InvalidRangeError


def test_default_config_is_valid():
    validate_config(get_config())


def test_defaults_match_documented_ranges():
    placement = InfillConfig().placement
    assert (placement.initial_offset_m.low, placement.initial_offset_m.high) == (1.0, 5.0)
    assert (placement.footprint_size_m.low, placement.footprint_size_m.high) == (6.0, 14.0)
    assert (placement.gap_m.low, placement.gap_m.high) == (2.0, 4.0)
    assert placement.base_setback_m == 10.0
    assert placement.overlap_buffer_m == 1.0
    assert placement.sample_edge_midpoints is False


@pytest.mark.parametrize("low, high", [(5.0, 1.0), (3.0, 3.0)])
def test_sampling_range_rejects_empty_range(low, high):
    with pytest.raises(InvalidRangeError):
        SamplingRange(low, high)


def test_invalid_range_is_a_value_error():
    with pytest.raises(ValueError):
        SamplingRange(2.0, 1.0)


def test_sampling_range_stays_half_open():
    rng = np.random.default_rng(0)
    r = SamplingRange(6.0, 14.0)
    draws = [r.sample(rng) for _ in range(500)]
    assert all(6.0 <= d < 14.0 for d in draws)


def test_validate_config_collects_errors():
    config = copy.deepcopy(InfillConfig())
    config.placement.base_setback_m = -1.0
    config.placement.overlap_buffer_m = -0.5
    config.network.sidewalk_width_m = 0.0
    config.api.max_retries = 0

    with pytest.raises(ValueError) as excinfo:
        validate_config(config)

    message = str(excinfo.value)
    assert "base_setback_m" in message
    assert "overlap_buffer_m" in message
    assert "sidewalk_width_m" in message
    assert "max_retries" in message


def test_validate_config_rejects_non_range():
    config = InfillConfig()
    config.placement.gap_m = (2.0, 4.0)
    with pytest.raises(ValueError, match="gap_m"):
        validate_config(config)
