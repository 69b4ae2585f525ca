"""Unit tests for plate normalization, available spots and congestion tiers."""

import pytest
from parking_app.services.occupancy_service import (
    available_spots,
    congestion_tier,
    normalize_plate,
)


class TestNormalizePlate:
    def test_strips_punctuation_and_uppercases(self):
        assert normalize_plate(" abc-123 ") == "ABC123"

    def test_none_becomes_empty(self):
        assert normalize_plate(None) == ""


class TestAvailableSpots:
    @pytest.mark.parametrize("capacity,scans,expected", [
        (100, 0, 100),
        (100, 40, 60),
        (100, 100, 0),
        (100, 130, 0),    # over-full never goes negative
        (0, 5, 0),
        (50, -3, 50),     # never above capacity
    ])
    def test_clamped_to_capacity(self, capacity, scans, expected):
        assert available_spots(capacity, scans) == expected


class TestCongestionTier:
    @pytest.mark.parametrize("scanned,expected", [
        (0, "Low"),
        (49, "Low"),
        (50, "Medium"),
        (79, "Medium"),
        (80, "High"),
        (120, "High"),
    ])
    def test_capacity_100(self, scanned, expected):
        assert congestion_tier(scanned, 100) == expected

    def test_small_lot_boundary(self):
        assert congestion_tier(8, 10) == "High"
        assert congestion_tier(7, 10) == "Medium"

    def test_zero_capacity(self):
        assert congestion_tier(0, 0) == "Low"
        assert congestion_tier(1, 0) == "High"

    def test_thresholds_can_be_overridden(self):
        assert congestion_tier(60, 100, medium=0.25, high=0.6) == "High"
