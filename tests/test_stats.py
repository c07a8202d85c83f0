"""Tests for the aggregator and distribution helpers."""

from __future__ import annotations

import pytest
from conftest import NOW_MS, make_event

from quake_feed.filters import FilterParams, apply_filters
from quake_feed.models import MagnitudeDistribution
from quake_feed.stats import (
    activity_level,
    aggregate,
    depth_class,
    magnitude_distribution,
)


class TestAggregate:
    def test_empty_returns_none(self):
        assert aggregate([]) is None
        assert aggregate(()) is None

    def test_filtered_example(self, sample_events):
        filtered = apply_filters(sample_events, FilterParams(min_mag=4, max_mag=10), NOW_MS)
        stats = aggregate(filtered)
        assert stats.total == 2
        assert stats.avg_mag == pytest.approx(6.35)
        assert stats.max_mag == 7.2
        assert stats.min_mag == 5.5

    def test_total_matches_view(self, sample_events):
        stats = aggregate(sample_events)
        assert stats.total == len(sample_events)
        assert stats.avg_mag == pytest.approx((3.0 + 5.5 + 7.2) / 3)

    def test_avg_depth_ignores_missing(self, sample_events):
        stats = aggregate(sample_events)
        assert stats.avg_depth == pytest.approx((8.0 + 33.0) / 2)

    def test_avg_depth_none_without_depths(self):
        stats = aggregate([make_event(depth_km=None), make_event("b", depth_km=None)])
        assert stats.avg_depth is None

    def test_tsunami_count(self, sample_events):
        assert aggregate(sample_events).with_tsunami == 1

    def test_significance_threshold_strict(self):
        stats = aggregate(
            [make_event("a", significance=700), make_event("b", significance=600),
             make_event("c", significance=601)]
        )
        assert stats.significant == 2

    def test_single_event(self):
        stats = aggregate([make_event(magnitude=4.4, depth_km=10.0)])
        assert stats.total == 1
        assert stats.avg_mag == stats.max_mag == stats.min_mag == 4.4
        assert stats.avg_depth == 10.0


class TestMagnitudeDistribution:
    def test_buckets(self):
        events = [make_event(str(i), m) for i, m in enumerate([1.0, 3.9, 4.0, 5.9, 6.0, 8.1])]
        dist = magnitude_distribution(events)
        assert (dist.low, dist.medium, dist.high) == (2, 2, 2)
        assert dist.total == 6

    def test_percentage(self):
        dist = MagnitudeDistribution(low=1, medium=2, high=1)
        assert dist.percentage("medium") == 50.0
        assert dist.percentage("low") == 25.0

    def test_percentage_empty(self):
        dist = magnitude_distribution([])
        assert dist.percentage("high") == 0.0


class TestClassifiers:
    @pytest.mark.parametrize(
        ("depth", "expected"),
        [(0.0, "shallow"), (69.9, "shallow"), (70.0, "intermediate"),
         (299.9, "intermediate"), (300.0, "deep"), (650.0, "deep")],
    )
    def test_depth_class(self, depth, expected):
        assert depth_class(depth) == expected

    @pytest.mark.parametrize(
        ("total", "expected"),
        [(0, "low"), (50, "low"), (51, "moderate"), (100, "moderate"), (101, "high")],
    )
    def test_activity_level(self, total, expected):
        assert activity_level(total) == expected
