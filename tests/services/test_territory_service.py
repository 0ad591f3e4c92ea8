"""
Unit tests for territory service.
"""

import pytest

from straymap.core.exceptions import EmptySightingsError, TerritoryConfigError
from straymap.core.geo import distance
from straymap.core.range_policy import RangePolicy
from straymap.schemas.territory import TerritoryEstimate
from straymap.services.territory_service import TerritoryService


@pytest.fixture
def territory_service():
    """Create a territory service with a fixed range table."""
    return TerritoryService(
        policy=RangePolicy({"dog": 2000, "cat": 1500, "other": 1000}),
        buffer_factor=1.2,
        min_radius_meters=50.0,
        min_sightings=3,
    )


# --- admission ---


def test_empty_accepted_admits_any_candidate(territory_service, make_sighting):
    for latitude, longitude in [(0.0, 0.0), (89.9, 179.9), (-45.0, -120.0)]:
        assert territory_service.is_admissible(make_sighting(latitude, longitude), [], "cat")


def test_single_accepted_is_pairwise_check(territory_service, make_sighting):
    accepted = [make_sighting(10.0, 10.0)]
    candidate = make_sighting(10.0, 10.5)  # about 55 km east

    assert not territory_service.is_admissible(candidate, accepted, "other")
    assert not territory_service.is_admissible(candidate, accepted, "dog")


def test_nearby_candidate_is_admitted(territory_service, make_sighting):
    accepted = [make_sighting(60.17, 24.94), make_sighting(60.171, 24.94)]
    candidate = make_sighting(60.172, 24.941)

    assert territory_service.is_admissible(candidate, accepted, "cat")


def test_admission_measures_from_center_of_accepted(territory_service, make_sighting):
    # Candidate is ~1.67 km from the first sighting but ~1.11 km from the center
    accepted = [make_sighting(0.0, 0.0), make_sighting(0.01, 0.0)]
    candidate = make_sighting(0.015, 0.0)

    assert distance(accepted[0].coordinates, candidate.coordinates) > 1500
    assert territory_service.is_admissible(candidate, accepted, "cat")
    assert not territory_service.is_admissible(candidate, accepted, "other")


def test_unknown_type_uses_other_range(territory_service, make_sighting):
    accepted = [make_sighting(0.0, 0.0)]
    candidate = make_sighting(0.012, 0.0)  # ~1.33 km

    assert territory_service.is_admissible(candidate, accepted, "cat")
    assert territory_service.is_admissible(
        candidate, accepted, "hamster"
    ) == territory_service.is_admissible(candidate, accepted, "other")


def test_check_admission_without_accepted(territory_service, make_sighting):
    assert territory_service.check_admission(make_sighting(10.0, 10.0), [], "dog") == (True, None)


def test_check_admission_reports_distance(territory_service, make_sighting):
    accepted = [make_sighting(10.0, 10.0)]

    admissible, spread = territory_service.check_admission(
        make_sighting(10.0, 10.5), accepted, "other"
    )
    assert admissible is False
    assert spread == pytest.approx(54_760, rel=1e-2)

    admissible, spread = territory_service.check_admission(
        make_sighting(10.005, 10.0), accepted, "other"
    )
    assert admissible is True
    assert spread == pytest.approx(556, rel=1e-2)


def test_distance_from_center(territory_service, make_sighting):
    candidate = make_sighting(1.0, 0.0)

    assert territory_service.distance_from_center(candidate, []) is None
    assert territory_service.distance_from_center(
        candidate, [make_sighting(0.0, 0.0)]
    ) == pytest.approx(111_195, rel=1e-3)


# --- filtering ---


def test_filter_keeps_close_sightings(territory_service, small_cluster):
    assert territory_service.filter_within_range(small_cluster, "dog") == small_cluster


def test_filter_drops_minority_outlier(territory_service, cluster_with_outlier):
    near, outlier = cluster_with_outlier
    sightings = near[:5] + [outlier] + near[5:]

    kept = territory_service.filter_within_range(sightings, "dog")

    assert kept == near
    assert outlier not in kept


def test_filter_preserves_order(territory_service, cluster_with_outlier):
    near, outlier = cluster_with_outlier
    shuffled = [near[3], outlier, near[0], near[9], near[1]]

    kept = territory_service.filter_within_range(shuffled, "cat")

    assert kept == [near[3], near[0], near[9], near[1]]


def test_filter_is_idempotent(territory_service, cluster_with_outlier):
    near, outlier = cluster_with_outlier
    once = territory_service.filter_within_range(near + [outlier], "cat")
    twice = territory_service.filter_within_range(once, "cat")

    assert twice == once


def test_filter_of_empty_list(territory_service):
    assert territory_service.filter_within_range([], "dog") == []


def test_filter_with_far_outlier_leaves_too_few(territory_service, make_sighting):
    close = [make_sighting(45.0, 7.0), make_sighting(45.001, 7.0)]
    far = make_sighting(45.45, 7.0)  # about 50 km north

    kept = territory_service.filter_within_range(close + [far], "cat")

    # The outlier drags the single center about 17 km from the close pair,
    # so nothing survives. The filter itself never raises.
    assert kept == []


def test_split_by_range(territory_service, cluster_with_outlier):
    near, outlier = cluster_with_outlier

    kept, dropped = territory_service.split_by_range(near + [outlier], "dog")

    assert kept == near
    assert dropped == [outlier]


# --- centroid and radius ---


def test_centroid_of_single_sighting(territory_service, make_sighting):
    sighting = make_sighting(51.505, -0.09)

    assert territory_service.centroid([sighting]) == sighting.coordinates


def test_centroid_of_empty_list_raises(territory_service):
    with pytest.raises(EmptySightingsError):
        territory_service.centroid([])


def test_radius_of_empty_list_raises(territory_service):
    with pytest.raises(EmptySightingsError):
        territory_service.estimate_radius([], "dog")


def test_radius_covers_farthest_sighting_with_buffer(territory_service, small_cluster):
    center = territory_service.centroid(small_cluster)
    farthest = max(distance(center, s.coordinates) for s in small_cluster)

    radius = territory_service.estimate_radius(small_cluster, "dog")

    assert radius == pytest.approx(farthest * 1.2)
    assert 0 < radius < 2000


def test_radius_is_capped_at_max_range(territory_service, make_sighting):
    spread_out = [make_sighting(0.0, 0.0), make_sighting(0.0, 0.03), make_sighting(0.03, 0.0)]

    assert territory_service.estimate_radius(spread_out, "dog") == 2000.0
    assert territory_service.estimate_radius(spread_out, "cat") == 1500.0
    assert territory_service.estimate_radius(spread_out, "lizard") == 1000.0


def test_radius_never_exceeds_max_range(territory_service, make_sighting):
    for step in [0.0001, 0.001, 0.005, 0.01, 0.1, 1.0]:
        sightings = [make_sighting(i * step, -i * step) for i in range(4)]
        for animal_type in ["dog", "cat", "other", "unknown"]:
            radius = territory_service.estimate_radius(sightings, animal_type)
            assert 0 < radius <= territory_service.max_range(animal_type)


def test_radius_of_identical_sightings_uses_minimum(territory_service, make_sighting):
    sightings = [make_sighting(10.0, 10.0)] * 3

    assert territory_service.estimate_radius(sightings, "cat") == 50.0


# --- full pipeline ---


def test_build_territory_small_cluster(territory_service, small_cluster):
    estimate = territory_service.build_territory(small_cluster, "dog")

    assert isinstance(estimate, TerritoryEstimate)
    assert estimate.accepted is True
    assert estimate.accepted_sightings == small_cluster
    assert estimate.discarded_sightings == []
    assert estimate.max_range_meters == 2000.0
    assert estimate.territory is not None
    assert estimate.territory.center.latitude == pytest.approx(0.000333, abs=1e-6)
    assert estimate.territory.center.longitude == pytest.approx(0.000333, abs=1e-6)
    assert 0 < estimate.territory.radius_meters < 200


def test_build_territory_drops_outlier(territory_service, cluster_with_outlier):
    near, outlier = cluster_with_outlier

    estimate = territory_service.build_territory(near + [outlier], "Dog")

    assert estimate.accepted is True
    assert estimate.animal_type == "dog"
    assert estimate.discarded_sightings == [outlier]
    assert estimate.territory.center == territory_service.centroid(near)


def test_build_territory_rejects_when_too_few_remain(territory_service, make_sighting):
    sightings = [make_sighting(45.0, 7.0), make_sighting(45.001, 7.0), make_sighting(45.45, 7.0)]

    estimate = territory_service.build_territory(sightings, "cat")

    assert estimate.accepted is False
    assert estimate.territory is None
    assert estimate.accepted_sightings == []
    assert estimate.discarded_sightings == sightings


def test_build_territory_with_two_sightings_is_rejected(territory_service, make_sighting):
    estimate = territory_service.build_territory(
        [make_sighting(0.0, 0.0), make_sighting(0.0, 0.0001)], "dog"
    )

    assert estimate.accepted is False
    assert estimate.territory is None
    assert len(estimate.accepted_sightings) == 2


# --- configuration ---


def test_default_configuration_is_valid():
    service = TerritoryService()

    assert service.min_sightings >= 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"min_sightings": 2},
        {"min_sightings": 0},
        {"min_radius_meters": 0.0},
        {"min_radius_meters": -5.0},
        {"min_radius_meters": float("nan")},
        {"buffer_factor": 0.0},
        {"buffer_factor": 0.5},
        {"buffer_factor": float("inf")},
        {"buffer_factor": float("nan")},
    ],
)
def test_invalid_configuration_is_rejected(overrides):
    kwargs = {
        "policy": RangePolicy({"other": 1000}),
        "buffer_factor": 1.2,
        "min_radius_meters": 50.0,
        "min_sightings": 3,
        **overrides,
    }

    with pytest.raises(TerritoryConfigError):
        TerritoryService(**kwargs)


def test_larger_minimum_is_honored(small_cluster):
    service = TerritoryService(policy=RangePolicy({"other": 1000}), min_sightings=4)

    estimate = service.build_territory(small_cluster, "other")

    assert estimate.accepted is False
    assert estimate.accepted_sightings == small_cluster
