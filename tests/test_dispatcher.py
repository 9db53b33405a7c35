import logging
import math

import pytest

from dispatch.dispatcher import DispatchSnapshot, Dispatcher, SkipReason, assign_drivers
from dispatch.policy import DispatchPolicy
from drivers.models import Driver
from orders.models import Order, PickupSite
from routing.geodistance import haversine_km


def test_end_to_end_example_picks_the_closer_driver(single_order, pickup_site, near_and_far_drivers):
    """
    Both drivers default to 50; d1 is ~1.1 km away, d2 ~111 km away.
    """
    snapshot = DispatchSnapshot(
        orders=single_order,
        drivers=near_and_far_drivers,
        pickup_sites=[pickup_site],
        reliability={},
    )

    result = assign_drivers(snapshot)

    assert len(result.assignments) == 1
    assignment = result.assignments[0]
    expected_km = haversine_km(near_and_far_drivers[0].location, pickup_site.location)

    assert assignment.order_id == "o1"
    assert assignment.driver_id == "d1"
    assert assignment.distance_km == pytest.approx(expected_km)
    assert assignment.score == pytest.approx(50 - expected_km * 8)
    assert assignment.score == pytest.approx(41.104, abs=1e-3)
    assert assignment.estimated_pickup_minutes == math.ceil(expected_km * 3)
    assert result.skipped == []


def test_reliability_can_outweigh_distance(pickup_site):
    """
    d2 is ~1.1 km further than d1; 10 extra reliability points beat 8.9 points of distance.
    """
    drivers = [Driver.new("d1", 40.0, -73.0), Driver.new("d2", 40.01, -73.0)]
    snapshot = DispatchSnapshot(
        orders=[Order("o1", "c1")],
        drivers=drivers,
        pickup_sites=[pickup_site],
        reliability={"d1": 50.0, "d2": 60.0},
    )

    assert assign_drivers(snapshot).assignments[0].driver_id == "d2"


def test_ties_go_to_the_earliest_driver(pickup_site):
    drivers = [
        Driver.new("first", 40.02, -73.0),
        Driver.new("second", 40.02, -73.0),
        Driver.new("third", 40.02, -73.0),
    ]
    snapshot = DispatchSnapshot(orders=[Order("o1", "c1")], drivers=drivers, pickup_sites=[pickup_site])

    assert assign_drivers(snapshot).assignments[0].driver_id == "first"

    snapshot = DispatchSnapshot(orders=[Order("o1", "c1")], drivers=drivers[::-1], pickup_sites=[pickup_site])

    assert assign_drivers(snapshot).assignments[0].driver_id == "third"


def test_unknown_pickup_site_does_not_abort_other_orders(pickup_site, near_and_far_drivers):
    snapshot = DispatchSnapshot(
        orders=[Order("ghost", "c404"), Order("o1", "c1")],
        drivers=near_and_far_drivers,
        pickup_sites=[pickup_site],
    )

    result = assign_drivers(snapshot)

    assert [a.order_id for a in result.assignments] == ["o1"]
    assert result.skipped_count == 1
    assert result.skipped[0].order_id == "ghost"
    assert result.skipped[0].reason == SkipReason.UNKNOWN_PICKUP_SITE


def test_empty_fleet_yields_no_assignments(single_order, pickup_site):
    result = assign_drivers(DispatchSnapshot(orders=single_order, drivers=[], pickup_sites=[pickup_site]))

    assert result.assignments == []
    assert result.skipped[0].reason == SkipReason.NO_ELIGIBLE_DRIVER


def test_empty_snapshot_is_a_no_op():
    result = assign_drivers(DispatchSnapshot())

    assert result.assignments == []
    assert result.skipped == []


def test_same_driver_can_win_several_orders_by_default(pickup_site, near_and_far_drivers):
    snapshot = DispatchSnapshot(
        orders=[Order("o1", "c1"), Order("o2", "c1"), Order("o3", "c1")],
        drivers=near_and_far_drivers,
        pickup_sites=[pickup_site],
    )

    result = assign_drivers(snapshot)

    assert [a.driver_id for a in result.assignments] == ["d1", "d1", "d1"]


def test_exclusive_mode_removes_selected_drivers_from_the_pool(pickup_site, near_and_far_drivers):
    snapshot = DispatchSnapshot(
        orders=[Order("o1", "c1"), Order("o2", "c1"), Order("o3", "c1")],
        drivers=near_and_far_drivers,
        pickup_sites=[pickup_site],
    )

    result = assign_drivers(snapshot, DispatchPolicy(exclusive_drivers=True))

    assert [(a.order_id, a.driver_id) for a in result.assignments] == [("o1", "d1"), ("o2", "d2")]
    assert [(s.order_id, s.reason) for s in result.skipped] == [("o3", SkipReason.NO_ELIGIBLE_DRIVER)]


def test_unscoreable_drivers_are_never_selected(pickup_site):
    drivers = [Driver.new("broken", math.nan, -73.0), Driver.new("ok", 40.5, -73.0)]
    snapshot = DispatchSnapshot(orders=[Order("o1", "c1")], drivers=drivers, pickup_sites=[pickup_site])

    assert assign_drivers(snapshot).assignments[0].driver_id == "ok"

    snapshot = DispatchSnapshot(orders=[Order("o1", "c1")], drivers=drivers[:1], pickup_sites=[pickup_site])

    result = assign_drivers(snapshot)
    assert result.assignments == []
    assert result.skipped[0].reason == SkipReason.NO_ELIGIBLE_DRIVER


def test_first_pickup_site_wins_on_duplicate_ids(near_and_far_drivers):
    sites = [PickupSite.new("c1", 41.0, -73.0), PickupSite.new("c1", 40.0, -73.0)]
    snapshot = DispatchSnapshot(orders=[Order("o1", "c1")], drivers=near_and_far_drivers, pickup_sites=sites)

    assert assign_drivers(snapshot).assignments[0].driver_id == "d2"


def test_orders_sharing_a_pickup_site_are_assigned_in_input_order(pickup_site, near_and_far_drivers):
    other = PickupSite.new("c2", 41.0, -73.0)
    snapshot = DispatchSnapshot(
        orders=[Order("o1", "c2"), Order("o2", "c1"), Order("o3", "c2")],
        drivers=near_and_far_drivers,
        pickup_sites=[pickup_site, other],
    )

    result = assign_drivers(snapshot)

    assert [(a.order_id, a.driver_id) for a in result.assignments] == [("o1", "d2"), ("o2", "d1"), ("o3", "d2")]


def test_pickup_radius_excludes_far_drivers(single_order, pickup_site, near_and_far_drivers):
    policy = DispatchPolicy(max_pickup_radius_km=5.0)

    result = assign_drivers(
        DispatchSnapshot(orders=single_order, drivers=near_and_far_drivers[1:], pickup_sites=[pickup_site]),
        policy,
    )

    assert result.assignments == []
    assert result.skipped[0].reason == SkipReason.NO_ELIGIBLE_DRIVER


def test_dispatcher_validates_its_policy():
    with pytest.raises(ValueError):
        Dispatcher(DispatchPolicy(distance_weight=-1.0))


def test_dispatcher_is_reusable_across_snapshots(pickup_site, near_and_far_drivers):
    dispatcher = Dispatcher()
    snapshot = DispatchSnapshot(orders=[Order("o1", "c1")], drivers=near_and_far_drivers, pickup_sites=[pickup_site])

    assert dispatcher.dispatch(snapshot) == dispatcher.dispatch(snapshot)


def test_summary_is_logged(caplog, pickup_site, near_and_far_drivers):
    caplog.set_level(logging.INFO, logger="dispatch.dispatcher")
    snapshot = DispatchSnapshot(
        orders=[Order("ghost", "c404"), Order("o1", "c1")],
        drivers=near_and_far_drivers,
        pickup_sites=[pickup_site],
    )

    assign_drivers(snapshot)

    assert "Assigned 1/2 orders across 2 drivers (1 skipped)" in caplog.text


def test_order_without_pickup_id_is_skipped(pickup_site, near_and_far_drivers):
    snapshot = DispatchSnapshot(
        orders=[Order("bad", None), Order("o1", "c1")],
        drivers=near_and_far_drivers,
        pickup_sites=[pickup_site],
    )

    result = assign_drivers(snapshot)

    assert [a.order_id for a in result.assignments] == ["o1"]
    assert [(s.order_id, s.reason) for s in result.skipped] == [("bad", SkipReason.UNKNOWN_PICKUP_SITE)]
