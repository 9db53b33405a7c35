import pytest

from drivers.models import Driver
from orders.models import Order, PickupSite


@pytest.fixture
def pickup_site():
    # Example: a kitchen in lower Manhattan
    return PickupSite.new("c1", 40.0, -73.0)


@pytest.fixture
def near_and_far_drivers():
    return [
        Driver.new("d1", 40.01, -73.0),
        Driver.new("d2", 41.0, -73.0),
    ]


@pytest.fixture
def single_order():
    return [Order(id="o1", pickup_id="c1")]
