import pytest

from capacity_coverage.fleet import FleetCoverage
from capacity_coverage.interface import RawInstance
from capacity_coverage.interface import RawReservation


@pytest.fixture
def linux_m5_large():
    return RawInstance(
        platform_details="Linux/UNIX", instance_type="m5.large", state="running"
    )


@pytest.fixture
def active_m5_large():
    return RawReservation(
        product_description="Linux/UNIX",
        instance_type="m5.large",
        state="active",
        instance_count=3,
    )


@pytest.fixture
def mixed_fleet():
    """A small fleet covering several families, sizes and states"""
    fleet = FleetCoverage()
    fleet.ingest(
        instances=[
            RawInstance(
                platform_details="Linux/UNIX",
                instance_type="m5.large",
                state="running",
            ),
            RawInstance(
                platform_details="Linux/UNIX",
                instance_type="m5.2xlarge",
                state="running",
            ),
            RawInstance(
                platform_details="Linux/UNIX",
                instance_type="m5.2xlarge",
                state="stopped",
            ),
            RawInstance(
                platform_details="Windows", instance_type="c5.xlarge", state="running"
            ),
            RawInstance(
                platform_details="Linux/UNIX",
                instance_type="r5.large",
                state="terminated",
            ),
        ],
        reservations=[
            RawReservation(
                product_description="Linux/UNIX",
                instance_type="m5.xlarge",
                state="active",
                instance_count=2,
            ),
            RawReservation(
                product_description="Linux/UNIX",
                instance_type="r5.large",
                state="retired",
                instance_count=4,
            ),
        ],
    )
    return fleet
