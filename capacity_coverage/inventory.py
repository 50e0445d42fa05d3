import logging
from typing import Any
from typing import List

import botocore.exceptions

from capacity_coverage.fleet import FleetCoverage
from capacity_coverage.interface import RawInstance
from capacity_coverage.interface import RawReservation
from capacity_coverage.interface import ReservationState

logger = logging.getLogger(__name__)


class InventoryFetchError(RuntimeError):
    """The EC2 API could not be queried"""

    def __init__(self, source: str, query: str, cause: Exception):
        self.source = source
        self.query = query
        self.cause = cause
        super().__init__(f"Unable to query {source} ({query}): {cause}")


def fetch_instances(ec2_client: Any) -> List[RawInstance]:
    """Pull every instance in the region, like

    aws --region us-east-1 ec2 describe-instances
    """
    instances = []
    try:
        paginator = ec2_client.get_paginator("describe_instances")
        for page in paginator.paginate():
            for reservation in page["Reservations"]:
                for data in reservation.get("Instances", []):
                    instances.append(RawInstance.from_boto(data))
    except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
        raise InventoryFetchError("EC2 instances", "DescribeInstances", e) from e

    logger.debug("Fetched %d instances", len(instances))
    return instances


def fetch_reservations(
    ec2_client: Any, include_retired: bool = True
) -> List[RawReservation]:
    """Pull Reserved Instances, like

    aws --region us-east-1 ec2 describe-reserved-instances \
      --filters 'Name=state,Values=active,retired'
    """
    states = [ReservationState.active.value]
    if include_retired:
        states.append(ReservationState.retired.value)
    payload = {"Filters": [{"Name": "state", "Values": states}]}

    try:
        response = ec2_client.describe_reserved_instances(**payload)
    except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
        raise InventoryFetchError(
            "EC2 Reserved Instances", "DescribeReservedInstances", e
        ) from e

    reservations = [
        RawReservation.from_boto(data) for data in response["ReservedInstances"]
    ]
    logger.debug("Fetched %d reserved instances", len(reservations))
    return reservations


def load_fleet(
    ec2_client: Any, include_retired: bool = True, strict: bool = False
) -> FleetCoverage:
    reservations = fetch_reservations(ec2_client, include_retired=include_retired)
    instances = fetch_instances(ec2_client)

    fleet = FleetCoverage()
    fleet.ingest(instances=instances, reservations=reservations, strict=strict)
    return fleet
