from __future__ import annotations

from enum import Enum
from typing import Any
from typing import Dict
from typing import Optional
from typing import Tuple

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

SHAPE_SEPARATOR = "."


###############################################################################
#                               Errors                                        #
###############################################################################


class CoverageError(ValueError):
    """Base class for errors raised while aggregating coverage"""


class MalformedShapeError(CoverageError):
    def __init__(self, shape: str):
        self.shape = shape
        super().__init__(
            f"Instance type {shape!r} has no family/size separator "
            f"{SHAPE_SEPARATOR!r}"
        )


class UnknownNormalizationFactorError(CoverageError):
    def __init__(self, size: str):
        self.size = size
        super().__init__(
            f"No normalization factor is known for instance size {size!r}"
        )


###############################################################################
#              Models (structs) for the records we ingest                     #
###############################################################################


class InstanceState(str, Enum):
    """Lifecycle state of an EC2 instance, only running instances count"""

    pending = "pending"
    running = "running"
    shutting_down = "shutting-down"
    terminated = "terminated"
    stopping = "stopping"
    stopped = "stopped"


class ReservationState(str, Enum):
    """State of a Reserved Instance purchase

    Only active and retired reservations are reconciled, anything else
    (e.g. payment-pending or queued) is ignored.
    """

    payment_pending = "payment-pending"
    active = "active"
    payment_failed = "payment-failed"
    retired = "retired"
    queued = "queued"
    queued_deleted = "queued-deleted"


class RawInstance(BaseModel):
    """A single instance as reported by the inventory"""

    platform_details: Optional[str] = None
    instance_type: Optional[str] = None
    state: Optional[str] = None
    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.platform_details or "", self.instance_type or "")

    @property
    def is_running(self) -> bool:
        return self.state == InstanceState.running

    @staticmethod
    def from_boto(data: Dict[str, Any]) -> RawInstance:
        """Builds from one entry of DescribeInstances Reservations[].Instances[]"""
        return RawInstance(
            platform_details=data.get("PlatformDetails"),
            instance_type=data.get("InstanceType"),
            state=data.get("State", {}).get("Name"),
        )


class RawReservation(BaseModel):
    """A Reserved Instance purchase as reported by the inventory"""

    product_description: Optional[str] = None
    instance_type: Optional[str] = None
    state: Optional[str] = None
    instance_count: int = Field(default=0, ge=0)
    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.product_description or "", self.instance_type or "")

    @staticmethod
    def from_boto(data: Dict[str, Any]) -> RawReservation:
        return RawReservation(
            product_description=data.get("ProductDescription"),
            instance_type=data.get("InstanceType"),
            state=data.get("State"),
            instance_count=data.get("InstanceCount") or 0,
        )


###############################################################################
#              Models (structs) for the aggregated tables                     #
###############################################################################


def split_shape(shape: str) -> Tuple[str, str]:
    """Splits an instance type such as m5.large into ("m5", "large")"""
    family, separator, size = shape.partition(SHAPE_SEPARATOR)
    if not separator:
        raise MalformedShapeError(shape)
    return family, size


class GroupedCounter(BaseModel):
    """Instances and reservations sharing a platform and instance type"""

    product_description: str
    instance_type: str
    running_count: int = 0
    reserved_active_count: int = 0
    reserved_expired_count: int = 0
    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.product_description, self.instance_type)

    @property
    def instance_family(self) -> str:
        return split_shape(self.instance_type)[0]

    @property
    def instance_size(self) -> str:
        return split_shape(self.instance_type)[1]


class NormalizedCounter(BaseModel):
    """Instances and active reservations of one family in normalized units

    A 2xlarge counts as 16 units and a large as 4, so the two can be
    compared within a family.
    """

    product_description: str
    instance_family: str
    running_count_normalization_factor: float = 0.0
    reserved_active_normalization_factor: float = 0.0
    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.product_description, self.instance_family)

    @property
    def normalization_factor_diff(self) -> float:
        return (
            self.running_count_normalization_factor
            - self.reserved_active_normalization_factor
        )

    @property
    def normalization_factor_coverage(self) -> float:
        if self.running_count_normalization_factor == 0.0:
            return 0.0
        return (
            self.reserved_active_normalization_factor
            / self.running_count_normalization_factor
        )
