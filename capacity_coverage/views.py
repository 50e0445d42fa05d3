from enum import Enum
from typing import Dict
from typing import List
from typing import Sequence
from typing import Tuple

from pydantic import BaseModel
from pydantic import ConfigDict

from capacity_coverage.fleet import FleetCoverage
from capacity_coverage.interface import GroupedCounter
from capacity_coverage.interface import NormalizedCounter


class ViewMode(str, Enum):
    """Which table of the fleet is shown"""

    def __str__(self):
        return str(self.value)

    instance = "instance"
    normalization_factor = "normalization_factor"


class Projection(BaseModel):
    """Everything a renderer needs to draw one table"""

    title: str
    header: Tuple[str, ...]
    widths: Tuple[int, ...]
    rows: Tuple[Tuple[str, ...], ...]
    model_config = ConfigDict(frozen=True)


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_percentage(ratio: float) -> str:
    return f"{ratio * 100:.1f}%"


def instance_cells(row: GroupedCounter) -> List[str]:
    return [
        row.product_description,
        row.instance_type,
        format_number(row.running_count),
        format_number(row.reserved_active_count),
        format_number(row.reserved_expired_count),
    ]


def normalized_cells(row: NormalizedCounter) -> List[str]:
    return [
        row.product_description,
        row.instance_family,
        format_number(row.running_count_normalization_factor),
        format_number(row.reserved_active_normalization_factor),
        format_number(row.normalization_factor_diff),
        format_percentage(row.normalization_factor_coverage),
    ]


class InstanceView:
    mode = ViewMode.instance
    title = "EC2 Instance"
    tab_title = "Instance"
    header: Tuple[str, ...] = (
        "product_description",
        "instance_type",
        "running_count",
        "reserved_active_count",
        "reserved_expired_count(all)",
    )
    widths: Tuple[int, ...] = (15,) * 5

    @staticmethod
    def to_rows(fleet: FleetCoverage) -> List[List[str]]:
        return [instance_cells(row) for row in fleet.rows()]


class NormalizationFactorView:
    mode = ViewMode.normalization_factor
    title = "EC2 RI NormalizationFactor"
    tab_title = "NormalizationFactor"
    header: Tuple[str, ...] = (
        "product_description",
        "instance_family",
        "running_count_normalization_factor",
        "reserved_active_normalization_factor",
        "normalization_factor_diff",
        "normalization_factor_coverage",
    )
    widths: Tuple[int, ...] = (15,) * 6

    @staticmethod
    def to_rows(fleet: FleetCoverage) -> List[List[str]]:
        return [normalized_cells(row) for row in fleet.normalized_view()]


VIEWS: Dict[ViewMode, type] = {
    ViewMode.instance: InstanceView,
    ViewMode.normalization_factor: NormalizationFactorView,
}


def project(fleet: FleetCoverage, mode: ViewMode) -> Projection:
    """Projects the fleet through one view

    Raises CoverageError if the view cannot be computed, e.g. an unknown
    instance size in the normalization factor view.
    """
    view = VIEWS[mode]
    return Projection(
        title=view.title,
        header=view.header,
        widths=view.widths,
        rows=tuple(tuple(cells) for cells in view.to_rows(fleet)),
    )


class ViewSelector:
    """Cycles between views, starting on the instance view"""

    def __init__(self, modes: Sequence[ViewMode] = tuple(ViewMode)):
        self._modes = list(modes)
        self._index = 0

    @property
    def mode(self) -> ViewMode:
        return self._modes[self._index]

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self):
        return VIEWS[self.mode]

    @property
    def tab_titles(self) -> List[str]:
        return [VIEWS[mode].tab_title for mode in self._modes]

    def next(self) -> ViewMode:
        self._index = (self._index + 1) % len(self._modes)
        return self.mode

    def previous(self) -> ViewMode:
        self._index = (self._index - 1) % len(self._modes)
        return self.mode

    def select(self, mode: ViewMode) -> ViewMode:
        self._index = self._modes.index(mode)
        return self.mode

    def project(self, fleet: FleetCoverage) -> Projection:
        return project(fleet, self.mode)
