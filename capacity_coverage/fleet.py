import logging
import threading
from typing import Dict
from typing import Iterable
from typing import List
from typing import Tuple

from capacity_coverage.interface import GroupedCounter
from capacity_coverage.interface import MalformedShapeError
from capacity_coverage.interface import NormalizedCounter
from capacity_coverage.interface import RawInstance
from capacity_coverage.interface import RawReservation
from capacity_coverage.interface import ReservationState
from capacity_coverage.interface import split_shape
from capacity_coverage.normalization import normalized_units

logger = logging.getLogger(__name__)


def _check_shape(instance_type: str) -> None:
    # An absent instance type is a legitimate (if uninformative) key
    if instance_type:
        split_shape(instance_type)


class FleetCoverage:
    """Running instances and Reserved Instances grouped by platform and type

    Rows are only ever created or incremented. Readers get immutable
    snapshots, so the table can be read by a UI loop while it is written.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._rows: Dict[Tuple[str, str], GroupedCounter] = {}

    def _add(
        self,
        key: Tuple[str, str],
        running: int = 0,
        reserved_active: int = 0,
        reserved_expired: int = 0,
    ) -> None:
        with self._lock:
            row = self._rows.get(key)
            if row is None:
                row = GroupedCounter(product_description=key[0], instance_type=key[1])
            self._rows[key] = row.model_copy(
                update={
                    "running_count": row.running_count + running,
                    "reserved_active_count": row.reserved_active_count
                    + reserved_active,
                    "reserved_expired_count": row.reserved_expired_count
                    + reserved_expired,
                }
            )

    def ingest_instance(self, instance: RawInstance) -> None:
        key = instance.key
        _check_shape(key[1])
        self._add(key, running=1 if instance.is_running else 0)

    def ingest_reservation(self, reservation: RawReservation) -> None:
        if reservation.state == ReservationState.active:
            active, expired = reservation.instance_count, 0
        elif reservation.state == ReservationState.retired:
            active, expired = 0, reservation.instance_count
        else:
            logger.debug(
                "Skipping %s reservation of %s", reservation.state, reservation.key
            )
            return

        key = reservation.key
        _check_shape(key[1])
        self._add(key, reserved_active=active, reserved_expired=expired)

    def ingest(
        self,
        instances: Iterable[RawInstance] = (),
        reservations: Iterable[RawReservation] = (),
        strict: bool = False,
    ) -> None:
        """Fold both record sequences into the table

        With strict a malformed instance type aborts the fold, otherwise the
        offending record is logged and skipped.
        """
        for instance in instances:
            try:
                self.ingest_instance(instance)
            except MalformedShapeError as exp:
                if strict:
                    raise
                logger.warning("Skipping instance: %s", exp)

        for reservation in reservations:
            try:
                self.ingest_reservation(reservation)
            except MalformedShapeError as exp:
                if strict:
                    raise
                logger.warning("Skipping reservation: %s", exp)

    def rows(self) -> Tuple[GroupedCounter, ...]:
        with self._lock:
            return tuple(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

    def normalized_view(self) -> Tuple[NormalizedCounter, ...]:
        """Sum running and active reserved capacity per family in
        normalized units, dropping families where both are zero.
        """
        totals: Dict[Tuple[str, str], List[float]] = {}
        for row in self.rows():
            family = row.instance_family
            running = normalized_units(row.instance_type, row.running_count)
            reserved = normalized_units(row.instance_type, row.reserved_active_count)

            key = (row.product_description, family)
            if key not in totals:
                if running == 0.0 and reserved == 0.0:
                    continue
                totals[key] = [0.0, 0.0]
            totals[key][0] += running
            totals[key][1] += reserved

        return tuple(
            NormalizedCounter(
                product_description=description,
                instance_family=family,
                running_count_normalization_factor=running,
                reserved_active_normalization_factor=reserved,
            )
            for (description, family), (running, reserved) in totals.items()
        )
