# -*- coding: utf-8 -*-
"""
Bounds Update Listener Module
Transaction plugin that keeps feature type and layer group bounds in sync
with committed edits.

The host pipeline calls, per transaction:
    before_transaction → data_store_change (per edit phase) → before_commit
    → after_transaction(committed)

Bounds maintenance must never fail a data edit: data_store_change and
after_transaction log and swallow every error.
"""

import logging
from enum import Enum

from .core.application import (
    RecordChangeCommand,
    PropagateBoundsCommand,
    RecordDirtyRegion,
    PropagateBounds,
)
from .core.application import dirty_regions
from .settings import BoundsUpdaterSettings

logger = logging.getLogger(__name__)


class ListenerState(Enum):
    """What the listener is doing for one transaction."""
    IDLE         = "idle"
    ACCUMULATING = "accumulating"
    PROPAGATING  = "propagating"


class BoundsUpdateTransactionListener:
    """Records dirty regions during a transaction and applies them on commit.

    State is tracked per TransactionRequest id, so concurrent transactions
    never overwrite each other's state.
    """

    def __init__(self, catalog, settings=None):
        """
        Args:
            catalog: CatalogRepository
            settings: BoundsUpdaterSettings (defaults when None)
        """
        if catalog is None:
            raise RuntimeError("BoundsUpdateTransactionListener requires a catalog.")
        self.catalog = catalog
        self.settings = settings or BoundsUpdaterSettings()
        self._states = {}
        self._record = RecordDirtyRegion(catalog)
        self._propagate = PropagateBounds(catalog)

    @property
    def priority(self):
        return self.settings.priority

    def state_of(self, request):
        """ListenerState of the transaction identified by ``request``."""
        return self._states.get(request.id, ListenerState.IDLE)

    @property
    def state(self):
        """Busiest state over all open transactions (IDLE when none is open)."""
        states = set(self._states.copy().values())
        for state in (ListenerState.PROPAGATING, ListenerState.ACCUMULATING):
            if state in states:
                return state
        return ListenerState.IDLE

    # ------------------------------------------------------------------ #
    #  Transaction callbacks
    # ------------------------------------------------------------------ #

    def before_transaction(self, request):
        """Nothing to prepare; the request is returned unchanged."""
        return request

    def before_commit(self, request):
        """Nothing to do before commit."""

    def data_store_change(self, event):
        """Record the dirty region of one edit phase.

        Returns:
            bool: True when a dirty region was recorded (False on any error)
        """
        try:
            logger.info("DataStoreChange: %s %s", event.layer_name, event.type)
            self._states[event.request.id] = ListenerState.ACCUMULATING
            return self._record.execute(RecordChangeCommand(event=event))
        except Exception:
            logger.warning("Error pre computing the transaction's affected area",
                           exc_info=True)
            return False

    def after_transaction(self, request, result=None, committed=False):
        """Apply the recorded dirty regions if the transaction committed.

        Args:
            request:   TransactionRequest
            result:    host transaction result (unused)
            committed: bool: False discards the regions without side effects

        Returns:
            dict or None: PropagateBounds report, None when nothing ran
        """
        try:
            if not committed:
                dirty_regions.discard(request)
                return None
            self._states[request.id] = ListenerState.PROPAGATING
            try:
                return self._propagate.execute(PropagateBoundsCommand(
                    request=request,
                    lenient=self.settings.lenient_transform,
                    max_points_to_project=self.settings.max_points_to_project,
                ))
            finally:
                dirty_regions.discard(request)
        except Exception:
            logger.warning("Error trying to update bounds to include affected area",
                           exc_info=True)
            return None
        finally:
            self._states.pop(getattr(request, 'id', None), None)
