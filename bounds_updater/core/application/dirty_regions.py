# -*- coding: utf-8 -*-
"""
Dirty region store: per-transaction record of the envelopes touched by edits.

The map lives on ``TransactionRequest.dirty_regions`` and is owned by the
request: nothing here keeps a reference to it, so concurrent transactions
never share state and a discarded request takes its regions with it.

Envelopes are stored as observed (no CRS normalization); merging happens
when the transaction commits.
"""


def all_dirty_regions(request):
    """Return the dirty region map of ``request``, creating it if absent.

    Args:
        request: TransactionRequest

    Returns:
        dict: QualifiedName → list[ReferencedEnvelope], in first-touch order
    """
    if request.dirty_regions is None:
        request.dirty_regions = {}
    return request.dirty_regions


def record_envelope(request, name, envelope):
    """Append ``envelope`` to the dirty regions of feature type ``name``.

    Args:
        request:  TransactionRequest
        name:     QualifiedName of the affected feature type
        envelope: ReferencedEnvelope of the affected features
    """
    all_dirty_regions(request).setdefault(name, []).append(envelope)


def discard(request):
    """Drop every dirty region recorded on ``request``."""
    request.dirty_regions = None
