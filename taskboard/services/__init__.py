"""Domain services: ordering, cascade deletes and membership."""
from taskboard.services import cascade, membership, ordering
from taskboard.services.cascade import CascadeFailure, CascadeResult

__all__ = ["CascadeFailure", "CascadeResult", "cascade", "membership", "ordering"]
