"""Application layer: session state and the overlap workflow."""

from taxaoverlap.app.service import OverlapService
from taxaoverlap.app.session import Action, OverlapSession, PoolSnapshot

__all__ = ["Action", "OverlapService", "OverlapSession", "PoolSnapshot"]
