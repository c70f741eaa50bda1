"""Work order data contract."""

from .models import BandSpec, ShiftWindow, WorkOrder

__all__ = ["ShiftWindow", "BandSpec", "WorkOrder"]
