"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.stock_levels import router as stock_levels_router
from routes.packet_labels import router as packet_labels_router
from routes.packing_materials import router as packing_materials_router
from routes.priority_packing import router as priority_packing_router
from routes.packing_transfers import router as packing_transfers_router

__all__ = [
    "stock_levels_router",
    "packet_labels_router",
    "packing_materials_router",
    "priority_packing_router",
    "packing_transfers_router",
]
