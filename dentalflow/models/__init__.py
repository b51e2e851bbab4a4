"""
Modelos SQLAlchemy: exportar todos para que Alembic los detecte.
"""

from dentalflow.models.kv_slot import KeyValueSlot

__all__ = [
    "KeyValueSlot",
]
