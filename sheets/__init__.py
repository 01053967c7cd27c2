"""The three drawing sheets and their layout configuration."""

from .compose import compose_sheets, SheetSet
from .general_assembly import compose_general_assembly
from .piece_breakdown import compose_piece_breakdown
from .joint_details import compose_joint_details
