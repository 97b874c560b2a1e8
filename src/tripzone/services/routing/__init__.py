"""Route assembly services."""

from .assembler import assemble_day, reassemble

__all__ = ["assemble_day", "reassemble"]
