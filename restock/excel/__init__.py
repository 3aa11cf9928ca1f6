"""Excel styling, formatting, and export utilities."""
from .writer import ExcelWriter
from .exports import export_history, export_snapshot
