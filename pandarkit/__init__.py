"""Tools for Pandar lidars: PTC command client, point records and CSV export, calibration tables."""

__version__ = "1.1.15"

__all__ = ["points", "tables", "tcp_command", "util"]