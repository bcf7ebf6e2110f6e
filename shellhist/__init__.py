"""Building blocks for cleaning shell history lines, building history entries, wiring shell start-up files and managing settings."""

__version__ = "0.1.0"