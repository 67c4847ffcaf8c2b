"""Incremental GitHub issue and comment mirror"""

__version__ = "1.0.0"
