"""Redundancy tracking — reconciliation against missed timer fires."""

from .tracker import RedundancyTracker, SweepResult

__all__ = ["RedundancyTracker", "SweepResult"]
