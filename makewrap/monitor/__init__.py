"""Build summary rendering for finished makewrap runs."""

from makewrap.monitor.renderer import SummaryRenderer

__all__ = ["SummaryRenderer"]
