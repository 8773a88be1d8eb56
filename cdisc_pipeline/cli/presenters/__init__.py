"""Presenters that render pipeline results to the console."""

from .summary import SummaryPresenter, SummaryRequest

__all__ = ["SummaryPresenter", "SummaryRequest"]
