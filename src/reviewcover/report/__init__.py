"""Renderers for reviewer suggestions outside the terminal."""

from reviewcover.report.markdown import render_report

__all__ = ["render_report"]
