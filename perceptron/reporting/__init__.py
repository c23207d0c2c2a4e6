"""Reporting utilities for the perceptron trainer."""

from .artifacts import write_manifest, write_run_outputs
from .metrics import CsvSink, JsonlSink
from .plots import PlotAdapter
from .summary import write_summary

__all__ = ["write_manifest", "write_run_outputs", "CsvSink", "JsonlSink", "PlotAdapter", "write_summary"]
