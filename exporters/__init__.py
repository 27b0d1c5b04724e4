"""Exporters for run reports."""

from .json_exporter import to_json

__all__ = ["to_json"]
