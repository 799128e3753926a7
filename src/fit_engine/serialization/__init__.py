"""Serialization module — JSON wire format for persisted entities."""

from fit_engine.serialization.json_codec import DecodeError, dumps, loads

__all__ = ["DecodeError", "dumps", "loads"]
