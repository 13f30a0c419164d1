"""Test helper utilities for job catalog tests."""

from .fixture_records import load_fixture_records, load_fixture_sources, make_record

__all__ = ["load_fixture_records", "load_fixture_sources", "make_record"]
