"""Filesystem, geometry and JSON helpers."""
