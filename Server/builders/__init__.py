"""
Folio Server - Builders Package

Fluent builders for constructing database entities in scanners and tests.
"""

from builders.volume_builder import VolumeBuilder

__all__ = ['VolumeBuilder']
