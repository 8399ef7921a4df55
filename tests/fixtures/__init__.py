"""
Test fixtures for hxcrepair.

Builds HxC XML disk layout dumps and reads repaired ones back.
"""

from tests.fixtures.hxc_dumps import (
    SectorSpec,
    TrackSpec,
    make_dump,
    make_track,
    parse_dump,
)

__all__ = [
    "SectorSpec",
    "TrackSpec",
    "make_dump",
    "make_track",
    "parse_dump",
]
