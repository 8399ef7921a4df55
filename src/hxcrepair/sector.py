# hxcrepair/sector.py
#
# Sector reconciliation: fill in missing and empty sectors of a track and
# bring every sector's data offset up to date.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations
from typing import Dict, List, Optional

import xml.etree.ElementTree as ET

from hxcrepair import error
from hxcrepair import document as doc
from hxcrepair.layout import Layout
from hxcrepair.offset import OffsetState

fill_value = '0x00'
default_datamark = '0xFB' # Normal data address mark

class Sector:
    """A <sector> element of a track's <sector_list>."""

    def __init__(self, node: ET.Element, tspec: str = '') -> None:
        self.node = node
        self.tspec = tspec
        self.id = doc.dec_int(node.get('sector_id'),
                              '%s: sector_id' % tspec)
        self.size = doc.dec_int(node.get('sector_size'),
                                '%s: Sector %d: sector_size' % (tspec, self.id))
        self._offset = doc.child(node, 'data_offset',
                                 '%s: Sector %d' % (tspec, self.id))

    def __str__(self) -> str:
        return ("Sector %d: %d bytes at %s"
                % (self.id, self.size, self._offset.text))

    @property
    def data_offset(self) -> int:
        return doc.hex_int(self._offset.text,
                           '%s: Sector %d: data_offset' % (self.tspec, self.id))
    @data_offset.setter
    def data_offset(self, offset: int) -> None:
        self._offset.text = doc.hex_str(offset)

    @property
    def has_payload(self) -> bool:
        return (self.node.find('sector_data') is not None
                or self.node.find('data_fill') is not None)

    @property
    def datamark(self) -> Optional[str]:
        node = self.node.find('datamark')
        return None if node is None else node.text

    def zero_fill(self) -> None:
        doc.insert_first(self.node, doc.new_node('data_fill', fill_value))

    @classmethod
    def synthesize(cls, sector_id: int, size: int, datamark: str,
                   offset: int, like: Sector) -> Sector:
        """Build a placeholder sector, indented like sector `like`."""
        node = doc.new_node('sector', sector_id=sector_id, sector_size=size)
        doc.add_children(node, [doc.new_node('data_fill', fill_value),
                                doc.new_node('datamark', datamark),
                                doc.new_node('data_offset',
                                             doc.hex_str(offset))],
                         like.node)
        return cls(node, like.tspec)


def sectors_by_id(sector_list: ET.Element, tspec: str) -> List[Sector]:
    """All sectors of a track, in ascending sector-id order."""
    index: Dict[int,Sector] = dict()
    for node in sector_list.findall('sector'):
        s = Sector(node, tspec)
        error.check(s.id not in index,
                    '%s: Duplicate sector %d' % (tspec, s.id))
        index[s.id] = s
    return [index[k] for k in sorted(index)]


def reconcile_track(sector_list: ET.Element, layout: Layout,
                    state: OffsetState, tspec: str = '') -> OffsetState:
    """Reconcile one track's sector list against the running offset state.

    Sectors are put into ascending id order. Gaps in the id sequence are
    filled with zero-filled placeholder sectors of the layout's sector
    size, and sectors without data get a zero-fill marker. Once any bytes
    have been added, every following sector is moved to its true offset.
    The updated state is returned for the next track.
    """

    sectors = sectors_by_id(sector_list, tspec)
    doc.reorder(sector_list, [s.node for s in sectors])

    expected: Optional[int] = None
    datamark = default_datamark

    for s in sectors:

        error.expect('%s: Sector %d size' % (tspec, s.id), s.size, 'gt', 0)
        recorded = s.data_offset
        state.check_recorded('%s: Sector %d offset' % (tspec, s.id),
                             recorded)

        if not s.has_payload:
            print('%s: Zero-filling sector %d' % (tspec, s.id))
            s.zero_fill()
            state.fill(s.size)

        while expected is not None and expected < s.id:
            print('%s: Adding sector %d' % (tspec, expected))
            error.expect('Layout sector size', layout.sector_size, 'gt', 0)
            added = Sector.synthesize(
                expected, layout.sector_size, datamark,
                state.insert(layout.sector_size), like=s)
            doc.insert_before(sector_list, added.node, s.node)
            expected += 1

        offset = state.place(recorded, s.size)
        if offset != recorded:
            s.data_offset = offset

        if expected is not None:
            error.expect('%s: Sector number' % tspec, expected, 'eq', s.id)
        expected = s.id + 1
        if s.datamark is not None:
            datamark = s.datamark

    return state

# Local variables:
# python-indent: 4
# End:
