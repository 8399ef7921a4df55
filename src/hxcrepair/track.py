# hxcrepair/track.py
#
# Track sequencing: walk the track list in document order, checking the
# track/side numbering and reconciling each track's sectors in turn.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations
from typing import Iterator, Optional, Tuple

import xml.etree.ElementTree as ET

from hxcrepair import error
from hxcrepair import document as doc
from hxcrepair.document import Document
from hxcrepair.layout import Layout
from hxcrepair.offset import OffsetState
from hxcrepair.sector import reconcile_track

class Track:
    """A <track> element of the <track_list>."""

    def __init__(self, node: ET.Element) -> None:
        self.node = node
        self.track_number = doc.dec_int(node.get('track_number'),
                                        'Track: track_number')
        self.side_number = doc.dec_int(node.get('side_number'),
                                       'Track %d: side_number'
                                       % self.track_number)
        self._offset = doc.child(node, 'data_offset', self.tspec)

    @property
    def tspec(self) -> str:
        return 'T%d.%d' % (self.track_number, self.side_number)

    @property
    def data_offset(self) -> int:
        return doc.hex_int(self._offset.text, self.tspec + ': data_offset')
    @data_offset.setter
    def data_offset(self, offset: int) -> None:
        self._offset.text = doc.hex_str(offset)

    @property
    def sector_list(self) -> Optional[ET.Element]:
        return self.node.find('sector_list')


class TrackSequencer:
    """Predicts the (track, side) pair expected next in the track list.

    Sides count up from 0; after the last side the side number wraps to 0
    and the track number advances.
    """

    def __init__(self, layout: Layout) -> None:
        self.layout = layout
        self.expected: Optional[Tuple[int,int]] = None

    def check(self, track: Track) -> None:
        if self.expected is None:
            return
        trk, sid = self.expected
        error.expect('Track number', track.track_number, 'eq', trk)
        error.expect('Side number', track.side_number, 'eq', sid)

    def advance(self, track: Track) -> None:
        trk, sid = track.track_number, track.side_number + 1
        if sid >= self.layout.nr_sides:
            trk, sid = trk + 1, 0
        self.expected = (trk, sid)


def tracks(document: Document) -> Iterator[Track]:
    for node in document.findall('layout/track_list/track'):
        yield Track(node)


def sequence_tracks(document: Document, layout: Layout,
                    state: OffsetState) -> OffsetState:
    seq = TrackSequencer(layout)
    for t in tracks(document):
        seq.check(t)
        if state.shifted and t.data_offset != state.computed_offset:
            t.data_offset = state.computed_offset
        sector_list = t.sector_list
        if sector_list is not None:
            state = reconcile_track(sector_list, layout, state, t.tspec)
        seq.advance(t)
    return state

# Local variables:
# python-indent: 4
# End:
