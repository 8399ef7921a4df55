# hxcrepair/layout.py
#
# Global disk geometry from the <layout> block of an HxC XML dump.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations

from hxcrepair import error
from hxcrepair.document import Document, dec_int

class Layout:

    # Attribute name -> element name under /disk_layout/layout
    fields = { 'nr_tracks':         'number_of_track',
               'nr_sides':          'number_of_side',
               'start_sector_id':   'start_sector_id',
               'sectors_per_track': 'sector_per_track',
               'sector_size':       'sector_size' }

    def __init__(self, nr_tracks: int, nr_sides: int, sectors_per_track: int,
                 sector_size: int, start_sector_id: int) -> None:
        self.nr_tracks = nr_tracks
        self.nr_sides = nr_sides
        self.sectors_per_track = sectors_per_track
        self.sector_size = sector_size
        self.start_sector_id = start_sector_id
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, '_frozen', False):
            raise AttributeError('Layout is read-only')
        super().__setattr__(name, value)

    def __str__(self) -> str:
        return ("%d tracks, %d sides, %d sectors, starting at %d, "
                "%d bytes per sector"
                % (self.nr_tracks, self.nr_sides, self.sectors_per_track,
                   self.start_sector_id, self.sector_size))

    @classmethod
    def from_document(cls, doc: Document) -> Layout:
        vals = dict()
        for attr, tag in cls.fields.items():
            node = doc.find('layout/' + tag)
            error.check(node is not None, 'Missing layout field <%s>' % tag)
            assert node is not None # mypy
            vals[attr] = dec_int(node.text, tag)
        return cls(**vals)

# Local variables:
# python-indent: 4
# End:
