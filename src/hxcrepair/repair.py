# hxcrepair/repair.py
#
# Repair an HxC XML disk layout in place.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from hxcrepair import document as doc
from hxcrepair.document import Document
from hxcrepair.layout import Layout
from hxcrepair.offset import OffsetState
from hxcrepair.track import sequence_tracks

def update_file_size(document: Document, state: OffsetState) -> None:
    node = document.find('file_size')
    if node is None:
        return
    if doc.dec_int(node.text, 'file_size') != state.computed_offset:
        print('File size %s -> %d' % (node.text, state.computed_offset))
        node.text = str(state.computed_offset)


def repair(document: Document) -> OffsetState:
    """Fill in missing and empty sectors and correct all data offsets.

    Raises error.Fatal if the document is inconsistent in a way that
    cannot be repaired. The document may then be partially modified and
    must not be written out.
    """
    layout = Layout.from_document(document)
    print(layout)
    state = sequence_tracks(document, layout, OffsetState())
    if state.shifted:
        update_file_size(document, state)
    print('%d sectors added, %d sectors zero-filled, %d bytes total'
          % (state.nr_added, state.nr_filled, state.computed_offset))
    return state

# Local variables:
# python-indent: 4
# End:
