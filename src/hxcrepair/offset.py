# hxcrepair/offset.py
#
# Running byte-offset bookkeeping across the whole track list.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from hxcrepair import error

class OffsetState:
    """Offset state threaded from sector to sector and track to track.

    computed_offset: Where the next sector really starts in the
      reconstructed image.
    added_offset: Bytes introduced by synthesized and zero-filled sectors
      which the recorded offsets in the document do not yet account for.
    """

    def __init__(self, computed_offset: int = 0,
                 added_offset: int = 0) -> None:
        self.computed_offset = computed_offset
        self.added_offset = added_offset
        self.nr_added = 0
        self.nr_filled = 0

    def __str__(self) -> str:
        return ("computed_offset=0x%x added_offset=0x%x"
                % (self.computed_offset, self.added_offset))

    @property
    def shifted(self) -> bool:
        return self.added_offset > 0

    def check_recorded(self, what: str, recorded: int) -> None:
        # Recorded offsets can only lag behind the true position. One that
        # runs ahead means bytes exist that the layout does not describe.
        if recorded > self.computed_offset:
            error.expect(what, recorded, 'eq', self.computed_offset)

    def fill(self, size: int) -> None:
        """A sector which contributed no bytes now contributes `size`."""
        self.added_offset += size
        self.nr_filled += 1

    def insert(self, size: int) -> int:
        """Reserve `size` bytes for a synthesized sector at the current
        position. Returns the sector's offset."""
        offset = self.computed_offset
        self.computed_offset += size
        self.added_offset += size
        self.nr_added += 1
        return offset

    def place(self, recorded: int, size: int) -> int:
        """Account for an existing sector of `size` bytes. Returns the
        offset it must be recorded at."""
        offset = self.computed_offset if self.shifted else recorded
        self.computed_offset += size
        return offset

# Local variables:
# python-indent: 4
# End:
