"""
Integration tests for the complete repair run.

Drives the command line entry point on dump files and checks exit codes,
the diagnostic stream, and the repaired document on standard output.
"""

import random
import sys

import pytest
from hxcrepair import cli
from tests.fixtures import SectorSpec, TrackSpec, make_dump, make_track, parse_dump


def write(tmp_path, text, name="dump.xml"):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def repair(capsys, path):
    res = cli.main(["hxc-repair", path])
    captured = capsys.readouterr()
    return res, captured.out, captured.err


def degraded_disk(nr_tracks=40, nr_sides=2, nsec=26, size=128,
                  nr_missing=60, nr_empty=30, seed=1234):
    """A dump with sectors dropped and emptied, offsets recorded as the
    capture tool would: each sector placed after the bytes it saw."""
    rnd = random.Random(seed)
    pairs = [(t, h) for t in range(nr_tracks) for h in range(nr_sides)]
    # Never drop the first or last sector of a track.
    inner = [(p, sid) for p in pairs for sid in range(2, nsec)]
    picks = rnd.sample(inner, nr_missing + nr_empty)
    missing, empty = set(picks[:nr_missing]), set(picks[nr_missing:])
    tracks, offset = [], 0
    for p in pairs:
        sectors, track_offset = [], offset
        for sid in range(1, nsec + 1):
            if (p, sid) in missing:
                continue
            payload = "none" if (p, sid) in empty else "data"
            sectors.append(SectorSpec(sid, offset, size, payload))
            if payload == "data":
                offset += size
        tracks.append(TrackSpec(p[0], p[1], sectors, track_offset))
    text = make_dump(tracks, nr_tracks=nr_tracks, nr_sides=nr_sides,
                     sectors_per_track=nsec, sector_size=size)
    return text, len(missing), len(empty)


class TestUsage:

    def test_no_filename(self, capsys):
        assert cli.main(["hxc-repair"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Err: Filename missing" in captured.err
        assert "Usage:" in captured.err

    def test_too_many_arguments(self, capsys, tmp_path):
        path = write(tmp_path, make_dump([]))
        assert cli.main(["hxc-repair", path, path]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_file(self, capsys, tmp_path):
        res, out, err = repair(capsys, str(tmp_path / "nope.xml"))
        assert res == 1
        assert out == ""
        assert "Err: File not readable:" in err

    def test_directory(self, capsys, tmp_path):
        res, out, err = repair(capsys, str(tmp_path))
        assert res == 1
        assert out == ""
        assert "Err: Not a plain file:" in err

    def test_stdout_restored(self, capsys, tmp_path):
        before = sys.stdout
        repair(capsys, write(tmp_path, make_dump([make_track(0, 0, [1])])))
        assert sys.stdout is before


class TestScenarios:

    def test_missing_sector_inserted(self, capsys, tmp_path):
        path = write(tmp_path, make_dump([make_track(0, 0, [1, 2, 4, 5])]))
        res, out, err = repair(capsys, path)
        assert res == 0
        assert "80 tracks, 1 sides, 26 sectors, starting at 1, " \
               "128 bytes per sector" in err
        assert "T0.0: Adding sector 3" in err
        t = parse_dump(out)[0]
        assert [s.sector_id for s in t.sectors] == [1, 2, 3, 4, 5]
        assert [s.data_offset for s in t.sectors] == \
            [0x000, 0x080, 0x100, 0x180, 0x200]
        added = t.sectors[2]
        assert added.fill == "0x00"
        assert added.datamark is not None

    def test_empty_sector_filled(self, capsys, tmp_path):
        tracks = [
            TrackSpec(0, 0, [SectorSpec(1, 0x000),
                             SectorSpec(2, 0x080, payload="none"),
                             SectorSpec(3, 0x080)]),
            make_track(1, 0, [1, 2], start_offset=0x100),
        ]
        res, out, err = repair(capsys, write(tmp_path, make_dump(tracks)))
        assert res == 0
        assert "T0.0: Zero-filling sector 2" in err
        t0, t1 = parse_dump(out)
        assert t0.sectors[1].fill == "0x00"
        assert [s.data_offset for s in t0.sectors] == [0x000, 0x080, 0x100]
        assert [s.data_offset for s in t1.sectors] == [0x180, 0x200]

    def test_offset_ahead_aborts_without_output(self, capsys, tmp_path):
        tracks = [TrackSpec(0, 0, [SectorSpec(1, 0x000),
                                   SectorSpec(2, 0x100)])]
        res, out, err = repair(capsys, write(tmp_path, make_dump(tracks)))
        assert res == 1
        assert out == ""
        assert "** FATAL ERROR:" in err
        assert "0x100 == 0x80" in err

    def test_double_sided_sequence(self, capsys, tmp_path):
        pairs = [(0, 0), (0, 1), (1, 0), (1, 1)]
        tracks = [make_track(t, h, [1], start_offset=i * 128)
                  for i, (t, h) in enumerate(pairs)]
        res, out, _ = repair(capsys, write(tmp_path, make_dump(tracks,
                                                                nr_sides=2)))
        assert res == 0
        assert len(parse_dump(out)) == 4

    def test_double_sided_repeat_rejected(self, capsys, tmp_path):
        tracks = [make_track(0, 0, [1]), make_track(0, 0, [1], 128)]
        res, out, err = repair(capsys, write(tmp_path, make_dump(tracks,
                                                                  nr_sides=2)))
        assert res == 1
        assert out == ""
        assert "Side number" in err

    def test_malformed_document(self, capsys, tmp_path):
        res, out, err = repair(capsys, write(tmp_path, "<disk_layout>"))
        assert res == 1
        assert out == ""
        assert "XML parse error" in err


class TestDocumentLevel:

    def test_file_size_updated_after_repair(self, capsys, tmp_path):
        text = make_dump([make_track(0, 0, [1, 3])])
        res, out, err = repair(capsys, write(tmp_path, text))
        assert res == 0
        assert "<file_size>384</file_size>" in out
        assert "File size 256 -> 384" in err

    def test_clean_dump_is_unchanged(self, capsys, tmp_path):
        text = make_dump([make_track(0, 0, [1, 2, 3]),
                          make_track(1, 0, [1, 2, 3], 0x180)])
        res, out, err = repair(capsys, write(tmp_path, text))
        assert res == 0
        assert out == text
        assert "0 sectors added, 0 sectors zero-filled" in err

    def test_other_elements_carried_through(self, capsys, tmp_path):
        text = make_dump([make_track(0, 0, [1, 3])])
        _, out, _ = repair(capsys, write(tmp_path, text))
        assert "<disk_layout_name>AUTOGENERATEDLAYOUT</disk_layout_name>" in out
        assert "<format>IBM_FM</format>" in out
        assert out.count("<sector_data>") == 2

    def test_synthesized_sector_indented_like_siblings(self, capsys, tmp_path):
        text = make_dump([make_track(0, 0, [1, 3])])
        _, out, _ = repair(capsys, write(tmp_path, text))
        assert ('          <sector sector_id="2" sector_size="128">\n'
                '            <data_fill>0x00</data_fill>\n'
                '            <datamark>0xFB</datamark>\n'
                '            <data_offset>0x000080</data_offset>\n'
                '          </sector>\n'
                '          <sector sector_id="3"') in out


class TestWholeDisk:

    @pytest.fixture
    def disk(self):
        return degraded_disk()

    @pytest.fixture
    def repaired(self, capsys, tmp_path, disk):
        text, _, _ = disk
        res, out, err = repair(capsys, write(tmp_path, text))
        assert res == 0
        return out, err

    def test_every_track_contiguous(self, repaired):
        out, _ = repaired
        for t in parse_dump(out):
            assert [s.sector_id for s in t.sectors] == list(range(1, 27))

    def test_cumulative_offset_law(self, repaired):
        out, _ = repaired
        offset = 0
        for t in parse_dump(out):
            assert t.data_offset == t.sectors[0].data_offset
            for s in t.sectors:
                assert s.data_offset == offset
                offset += s.size
        assert offset == 40 * 2 * 26 * 128

    def test_no_payload_less_sectors(self, repaired):
        out, _ = repaired
        for t in parse_dump(out):
            for s in t.sectors:
                assert s.has_data or s.fill == "0x00"

    def test_counts_reported(self, disk, repaired):
        _, nr_missing, nr_empty = disk
        _, err = repaired
        assert err.count("Adding sector") == nr_missing
        assert err.count("Zero-filling sector") == nr_empty
        assert ("%d sectors added, %d sectors zero-filled"
                % (nr_missing, nr_empty)) in err

    def test_second_run_is_identical(self, capsys, tmp_path, repaired):
        out, _ = repaired
        res, out2, err2 = repair(capsys, write(tmp_path, out, "again.xml"))
        assert res == 0
        assert out2 == out
        assert "Adding sector" not in err2
        assert "Zero-filling sector" not in err2
