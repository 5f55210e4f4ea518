"""
Test the SpritePacker client and PackResult
"""
import pytest
import os
import json
import tempfile
from spritepacker import SpritePacker, PackResult, Rectangle, Placement
from spritepacker.exceptions import OversizedRectangleError, ParseError


class TestSpritePackerClient:
    """Test client initialization and packing"""

    def test_client_initializes_with_defaults(self, monkeypatch):
        """Test that SpritePacker uses 1024x1024 sheets by default"""
        for key in ("SPRITEPACKER_SHEET_SIZE", "SPRITEPACKER_SHEET_WIDTH", "SPRITEPACKER_SHEET_HEIGHT"):
            monkeypatch.delenv(key, raising=False)
        sp = SpritePacker()
        assert (sp.sheet_width, sp.sheet_height) == (1024, 1024)

    def test_client_accepts_custom_size(self):
        sp = SpritePacker(sheet_width=512, sheet_height=256)
        assert (sp.sheet_width, sp.sheet_height) == (512, 256)

    def test_client_reads_env(self, monkeypatch):
        monkeypatch.setenv("SPRITEPACKER_SHEET_SIZE", "128")
        sp = SpritePacker(sheet_height=64)
        assert (sp.sheet_width, sp.sheet_height) == (128, 64)

    def test_pack_accepts_mixed_sizes(self):
        sp = SpritePacker(sheet_width=1024, sheet_height=1024)
        result = sp.pack(["700x700", (700, 700), Rectangle(10, 10, "dot")])

        assert isinstance(result, PackResult)
        assert len(result) == 2
        assert result.sheets[0][0] == Placement(700, 700, 0, 0)

    def test_pack_bad_string(self):
        with pytest.raises(ParseError):
            SpritePacker().pack(["10by10"])

    def test_pack_oversized(self):
        with pytest.raises(OversizedRectangleError):
            SpritePacker(sheet_width=64, sheet_height=64).pack(["65x1"])


class TestPackResult:
    """Test result formatting and saving"""

    def _result(self):
        return SpritePacker(sheet_width=1024, sheet_height=1024).pack(["700x700", "700x700"])

    def test_to_text(self):
        assert self._result().to_text() == "sheet 1\n700x700 0 0\n\nsheet 2\n700x700 0 0\n\n"

    def test_to_json(self):
        data = self._result().to_json()
        assert data["sheet_width"] == 1024
        assert [s["index"] for s in data["sheets"]] == [1, 2]

    def test_stats(self):
        stats = self._result().stats()
        assert stats["sheets"] == 2
        assert stats["sprites"] == 2
        assert stats["utilization"][0] == pytest.approx(700 * 700 / (1024 * 1024))

    def test_save_txt(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "sheets.txt")
            self._result().save(path)
            with open(path) as f:
                assert f.read().startswith("sheet 1\n700x700 0 0\n")

    def test_save_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "sheets.json")
            self._result().save(path)
            with open(path) as f:
                assert len(json.load(f)["sheets"]) == 2

    def test_save_explicit_filetype(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "sheets.out")
            self._result().save(path, filetype="json")
            with open(path) as f:
                assert json.load(f)["sheet_height"] == 1024

    def test_save_unknown_extension(self):
        with pytest.raises(ValueError, match="Cannot infer filetype"):
            self._result().save("sheets.png")
