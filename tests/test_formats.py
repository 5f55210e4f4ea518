"""
Tests for WxH parsing, text output and the atlas manifest
"""
import json
import pytest
from spritepacker.exceptions import ParseError
from spritepacker.formats import (
    format_sheets,
    load_manifest,
    manifest_to_sheets,
    parse_size,
    parse_sizes,
    to_manifest,
)
from spritepacker.packing import Placement, Rectangle
from spritepacker.schema import AtlasManifest


class TestParsing:
    """Test reading WxH size listings"""

    def test_parse_size(self):
        assert parse_size("864x480") == Rectangle(864, 480)

    def test_parse_size_uppercase_and_whitespace(self):
        assert parse_size(" 64X32 ") == Rectangle(64, 32)

    @pytest.mark.parametrize("token", ["64", "64x", "x32", "64*32", "-4x3", "4.5x3", "axb", ""])
    def test_malformed_tokens(self, token):
        with pytest.raises(ParseError):
            parse_size(token)

    def test_zero_dimension(self):
        with pytest.raises(ParseError, match="positive"):
            parse_size("0x10")

    def test_parse_sizes_whitespace_separated(self):
        rects = parse_sizes("864x480 78x107\n410x321\t188x167\n")
        assert rects == [Rectangle(864, 480), Rectangle(78, 107), Rectangle(410, 321), Rectangle(188, 167)]

    def test_parse_sizes_with_count(self):
        """A leading count of sizes is accepted"""
        rects = parse_sizes("3\n64x64\n32x32\n16x16\n")
        assert len(rects) == 3

    def test_parse_sizes_count_mismatch(self):
        with pytest.raises(ParseError, match="declares 3"):
            parse_sizes("3 64x64 32x32")

    def test_parse_sizes_empty(self):
        assert parse_sizes("   \n") == []

    def test_parse_sizes_reports_bad_token(self):
        with pytest.raises(ParseError, match="12by40"):
            parse_sizes("10x10 12by40")


class TestTextOutput:
    """Test the sheet N / WxH X Y listing"""

    def test_format_sheets(self):
        sheets = [
            [Placement(864, 480, 0, 0), Placement(410, 321, 0, 480)],
            [Placement(629, 236, 0, 0)],
        ]
        assert format_sheets(sheets) == (
            "sheet 1\n"
            "864x480 0 0\n"
            "410x321 0 480\n"
            "\n"
            "sheet 2\n"
            "629x236 0 0\n"
            "\n"
        )

    def test_format_no_sheets(self):
        assert format_sheets([]) == ""


class TestManifest:
    """Test manifest conversion and validation"""

    def test_to_manifest(self):
        sheets = [[Placement(10, 10, 0, 0, "a.png"), Placement(10, 10, 10, 0, "b.png")]]
        manifest = to_manifest(sheets, 64, 64, image_names=["sheet_1.png"])

        assert isinstance(manifest, AtlasManifest)
        assert manifest.sheets[0].index == 1
        assert manifest.sheets[0].image == "sheet_1.png"
        assert [s.name for s in manifest.sheets[0].sprites] == ["a.png", "b.png"]
        assert manifest.sprite_count == 2

    def test_manifest_is_json_serializable(self):
        manifest = to_manifest([[Placement(8, 8, 0, 0)]], 16, 16)
        data = json.loads(json.dumps(manifest.model_dump()))
        assert data["sheet_width"] == 16
        assert data["sheets"][0]["sprites"][0] == {"name": None, "width": 8, "height": 8, "x": 0, "y": 0}

    def test_load_and_convert_back(self):
        sheets = [[Placement(8, 8, 0, 0, "a")], [Placement(16, 4, 2, 3)]]
        data = to_manifest(sheets, 32, 32).model_dump()
        assert manifest_to_sheets(load_manifest(data)) == sheets

    def test_image_name_count_mismatch(self):
        with pytest.raises(ValueError):
            to_manifest([[Placement(8, 8, 0, 0)]], 16, 16, image_names=[])

    def test_load_rejects_overlap(self):
        data = {
            "sheet_width": 64,
            "sheet_height": 64,
            "sheets": [{"index": 1, "sprites": [
                {"width": 32, "height": 32, "x": 0, "y": 0},
                {"width": 32, "height": 32, "x": 16, "y": 16},
            ]}],
        }
        with pytest.raises(ValueError, match="overlap"):
            load_manifest(data)

    def test_load_rejects_out_of_bounds(self):
        data = {
            "sheet_width": 64,
            "sheet_height": 64,
            "sheets": [{"index": 1, "sprites": [{"width": 32, "height": 32, "x": 40, "y": 0}]}],
        }
        with pytest.raises(ValueError, match="leaves"):
            load_manifest(data)

    def test_load_rejects_unknown_fields(self):
        with pytest.raises(ValueError):
            load_manifest({"sheet_width": 64, "sheet_height": 64, "sheets": [], "padding": 2})
