"""
Tests for the offline converter in tools/geonav_convert.py.
"""

import csv
import importlib.util
from pathlib import Path

import pytest

_TOOL = Path(__file__).resolve().parent.parent / "tools" / "geonav_convert.py"
_spec = importlib.util.spec_from_file_location("geonav_convert", _TOOL)
geonav_convert = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(geonav_convert)


def _write_csv(path: Path, header, rows):
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)


def _read_csv(path: Path):
    with path.open(newline="") as f:
        return list(csv.DictReader(f))


class TestConvertRows:

    def test_ll2utm(self):
        rows, errors = geonav_convert.convert_rows("ll2utm", [{"latitude": "45.0", "longitude": "-93.0"}])
        assert errors == []
        assert rows[0]["zone"] == "15T"
        assert rows[0]["easting"] == pytest.approx(500000.0)

    def test_bad_row_reported(self):
        rows, errors = geonav_convert.convert_rows(
            "ll2utm",
            [{"latitude": "89.0", "longitude": "0.0"}, {"latitude": "x", "longitude": "0.0"}],
        )
        assert len(errors) == 2
        assert rows[0]["easting"] == ""

    def test_xy_requires_origin(self):
        with pytest.raises(ValueError):
            geonav_convert.convert_row("ll2xy", {"latitude": "45.0", "longitude": "-93.0"})


class TestMain:

    def test_ll2utm_then_utm2ll(self, tmp_path):
        src = tmp_path / "fixes.csv"
        utm = tmp_path / "utm.csv"
        back = tmp_path / "back.csv"
        _write_csv(src, ["stamp", "latitude", "longitude"], [[1.0, 45.0, -93.0], [2.0, -33.86, 151.21]])

        assert geonav_convert.main(["ll2utm", str(src), "-o", str(utm)]) == 0
        utm_rows = _read_csv(utm)
        assert utm_rows[0]["stamp"] == "1.0"
        assert utm_rows[1]["zone"] == "56H"

        # Drop the geodetic columns so utm2ll fills them fresh
        _write_csv(
            utm,
            ["easting", "northing", "zone"],
            [[r["easting"], r["northing"], r["zone"]] for r in utm_rows],
        )
        assert geonav_convert.main(["utm2ll", str(utm), "-o", str(back)]) == 0
        back_rows = _read_csv(back)
        assert float(back_rows[1]["latitude"]) == pytest.approx(-33.86, abs=1e-6)
        assert float(back_rows[1]["longitude"]) == pytest.approx(151.21, abs=1e-6)

    def test_ll2xy_origin(self, tmp_path):
        src = tmp_path / "fixes.csv"
        out = tmp_path / "xy.csv"
        _write_csv(src, ["latitude", "longitude"], [[45.0, -93.0]])
        assert geonav_convert.main(["ll2xy", str(src), "--origin", "45.0", "-93.0", "-o", str(out)]) == 0
        row = _read_csv(out)[0]
        assert float(row["x"]) == pytest.approx(0.0, abs=1e-6)
        assert float(row["y"]) == pytest.approx(0.0, abs=1e-6)

    def test_ll2xy_without_origin_fails(self, tmp_path):
        src = tmp_path / "fixes.csv"
        _write_csv(src, ["latitude", "longitude"], [[45.0, -93.0]])
        assert geonav_convert.main(["ll2xy", str(src)]) == 1

    def test_missing_columns(self, tmp_path):
        src = tmp_path / "fixes.csv"
        _write_csv(src, ["lat", "lon"], [[45.0, -93.0]])
        assert geonav_convert.main(["ll2utm", str(src)]) == 1

    def test_point(self, capsys):
        assert geonav_convert.main(["point", "45.0", "-93.0"]) == 0
        assert capsys.readouterr().out.strip().endswith("15T")

    def test_point_out_of_band(self, capsys):
        assert geonav_convert.main(["point", "84.5", "0.0"]) == 1
