from __future__ import annotations

from pyrutas._redact import preview_for_log


def test_preview_for_log_truncates_long_geometry() -> None:
    geometry = '{"type": "LineString", "coordinates": [' + ", ".join(["[-98.28, 26.09]"] * 50) + "]}"

    preview = preview_for_log(geometry, max_string=40)

    assert preview.startswith('{"type": "LineString"')
    assert preview.endswith("<truncated>")
    assert len(preview) < len(geometry)


def test_preview_for_log_keeps_short_values_on_one_line() -> None:
    assert preview_for_log("Internal\nServer Error") == "Internal Server Error"
    assert preview_for_log([1, 2]) == "[1, 2]"
