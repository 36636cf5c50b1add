import json

from adapters.result_exporter import export_result, export_result_json
from cli.ui_components import hex_preview
from core.domain.models import FetchResult, OutputType


def test_export_text(tmp_path):
    result = FetchResult(output_type=OutputType.STRING, value="héllo")

    path = export_result(result=result, output_path=tmp_path / "a" / "out.txt")

    assert path.read_text(encoding="utf-8") == "héllo"


def test_export_bytes(tmp_path):
    result = FetchResult(output_type=OutputType.BYTE_ARRAY, value=[0, 128, 255])

    path = export_result(result=result, output_path=tmp_path / "out.bin")

    assert path.read_bytes() == b"\x00\x80\xff"


def test_export_json(tmp_path):
    result = FetchResult(output_type=OutputType.BYTE_ARRAY, value=[1, 2])

    path = export_result_json(result=result, output_path=tmp_path / "out.json")

    assert json.loads(path.read_text(encoding="utf-8")) == {"output_type": "byteArray", "value": [1, 2]}


def test_hex_preview_truncates():
    preview = hex_preview(bytes(range(40)), limit=32)

    lines = preview.splitlines()
    assert lines[0].startswith("00000000  00 01 02")
    assert len(lines) == 3
    assert lines[-1] == "... (8 more bytes)"
