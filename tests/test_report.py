import base64
import json

from pagediff.report import diff_result_to_json, to_data_url, write_json_report
from pagediff.types import ComparisonResult, PageComparison, Region


def _result():
    return ComparisonResult(
        width=100,
        height=50,
        regions=[Region("1", (0.0, 20.0, 40.0, 60.0))],
        mask_image=b"png-bytes",
        params={"cell_size": 20},
    )


def test_to_data_url():
    url = to_data_url(b"\x00\x01", "image/png")
    assert url == "data:image/png;base64," + base64.b64encode(b"\x00\x01").decode()
    assert to_data_url(None, "image/png") is None


def test_write_json_report_single_result(tmp_path):
    path = tmp_path / "out" / "report.json"
    write_json_report(_result(), path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["regions"] == [{"id": "1", "boundingBox": [0.0, 20.0, 40.0, 60.0]}]
    assert "maskImage" not in data


def test_page_reports_embed_images():
    pages = [PageComparison(index=2, scale=1.5, result=_result())]
    data = json.loads(diff_result_to_json(pages, include_images=True))
    assert data[0]["page_index"] == 2
    assert data[0]["scale"] == 1.5
    assert data[0]["maskImage"].startswith("data:image/png;base64,")
    assert data[0]["annotatedOld"] is None


def test_region_to_pixels():
    assert Region("1", (0.0, 20.0, 40.0, 60.0)).to_pixels(100, 50) == (20, 0, 60, 20)
