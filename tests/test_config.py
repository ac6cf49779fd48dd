import pytest

from shortlist.config import load_settings


def test_defaults(monkeypatch, tmp_path):
    for k in ("SHORTLIST_ARCHIVE_NAME", "SHORTLIST_ARCHIVE_FOLDER", "SHORTLIST_REGION_WINDOW",
              "SHORTLIST_RENDER_WIDTH", "SHORTLIST_LOG_LEVEL"):
        monkeypatch.delenv(k, raising=False)
    out = tmp_path / "out"
    monkeypatch.setenv("SHORTLIST_OUTPUT_DIR", str(out))
    s = load_settings()
    assert s.archive_name == "UNCTAD_Selection.zip"
    assert s.archive_folder == "Selected_Candidates"
    assert s.region_window == 1500
    assert s.render_width == 900
    assert s.log_level == "INFO"
    assert out.is_dir()


def test_invalid_numbers(monkeypatch, tmp_path):
    monkeypatch.setenv("SHORTLIST_OUTPUT_DIR", str(tmp_path))
    monkeypatch.setenv("SHORTLIST_REGION_WINDOW", "lots")
    monkeypatch.setenv("SHORTLIST_RENDER_WIDTH", "-5")
    with pytest.raises(RuntimeError, match="SHORTLIST_REGION_WINDOW, SHORTLIST_RENDER_WIDTH"):
        load_settings()
