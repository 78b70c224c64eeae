from __future__ import annotations

import json
from pathlib import Path

import pytest

from catalog_pipeline.core.codecs.tabular_codec import HEADER
from catalog_pipeline.core.config import AppConfig
from catalog_pipeline.core.errors import SchemaViolation
from catalog_pipeline.main import build_manual_record, main

from conftest import valid_channel

NEWS_FIELDS = ["News1", "https://x/a", "", "News", "", "", "", "720p", "", "", "news,24x7"]


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _catalog(workdir: Path) -> list:
    return json.loads((workdir / "channels.json").read_text(encoding="utf-8"))


def test_build_manual_record_applies_defaults() -> None:
    record = build_manual_record(NEWS_FIELDS, AppConfig(default_country="GB"))
    assert record.country == "GB"
    assert record.language == "English"
    assert record.logo is None
    assert record.year is None
    assert record.status is True


def test_build_manual_record_status_is_true_unless_false() -> None:
    fields = list(NEWS_FIELDS)
    fields[9] = "no"
    assert build_manual_record(fields, AppConfig()).status is True
    fields[9] = "false"
    assert build_manual_record(fields, AppConfig()).status is False


def test_build_manual_record_requires_name_url_category() -> None:
    fields = list(NEWS_FIELDS)
    fields[1] = "  "
    with pytest.raises(SchemaViolation, match="url"):
        build_manual_record(fields, AppConfig())


def test_build_manual_record_rejects_non_numeric_year() -> None:
    fields = list(NEWS_FIELDS)
    fields[8] = "nineteen"
    with pytest.raises(SchemaViolation, match="year"):
        build_manual_record(fields, AppConfig())


def test_convert_command(workdir: Path, write_catalog, capsys: pytest.CaptureFixture) -> None:
    write_catalog([valid_channel()], name="in.json")

    assert main(["convert", "in.json", "out.csv"]) == 0

    assert (workdir / "out.csv").read_text(encoding="utf-8").splitlines()[0] == HEADER
    assert "Conversion completed: 1 channel(s) written to out.csv" in capsys.readouterr().out


def test_convert_same_format_prints_usage(workdir: Path, write_catalog, capsys: pytest.CaptureFixture) -> None:
    write_catalog([valid_channel()], name="in.json")

    assert main(["convert", "in.json", "out.json"]) == 1

    assert "Supported conversions" in capsys.readouterr().err
    assert not (workdir / "out.json").exists()


def test_convert_missing_input_fails(workdir: Path) -> None:
    assert main(["convert", "nope.json", "out.m3u"]) == 1


def test_validate_reports_findings(workdir: Path, write_catalog, capsys: pytest.CaptureFixture) -> None:
    write_catalog([valid_channel(group="")])

    assert main(["validate", "channels.json"]) == 1

    out = capsys.readouterr().out
    assert "ERROR: record #0 [group]: Field is null or empty" in out
    assert "1 record(s) checked: 1 error(s), 0 warning(s)" in out


def test_validate_clean_file_passes(workdir: Path, write_catalog) -> None:
    write_catalog([valid_channel()])
    assert main(["validate", "channels.json"]) == 0


def test_validate_fix_rewrites_sorted(workdir: Path, write_catalog) -> None:
    write_catalog([
        valid_channel(name="Zed", url="https://x/z"),
        valid_channel(name="Amy", url="https://x/y"),
    ])

    assert main(["validate", "channels.json", "--fix"]) == 0

    assert [c["name"] for c in _catalog(workdir)] == ["Amy", "Zed"]
    assert (workdir / "channels.json").read_text(encoding="utf-8").startswith('[\n  {\n    "name": "Amy"')


def test_validate_fix_leaves_unparseable_file_alone(workdir: Path) -> None:
    (workdir / "channels.json").write_text("[{", encoding="utf-8")
    assert main(["validate", "channels.json", "--fix"]) == 1
    assert (workdir / "channels.json").read_text(encoding="utf-8") == "[{"


def test_add_manual_channel(workdir: Path, write_catalog, capsys: pytest.CaptureFixture) -> None:
    write_catalog([valid_channel(name="Zed", url="https://x/z", group="")])

    assert main(["add", *NEWS_FIELDS]) == 0

    assert "Channel added successfully." in capsys.readouterr().out
    catalog = _catalog(workdir)
    assert [c["name"] for c in catalog] == ["News1", "Zed"]
    assert catalog[0] == {
        "name": "News1",
        "url": "https://x/a",
        "logo": None,
        "category": "News",
        "group": "",
        "country": "US",
        "language": "English",
        "resolution": "720p",
        "year": None,
        "status": True,
        "tags": "news,24x7",
    }


def test_add_duplicate_url_leaves_catalog_unchanged(workdir: Path, write_catalog) -> None:
    path = write_catalog([valid_channel()])
    before = path.read_bytes()

    assert main(["add", *NEWS_FIELDS]) == 1

    assert path.read_bytes() == before


def test_add_missing_required_field(workdir: Path, write_catalog) -> None:
    path = write_catalog([])
    fields = list(NEWS_FIELDS)
    fields[3] = ""
    assert main(["add", *fields]) == 1
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_add_wrong_field_count_prints_usage(workdir: Path, write_catalog, capsys: pytest.CaptureFixture) -> None:
    write_catalog([])
    assert main(["add", "News1", "https://x/a"]) == 1
    assert "Expected 11 fields" in capsys.readouterr().err


def test_add_requires_existing_catalog(workdir: Path) -> None:
    assert main(["add", *NEWS_FIELDS]) == 1
    assert not (workdir / "channels.json").exists()


def test_add_from_file_writes_import_log(workdir: Path, write_catalog, capsys: pytest.CaptureFixture) -> None:
    write_catalog([valid_channel()])
    (workdir / "batch.csv").write_text(
        HEADER + "\n"
        "News1 again|https://x/a||News|General|US|English|720p||true|news\n"
        "Sport|https://x/s||Sports|General|US|English|1080p|2010|false|sport\n",
        encoding="utf-8",
    )

    assert main(["add", "-f", "batch.csv"]) == 0

    out = capsys.readouterr().out
    assert "Import complete!" in out
    assert "Added: 1 channel(s)" in out
    assert "Skipped: 1 channel(s)" in out
    assert (workdir / "batch.csv.import.log").read_text(encoding="utf-8") == (
        "SKIPPED: News1 again - URL already exists\n"
        "ADDED: Sport\n"
    )
    assert [c["url"] for c in _catalog(workdir)] == ["https://x/a", "https://x/s"]


def test_add_from_malformed_file_changes_nothing(workdir: Path, write_catalog) -> None:
    path = write_catalog([valid_channel()])
    before = path.read_bytes()
    (workdir / "batch.m3u").write_text("not a playlist\n", encoding="utf-8")

    assert main(["add", "-f", "batch.m3u"]) == 1

    assert path.read_bytes() == before
    assert not (workdir / "batch.m3u.import.log").exists()


def test_catalog_option_overrides_config(workdir: Path, write_catalog) -> None:
    write_catalog([], name="other.json")
    assert main(["--catalog", "other.json", "add", *NEWS_FIELDS]) == 0
    assert len(json.loads((workdir / "other.json").read_text(encoding="utf-8"))) == 1


def test_bad_config_file_fails(workdir: Path, capsys: pytest.CaptureFixture) -> None:
    (workdir / "bad.yaml").write_text("logging:\n  level: LOUD\n", encoding="utf-8")
    assert main(["--config", "bad.yaml", "validate", "x.json"]) == 1
    assert "Configuration validation failed" in capsys.readouterr().err


def test_add_to_catalog_with_non_string_name_fails_cleanly(workdir: Path, write_catalog) -> None:
    path = write_catalog([valid_channel(name=5), valid_channel(name="B", url="https://x/b")])
    before = path.read_bytes()

    assert main(["add", "N", "https://x/n", "", "News", "", "", "", "", "", "", "n"]) == 1

    assert path.read_bytes() == before


def test_validate_reports_invalid_utf8(workdir: Path, capsys: pytest.CaptureFixture) -> None:
    (workdir / "channels.json").write_bytes(b'[{"name": "Caf\xe9"}]')

    assert main(["validate", "channels.json"]) == 1

    assert "not valid UTF-8" in capsys.readouterr().out
