"""Tests for the command line entry point."""

import zipfile

import pytest

from uihighlight.cli import build_parser, main


@pytest.fixture
def input_dir(tmp_path, pair_files):
    directory = tmp_path / "input"
    directory.mkdir()
    for name in ("home", "settings"):
        dump, screenshot = pair_files(name)
        (directory / dump.name).write_bytes(dump.content)
        (directory / screenshot.name).write_bytes(screenshot.content)
    (directory / "notes.txt").write_text("ignored")
    return directory


class TestParser:

    def test_generate_defaults(self):
        args = build_parser().parse_args(["generate", "shots"])
        assert args.command == "generate"
        assert args.xml_dir is None
        assert args.zip is False

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestGenerate:

    def test_writes_png_per_pair(self, input_dir, tmp_path):
        output = tmp_path / "out"

        assert main(["generate", str(input_dir), "-o", str(output)]) == 0
        assert sorted(p.name for p in output.iterdir()) == ["home.png", "settings.png"]

    def test_writes_zip(self, input_dir, tmp_path):
        output = tmp_path / "out"

        assert main(["generate", str(input_dir), "-o", str(output), "--zip"]) == 0
        names = zipfile.ZipFile(output / "highlights.zip").namelist()
        assert sorted(names) == ["home.png", "manifest.json", "settings.png"]

    def test_separate_xml_dir(self, input_dir, tmp_path):
        xml_dir = tmp_path / "xml"
        xml_dir.mkdir()
        for dump in input_dir.glob("*.xml"):
            dump.rename(xml_dir / dump.name)
        output = tmp_path / "out"

        assert main(["generate", str(input_dir), "--xml-dir", str(xml_dir), "-o", str(output)]) == 0
        assert (output / "home.png").exists()

    def test_count_mismatch_fails(self, input_dir, tmp_path):
        (input_dir / "home.xml").unlink()
        assert main(["generate", str(input_dir), "-o", str(tmp_path / "out")]) == 1

    def test_missing_directory_fails(self, tmp_path):
        assert main(["generate", str(tmp_path / "nope")]) == 1

    def test_broken_screenshot_fails(self, input_dir, tmp_path):
        (input_dir / "home.png").write_bytes(b"not a png")
        assert main(["generate", str(input_dir), "-o", str(tmp_path / "out")]) == 1
