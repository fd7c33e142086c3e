"""Tests for expanding file inputs into upload entries."""

import os

import pytest

from hangar.files import FileProcessingError, FileProcessor
from inputs import FileInput


@pytest.fixture
def build_dir(tmp_path):
    libs = tmp_path / "build" / "libs"
    libs.mkdir(parents=True)
    (libs / "plugin-1.0.jar").write_bytes(b"jar-a")
    (libs / "plugin-1.0-sources.jar").write_bytes(b"jar-b")
    (libs / "notes.txt").write_text("not a jar")
    return tmp_path


class TestFileProcessor:
    def test_glob_expanded_in_sorted_order(self, build_dir):
        processor = FileProcessor(base_dir=str(build_dir))

        upload_files, files_data = processor.process_files([
            FileInput(platforms=["PAPER", "VELOCITY"], path="build/libs/*.jar"),
        ])

        assert [f.name for f in upload_files] == ["plugin-1.0-sources.jar", "plugin-1.0.jar"]
        assert all(os.path.isabs(f.path) for f in upload_files)
        assert files_data == [{"platforms": ["PAPER", "VELOCITY"]}] * 2

    def test_recursive_glob(self, build_dir):
        upload_files, _ = FileProcessor(base_dir=str(build_dir)).process_files([
            FileInput(platforms=["PAPER"], path="**/plugin-1.0.jar"),
        ])
        assert [f.name for f in upload_files] == ["plugin-1.0.jar"]

    def test_external_entry(self, build_dir):
        upload_files, files_data = FileProcessor(base_dir=str(build_dir)).process_files([
            FileInput(platforms=["WATERFALL"], url=True, external_url="https://cdn.example.com/p.jar"),
            FileInput(platforms=["PAPER"], path="build/libs/plugin-1.0.jar"),
        ])

        assert len(upload_files) == 1
        assert files_data == [
            {"platforms": ["WATERFALL"], "url": True, "externalUrl": "https://cdn.example.com/p.jar"},
            {"platforms": ["PAPER"]},
        ]

    def test_no_match(self, build_dir):
        with pytest.raises(FileProcessingError, match="index 0: No files found matching pattern: dist/\\*.jar"):
            FileProcessor(base_dir=str(build_dir)).process_files([
                FileInput(platforms=["PAPER"], path="dist/*.jar"),
            ])

    def test_directory_match_rejected(self, build_dir):
        with pytest.raises(FileProcessingError, match="Path is not a file"):
            FileProcessor(base_dir=str(build_dir)).process_files([
                FileInput(platforms=["PAPER"], path="build/*"),
            ])

    def test_invalid_entry(self):
        with pytest.raises(FileProcessingError, match="Invalid file configuration"):
            FileProcessor().process_files([FileInput(platforms=["PAPER"], url=True)])
