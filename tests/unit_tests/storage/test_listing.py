import pytest

from uploads_api.errors import StorageUnavailable
from uploads_api.storage.artifacts import UploadDirectory
from uploads_api.storage.listing import download_url, list_files


def names(files):
    return sorted(file.name for file in files)


def test_lists_logical_files_only(directory, upload_dir):
    (upload_dir / "video.mp4").write_bytes(b"0123456789")
    (upload_dir / "video.mp4.info").write_text("{}")
    (upload_dir / "video.mp4.json").write_text("{}")
    (upload_dir / "orphan.info").write_text("{}")
    (upload_dir / "standalone.json").write_text("{}")
    (upload_dir / "subdir").mkdir()

    files = list_files(directory)

    assert names(files) == ["standalone.json", "video.mp4"]
    video = next(file for file in files if file.name == "video.mp4")
    assert video.size == 10
    assert video.url == "/api/files/video.mp4"
    assert video.uploaded_at.tzinfo is not None


def test_sidecar_disappears_once_primary_exists(directory, upload_dir):
    (upload_dir / "report.json").write_text("{}")
    assert names(list_files(directory)) == ["report.json"]

    (upload_dir / "report").write_bytes(b"primary")
    assert names(list_files(directory)) == ["report"]


def test_listing_is_stable_for_unchanged_directory(directory, upload_dir):
    for i in range(20):
        (upload_dir / f"file{i}.bin").write_bytes(b"x" * i)

    assert list_files(directory) == list_files(directory)


def test_empty_directory(directory):
    assert list_files(directory) == []


def test_missing_directory_is_storage_unavailable(tmp_path):
    directory = UploadDirectory(path=tmp_path / "does-not-exist")

    with pytest.raises(StorageUnavailable):
        list_files(directory)


def test_entry_vanishing_mid_scan_is_omitted(directory, upload_dir, monkeypatch):
    (upload_dir / "keep.txt").write_bytes(b"keep")
    (upload_dir / "vanish.txt").write_bytes(b"vanish")

    original_names = UploadDirectory.names

    def names_then_delete(self):
        entries = list(original_names(self))
        (upload_dir / "vanish.txt").unlink()
        return iter(entries)

    monkeypatch.setattr(UploadDirectory, "names", names_then_delete)

    assert names(list_files(directory)) == ["keep.txt"]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("plain.txt", "/api/files/plain.txt"),
        ("with space.txt", "/api/files/with%20space.txt"),
        ("a/b", "/api/files/a%2Fb"),
        ("100%.txt", "/api/files/100%25.txt"),
        ("it's (1)!.txt", "/api/files/it's%20(1)!.txt"),
        ("отчёт.pdf", "/api/files/%D0%BE%D1%82%D1%87%D1%91%D1%82.pdf"),
    ],
)
def test_download_url_encoding(name, expected):
    assert download_url(name) == expected
