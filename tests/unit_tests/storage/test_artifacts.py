import os

from uploads_api.storage.artifacts import ArtifactKind, UploadDirectory, classify


def classify_all(directory: UploadDirectory) -> dict:
    return {name: classify(directory, name) for name in sorted(directory.names())}


def test_progress_artifact_is_always_bookkeeping(directory, upload_dir):
    (upload_dir / "orphan.info").write_text("{}")
    (upload_dir / "video.mp4").write_bytes(b"data")
    (upload_dir / "video.mp4.info").write_text("{}")

    assert classify(directory, "orphan.info") is ArtifactKind.PROGRESS
    assert classify(directory, "video.mp4.info") is ArtifactKind.PROGRESS
    assert classify(directory, "video.mp4") is ArtifactKind.LOGICAL_FILE


def test_sidecar_depends_on_primary_presence(directory, upload_dir):
    (upload_dir / "report.json").write_text("{}")
    assert classify(directory, "report.json") is ArtifactKind.LOGICAL_FILE

    (upload_dir / "report").write_bytes(b"primary")
    assert classify(directory, "report.json") is ArtifactKind.SIDECAR

    os.remove(upload_dir / "report")
    assert classify(directory, "report.json") is ArtifactKind.LOGICAL_FILE


def test_sidecar_with_directory_primary_is_a_logical_file(directory, upload_dir):
    (upload_dir / "report").mkdir()
    (upload_dir / "report.json").write_text("{}")

    assert classify(directory, "report.json") is ArtifactKind.LOGICAL_FILE


def test_directories_are_excluded(directory, upload_dir):
    (upload_dir / "nested").mkdir()
    (upload_dir / "nested.json").mkdir()

    assert classify(directory, "nested") is None
    assert classify(directory, "nested.json") is None


def test_vanished_entry_is_excluded(directory):
    assert classify(directory, "gone.txt") is None


def test_classification_is_idempotent(directory, upload_dir):
    for name in ["a.txt", "a.txt.info", "a.txt.json", "b.json", "c.info"]:
        (upload_dir / name).write_bytes(b"x")
    (upload_dir / "dir").mkdir()

    first = classify_all(directory)
    second = classify_all(directory)

    assert first == second
    assert first == {
        "a.txt": ArtifactKind.LOGICAL_FILE,
        "a.txt.info": ArtifactKind.PROGRESS,
        "a.txt.json": ArtifactKind.SIDECAR,
        "b.json": ArtifactKind.LOGICAL_FILE,
        "c.info": ArtifactKind.PROGRESS,
        "dir": None,
    }


def test_custom_suffixes(upload_dir):
    directory = UploadDirectory(path=upload_dir, progress_suffix=".progress", sidecar_suffix=".meta")
    (upload_dir / "a.bin").write_bytes(b"x")
    (upload_dir / "a.bin.meta").write_text("{}")
    (upload_dir / "a.bin.progress").write_text("{}")
    (upload_dir / "a.bin.info").write_text("{}")

    assert classify(directory, "a.bin.meta") is ArtifactKind.SIDECAR
    assert classify(directory, "a.bin.progress") is ArtifactKind.PROGRESS
    assert classify(directory, "a.bin.info") is ArtifactKind.LOGICAL_FILE


def test_stat_returns_none_for_missing_entries(directory, upload_dir):
    (upload_dir / "a.txt").write_bytes(b"abc")

    assert directory.stat("missing") is None
    assert directory.stat("") is None
    assert directory.stat("a.txt").st_size == 3
    assert directory.is_regular_file("a.txt")
    assert not directory.is_regular_file("missing")
