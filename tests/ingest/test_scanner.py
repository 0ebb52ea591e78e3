"""Tests for camera card scanning."""

from pathlib import Path

import pytest

from mediaingest.domain.transfer import MediaType, TransferDestinations
from mediaingest.ingest.scanner import scan_source_files


@pytest.fixture
def card(tmp_path: Path) -> Path:
    """A card layout with photos, clips and clutter."""
    root = tmp_path / "CARD"
    (root / "DCIM" / "100MSDCF").mkdir(parents=True)
    (root / "PRIVATE" / "M4ROOT" / "CLIP").mkdir(parents=True)
    (root / "DCIM" / "100MSDCF" / "EA001621.JPG").write_bytes(b"p" * 10)
    (root / "DCIM" / "100MSDCF" / "EA001622.jpeg").write_bytes(b"p" * 20)
    (root / "PRIVATE" / "M4ROOT" / "CLIP" / "C0001.MOV").write_bytes(b"v" * 30)
    (root / "PRIVATE" / "M4ROOT" / "CLIP" / "C0002.mp4").write_bytes(b"v" * 40)
    (root / "PRIVATE" / "M4ROOT" / "CLIP" / "C0001M01.XML").write_text("<xml/>")
    (root / "DCIM" / "notes.txt").write_text("ignore me")
    (root / "DCIM" / "FAKE.JPG").mkdir()
    return root


@pytest.fixture
def destinations(tmp_path: Path) -> TransferDestinations:
    return TransferDestinations(photos=tmp_path / "photos", raw_videos=tmp_path / "raw")


class TestScanSourceFiles:
    @pytest.mark.asyncio
    async def test_routes_photos_and_videos(self, card, destinations, mock_logger) -> None:
        tasks = await scan_source_files(card, destinations, logger=mock_logger)

        by_name = {task.source.name: task for task in tasks}
        assert set(by_name) == {
            "EA001621.JPG",
            "EA001622.jpeg",
            "C0001.MOV",
            "C0002.mp4",
        }
        assert by_name["EA001621.JPG"].media_type == MediaType.PHOTO
        assert by_name["EA001621.JPG"].destination == destinations.photos / "EA001621.JPG"
        assert by_name["C0002.mp4"].media_type == MediaType.VIDEO
        assert by_name["C0002.mp4"].destination == destinations.raw_videos / "C0002.mp4"
        assert by_name["C0001.MOV"].size == 30

    @pytest.mark.asyncio
    async def test_results_sorted_by_source(self, card, destinations, mock_logger) -> None:
        tasks = await scan_source_files(card, destinations, logger=mock_logger)

        sources = [str(task.source) for task in tasks]
        assert sources == sorted(sources)

    @pytest.mark.asyncio
    async def test_broken_symlink_skipped(self, card, destinations, mock_logger) -> None:
        (card / "DCIM" / "GHOST.JPG").symlink_to(card / "does-not-exist.jpg")

        tasks = await scan_source_files(card, destinations, logger=mock_logger)

        assert "GHOST.JPG" not in {task.source.name for task in tasks}

    @pytest.mark.asyncio
    async def test_empty_card(self, tmp_path, destinations, mock_logger) -> None:
        (tmp_path / "EMPTY").mkdir()

        assert await scan_source_files(tmp_path / "EMPTY", destinations, logger=mock_logger) == []

    @pytest.mark.asyncio
    async def test_missing_source_raises(self, tmp_path, destinations, mock_logger) -> None:
        with pytest.raises(NotADirectoryError):
            await scan_source_files(tmp_path / "nope", destinations, logger=mock_logger)
