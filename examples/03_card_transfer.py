#!/usr/bin/env python3
"""
03_card_transfer.py - Scan, copy and validate a camera card

Demonstrates:
- Scanning a card and routing photos and raw videos
- Copying with per-file integrity validation
- Batch validation report with timestamp warnings
"""

import asyncio
import tempfile
from pathlib import Path

from mediaingest import TransferService, scan_source_files
from mediaingest.domain import TransferDestinations


def build_fake_card(root: Path) -> None:
    (root / "DCIM" / "100MSDCF").mkdir(parents=True)
    (root / "PRIVATE" / "M4ROOT" / "CLIP").mkdir(parents=True)
    for n in range(1, 4):
        (root / "DCIM" / "100MSDCF" / f"EA00162{n}.JPG").write_bytes(b"photo" * 512)
    (root / "PRIVATE" / "M4ROOT" / "CLIP" / "C0001.MOV").write_bytes(b"\x00" * 4096)
    (root / "PRIVATE" / "M4ROOT" / "CLIP" / "C0001M01.XML").write_text("<meta/>")


async def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        card = Path(tmp) / "CARD"
        build_fake_card(card)
        destinations = TransferDestinations(
            photos=Path(tmp) / "photos", raw_videos=Path(tmp) / "videos-raw"
        )

        tasks = await scan_source_files(card, destinations)
        print(f"Found {len(tasks)} media files\n")

        report = await TransferService().transfer(
            tasks,
            card,
            on_file=lambda task, outcome: print(f"  ✓ {task.source.name}"),
        )

        validation = report.validation
        print(
            f"\nCopied {validation.dest_file_count}/{validation.source_file_count}, "
            f"{validation.exif_timestamps_found} with EXIF timestamps"
        )
        for warning in validation.warnings:
            print(f"  {warning.severity}: {warning.message}")
            print(f"    → {warning.suggested_action}")


if __name__ == "__main__":
    asyncio.run(main())
