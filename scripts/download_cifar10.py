#!/usr/bin/env python3
"""Download the CIFAR-10 binary batches into a flat data directory.

Fetches ``cifar-10-binary.tar.gz`` from the dataset's home page, extracts it
and moves the six ``*.bin`` batch files (plus ``batches.meta.txt``) up into
``--data-dir`` where the training loader expects them.

Usage::

    python scripts/download_cifar10.py
    python scripts/download_cifar10.py --data-dir /path/to/data
"""

from __future__ import annotations

import argparse
import shutil
from pathlib import Path

from loguru import logger
from torchvision.datasets.utils import download_and_extract_archive

CIFAR10_BINARY_URL = "https://www.cs.toronto.edu/~kriz/cifar-10-binary.tar.gz"
CIFAR10_BINARY_MD5 = "c32a1d4ab5d03f1284b67883e8d87530"
EXTRACTED_DIR = "cifar-10-batches-bin"
EXPECTED_FILES = [
    *(f"data_batch_{i}.bin" for i in range(1, 6)),
    "test_batch.bin",
    "batches.meta.txt",
]


def download(data_dir: Path, keep_archive: bool = False) -> None:
    """Download, extract and flatten the binary CIFAR-10 release."""
    if all((data_dir / name).is_file() for name in EXPECTED_FILES):
        logger.info(f"CIFAR-10 already present in {data_dir}, nothing to do")
        return

    data_dir.mkdir(parents=True, exist_ok=True)
    download_and_extract_archive(
        CIFAR10_BINARY_URL,
        download_root=str(data_dir),
        md5=CIFAR10_BINARY_MD5,
        remove_finished=not keep_archive,
    )

    extracted = data_dir / EXTRACTED_DIR
    for name in EXPECTED_FILES:
        src = extracted / name
        if not src.is_file():
            raise FileNotFoundError(f"Archive did not contain {name}")
        shutil.move(str(src), str(data_dir / name))
    shutil.rmtree(extracted)
    logger.info(f"CIFAR-10 binary batches written to {data_dir}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("data"),
        help="Destination directory (default: data)",
    )
    parser.add_argument(
        "--keep-archive",
        action="store_true",
        help="Keep the downloaded .tar.gz after extraction",
    )
    args = parser.parse_args()
    download(args.data_dir, keep_archive=args.keep_archive)


if __name__ == "__main__":
    main()
