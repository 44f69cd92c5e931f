"""
Read access to a captured working-set sample store.

A sample store is the directory the capture tool writes for one process:

    <root>/<timestamp>/<virtual_address_hex>

Timestamp directories sort lexicographically in capture order. Each address
file is a flat sequence of 64-bit page flag words for the contiguous pages
starting at that virtual address.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from ..validation import MalformedSample, MissingSamples, handle_file_error

logger = logging.getLogger(__name__)

# Size in bytes of one page flag word.
WORD_SIZE = 8

# Directory names such as 20240501100000.
COMPACT_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def parse_address(address: str) -> int:
    """Return the integer value of a hexadecimal address key such as '0x7f00'."""
    try:
        return int(address, 16)
    except ValueError:
        raise MalformedSample(f"not a hexadecimal address: {address!r}", path=address)


def parse_timestamp(timestamp: str) -> datetime:
    """
    Parse a timestamp directory name into an aware datetime.

    Accepts ISO-8601 names (a trailing 'Z' means UTC), compact
    YYYYMMDDHHMMSS names and plain integer epoch seconds. Naive values
    are taken as UTC.

    Raises:
        MalformedSample: If the name is none of these
    """
    try:
        if len(timestamp) == 14 and timestamp.isdigit():
            parsed = datetime.strptime(timestamp, COMPACT_TIMESTAMP_FORMAT)
        elif timestamp.isdigit():
            return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
        else:
            text = timestamp[:-1] + "+00:00" if timestamp.endswith("Z") else timestamp
            parsed = datetime.fromisoformat(text)
    except (ValueError, OverflowError, OSError):
        raise MalformedSample(f"cannot parse timestamp {timestamp!r}", path=timestamp)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class SampleStore:
    """
    Lists and reads the samples under one sample root.
    """

    def __init__(self, root: Path, timestamp_glob: str = "20*", address_glob: str = "0x*"):
        self.root = Path(root)
        self.timestamp_glob = timestamp_glob
        self.address_glob = address_glob

    def timestamps(self) -> List[str]:
        """
        Return the timestamp directory names, oldest first.

        Raises:
            MissingSamples: If the root holds no timestamp directories
        """
        if not self.root.is_dir():
            raise MissingSamples(f"sample root {self.root} does not exist")
        names = sorted(p.name for p in self.root.glob(self.timestamp_glob) if p.is_dir())
        if not names:
            raise MissingSamples(
                f"no timestamp directories matching '{self.timestamp_glob}' in {self.root}"
            )
        logger.info(f"Using {len(names)} timestamps from {self.root}: {names[0]} .. {names[-1]}")
        return names

    def addresses(self, timestamp: str) -> List[str]:
        """Return the address keys recorded at `timestamp`, in numeric order."""
        directory = self.root / timestamp
        keys = [p.name for p in directory.glob(self.address_glob) if p.is_file()]
        return sorted(keys, key=parse_address)

    def sample_path(self, timestamp: str, address: str) -> Path:
        return self.root / timestamp / address

    def sample_size(self, timestamp: str, address: str) -> int:
        """Size in bytes of one sample file."""
        path = self.sample_path(timestamp, address)
        try:
            return path.stat().st_size
        except OSError as e:
            handle_file_error(e, f"stat of sample {path}", logger=logger)
            raise

    def page_count(self, timestamp: str, address: str) -> int:
        """
        Number of flag words in one sample file.

        Raises:
            MalformedSample: If the size is not a multiple of the word size
        """
        size = self.sample_size(timestamp, address)
        if size % WORD_SIZE:
            path = self.sample_path(timestamp, address)
            raise MalformedSample(
                f"sample {path} is {size} bytes, not a multiple of {WORD_SIZE}",
                path=str(path),
            )
        return size // WORD_SIZE

    def read_sample(self, timestamp: str, address: str) -> bytes:
        """Read the raw bytes of one sample file."""
        path = self.sample_path(timestamp, address)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            handle_file_error(e, f"reading sample {path}", logger=logger)
            raise
        logger.debug(f"Read {len(data)} bytes from {path}")
        return data
