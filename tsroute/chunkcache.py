"""On-disk cache of data tiles keyed by feature and tile bounds."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import List, Sequence

from tsroute.geometry import Point2
from tsroute.log import LogLevel, log_message
from tsroute.meshio import (
    load_contours_from_file,
    load_tin_from_file,
    write_contours_to_file,
    write_tin_to_file,
)
from tsroute.tin import Tin

CACHE_DIR = "./tsrCache"

_MASK = (1 << 64) - 1
_MIX_MULTIPLIER = 0xE9846AF9B1A615D
_GOLDEN = 0x9E3779B9


@dataclass(frozen=True)
class ChunkInfo:
    """Bounds of a tile in latitude and longitude degrees."""

    min_lat: float
    min_lng: float
    max_lat: float
    max_lng: float


def _mix(x: int) -> int:
    x ^= x >> 32
    x = (x * _MIX_MULTIPLIER) & _MASK
    x ^= x >> 32
    x = (x * _MIX_MULTIPLIER) & _MASK
    x ^= x >> 28
    return x


def _hash_float(value: float) -> int:
    if value == 0:
        return 0
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def generate_chunk_id(chunk: ChunkInfo) -> str:
    """Return a stable name ``chunk_<n>`` derived from the tile bounds."""
    seed = 0
    for value in (chunk.min_lat, chunk.min_lng, chunk.max_lat, chunk.max_lng):
        seed = _mix((seed + _GOLDEN + _hash_float(float(value))) & _MASK)
    return f"chunk_{seed}"


def get_chunk_filepath(feature_id: str, chunk: ChunkInfo, cache_dir: str = CACHE_DIR) -> str:
    """Return the cache file of a tile, creating the feature's directory if needed."""
    directory = os.path.join(cache_dir, feature_id)
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError:
        log_message(LogLevel.WARN, __file__, 0, "failed to create cache directory")
    return os.path.join(directory, generate_chunk_id(chunk))


def is_chunk_cached(feature_id: str, chunk: ChunkInfo, cache_dir: str = CACHE_DIR) -> bool:
    """Whether the tile has a cache file."""
    return os.path.exists(get_chunk_filepath(feature_id, chunk, cache_dir))


def cache_tin(feature_id: str, chunk: ChunkInfo, tin: Tin, cache_dir: str = CACHE_DIR) -> bool:
    """Store a triangulation for the tile; return False if it could not be written."""
    filepath = get_chunk_filepath(feature_id, chunk, cache_dir)
    log_message(LogLevel.TRACE, __file__, 0, f"caching to: {filepath}")
    return write_tin_to_file(filepath, tin)


def cache_contours(
    feature_id: str,
    chunk: ChunkInfo,
    contours: Sequence[Sequence[Point2]],
    cache_dir: str = CACHE_DIR,
) -> None:
    """Store contours for the tile."""
    filepath = get_chunk_filepath(feature_id, chunk, cache_dir)
    log_message(LogLevel.TRACE, __file__, 0, f"caching contours to: {filepath}")
    write_contours_to_file(filepath, contours)


def load_cached_tin(feature_id: str, chunk: ChunkInfo, cache_dir: str = CACHE_DIR) -> Tin:
    """Load the tile's cached triangulation. Raises OSError if it is not cached."""
    return load_tin_from_file(get_chunk_filepath(feature_id, chunk, cache_dir))


def load_cached_contours(
    feature_id: str, chunk: ChunkInfo, cache_dir: str = CACHE_DIR
) -> List[List[Point2]]:
    """Load the tile's cached contours. Raises OSError if they are not cached."""
    return load_contours_from_file(get_chunk_filepath(feature_id, chunk, cache_dir))


def delete_chunk_from_cache(feature_id: str, chunk: ChunkInfo, cache_dir: str = CACHE_DIR) -> None:
    """Remove the tile's cache file if there is one."""
    filepath = get_chunk_filepath(feature_id, chunk, cache_dir)
    if os.path.exists(filepath):
        os.remove(filepath)