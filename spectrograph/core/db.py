"""
spectrograph/core/db.py — Linear magnitude → relative decibels with a noise floor.

Algorithm (two passes, the second depends on a global result of the first):
    1. ref = max(values); offset = 10·log10(max(1e-10, ref²))
       db  = 10·log10(max(1e-10, v²)) − offset           (0 dB = loudest bin)
    2. floor = max(db) − 80; every value clamped to ≥ floor

The 80 dB window is an empirical display range, not a physical constant.

With ``workers > 1`` each pass is a chunked map-reduce over a thread pool.
The clamp never uses a chunk-local max: pass 2 starts only after every
chunk of pass 1 has reported.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np

_EPS = 1e-10  # small value to prevent log(0)

DB_FLOOR_RANGE: float = 80.0
"""Dynamic range kept below the loudest value, in dB."""

_CHUNK_SIZE = 65_536  # values per map-reduce chunk


def _amp_to_db(values: np.ndarray, offset: float) -> np.ndarray:
    return 10.0 * np.log10(np.maximum(_EPS, np.square(values, dtype=np.float64))) - offset


def _offset(ref: float) -> float:
    return 10.0 * float(np.log10(max(_EPS, ref * ref)))


def to_db(values: np.ndarray, *, workers: int = 1) -> np.ndarray:
    """Convert linear magnitudes to dB relative to the maximum, floored at -80 dB.

    Args:
        values: Magnitudes, any shape. Not modified.
        workers: Threads used for the chunked passes. 1 = synchronous.

    Returns:
        float32 array with the same shape as `values`. Empty input returns
        an empty array.
    """
    src = np.asarray(values, dtype=np.float32)
    if src.size == 0:
        return src.copy()

    if workers <= 1 or src.size <= _CHUNK_SIZE:
        db = _amp_to_db(src, _offset(float(src.max())))
        return np.maximum(db, db.max() - DB_FLOOR_RANGE).astype(np.float32)

    flat = src.reshape(-1)
    out = np.empty(flat.shape, dtype=np.float32)
    bounds = [(i, min(i + _CHUNK_SIZE, flat.size)) for i in range(0, flat.size, _CHUNK_SIZE)]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        # pass 1a: global reference
        ref = max(pool.map(lambda b: float(flat[b[0] : b[1]].max()), bounds))
        offset = _offset(ref)

        def convert(b: tuple[int, int]) -> float:
            chunk = _amp_to_db(flat[b[0] : b[1]], offset)
            out[b[0] : b[1]] = chunk
            return float(chunk.max())

        # pass 1b: convert + chunk maxima; list() is the barrier
        log_spec_max = max(list(pool.map(convert, bounds)))
        floor = np.float32(log_spec_max - DB_FLOOR_RANGE)

        def clamp(b: tuple[int, int]) -> None:
            np.maximum(out[b[0] : b[1]], floor, out=out[b[0] : b[1]])

        # pass 2: clamp against the global max
        list(pool.map(clamp, bounds))

    return out.reshape(src.shape)
