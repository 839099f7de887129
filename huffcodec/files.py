import logging
import time
from typing import Dict, Optional, Tuple

from .container import compress_with_stats, decompress, is_compressed, read_header
from .settings import ALREADY_COMPRESSED_EXTS, COMPRESSED_SUFFIX
from .tree import HuffmanTree

logger = logging.getLogger(__name__)


def read_file_bytes(path: str) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def _skipped(src: str, dst: str, original_bytes: int, note: str, t0: float, t_read: float,
             unique_symbols: int = 0) -> Dict[str, object]:
    logger.info("Skipping %s: %s", src, note)
    return {
        "input": src,
        "output": dst,
        "original_bytes": original_bytes,
        "compressed_bytes": original_bytes,
        "unique_symbols": unique_symbols,
        "pad_count": None,
        "compression_ratio": 1.0,
        "space_saved_percent": 0.0,
        "bit_ratio": None,
        "skipped": True,
        "note": note,
        "time_read": t_read - t0,
        "time_total": time.perf_counter() - t0,
    }


def compress_file(src: str, dst: str) -> Tuple[Optional[HuffmanTree], Dict[str, object]]:
    """
    Returns (tree, stats). If compression is skipped (already compressed type, .huff,
    or compression would not shrink the file), nothing is written to ``dst``,
    the tree is None, and stats['skipped'] is True with stats['note'] explaining why.
    """
    src_str = str(src).strip().lower()

    t0 = time.perf_counter()
    raw = read_file_bytes(src)
    t_read = time.perf_counter()
    original_bytes = len(raw)

    # 1) Already in our format?
    if is_compressed(raw) or src_str.endswith(COMPRESSED_SUFFIX):
        return None, _skipped(src, dst, original_bytes,
                              "Input file is already in .huff format (double-compression prevented).",
                              t0, t_read)

    # 2) Already compressed file type?
    if any(src_str.endswith(ext) for ext in ALREADY_COMPRESSED_EXTS):
        return None, _skipped(src, dst, original_bytes,
                              "This file type is likely already compressed (skipped compression).",
                              t0, t_read)

    blob, tree, core = compress_with_stats(raw)
    t_pack = time.perf_counter()

    # 3) Would the container be larger than what we started with?
    if original_bytes > 0 and len(blob) >= original_bytes:
        return None, _skipped(src, dst, original_bytes,
                              "Compression cannot reduce the size of this file.",
                              t0, t_read, unique_symbols=core["unique_symbols"])

    with open(dst, 'wb') as out:
        out.write(blob)
    t_write = time.perf_counter()

    if original_bytes > 0:
        compression_ratio = len(blob) / original_bytes
        space_saved_percent = ((original_bytes - len(blob)) / original_bytes) * 100.0
    else:
        compression_ratio = None
        space_saved_percent = None

    stats = {
        "input": src,
        "output": dst,
        "original_bytes": original_bytes,
        "compressed_bytes": len(blob),
        "tree_bytes": core["tree_bytes"],
        "unique_symbols": core["unique_symbols"],
        "pad_count": core["pad_count"],
        "compression_ratio": compression_ratio,
        "space_saved_percent": space_saved_percent,
        "bit_ratio": core["bit_ratio"],
        "skipped": False,
        "note": None,
        "time_read": t_read - t0,
        "time_tree_build": core["time_tree_build"],
        "time_pack": core["time_pack"],
        "time_serialize": core["time_serialize"],
        "time_write": t_write - t_pack,
        "time_total": t_write - t0,
    }
    logger.info("Compressed %s (%dB) -> %s (%dB)", src, original_bytes, dst, len(blob))
    return tree, stats


def decompress_file(src: str, dst: str) -> Dict[str, object]:
    t0 = time.perf_counter()
    raw = read_file_bytes(src)
    t_read = time.perf_counter()

    header = read_header(raw)
    decoded = decompress(raw)
    t_decode = time.perf_counter()

    with open(dst, 'wb') as f:
        f.write(decoded)
    t_write = time.perf_counter()

    stats = {
        "input_huff": src,
        "output": dst,
        "compressed_size": len(raw),
        "restored_size": len(decoded),
        "pad_count": header.pad_count,
        "time_read": t_read - t0,
        "time_decode": t_decode - t_read,
        "time_write": t_write - t_decode,
        "time_total": t_write - t0,
    }
    logger.info("Decompressed %s (%dB) -> %s (%dB)", src, len(raw), dst, len(decoded))
    return stats

