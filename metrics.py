import time

import numpy as np
import pandas as pd

from codec import ALGORITHM_NAMES, ALGORITHMS, decode, encode, normalize_algorithm, wire_bytes
from errors import ensure_bytes


def calculate_entropy(data) -> float:
    """Calculate Shannon entropy in bits per byte"""
    data = ensure_bytes(data)
    if not data:
        return 0.0

    counts = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=256)
    probabilities = counts[counts > 0] / len(data)
    return float(-(probabilities * np.log2(probabilities)).sum())


def calculate_compression_ratio(original_size, compressed_size) -> float:
    if compressed_size == 0:
        return 0.0
    return original_size / compressed_size


def calculate_space_saved(original_size, compressed_size) -> float:
    """Percentage reduction in size, negative when the output grew"""
    if original_size == 0:
        return 0.0
    return (original_size - compressed_size) / original_size * 100


def compress_with_stats(data, algorithm):
    data = ensure_bytes(data)
    algorithm = normalize_algorithm(algorithm)

    start_time = time.perf_counter()
    encoded = encode(data, algorithm)
    compression_time = time.perf_counter() - start_time

    original_size = len(data)
    compressed_size = len(wire_bytes(encoded))

    return {
        'algorithm': algorithm,
        'original_size': original_size,
        'compressed_size': compressed_size,
        'ratio': calculate_compression_ratio(original_size, compressed_size),
        'space_saved': calculate_space_saved(original_size, compressed_size),
        'time': compression_time,
        'round_trip': decode(encoded, algorithm) == data,
        'data': encoded,
    }


def compare_algorithms(data) -> pd.DataFrame:
    results = []

    for algorithm in ALGORITHMS:
        stats = compress_with_stats(data, algorithm)
        results.append({
            "Algorithm": ALGORITHM_NAMES[algorithm],
            "Size (bytes)": stats['compressed_size'],
            "Ratio": round(stats['ratio'], 2),
            "Space Saved (%)": round(stats['space_saved'], 1),
            "Time (s)": round(stats['time'], 4),
            "Round Trip": stats['round_trip'],
        })

    return pd.DataFrame(results)
