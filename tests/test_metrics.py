import pytest
import os
import sys

module_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, module_path)

from codec import LZ, RLE
from errors import UnsupportedAlgorithm
from metrics import (
    calculate_compression_ratio,
    calculate_entropy,
    calculate_space_saved,
    compare_algorithms,
    compress_with_stats,
)


def test_entropy():
    assert calculate_entropy(b"") == 0.0
    assert calculate_entropy(b"AAAA") == 0.0
    assert calculate_entropy(b"ABAB") == pytest.approx(1.0)
    assert calculate_entropy(bytes(range(256))) == pytest.approx(8.0)


def test_ratio_and_savings():
    assert calculate_compression_ratio(100, 25) == 4.0
    assert calculate_compression_ratio(100, 0) == 0.0
    assert calculate_space_saved(100, 25) == 75.0
    assert calculate_space_saved(0, 10) == 0.0
    assert calculate_space_saved(10, 20) == -100.0


def test_compress_with_stats_rle():
    stats = compress_with_stats(b"A" * 100, "RLE")
    assert stats['algorithm'] == RLE
    assert stats['original_size'] == 100
    assert stats['compressed_size'] == 2
    assert stats['ratio'] == 50.0
    assert stats['round_trip'] is True
    assert stats['data'] == "A\x64"
    assert stats['time'] >= 0


def test_compress_with_stats_lz():
    stats = compress_with_stats(b"AAAA", LZ)
    assert stats['data'] == "65,256,65"
    assert stats['compressed_size'] == len("65,256,65")
    assert stats['round_trip'] is True


def test_compress_with_stats_rejects_unknown_algorithm():
    with pytest.raises(UnsupportedAlgorithm):
        compress_with_stats(b"A", "zip")


def test_compare_algorithms():
    df = compare_algorithms(b"ABABABABABAB" * 10)
    assert list(df["Algorithm"]) == ["Run-Length Encoding (RLE)", "Lempel-Ziv (LZ78)"]
    assert list(df.columns) == ["Algorithm", "Size (bytes)", "Ratio", "Space Saved (%)", "Time (s)", "Round Trip"]
    assert df["Round Trip"].all()
    assert df.loc[0, "Size (bytes)"] == 240
