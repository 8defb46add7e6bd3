import pytest
import io
import os
import sys

module_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, module_path)

import cli
from codec import LZ, RLE, encode, wire_bytes


@pytest.fixture
def text_file(tmp_path):
    """Fixture for a small text file with long runs."""
    path = tmp_path / "input.txt"
    path.write_bytes(b"AAAABBBCCDAA")
    return path


def fake_stdin(monkeypatch, data):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


def test_compress_and_decompress_file(tmp_path, text_file):
    compressed = tmp_path / "out.compressed"
    restored = tmp_path / "restored.txt"

    assert cli.main(["compress", str(text_file), str(compressed), "--rle"]) == 0
    assert compressed.read_bytes() == b"A\x04B\x03C\x02D\x01A\x02"

    assert cli.main(["decompress", str(compressed), str(restored), "--rle"]) == 0
    assert restored.read_bytes() == b"AAAABBBCCDAA"


def test_lz_file_round_trip(tmp_path, text_file):
    compressed = tmp_path / "out.lz"
    restored = tmp_path / "restored.txt"

    assert cli.main(["compress", str(text_file), str(compressed), "--lz"]) == 0
    assert compressed.read_bytes() == wire_bytes(encode(b"AAAABBBCCDAA", LZ))

    # No flag: the digits-and-commas stream is recognised as LZ
    assert cli.main(["decompress", str(compressed), str(restored)]) == 0
    assert restored.read_bytes() == b"AAAABBBCCDAA"


def test_auto_detect_on_compress(tmp_path, capsys):
    binary = tmp_path / "image.png"
    binary.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 10)
    output = tmp_path / "image.out"

    assert cli.main(["compress", str(binary), str(output)]) == 0
    assert output.read_bytes() == wire_bytes(encode(binary.read_bytes(), LZ))
    assert "Lempel-Ziv" in capsys.readouterr().err


def test_stdin_to_stdout(monkeypatch, capsysbinary):
    fake_stdin(monkeypatch, b"ZZZZ")

    assert cli.main(["compress", "--rle"]) == 0
    assert capsysbinary.readouterr().out == b"Z\x04"


def test_decompress_stdin_to_stdout(monkeypatch, capsysbinary):
    fake_stdin(monkeypatch, b"65,256,65")

    assert cli.main(["decompress", "--lz"]) == 0
    assert capsysbinary.readouterr().out == b"AAAA"


def test_glob_batch(tmp_path):
    src = tmp_path / "src"
    (src / "nested").mkdir(parents=True)
    (src / "a.txt").write_bytes(b"aaaa")
    (src / "nested" / "b.txt").write_bytes(b"bbbbbb")
    (src / "skip.bin").write_bytes(b"\x00")
    out_dir = tmp_path / "out"

    pattern = str(src / "**" / "*.txt")
    assert cli.main(["compress", pattern, str(out_dir), "--rle"]) == 0
    assert (out_dir / "a.txt.rle.compressed").read_bytes() == b"a\x04"
    assert (out_dir / "b.txt.rle.compressed").read_bytes() == b"b\x06"
    assert not (out_dir / "skip.bin.rle.compressed").exists()

    restored = tmp_path / "restored"
    assert cli.main(["decompress", str(out_dir / "*.compressed"), str(restored)]) == 0
    assert (restored / "a.txt").read_bytes() == b"aaaa"
    assert (restored / "b.txt").read_bytes() == b"bbbbbb"


def test_glob_requires_output_directory(tmp_path, text_file):
    assert cli.main(["compress", str(tmp_path / "*.txt")]) == 1
    assert cli.main(["compress", str(tmp_path / "*.txt"), str(text_file)]) == 1


def test_glob_without_matches(tmp_path):
    assert cli.main(["compress", str(tmp_path / "*.nothing"), str(tmp_path / "out")]) == 1


def test_batch_reports_failures(tmp_path):
    (tmp_path / "good.compressed").write_bytes(b"a\x02")
    (tmp_path / "bad.compressed").write_bytes(b"a\x02b")

    restored = tmp_path / "restored"
    assert cli.main(["decompress", str(tmp_path / "*.compressed"), str(restored), "--rle"]) == 1
    assert (restored / "good").read_bytes() == b"aa"


def test_malformed_input_exits_non_zero(tmp_path, capsys):
    bad = tmp_path / "bad.compressed"
    bad.write_bytes(b"A\x04B")

    assert cli.main(["decompress", str(bad), str(tmp_path / "out"), "--rle"]) == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_invalid_lz_code_exits_non_zero(monkeypatch):
    fake_stdin(monkeypatch, b"65,9999")
    assert cli.main(["decompress", "--lz"]) == 1


def test_missing_input_file(tmp_path):
    assert cli.main(["compress", str(tmp_path / "missing.txt"), str(tmp_path / "out")]) == 1


def test_conflicting_flags():
    with pytest.raises(SystemExit):
        cli.main(["compress", "--rle", "--lz"])


@pytest.mark.parametrize("operation, name, algorithm, expected", [
    (cli.COMPRESS, "dir/a.txt", RLE, "a.txt.rle.compressed"),
    (cli.COMPRESS, "dir/a.png", LZ, "a.png.lz.compressed"),
    (cli.DECOMPRESS, "dir/a.txt.rle.compressed", None, "a.txt"),
    (cli.DECOMPRESS, "dir/a.txt.compressed", None, "a.txt"),
    (cli.DECOMPRESS, "dir/a.lz", None, "a"),
    (cli.DECOMPRESS, "dir/a.bin", None, "a.txt"),
])
def test_output_name(operation, name, algorithm, expected):
    assert cli.output_name(operation, name, algorithm) == expected


def test_auto_detected_digits_round_trip(tmp_path):
    """49 '1' bytes encode as RLE b"11", which is also the LZ stream [11]."""
    source = tmp_path / "digits.txt"
    source.write_bytes(b"1" * 49)
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    restored = tmp_path / "restored"
    restored.mkdir()

    assert cli.main(["compress", str(source), str(out_dir)]) == 0
    compressed = out_dir / "digits.txt.rle.compressed"
    assert compressed.read_bytes() == b"11"

    assert cli.main(["decompress", str(compressed), str(restored)]) == 0
    assert (restored / "digits.txt").read_bytes() == b"1" * 49


def test_ambiguous_stream_is_an_error(tmp_path, capsys):
    source = tmp_path / "digits.txt"
    source.write_bytes(b"1" * 49)
    compressed = tmp_path / "digits.out"
    restored = tmp_path / "restored.txt"

    assert cli.main(["compress", str(source), str(compressed)]) == 0
    assert cli.main(["decompress", str(compressed), str(restored)]) == 1
    assert not restored.exists()
    assert "valid as both RLE and LZ" in capsys.readouterr().err

    # an explicit flag settles it
    assert cli.main(["decompress", str(compressed), str(restored), "--rle"]) == 0
    assert restored.read_bytes() == b"1" * 49


def test_ambiguous_stdin_is_an_error(monkeypatch, capsysbinary):
    fake_stdin(monkeypatch, b"11")
    assert cli.main(["decompress"]) == 1
    assert capsysbinary.readouterr().out == b""


def test_analyze(tmp_path, capsys):
    (tmp_path / "a.txt").write_bytes(b"hello")
    (tmp_path / "b.png").write_bytes(b"\x89PNG\r\n\x1a\n")

    assert cli.main(["analyze", str(tmp_path / "*")]) == 0
    out = capsys.readouterr().out
    assert "a.txt" in out and "b.png" in out
    assert "rle" in out and "lz" in out


def test_analyze_missing_file(tmp_path):
    assert cli.main(["analyze", str(tmp_path / "missing.txt")]) == 1
    assert cli.main(["analyze"]) == 1


def test_process_returns_algorithm():
    assert cli.process(cli.COMPRESS, b"AAAA", RLE) == (b"A\x04", RLE)
    assert cli.process(cli.DECOMPRESS, b"65,256,65") == (b"AAAA", LZ)
