from errors import InvalidCode, InvalidInputType, MalformedStream, UnsupportedAlgorithm, ensure_bytes
from lz import LZ_decoding, LZ_encoding, format_codes, parse_codes
from rle import run_length_decoding, run_length_encoding

RLE = "rle"
LZ = "lz"
ALGORITHMS = (RLE, LZ)

ALGORITHM_NAMES = {
    RLE: "Run-Length Encoding (RLE)",
    LZ: "Lempel-Ziv (LZ78)",
}


def normalize_algorithm(algorithm) -> str:
    """Map "RLE", "--rle", " lz " and friends to a tag in ALGORITHMS"""
    if not isinstance(algorithm, str):
        raise UnsupportedAlgorithm(f"algorithm must be one of {', '.join(ALGORITHMS)}, got {algorithm!r}")

    tag = algorithm.strip().lower()
    if tag.startswith("--"):
        tag = tag[2:]
    if tag not in ALGORITHMS:
        raise UnsupportedAlgorithm(f"unsupported algorithm {algorithm!r}, use one of {', '.join(ALGORITHMS)}")
    return tag


def wire_text(data) -> str:
    """Bytes read from a file to wire text, one character per byte"""
    return ensure_bytes(data).decode("latin-1")


def wire_bytes(text: str) -> bytes:
    """Wire text to bytes for writing to a file"""
    if not isinstance(text, str):
        raise InvalidInputType(f"wire text must be a string, got {type(text).__name__}")
    return text.encode("latin-1")


def encode(data: bytes, algorithm=RLE) -> str:
    algorithm = normalize_algorithm(algorithm)
    data = ensure_bytes(data)

    if algorithm == RLE:
        return wire_text(run_length_encoding(data))
    return format_codes(LZ_encoding(data))


def decode(text, algorithm=RLE) -> bytes:
    algorithm = normalize_algorithm(algorithm)

    if isinstance(text, (bytes, bytearray, memoryview)):
        text = wire_text(text)
    elif not isinstance(text, str):
        raise InvalidInputType(f"encoded input must be text or bytes, got {type(text).__name__}")

    if algorithm == RLE:
        try:
            stream = text.encode("latin-1")
        except UnicodeEncodeError as e:
            raise MalformedStream(f"RLE stream holds a character outside 0..255 at offset {e.start}") from e
        return run_length_decoding(stream)

    if not text.isascii():
        raise InvalidCode("LZ code stream must be ASCII text")
    return LZ_decoding(parse_codes(text))
