class CodecError(Exception):
    """Base class for every failure raised by the codecs"""


class MalformedStream(CodecError):
    """RLE stream with an odd length or a zero run length"""


class InvalidCode(CodecError):
    """LZ code that is neither in the dictionary nor the next code to be assigned"""


class UnsupportedAlgorithm(CodecError):
    """Algorithm tag outside of the supported set"""


class AmbiguousFormat(CodecError):
    """Encoded stream that decodes validly as more than one algorithm"""


class InvalidInputType(CodecError, TypeError):
    """Input is not a byte sequence"""


def ensure_bytes(data, name="data") -> bytes:
    """Return an immutable copy of a bytes-like input or raise InvalidInputType"""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise InvalidInputType(f"{name} must be a byte sequence, got {type(data).__name__}")
