import os
import re
from typing import Dict, List, Optional

import config
from codec import ALGORITHMS, LZ, RLE, decode, normalize_algorithm
from errors import AmbiguousFormat, CodecError


class FileTypeDetector:
    """Picks a codec for a file from its extension, header or content"""

    # Text-like files, long runs of repeated characters are common
    TEXT_EXTENSIONS = {
        '.txt', '.md', '.csv', '.tsv', '.json', '.xml', '.html', '.htm', '.css',
        '.log', '.ini', '.cfg', '.conf', '.yaml', '.yml', '.toml', '.svg',
        '.py', '.js', '.ts', '.c', '.h', '.cpp', '.java', '.rs', '.go', '.sh',
    }

    # Binary files, phrase repetition beats byte runs
    BINARY_EXTENSIONS = {
        '.pdf', '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.tiff', '.webp',
        '.zip', '.gz', '.bz2', '.xz', '.7z', '.tar', '.rar',
        '.exe', '.dll', '.so', '.dylib', '.bin', '.dat', '.o', '.elf',
    }

    MAGIC_HEADERS = {
        b'\x89PNG\r\n\x1a\n': 'PNG',
        b'\xff\xd8\xff': 'JPEG',
        b'GIF87a': 'GIF',
        b'GIF89a': 'GIF',
        b'%PDF': 'PDF',
        b'PK\x03\x04': 'ZIP',
        b'\x1f\x8b\x08': 'GZIP',
        b'\x7fELF': 'ELF',
        b'MZ': 'EXE',
    }

    # Decimal codes separated by commas, nothing else
    LZ_STREAM = re.compile(r"\d+(?:,\d+)*")

    @staticmethod
    def algorithm_for_extension(filename: str) -> Optional[str]:
        _, ext = os.path.splitext(filename.lower())
        if ext in FileTypeDetector.TEXT_EXTENSIONS:
            return RLE
        if ext in FileTypeDetector.BINARY_EXTENSIONS:
            return LZ
        return None

    @staticmethod
    def algorithm_for_content(sample: bytes) -> str:
        for magic in FileTypeDetector.MAGIC_HEADERS:
            if sample.startswith(magic):
                return LZ
        # Plain ASCII reads as text
        if sample.isascii():
            return RLE
        return LZ

    @staticmethod
    def detect_algorithm(filename: Optional[str] = None, sample: Optional[bytes] = None) -> str:
        """
        Choose an algorithm tag for compression.

        The extension wins when it is known, then the content sample is
        checked for magic headers and non-ASCII bytes. Without either the
        configured default is returned.
        """
        if filename:
            algorithm = FileTypeDetector.algorithm_for_extension(filename)
            if algorithm is not None:
                return algorithm

        if sample is not None:
            return FileTypeDetector.algorithm_for_content(bytes(sample[:config.SAMPLE_SIZE]))

        return normalize_algorithm(config.DEFAULT_ALGORITHM)

    @staticmethod
    def algorithm_for_tag(filename: str) -> Optional[str]:
        """Algorithm recorded in a name like "a.txt.rle.compressed" or "a.lz" """
        name = os.path.basename(filename)
        if config.COMPRESSED_SUFFIX and name.endswith(config.COMPRESSED_SUFFIX):
            name = name[:-len(config.COMPRESSED_SUFFIX)]
        _, ext = os.path.splitext(name.lower())
        if ext[1:] in ALGORITHMS:
            return ext[1:]
        return None

    @staticmethod
    def sniff_encoded(text, filename: Optional[str] = None) -> str:
        """
        Work out which codec produced an encoded stream.

        An algorithm tag in the file name wins. Otherwise anything that is not
        digits and commas is RLE. A digits-and-commas stream of even length
        is also a valid RLE stream, so if it decodes as LZ as well the format
        cannot be told and AmbiguousFormat is raised.
        """
        if filename:
            algorithm = FileTypeDetector.algorithm_for_tag(filename)
            if algorithm is not None:
                return algorithm

        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("latin-1")
        if not FileTypeDetector.LZ_STREAM.fullmatch(text):
            return RLE
        # RLE frames are 2 bytes each, and digits or commas are never a zero count
        if len(text) % 2:
            return LZ

        try:
            decode(text, LZ)
        except CodecError:
            return RLE
        raise AmbiguousFormat(
            "encoded data is valid as both RLE and LZ, pass --rle or --lz"
        )

    @staticmethod
    def analyze_files(file_paths: List[str]) -> Dict[str, Dict]:
        results = {}

        for file_path in file_paths:
            try:
                with open(file_path, 'rb') as f:
                    sample = f.read(config.SAMPLE_SIZE)
                results[file_path] = {
                    'extension': os.path.splitext(file_path)[1].lower(),
                    'size': os.path.getsize(file_path),
                    'algorithm': FileTypeDetector.detect_algorithm(file_path, sample),
                }
            except OSError as e:
                results[file_path] = {'error': str(e)}

        return results


detect_algorithm = FileTypeDetector.detect_algorithm
sniff_encoded = FileTypeDetector.sniff_encoded
algorithm_for_tag = FileTypeDetector.algorithm_for_tag
analyze_files = FileTypeDetector.analyze_files
