from errors import MalformedStream, ensure_bytes

# Longest run one (value, count) pair can carry
MAX_RUN_LENGTH = 255


def iter_runs(data: bytes):
    """Yield (value, run length) tokens, splitting runs longer than 255"""
    data = ensure_bytes(data)
    if not data:
        return

    prev = data[0]
    count = 1

    for b in data[1:]:
        if b == prev and count < MAX_RUN_LENGTH:
            count += 1
        else:
            yield prev, count
            prev = b
            count = 1

    # last run, count is always >= 1 here
    yield prev, count


def run_length_encoding(data: bytes) -> bytes:
    """
    Encode data as (byte value, run length) pairs, 2 bytes per pair.
    Run lengths are in 1..255.
    """
    output = bytearray()

    for value, count in iter_runs(data):
        output.append(value)     # repeated byte
        output.append(count)     # run length

    return bytes(output)


def run_length_decoding(data: bytes) -> bytes:
    data = ensure_bytes(data)
    if not data:
        return b""

    if len(data) % 2 != 0:
        raise MalformedStream(f"RLE stream length must be even, got {len(data)} bytes")

    output = bytearray()

    for i in range(0, len(data), 2):
        value = data[i]          # repeated byte
        count = data[i + 1]      # run length

        if count == 0:
            raise MalformedStream(f"zero run length at offset {i + 1}")

        output.extend(bytes((value,)) * count)

    return bytes(output)
