import numbers

from errors import InvalidCode, InvalidInputType, ensure_bytes

# Codes 0..255 are the seeded single-byte phrases
SEED_SIZE = 256
CODE_SEPARATOR = ","


class LZDictionary:
    """
    Phrase table for a single encode or decode call.

    Codes 0..255 are the single-byte phrases; new phrases get 256, 257, ...
    in insertion order. Entries are never evicted, so the table grows with
    the input (up to one entry per input byte). Callers with very large
    inputs should budget memory for that.
    """

    def __init__(self):
        self.phrases = [bytes((i,)) for i in range(SEED_SIZE)]
        self.codes = {phrase: code for code, phrase in enumerate(self.phrases)}

    @property
    def next_code(self) -> int:
        return len(self.phrases)

    def __len__(self):
        return len(self.phrases)

    def __contains__(self, phrase):
        return phrase in self.codes

    def add(self, phrase: bytes) -> int:
        code = len(self.phrases)
        self.phrases.append(phrase)
        self.codes[phrase] = code
        return code

    def code_of(self, phrase: bytes) -> int:
        return self.codes[phrase]

    def phrase_of(self, code: int) -> bytes:
        if code < 0 or code >= len(self.phrases):
            raise InvalidCode(f"code {code} is not in the dictionary")
        return self.phrases[code]

    def entries(self, start=SEED_SIZE):
        """(code, phrase) pairs from start onwards, learned entries by default"""
        return list(enumerate(self.phrases[start:], start))


def LZ_encoding(data: bytes) -> list:
    data = ensure_bytes(data)
    dictionary = LZDictionary()
    current = b""
    result = []

    for b in data:
        byte = bytes((b,))
        combine = current + byte
        if combine in dictionary:
            current = combine
        else:
            # current is empty only before the first byte, whose phrase is seeded
            result.append(dictionary.code_of(current if current else byte))
            dictionary.add(combine)
            current = byte

    if current:
        result.append(dictionary.code_of(current))

    return result


def _check_code(code):
    # bool is an Integral subclass but never a valid code; numpy integers are fine
    if isinstance(code, bool) or not isinstance(code, numbers.Integral):
        raise InvalidCode(f"code must be an integer, got {code!r}")
    code = int(code)
    if code < 0:
        raise InvalidCode(f"negative code {code}")
    return code


def lz_decode_with_dictionary(codes):
    """Returns: (decoded_bytes, dictionary) with the dictionary as rebuilt by the decoder"""
    if codes is None or isinstance(codes, (str, bytes, bytearray)):
        raise InvalidInputType(f"codes must be a sequence of integers, got {type(codes).__name__}")

    codes = list(codes)
    dictionary = LZDictionary()
    if not codes:
        return b"", dictionary

    # First code can only be a seeded single-byte phrase
    first = _check_code(codes[0])
    if first >= SEED_SIZE:
        raise InvalidCode(f"first code {first} is not a single-byte phrase")

    previous = dictionary.phrase_of(first)
    output = bytearray(previous)

    for position, code in enumerate(codes[1:], start=1):
        code = _check_code(code)

        if code < dictionary.next_code:
            entry = dictionary.phrase_of(code)
        elif code == dictionary.next_code:
            # Encoder emitted the phrase it was defining at the same step
            entry = previous + previous[:1]
        else:
            raise InvalidCode(
                f"code {code} at position {position} is beyond next code {dictionary.next_code}"
            )

        output.extend(entry)
        dictionary.add(previous + entry[:1])
        previous = entry

    return bytes(output), dictionary


def LZ_decoding(codes) -> bytes:
    decoded, _ = lz_decode_with_dictionary(codes)
    return decoded


def format_codes(codes) -> str:
    """Render codes as comma separated decimal text, e.g. "65,66,256" """
    return CODE_SEPARATOR.join(str(_check_code(code)) for code in codes)


def parse_codes(text: str) -> list:
    if not isinstance(text, str):
        raise InvalidInputType(f"code text must be a string, got {type(text).__name__}")
    if text == "":
        return []

    codes = []
    for position, token in enumerate(text.split(CODE_SEPARATOR)):
        digits = token[1:] if token.startswith("-") else token
        # isdigit() also accepts non-ASCII digits, hence the isascii() check
        if not digits or not digits.isascii() or not digits.isdigit():
            raise InvalidCode(f"token {token!r} at position {position} is not a decimal integer")
        # Only canonical renderings, so parse and format agree: no "065", no "-0"
        if digits[0] == "0" and (len(digits) > 1 or token.startswith("-")):
            raise InvalidCode(f"token {token!r} at position {position} is not in canonical form")
        codes.append(int(token))

    return codes
