import argparse
import glob
import os
import sys

import pandas as pd

import config
from codec import ALGORITHM_NAMES, LZ, RLE, decode, encode, wire_bytes, wire_text
from errors import CodecError
from file_detector import algorithm_for_tag, analyze_files, detect_algorithm, sniff_encoded
from logger import logger

COMPRESS = "compress"
DECOMPRESS = "decompress"
ANALYZE = "analyze"

EXAMPLES = """\
examples:
  rle-lz compress input.txt output.txt --rle
  rle-lz compress input.txt compressed_files
  rle-lz decompress compressed_files/input.txt.rle.compressed restored
  rle-lz compress "*.txt" compressed_files --rle
  rle-lz decompress "out/**/*.compressed" restored
  rle-lz analyze "docs/**/*"
  echo "Hello World" | rle-lz compress --rle > output.bin
  rle-lz decompress output.bin --rle

Without --rle/--lz, compress picks RLE for text files and LZ for binary
files. Files written into a directory are named <name>.<algorithm>.compressed
so that decompress can tell the algorithm from the name; otherwise it looks
at the content and fails when the data is valid for both algorithms.
When the input is a glob pattern the output must be a directory.
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rle-lz",
        description="Compress or decompress files with Run-Length Encoding (RLE) or Lempel-Ziv (LZ78).",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("operation", choices=[COMPRESS, DECOMPRESS, ANALYZE],
                        help="operation to perform, analyze shows the algorithm picked for each file")
    parser.add_argument("input", nargs="?",
                        help="input file or glob pattern, stdin when omitted")
    parser.add_argument("output", nargs="?",
                        help="output file or directory, stdout when omitted")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--rle", dest="algorithm", action="store_const", const=RLE,
                       help="use Run-Length Encoding")
    group.add_argument("--lz", dest="algorithm", action="store_const", const=LZ,
                       help="use Lempel-Ziv (LZ78)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log progress details")
    return parser


def is_glob(pattern):
    return any(ch in pattern for ch in "*?[")


def expand(pattern):
    return sorted(path for path in glob.glob(pattern, recursive=True) if os.path.isfile(path))


def process(operation, data, algorithm=None, filename=None):
    """Returns: (output_bytes, algorithm used)"""
    if operation == COMPRESS:
        if algorithm is None:
            algorithm = detect_algorithm(filename, data)
            logger.log(f"Auto-detected algorithm: {ALGORITHM_NAMES[algorithm]}")
        return wire_bytes(encode(data, algorithm)), algorithm

    text = wire_text(data)
    if algorithm is None:
        algorithm = sniff_encoded(text, filename)
        logger.log(f"Auto-detected algorithm: {ALGORITHM_NAMES[algorithm]}")
    return decode(text, algorithm), algorithm


def output_name(operation, input_path, algorithm=None):
    """Compressed files carry the algorithm: a.txt -> a.txt.rle.compressed"""
    name = os.path.basename(input_path)
    if operation == COMPRESS:
        return f"{name}.{algorithm}{config.COMPRESSED_SUFFIX}"

    tagged = algorithm_for_tag(name) is not None
    if config.COMPRESSED_SUFFIX and name.endswith(config.COMPRESSED_SUFFIX):
        name = name[:-len(config.COMPRESSED_SUFFIX)]
    elif not tagged:
        return os.path.splitext(name)[0] + config.DECOMPRESSED_SUFFIX
    if tagged:
        name = os.path.splitext(name)[0]
    return name


def process_file(operation, input_path, output, algorithm=None):
    """Write to output, or into it when output is a directory"""
    with open(input_path, "rb") as f:
        data = f.read()

    result, used = process(operation, data, algorithm, filename=input_path)

    output_path = output
    if os.path.isdir(output):
        output_path = os.path.join(output, output_name(operation, input_path, used))

    with open(output_path, "wb") as f:
        f.write(result)

    logger.debug(f"{input_path} -> {output_path}: {len(data):,} B -> {len(result):,} B")
    return output_path, used


def process_batch(operation, pattern, output_dir, algorithm=None):
    files = expand(pattern)
    if not files:
        logger.error(f"No files match {pattern!r}")
        return 1

    os.makedirs(output_dir, exist_ok=True)

    failures = 0
    for input_path in files:
        try:
            output_path, used = process_file(operation, input_path, output_dir, algorithm)
            logger.log(f"{operation.capitalize()}ed {input_path} -> {output_path} using {ALGORITHM_NAMES[used]}")
        except (CodecError, OSError) as e:
            logger.error(f"{input_path}: {e}")
            failures += 1

    logger.log(f"Processed {len(files) - failures} of {len(files)} files")
    return 1 if failures else 0


def analyze(pattern):
    files = expand(pattern) if is_glob(pattern) else [pattern]
    if not files:
        logger.error(f"No files match {pattern!r}")
        return 1

    results = analyze_files(files)
    table = pd.DataFrame.from_dict(results, orient="index")
    print(table.to_string())

    return 1 if any('error' in info for info in results.values()) else 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logger.set_logger_id(config.LOG_ID)
    logger.set_verbose(args.verbose or config.VERBOSE)

    try:
        if args.operation == ANALYZE:
            if not args.input:
                logger.error("analyze needs a file or glob pattern")
                return 1
            return analyze(args.input)

        if args.input and is_glob(args.input):
            if not args.output:
                logger.error("Output directory is required when the input is a glob pattern")
                return 1
            if os.path.isfile(args.output):
                logger.error(f"Output {args.output!r} must be a directory for glob patterns")
                return 1
            return process_batch(args.operation, args.input, args.output, args.algorithm)

        if args.input and args.output:
            _, used = process_file(args.operation, args.input, args.output, args.algorithm)
            logger.log(f"Operation completed successfully using {ALGORITHM_NAMES[used]}")
            return 0

        if args.input:
            with open(args.input, "rb") as f:
                data = f.read()
        else:
            data = sys.stdin.buffer.read()

        result, _ = process(args.operation, data, args.algorithm, filename=args.input)
        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()

    except (CodecError, OSError) as e:
        logger.error(e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
