import os

from logger import logger

DEFAULTS = {
    'default_algorithm': "rle",
    'sample_size': 1024,
    'compressed_suffix': ".compressed",
    'decompressed_suffix': ".txt",
    'log_id': "codec",
    'verbose': False,
}


def _flag(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_config(environ=None):
    """Read the overridable defaults from environ (os.environ by default)"""
    if environ is None:
        environ = os.environ

    sample_size = environ.get("CODEC_SAMPLE_SIZE", str(DEFAULTS['sample_size']))
    try:
        sample_size = int(sample_size)
    except ValueError:
        raise ValueError(f"CODEC_SAMPLE_SIZE must be an integer, got {sample_size!r}")
    if sample_size <= 0:
        raise ValueError("CODEC_SAMPLE_SIZE must be positive")

    return {
        'default_algorithm': environ.get("CODEC_DEFAULT_ALGORITHM", DEFAULTS['default_algorithm']).strip().lower(),
        'sample_size': sample_size,
        'compressed_suffix': environ.get("CODEC_COMPRESSED_SUFFIX", DEFAULTS['compressed_suffix']),
        'decompressed_suffix': environ.get("CODEC_DECOMPRESSED_SUFFIX", DEFAULTS['decompressed_suffix']),
        'log_id': environ.get("CODEC_LOG_ID", DEFAULTS['log_id']),
        'verbose': _flag(environ.get("CODEC_VERBOSE", "0")),
    }


def load_config_or_defaults(environ=None):
    """Like load_config, but a bad override is reported and the defaults are used"""
    try:
        return load_config(environ)
    except ValueError as e:
        logger.error(f"Ignoring environment overrides: {e}")
        return dict(DEFAULTS)


_config = load_config_or_defaults()

DEFAULT_ALGORITHM = _config['default_algorithm']
SAMPLE_SIZE = _config['sample_size']
COMPRESSED_SUFFIX = _config['compressed_suffix']
DECOMPRESSED_SUFFIX = _config['decompressed_suffix']
LOG_ID = _config['log_id']
VERBOSE = _config['verbose']
