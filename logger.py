import sys


class Logger:
    def __init__(self, logger_id="codec", verbose=False, stream=None):
        self.logger_id = logger_id
        self.verbose = verbose
        self.stream = stream

    def set_logger_id(self, logger_id):
        self.logger_id = logger_id

    def set_verbose(self, verbose):
        self.verbose = verbose

    def _write(self, prefix, args):
        # stdout carries codec output, so everything goes to stderr
        stream = self.stream if self.stream is not None else sys.stderr
        print(prefix, *args, file=stream)

    def log(self, *args):
        self._write(f"[{self.logger_id}]", args)

    def debug(self, *args):
        if self.verbose:
            self._write(f"[DEBUG][{self.logger_id}]", args)

    def error(self, *args):
        self._write(f"[ERROR][{self.logger_id}]", args)


logger = Logger()
