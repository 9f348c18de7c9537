import sys
from logging import WARN, Formatter, Handler, LogRecord, getLogger

log = getLogger("gcstring")


class _Handler(Handler):
    """
    WARN and below -> stdout, ERROR and above -> stderr
    """

    def emit(self, record: LogRecord) -> None:
        stream = sys.stdout if record.levelno <= WARN else sys.stderr
        try:
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


_log = _Handler()
_log.setFormatter(Formatter("%(name)s :: %(levelname)s :: %(message)s"))

log.addHandler(_log)
log.setLevel(WARN)
