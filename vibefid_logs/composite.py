from vibefid_logs.base import Logger


class CompositeLogger(Logger):
    """Fans every event out to several loggers; each applies its own level."""

    def __init__(self, *loggers: Logger):
        log_type = loggers[0].log_type if loggers else "server"
        super().__init__(log_type=log_type)
        self.loggers = loggers

    def _log(self, level, msg, data):
        for l in self.loggers:
            l._emit(level, msg, data)
