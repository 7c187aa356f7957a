from vibefid_logs.stdout import StdoutLogger
from vibefid_logs.file import FileLogger
from vibefid_logs.json import JSONLogger
from vibefid_logs.composite import CompositeLogger
from vibefid_server import config


def get_logger(mode="dev", log_type="server", level=None):
    level = level or config.LOG_LEVEL
    if mode == "prod":
        return CompositeLogger(
            FileLogger(log_type=log_type, base_path=config.LOG_DIR, min_level=level),
            JSONLogger(log_type=log_type, min_level=level)
        )
    return StdoutLogger(log_type=log_type, min_level=level)
