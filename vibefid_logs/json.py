from vibefid_logs.base import Logger, utc_timestamp
import json


class JSONLogger(Logger):

    def _log(self, level, msg, data):
        print(json.dumps({
            "ts": utc_timestamp(),
            "log_type": self.log_type,
            "level": level,
            "event": msg,
            "data": data
        }, default=str))
