from vibefid_logs.chooseLogType import get_logger
from vibefid_server import config

server_logger = get_logger(mode=config.ENV, log_type="server")
mint_logger = get_logger(mode=config.ENV, log_type="mint")
metadata_logger = get_logger(mode=config.ENV, log_type="metadata")
