import logging
import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "ballou-gateway"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def __init__(self, *args, service: str = SERVICE_NAME, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('service'):
            log_record['service'] = self.service
        if not log_record.get('level'):
            log_record['level'] = record.levelname
        if not log_record.get('timestamp'):
            log_record['timestamp'] = self.formatTime(record, self.datefmt)
        if 'message' not in log_record:
            log_record['message'] = record.getMessage()

        if hasattr(record, 'provider'):
            log_record['provider'] = record.provider
        if hasattr(record, 'status_code'):
            log_record['status_code'] = record.status_code


def setup_logging(level: str = "INFO", stream=None, service: str = SERVICE_NAME) -> logging.Handler:
    logger = logging.getLogger()
    logger.setLevel(level)

    # Drop handlers installed by a previous call so records are not duplicated
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        CustomJsonFormatter('%(timestamp)s %(level)s %(service)s %(message)s', service=service)
    )
    logger.addHandler(handler)
    return handler
