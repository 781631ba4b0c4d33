from sysoutlogger.processing.logger_arguments import PLACEHOLDER, LoggerArgumentProcessor

__all__ = ["PLACEHOLDER", "LoggerArgumentProcessor"]
