from .log_helpers import LOG_FMT, basic_log_config, enable_debug_logging, suppress_logs

__all__ = [
    "LOG_FMT",
    "basic_log_config",
    "enable_debug_logging",
    "suppress_logs",
]
