"""Shared behavior for classes that log on behalf of a caller."""

import logging


class LoggerMixin:
    """Adds a replaceable logger and verbose-aware info logging."""

    def __init__(self, verbose: bool = False) -> None:
        self.logger: logging.Logger = logging.getLogger(
            self.__class__.__module__
        )
        self.verbose = verbose

    def _set_logger(self, logger: logging.Logger | None) -> None:
        """Use the supplied logger for diagnostics, if one is given."""
        if logger is not None:
            self.logger = logger

    def _log_verbose_info(self, message: str, *args: object) -> None:
        """Log at INFO when verbose, otherwise at DEBUG."""
        if self.verbose:
            self.logger.info(message, *args)
        else:
            self.logger.debug(message, *args)
