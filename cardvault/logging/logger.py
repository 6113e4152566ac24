import logging
import sys

_DEV_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_PROD_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(process)d: %(message)s"


class Log:
    """Centralized logging for the card pipeline and search engine."""

    _logger: logging.Logger = logging.getLogger("cardvault")

    @classmethod
    def configure(cls, log_level: str, app_env: str = "dev") -> None:
        """Set level and attach a stderr handler once.

        Non-dev environments get a format with logger name and pid so lines
        from concurrent pipeline runs can be told apart.
        """
        cls._logger.setLevel(log_level.upper())
        if cls._logger.handlers:
            return
        handler = logging.StreamHandler(sys.stderr)
        fmt = _DEV_FORMAT if app_env == "dev" else _PROD_FORMAT
        handler.setFormatter(logging.Formatter(fmt))
        cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error message with the active traceback attached."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
