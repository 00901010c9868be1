import json
import logging
import sys
from typing import Any

from loguru import logger

from teamportal import settings
from teamportal.common import context


class InterceptHandler(logging.Handler):
    """
    Default handler from examples in loguru documentation.
    This handler intercepts all log requests and
    passes them to loguru.
    For more info see:
    https://loguru.readthedocs.io/en/stable/overview.html#entirely-compatible-with-standard-logging
    """

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover
        """
        Propagates logs to loguru.
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level,
            record.getMessage(),
        )


def deployed_log_formatter(record: dict[str, Any]) -> str:
    """
    Formats a machine readable log
    """
    if record['exception'] is not None:
        exc = record['exception']
        record['exception'] = None
        record['extra']['error'] = {
            'exception_type': str(type(exc.value).__name__),
            'message': str(exc.value),
        }

    record['extra']['timestamp'] = record['time'].strftime('%Y-%m-%dT%H:%M:%S,%f')
    record['extra']['message'] = record['message']
    record['extra']['level'] = record['level'].name

    # This is set in logging context, but some loggers are above it
    request_id = record['extra'].get('request_id', None)
    if not request_id:
        request_id = context.get_safe_request_id() or ''
    record['extra']['request_id'] = request_id
    record['extra']['user_id'] = context.get_safe_user_id() or ''

    record['extra']['serialized'] = json.dumps(record['extra'], default=str)
    return '{extra[serialized]}\n'


def local_log_formatter(record: dict[str, Any]) -> str:
    """
    Formats a log record for local development console
    """
    duration = record['extra'].get('duration', None)
    level = record['level'].no
    if duration is None:
        if level == logging.DEBUG:
            icon = '🔬'
        elif level == logging.WARNING:
            icon = '⚠️'
        elif level == logging.ERROR:
            icon = '💣💥'
        elif level == logging.CRITICAL:
            icon = '🚨'
        else:
            icon = '✏️'

        log_format = (
            '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> '
            f'| {icon} '
            ' <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> '
            '- <level>{message}</level>\n'
        )
    else:
        if level == logging.WARNING:
            meta = '⚠️'
        elif level == logging.ERROR:
            meta = '💣💥'
        elif level == logging.CRITICAL:
            meta = '🚨🚨🚨'
        else:
            # Otherwise show duration of endpoint
            meta = f'⏱️ {duration}s'

        log_format = (
            '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> '
            f'| <magenta>{meta}</magenta> '
            '- <level>{message}</level>\n'
        )

    if record['exception'] is not None:
        if settings.DEBUG:
            from rich.console import Console
            from rich.traceback import Traceback

            exc_info = record['exception']
            Console().print(
                Traceback.from_exception(
                    exc_type=exc_info[0],
                    exc_value=exc_info[1],
                    traceback=exc_info[2],
                    show_locals=True,
                    locals_max_length=5,
                    locals_max_string=25,
                    max_frames=10,
                )
            )
        else:
            log_format += '{exception}\n'
    return log_format


def configure_logging():
    # Intercept everything at the root logger
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.LOG_LEVEL)

    # Remove every other logger's handlers
    # and propagate to root logger
    for name in logging.root.manager.loggerDict.keys():
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    if settings.IS_DEPLOYED_ENV:
        log_formatter = deployed_log_formatter
    else:
        log_formatter = local_log_formatter

    logger.remove()
    logger.add(
        sys.stdout,
        serialize=False,
        backtrace=False,
        diagnose=False,
        level=settings.LOG_LEVEL,
        format=log_formatter,
    )
    # This logger only duplicates since we have middleware we are appending context too
    logging.getLogger('uvicorn.access').propagate = False
    logger.info(f'logging level: {settings.LOG_LEVEL}')
