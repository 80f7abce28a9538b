import logging
import sys


_NOISY_LOGGERS = ("urllib3", "google", "grpc", "flet", "flet_core", "flet_runtime", "httpx")


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the desktop app and the API.

    StudyFlow modules log at the requested level; chatty third-party
    libraries are held at WARNING.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
