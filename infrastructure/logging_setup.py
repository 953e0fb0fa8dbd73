import logging
import sys

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Librerías que solo deben aparecer en consola a partir de WARNING
_NOISY_LOGGERS = ("pymongo", "peewee", "sqlalchemy.engine", "urllib3", "httpx")


def setup_logging(level: str | int = "info") -> None:
    """
    Configura el logger raíz con un único handler a stderr.

    Se puede llamar varias veces: elimina los handlers previos para no duplicar
    mensajes (uvicorn con reload vuelve a importar la app).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.captureWarnings(True)
