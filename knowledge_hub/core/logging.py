import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Настройка корневого логгера приложения"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    # SQLAlchemy логирует запросы через echo, не дублируем
    logging.getLogger("sqlalchemy.engine").propagate = False
