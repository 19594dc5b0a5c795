"""
Configuração de logging da aplicação (biblioteca padrão).
"""
import logging
import sys

LOGGER_NAME = "app"

_configured = False


class LabeledFormatter(logging.Formatter):
    """Formata mensagens como `LEVEL logger: mensagem`."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        message = f"{label} {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Configura o logger raiz da aplicação.

    Chamadas repetidas apenas ajustam o nível.

    Parâmetros:
        level: Nível de log (nome ou valor numérico).

    Retorna:
        Logger raiz da aplicação.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(LabeledFormatter())
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger


def get_logger(name: str) -> logging.Logger:
    """Retorna um logger filho do logger da aplicação."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Remove os handlers configurados. Usado nos testes."""
    global _configured
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    _configured = False
