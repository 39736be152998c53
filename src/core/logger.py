"""
Módulo de Logging Centralizado.

Todos os módulos obtêm seu logger por aqui, garantindo o mesmo formato
de saída (stdout) em desenvolvimento e em containers.
"""

import logging
import os
import sys

FORMATO_LOG = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'


def get_logger(name: str) -> logging.Logger:
    """
    Configura e retorna uma instância de logger com formatação padronizada.

    Args:
        name (str): O nome do módulo que está chamando o log (geralmente __name__).

    Returns:
        logging.Logger: Instância configurada do logger.
    """
    logger = logging.getLogger(name)

    # Um único handler por logger, mesmo com imports repetidos
    if not logger.handlers:
        nivel = os.environ.get('LOG_LEVEL', 'INFO').upper()
        logger.setLevel(getattr(logging, nivel, logging.INFO))

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(FORMATO_LOG))
        logger.addHandler(handler)

    return logger
