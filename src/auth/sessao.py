"""
Sessão da requisição.

Cada requisição ganha um único SessaoUsuario (guardado em 'g'), iniciado a
partir do cookie de sessão e encerrado no teardown do app context.
"""

from flask import current_app, g, jsonify, session

from src.auth.services import SessaoUsuario
from src.core.database import obter_armazem
from src.core.logger import get_logger

logger = get_logger(__name__)


def obter_sessao() -> SessaoUsuario:
    if 'sessao' not in g:
        sessao = SessaoUsuario(
            session,
            obter_armazem().usuarios,
            current_app.config.get('SESSION_KEY', 'usuario_atual'),
        )
        sessao.iniciar()
        g.sessao = sessao
    return g.sessao


def encerrar_sessao(_exc=None):
    sessao = g.pop('sessao', None)
    if sessao is not None:
        sessao.encerrar()


# === GUARDAS (before_request) ===

def exigir_login():
    if not obter_sessao().autenticado:
        return jsonify({'erro': 'Faça login para continuar.'}), 401
    return None


def exigir_admin():
    sessao = obter_sessao()
    if not sessao.autenticado:
        return jsonify({'erro': 'Faça login para continuar.'}), 401
    if not sessao.is_admin:
        logger.warning(f"Acesso negado: {sessao.usuario.identificacao}")
        return jsonify({'erro': 'Acesso restrito a administradores.'}), 403
    return None
