"""
Módulo Principal da Aplicação (Application Factory)
"""

from functools import wraps
from inspect import iscoroutinefunction

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix # Necessário atrás de proxy (Cloud Run)
from config import Config

from .core.database import criar_armazem_firestore, fechar_armazem
from .core.exceptions import (
    ContaDesativada,
    CredencialInvalida,
    ErroAplicacao,
    ErroTransporte,
    ErroValidacao,
    RegistroInvalido,
    UsuarioNaoEncontrado,
)
from .core.extensions import csrf, limiter
from .core.logger import get_logger

logger = get_logger(__name__)

STATUS_POR_ERRO = {
    UsuarioNaoEncontrado: 401,
    CredencialInvalida: 401,
    ContaDesativada: 401,
    ErroValidacao: 400,
    ErroTransporte: 502,
    RegistroInvalido: 500,
}


class AppAcademica(Flask):
    """Flask que fecha o armazém da requisição ao fim de cada view assíncrona."""

    def ensure_sync(self, func):
        if not iscoroutinefunction(func):
            return func

        @wraps(func)
        async def executar_e_fechar(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            finally:
                # Ainda dentro do event loop da view
                await fechar_armazem()

        return super().ensure_sync(executar_e_fechar)


def create_app(config_class=Config, fabrica_armazem=None):
    """
    Cria e configura uma instância da aplicação Flask.

    Args:
        config_class: classe de configuração.
        fabrica_armazem: callable(config) -> armazém de entidades.
            Padrão: Firestore. Os testes injetam um armazém em memória.
    """

    app = AppAcademica(__name__, instance_relative_config=True)

    # Gera URLs com 'https://' atrás do proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # 1. Carrega a configuração
    app.config.from_object(config_class)

    # 2. Extensões
    csrf.init_app(app)
    limiter.init_app(app)
    app.extensions['fabrica_armazem'] = fabrica_armazem or criar_armazem_firestore

    # 3. Blueprints (Módulos)
    from .auth import auth_bp
    from .auth.sessao import encerrar_sessao
    app.register_blueprint(auth_bp, url_prefix='/')
    app.teardown_appcontext(encerrar_sessao)

    from .academico import academico_bp
    app.register_blueprint(academico_bp)

    from .admin import admin_bp
    app.register_blueprint(admin_bp)

    # 4. Erros da aplicação viram JSON
    @app.errorhandler(ErroAplicacao)
    def tratar_erro_aplicacao(erro):
        status = STATUS_POR_ERRO.get(type(erro), 500)
        if status >= 500:
            logger.error(f"Erro na requisição: {erro}", exc_info=erro)
        corpo = {'erro': erro.mensagem}
        if isinstance(erro, ErroValidacao):
            corpo['campos'] = erro.erros
        return jsonify(corpo), status

    # 5. Rota de Health Check
    @app.route("/health")
    def health_check():
        return "Gestão Acadêmica no ar!", 200

    return app
