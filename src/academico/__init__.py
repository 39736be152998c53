"""
Módulo Acadêmico (Blueprint)

Salas, disciplinas e turmas. Todas as rotas exigem usuário logado.
"""

from flask import Blueprint

academico_bp = Blueprint(
    'academico_bp',
    __name__,
    url_prefix='/academico'
)

from . import routes
