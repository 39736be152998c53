"""
Módulo Admin (Blueprint)

Gestão do cadastro de usuários. Restrito ao papel ADMIN.
"""

from flask import Blueprint

admin_bp = Blueprint(
    'admin_bp',
    __name__,
    url_prefix='/admin' # Todas as rotas começarão com /admin
)

from . import routes
