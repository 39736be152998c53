"""
Rotas do Módulo de Autenticação

Gerencia /login, /logout e a edição do próprio perfil (/perfil).
"""

from flask import current_app, jsonify, redirect, url_for
from flask_wtf.csrf import generate_csrf

from . import auth_bp
from . import services as auth_services
from .forms import LoginForm, PerfilForm
from .sessao import obter_sessao
from src.core.forms import validar_formulario
from src.core.database import obter_armazem
from src.core.extensions import limiter


def _usuario_publico(usuario) -> dict:
    return usuario.model_dump(by_alias=True, exclude={'senha'})


# === LOGIN / LOGOUT ===

@auth_bp.route('/')
@auth_bp.route('/login', methods=['GET'])
def login():
    """ Ponto de entrada: informa se já existe sessão. """
    sessao = obter_sessao()
    if sessao.autenticado:
        return jsonify({'autenticado': True, 'usuario': _usuario_publico(sessao.usuario)})
    return jsonify({'autenticado': False})


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(lambda: current_app.config.get('LIMITE_LOGIN', '10 per minute'))
async def entrar():
    form = validar_formulario(LoginForm())
    usuario = await obter_sessao().entrar(form.username.data, form.password.data)
    return jsonify({
        'usuario': _usuario_publico(usuario),
        'is_admin': obter_sessao().is_admin,
    })


@auth_bp.route('/csrf-token')
def csrf_token():
    """ Token CSRF para clientes que enviam os forms via fetch (header X-CSRFToken). """
    return jsonify({'csrf_token': generate_csrf()})


@auth_bp.route('/logout')
def logout():
    obter_sessao().sair()
    return redirect(url_for('auth_bp.login'))


# === PERFIL ===

@auth_bp.route('/perfil', methods=['GET'])
def perfil():
    sessao = obter_sessao()
    if not sessao.autenticado:
        return redirect(url_for('auth_bp.login'))
    return jsonify(_usuario_publico(sessao.usuario))


@auth_bp.route('/perfil', methods=['POST'])
async def salvar_perfil():
    sessao = obter_sessao()
    if not sessao.autenticado:
        return redirect(url_for('auth_bp.login'))

    form = validar_formulario(PerfilForm())
    senha_alterada = await auth_services.atualizar_perfil(
        sessao,
        obter_armazem().usuarios,
        form.userName.data.strip(),
        form.newPassword.data or '',
        form.confirmPassword.data or '',
    )

    if senha_alterada:
        # Senha nova exige login novamente
        sessao.sair()
        return jsonify({'mensagem': 'Senha alterada! Por favor, faça login novamente.', 'reautenticar': True})

    return jsonify({'mensagem': 'Dados atualizados com sucesso!', 'usuario': _usuario_publico(sessao.usuario)})
