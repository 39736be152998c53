"""
Rotas do Módulo Admin

Cadastro de usuários: listar, criar, editar, excluir e ativar/desativar.
"""
from flask import abort, jsonify

from . import admin_bp
from src.auth import services as auth_services
from src.auth.forms import UsuarioForm
from src.auth.sessao import exigir_admin
from src.core.database import obter_armazem
from src.core.forms import validar_formulario
from src.core.logger import get_logger

logger = get_logger(__name__)

admin_bp.before_request(exigir_admin)


def _publico(usuario) -> dict:
    return usuario.model_dump(by_alias=True, exclude={'senha'})


async def _buscar_usuario(usuario_id: str):
    usuarios = await auth_services.listar_usuarios(obter_armazem().usuarios)
    for usuario in usuarios:
        if usuario.id == usuario_id:
            return usuario
    abort(404)


@admin_bp.route('/usuarios', methods=['GET'])
async def listar_usuarios():
    usuarios = await auth_services.listar_usuarios(obter_armazem().usuarios)
    return jsonify([_publico(u) for u in usuarios])


@admin_bp.route('/usuarios', methods=['POST'])
async def criar_usuario():
    form = validar_formulario(UsuarioForm())
    usuario = await auth_services.criar_usuario(obter_armazem().usuarios, form.para_dados())
    return jsonify({'mensagem': 'Usuário criado com sucesso!', 'usuario': _publico(usuario)}), 201


@admin_bp.route('/usuarios/<usuario_id>', methods=['POST'])
async def editar_usuario(usuario_id):
    form = validar_formulario(UsuarioForm())
    usuario = await auth_services.atualizar_usuario(obter_armazem().usuarios, usuario_id, form.para_dados())
    return jsonify({'mensagem': 'Usuário atualizado com sucesso!', 'usuario': _publico(usuario)})


@admin_bp.route('/usuarios/<usuario_id>/excluir', methods=['POST'])
async def excluir_usuario(usuario_id):
    await auth_services.excluir_usuario(obter_armazem().usuarios, usuario_id)
    return jsonify({'mensagem': 'Usuário excluído com sucesso!'})


@admin_bp.route('/usuarios/<usuario_id>/status', methods=['POST'])
async def alternar_status(usuario_id):
    usuario = await _buscar_usuario(usuario_id)
    ativo = await auth_services.alternar_status(obter_armazem().usuarios, usuario)
    return jsonify({'mensagem': f"Usuário {'ativado' if ativo else 'desativado'} com sucesso!", 'ativo': ativo})
