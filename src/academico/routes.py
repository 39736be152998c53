"""
Rotas do Módulo Acadêmico

CRUD de salas, disciplinas e turmas. Cada requisição usa seu próprio
AgregadorAcademico, carregado do zero.
"""

from flask import jsonify

from . import academico_bp
from .forms import DisciplinaForm, SalaForm, TurmaForm
from .services import AgregadorAcademico
from src.auth.sessao import exigir_login
from src.core.database import obter_armazem
from src.core.forms import validar_formulario
from src.core.logger import get_logger

logger = get_logger(__name__)

academico_bp.before_request(exigir_login)


def _agregador() -> AgregadorAcademico:
    return AgregadorAcademico(obter_armazem())


def _dump(registros) -> list:
    return [r.model_dump(by_alias=True) for r in registros]


def _falha_carga(resultado, colecao: str):
    logger.error(f"Listagem de {colecao} indisponível: {resultado.erro}")
    return jsonify({'erro': f"Erro ao carregar {colecao}"}), 502


# === SALAS ===

@academico_bp.route('/salas', methods=['GET'])
async def listar_salas():
    agregador = _agregador()
    resultado = await agregador.carregar_salas()
    if not resultado.ok:
        return _falha_carga(resultado, 'salas')
    return jsonify(_dump(agregador.salas))


@academico_bp.route('/salas', methods=['POST'])
async def criar_sala():
    form = validar_formulario(SalaForm())
    sala = await _agregador().criar_sala(form.para_rascunho())
    return jsonify(sala.model_dump(by_alias=True)), 201


@academico_bp.route('/salas/<sala_id>', methods=['POST'])
async def atualizar_sala(sala_id):
    form = validar_formulario(SalaForm())
    await _agregador().atualizar_sala(sala_id, form.para_rascunho())
    return jsonify({'mensagem': 'Sala atualizada.'})


@academico_bp.route('/salas/<sala_id>/excluir', methods=['POST'])
async def excluir_sala(sala_id):
    await _agregador().excluir_sala(sala_id)
    return jsonify({'mensagem': 'Sala excluída.'})


# === DISCIPLINAS ===

@academico_bp.route('/disciplinas', methods=['GET'])
async def listar_disciplinas():
    agregador = _agregador()
    resultado = await agregador.carregar_disciplinas()
    if not resultado.ok:
        return _falha_carga(resultado, 'disciplinas')
    return jsonify(_dump(agregador.disciplinas))


@academico_bp.route('/disciplinas', methods=['POST'])
async def criar_disciplina():
    form = validar_formulario(DisciplinaForm())
    disciplina = await _agregador().criar_disciplina(form.para_rascunho())
    return jsonify(disciplina.model_dump(by_alias=True)), 201


@academico_bp.route('/disciplinas/<disciplina_id>', methods=['POST'])
async def atualizar_disciplina(disciplina_id):
    form = validar_formulario(DisciplinaForm())
    await _agregador().atualizar_disciplina(disciplina_id, form.para_rascunho())
    return jsonify({'mensagem': 'Disciplina atualizada.'})


@academico_bp.route('/disciplinas/<disciplina_id>/excluir', methods=['POST'])
async def excluir_disciplina(disciplina_id):
    await _agregador().excluir_disciplina(disciplina_id)
    return jsonify({'mensagem': 'Disciplina excluída.'})


# === TURMAS ===

@academico_bp.route('/turmas', methods=['GET'])
async def listar_turmas():
    """
    Turmas com nomes de disciplina/sala resolvidos.

    Se salas ou disciplinas falharem, as turmas saem com os rótulos de
    fallback e a falha é informada em 'avisos'.
    """
    agregador = _agregador()
    resultados = await agregador.carregar_tudo()
    if not resultados['turmas'].ok:
        return _falha_carga(resultados['turmas'], 'turmas')

    avisos = [f"Erro ao carregar {nome}" for nome, r in resultados.items() if not r.ok]
    return jsonify({
        'turmas': [agregador.turma_detalhada(t) for t in agregador.turmas],
        # Listas de seleção do formulário: só registros ativos
        'opcoes_disciplinas': [{'codigo': d.codigo, 'nome': d.nome} for d in agregador.disciplinas_ativas()],
        'opcoes_salas': [{'numero': s.numero, 'nome': s.nome} for s in agregador.salas_ativas()],
        'avisos': avisos,
    })


@academico_bp.route('/turmas', methods=['POST'])
async def criar_turma():
    form = validar_formulario(TurmaForm())
    turma = await _agregador().criar_turma(form.para_rascunho())
    logger.info(f"Turma criada: {turma.codigo_turma}")
    return jsonify(turma.model_dump(by_alias=True)), 201


@academico_bp.route('/turmas/<turma_id>', methods=['POST'])
async def atualizar_turma(turma_id):
    form = validar_formulario(TurmaForm())
    await _agregador().atualizar_turma(turma_id, form.para_rascunho())
    return jsonify({'mensagem': 'Turma atualizada.'})


@academico_bp.route('/turmas/<turma_id>/excluir', methods=['POST'])
async def excluir_turma(turma_id):
    await _agregador().excluir_turma(turma_id)
    return jsonify({'mensagem': 'Turma excluída.'})
