"""
Módulo de Conexão com o Banco de Dados (Core)

Adapta o Google Firestore (cliente assíncrono) ao contrato de "armazém de
entidades" consumido pelos Service Layers: para cada coleção,
listar / criar / atualizar / excluir. Não há transações nem integridade
referencial; tudo isso fica a cargo de quem chama.
"""

from typing import Any, Callable, Dict, List, Optional

from flask import current_app, g
from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from src.core.exceptions import ErroTransporte
from src.core.logger import get_logger

logger = get_logger(__name__)

# Chave do identificador do documento dentro do registro devolvido
CAMPO_ID = '_id'


class ColecaoEntidades:
    """CRUD de uma única coleção do Firestore."""

    def __init__(self, client: firestore.AsyncClient, nome: str):
        self._client = client
        self.nome = nome

    def _ref(self):
        return self._client.collection(self.nome)

    async def listar(self, filtro: Optional[Dict[str, Any]] = None) -> List[dict]:
        """
        Lista os documentos da coleção.

        Args:
            filtro: mapa campo -> valor; apenas igualdade exata.
        """
        query = self._ref()
        for campo, valor in (filtro or {}).items():
            query = query.where(filter=FieldFilter(campo, '==', valor))

        try:
            registros = []
            async for doc in query.stream():
                dados = doc.to_dict()
                dados[CAMPO_ID] = doc.id
                registros.append(dados)
            return registros
        except gcp_exceptions.GoogleAPIError as e:
            raise ErroTransporte(f"Erro ao listar '{self.nome}': {e}") from e

    async def criar(self, registro: dict) -> dict:
        dados = {k: v for k, v in registro.items() if k != CAMPO_ID}
        try:
            _, doc_ref = await self._ref().add(dados)
        except gcp_exceptions.GoogleAPIError as e:
            raise ErroTransporte(f"Erro ao criar em '{self.nome}': {e}") from e

        logger.info(f"Documento criado em {self.nome}: {doc_ref.id}")
        return {**dados, CAMPO_ID: doc_ref.id}

    async def atualizar(self, doc_id: str, parcial: dict) -> dict:
        """Aplica o patch parcial e devolve o documento resultante."""
        doc_ref = self._ref().document(doc_id)
        dados = {k: v for k, v in parcial.items() if k != CAMPO_ID}
        try:
            await doc_ref.update(dados)
            doc = await doc_ref.get()
        except gcp_exceptions.GoogleAPIError as e:
            raise ErroTransporte(f"Erro ao atualizar {self.nome}/{doc_id}: {e}") from e

        resultado = doc.to_dict() or {}
        resultado[CAMPO_ID] = doc_id
        return resultado

    async def excluir(self, doc_id: str) -> None:
        try:
            await self._ref().document(doc_id).delete()
        except gcp_exceptions.GoogleAPIError as e:
            raise ErroTransporte(f"Erro ao excluir {self.nome}/{doc_id}: {e}") from e

        logger.info(f"Documento excluído de {self.nome}: {doc_id}")


class ArmazemEntidades:
    """Agrupa as quatro coleções usadas pela aplicação."""

    def __init__(self, client: firestore.AsyncClient, config: dict):
        self._client = client
        self.usuarios = ColecaoEntidades(client, config.get('COLECAO_USUARIOS', 'users'))
        self.salas = ColecaoEntidades(client, config.get('COLECAO_SALAS', 'salas'))
        self.disciplinas = ColecaoEntidades(client, config.get('COLECAO_DISCIPLINAS', 'disciplinas'))
        self.turmas = ColecaoEntidades(client, config.get('COLECAO_TURMAS', 'turmas'))

    async def fechar(self) -> None:
        """Fecha o canal gRPC do cliente, se ele chegou a ser aberto."""
        # O AsyncClient não tem close(); o canal pertence ao cliente GAPIC, criado no primeiro uso
        api = getattr(self._client, '_firestore_api_internal', None)
        if api is not None:
            await api.transport.close()


def criar_armazem_firestore(config: dict) -> ArmazemEntidades:
    """
    Cria o cliente assíncrono do Firestore.

    O SDK busca as credenciais em 'GOOGLE_APPLICATION_CREDENTIALS'.
    O cliente gRPC assíncrono fica preso ao event loop em que nasceu,
    por isso um novo armazém é criado a cada requisição.
    """
    client = firestore.AsyncClient(
        project=config.get('GOOGLE_CLOUD_PROJECT'),
        database=config.get('FIRESTORE_DATABASE') or '(default)',
    )
    return ArmazemEntidades(client, config)


def obter_armazem() -> ArmazemEntidades:
    """Armazém da requisição atual (criado sob demanda e guardado em 'g')."""
    if 'armazem' not in g:
        fabrica: Callable[[dict], Any] = current_app.extensions['fabrica_armazem']
        g.armazem = fabrica(current_app.config)
    return g.armazem


async def fechar_armazem() -> None:
    """
    Fecha o armazém da requisição atual, se houver.

    Precisa rodar no mesmo event loop da view assíncrona que usou o
    cliente; o teardown do Flask já executa fora dele.
    """
    armazem = g.pop('armazem', None)
    if armazem is None:
        return
    try:
        await armazem.fechar()
    except Exception as e:
        logger.warning(f"Erro ao fechar a conexão com o banco: {e}", exc_info=True)
