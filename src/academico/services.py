"""
Camada de Serviço (Service Layer) Acadêmica

Mantém em memória as coleções de salas, disciplinas e turmas e executa
as operações de escrita delegando ao armazém de entidades. Depois de
toda escrita a coleção afetada é recarregada por inteiro: não há patch
otimista nem inserção local antes do recarregamento.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from src.academico.models import Disciplina, Sala, Turma
from src.core.models import Registro
from src.core.logger import get_logger

logger = get_logger(__name__)

R = TypeVar('R', bound=Registro)


@dataclass
class Resultado:
    """Resultado explícito de uma carga: sucesso (registros) ou falha (erro)."""

    registros: List[Any] = field(default_factory=list)
    erro: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.erro is None

    @classmethod
    def sucesso(cls, registros: List[Any]) -> 'Resultado':
        return cls(registros=registros)

    @classmethod
    def falha(cls, erro: Exception) -> 'Resultado':
        return cls(erro=erro)


def _serializar(valor: Any) -> Any:
    if isinstance(valor, BaseModel):
        return valor.model_dump(by_alias=True)
    if isinstance(valor, list):
        return [_serializar(v) for v in valor]
    return valor


class CacheColecao(Generic[R]):
    """
    Cache de uma coleção + índice pela chave natural.

    O índice é reconstruído a cada carga bem-sucedida. Em chaves
    duplicadas vale o primeiro registro na ordem do banco.
    """

    def __init__(self, colecao, modelo: Type[R], campo_chave: str):
        self.colecao = colecao
        self.modelo = modelo
        self.campo_chave = campo_chave
        self.registros: List[R] = []
        self.indice: Dict[str, R] = {}

    async def carregar(self) -> Resultado:
        """
        Recarrega a coleção inteira.

        Falha de transporte vira Resultado.falha e o cache anterior é mantido.
        Documentos que não validam são ignorados (com log) sem derrubar a carga.
        """
        try:
            documentos = await self.colecao.listar()
        except Exception as e:
            logger.error(f"Erro ao carregar '{self.colecao.nome}': {e}", exc_info=True)
            return Resultado.falha(e)

        registros = []
        for doc in documentos:
            try:
                registros.append(self.modelo.model_validate(doc))
            except ValidationError as e:
                logger.error(f"Documento inválido ignorado em '{self.colecao.nome}' ({doc.get('_id')}): {e}")

        indice = {}
        for registro in registros:
            indice.setdefault(getattr(registro, self.campo_chave), registro)

        self.registros = registros
        self.indice = indice
        return Resultado.sucesso(registros)

    async def criar(self, rascunho) -> R:
        if isinstance(rascunho, BaseModel):
            documento = rascunho.para_documento()
        else:
            documento = self.modelo.model_validate(rascunho).para_documento()

        criado = await self.colecao.criar(documento)
        await self.carregar()
        return self.modelo.model_validate(criado)

    async def atualizar(self, doc_id: str, parcial: dict) -> None:
        patch = {campo: _serializar(valor) for campo, valor in parcial.items()}
        await self.colecao.atualizar(doc_id, patch)
        await self.carregar()

    async def excluir(self, doc_id: str) -> None:
        await self.colecao.excluir(doc_id)
        await self.carregar()


class AgregadorAcademico:
    """
    Visão em memória de salas, disciplinas e turmas.

    Uma instância por requisição/tela. A cópia local pode ficar
    desatualizada se o recarregamento após uma escrita falhar; a próxima
    carga bem-sucedida a corrige.
    """

    def __init__(self, armazem):
        self._salas = CacheColecao(armazem.salas, Sala, 'numero')
        self._disciplinas = CacheColecao(armazem.disciplinas, Disciplina, 'codigo')
        self._turmas = CacheColecao(armazem.turmas, Turma, 'codigo_turma')

    @property
    def salas(self) -> List[Sala]:
        return self._salas.registros

    @property
    def disciplinas(self) -> List[Disciplina]:
        return self._disciplinas.registros

    @property
    def turmas(self) -> List[Turma]:
        return self._turmas.registros

    # === CARGA ===

    async def carregar_salas(self) -> Resultado:
        return await self._salas.carregar()

    async def carregar_disciplinas(self) -> Resultado:
        return await self._disciplinas.carregar()

    async def carregar_turmas(self) -> Resultado:
        return await self._turmas.carregar()

    async def carregar_tudo(self) -> Dict[str, Resultado]:
        return {
            'salas': await self.carregar_salas(),
            'disciplinas': await self.carregar_disciplinas(),
            'turmas': await self.carregar_turmas(),
        }

    # === SALAS ===

    async def criar_sala(self, rascunho) -> Sala:
        return await self._salas.criar(rascunho)

    async def atualizar_sala(self, sala_id: str, parcial: dict) -> None:
        await self._salas.atualizar(sala_id, parcial)

    async def excluir_sala(self, sala_id: str) -> None:
        await self._salas.excluir(sala_id)

    # === DISCIPLINAS ===

    async def criar_disciplina(self, rascunho) -> Disciplina:
        return await self._disciplinas.criar(rascunho)

    async def atualizar_disciplina(self, disciplina_id: str, parcial: dict) -> None:
        await self._disciplinas.atualizar(disciplina_id, parcial)

    async def excluir_disciplina(self, disciplina_id: str) -> None:
        await self._disciplinas.excluir(disciplina_id)

    # === TURMAS ===

    async def criar_turma(self, rascunho) -> Turma:
        return await self._turmas.criar(rascunho)

    async def atualizar_turma(self, turma_id: str, parcial: dict) -> None:
        await self._turmas.atualizar(turma_id, parcial)

    async def excluir_turma(self, turma_id: str) -> None:
        await self._turmas.excluir(turma_id)

    # === RESOLUÇÃO DE CHAVES NATURAIS ===

    def nome_disciplina(self, codigo: str) -> str:
        """Nome da disciplina em cache; sem correspondência devolve o próprio código."""
        disciplina = self._disciplinas.indice.get(codigo)
        return disciplina.nome if disciplina else codigo

    def nome_sala(self, numero: str) -> str:
        """Nome da sala em cache; sem correspondência devolve 'Sala <numero>'."""
        sala = self._salas.indice.get(numero)
        return sala.nome if sala else f"Sala {numero}"

    def salas_ativas(self) -> List[Sala]:
        return [s for s in self.salas if s.ativa]

    def disciplinas_ativas(self) -> List[Disciplina]:
        return [d for d in self.disciplinas if d.ativa]

    def turma_detalhada(self, turma: Turma) -> dict:
        """Turma pronta para exibição, com nomes resolvidos e ocupação."""
        dados = turma.model_dump(by_alias=True)
        dados.update({
            'disciplina_nome': self.nome_disciplina(turma.disciplina_id),
            'sala_nome': self.nome_sala(turma.sala_id),
            'periodo': turma.periodo,
            'vagas_livres': turma.vagas_livres,
        })
        return dados
