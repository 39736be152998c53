"""
Modelos de Domínio Acadêmico (Pydantic v2).

Salas, Disciplinas e Turmas referenciam-se por chaves naturais
(número da sala, código da disciplina), nunca pelo id do documento.
Nenhuma referência é validada aqui: uma turma pode apontar para uma
disciplina ou sala inexistente.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.models import Registro


class DiaSemana(str, Enum):
    SEGUNDA = 'segunda'
    TERCA = 'terca'
    QUARTA = 'quarta'
    QUINTA = 'quinta'
    SEXTA = 'sexta'
    SABADO = 'sabado'


ROTULOS_DIAS = {
    DiaSemana.SEGUNDA: 'Segunda-feira',
    DiaSemana.TERCA: 'Terça-feira',
    DiaSemana.QUARTA: 'Quarta-feira',
    DiaSemana.QUINTA: 'Quinta-feira',
    DiaSemana.SEXTA: 'Sexta-feira',
    DiaSemana.SABADO: 'Sábado',
}


class Horario(BaseModel):
    """Um intervalo semanal recorrente. Embutido na Turma, nunca persistido sozinho."""

    model_config = ConfigDict(use_enum_values=True)

    dia_semana: DiaSemana = Field(default=DiaSemana.SEGUNDA, validate_default=True)
    hora_inicio: str = '08:00'
    hora_fim: str = '10:00'

    @property
    def rotulo(self) -> str:
        return f"{self.dia_semana} {self.hora_inicio} - {self.hora_fim}"


class Sala(Registro):
    numero: str
    nome: str
    capacidade: int = 0
    tipo: str = 'sala_aula'
    bloco: Optional[str] = None
    ativa: bool = True


class Disciplina(Registro):
    codigo: str
    nome: str
    carga_horaria: int = 0
    departamento: str = ''
    ementa: Optional[str] = None
    # Códigos de outras disciplinas, na ordem informada
    pre_requisitos: List[str] = Field(default_factory=list)
    creditos: int = 0
    ativa: bool = True

    @field_validator('pre_requisitos', mode='before')
    @classmethod
    def _lista_vazia_se_nula(cls, valor):
        return [] if valor is None else valor


class Turma(Registro):
    codigo_turma: str
    disciplina_id: str  # Disciplina.codigo
    professor: str = ''
    semestre: int = 1  # 1 ou 2 (validado no formulário)
    ano: int
    horarios: List[Horario] = Field(default_factory=list)
    sala_id: str  # Sala.numero
    # vagas_ocupadas pode exceder vagas_total; nada impede
    vagas_total: int = 0
    vagas_ocupadas: int = 0
    ativa: bool = True
    observacoes: Optional[str] = None

    # Turmas antigas podem ter sido gravadas com horarios = null
    @field_validator('horarios', mode='before')
    @classmethod
    def _horarios_vazios_se_nulos(cls, valor):
        return [] if valor is None else valor

    @property
    def vagas_livres(self) -> int:
        return self.vagas_total - self.vagas_ocupadas

    @property
    def periodo(self) -> str:
        return f"{self.semestre}º Semestre / {self.ano}"
