"""
Modelo de Usuário.

Os nomes dos campos no banco (username, userName, userRole...) são
preservados via alias para manter compatibilidade com a base existente.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from src.core.models import Registro


class Papel(str, Enum):
    ADMIN = 'ADMIN'
    USER = 'USER'


class Usuario(Registro):
    # Cadastros antigos só têm 'userName'
    login: Optional[str] = Field(default=None, alias='username')
    nome: str = Field(default='', alias='userName')
    # Texto puro, como sempre foi gravado
    senha: str = Field(alias='password')
    papel: Papel = Field(default=Papel.USER, alias='userRole', validate_default=True)
    ativo: bool = True
    criado_em: Optional[str] = Field(default=None, alias='createdTime')

    @property
    def identificacao(self) -> str:
        """Login, ou o nome de exibição quando o cadastro não tem login."""
        return self.login or self.nome
