"""
Camada de Serviço (Service Layer) da Autenticação

Responsável pela identidade do operador (login/logout, papel) e pela
manutenção do cadastro de usuários.

ATENÇÃO: as senhas continuam gravadas e comparadas em texto puro, como na
base herdada. Trocar por hash muda o comportamento observável (senhas
atuais deixariam de bater) e precisa ser decidido com os responsáveis.
O cookie de sessão do Flask é assinado, não criptografado: o usuário
serializado nele, senha incluída, fica legível para quem tiver o cookie.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, MutableMapping, Optional

from pydantic import ValidationError

from src.auth.models import Papel, Usuario
from src.core.exceptions import (
    ContaDesativada,
    CredencialInvalida,
    ErroValidacao,
    RegistroInvalido,
    UsuarioNaoEncontrado,
)
from src.core.logger import get_logger

logger = get_logger(__name__)

CHAVE_SESSAO_PADRAO = 'usuario_atual'


class EstadoSessao(str, Enum):
    NAO_AUTENTICADO = 'nao_autenticado'
    AUTENTICANDO = 'autenticando'
    AUTENTICADO = 'autenticado'


class SessaoUsuario:
    """
    Identidade do operador atual.

    O usuário logado fica serializado (JSON) sob uma única chave do
    armazenamento persistente (o cookie de sessão do Flask, ou um dict).
    A presença da chave é o único sinal de "autenticado"; uma sessão
    restaurada é aceita sem consultar o banco.
    """

    def __init__(self, armazenamento: MutableMapping, usuarios, chave: str = CHAVE_SESSAO_PADRAO):
        self._armazenamento = armazenamento
        self._usuarios = usuarios
        self.chave = chave
        self.usuario: Optional[Usuario] = None
        self.estado = EstadoSessao.NAO_AUTENTICADO

    def iniciar(self) -> Optional[Usuario]:
        """Restaura a sessão persistida, sem ida ao banco."""
        bruto = self._armazenamento.get(self.chave)
        usuario = None

        if bruto is not None:
            try:
                usuario = Usuario.model_validate_json(bruto)
            except (ValueError, TypeError) as e:
                logger.error(f"Sessão corrompida descartada: {e}")
                self._armazenamento.pop(self.chave, None)

        self._definir(usuario)
        return usuario

    def encerrar(self) -> None:
        """Libera o estado em memória. O armazenamento persistente não é tocado."""
        self.usuario = None
        self.estado = EstadoSessao.NAO_AUTENTICADO

    @property
    def autenticado(self) -> bool:
        return self.estado == EstadoSessao.AUTENTICADO

    @property
    def is_admin(self) -> bool:
        return self.usuario is not None and self.usuario.papel == Papel.ADMIN

    @property
    def is_user(self) -> bool:
        return self.usuario is not None and self.usuario.papel == Papel.USER

    async def _buscar_por_login(self, login: str) -> List[dict]:
        """Procura pelo login ('username') e, sem resultado, pelo nome de exibição ('userName')."""
        encontrados = await self._usuarios.listar({'username': login})
        if not encontrados:
            encontrados = await self._usuarios.listar({'userName': login})
        return encontrados

    async def entrar(self, login: str, senha: str) -> Usuario:
        """
        Autentica pelo login (com trim) e senha.

        Raises:
            UsuarioNaoEncontrado: nenhum usuário com esse login.
            CredencialInvalida: senha diferente da gravada.
            ContaDesativada: credenciais corretas, mas usuário inativo.
            RegistroInvalido: o documento encontrado não é um usuário válido.
            ErroTransporte: falha ao consultar o banco.
        """
        usuario_anterior = self.usuario
        self.estado = EstadoSessao.AUTENTICANDO
        login = login.strip()

        try:
            encontrados = await self._buscar_por_login(login)
            if not encontrados:
                raise UsuarioNaoEncontrado()
            if len(encontrados) > 1:
                logger.warning(f"Login '{login}' duplicado na base ({len(encontrados)} registros). Usando o primeiro.")

            try:
                usuario = Usuario.model_validate(encontrados[0])
            except ValidationError as e:
                raise RegistroInvalido() from e

            if usuario.senha != senha.strip():
                raise CredencialInvalida()
            if not usuario.ativo:
                raise ContaDesativada()
        except Exception as e:
            logger.warning(f"Falha de login para '{login}': {e}")
            self._definir(usuario_anterior)
            raise

        # Persistência antes da transição de estado
        self._armazenamento[self.chave] = usuario.model_dump_json(by_alias=True)
        self._definir(usuario)
        logger.info(f"Login efetuado: {login} (Role: {usuario.papel})")
        return usuario

    def sair(self) -> None:
        if self.usuario:
            logger.info(f"Logout: {self.usuario.identificacao}")
        self._armazenamento.pop(self.chave, None)
        self._definir(None)

    def atualizar_usuario_em_sessao(self, usuario: Usuario) -> None:
        """Regrava o usuário persistido (ex.: após edição do perfil)."""
        self._armazenamento[self.chave] = usuario.model_dump_json(by_alias=True)
        self._definir(usuario)

    def _definir(self, usuario: Optional[Usuario]) -> None:
        self.usuario = usuario
        self.estado = EstadoSessao.AUTENTICADO if usuario else EstadoSessao.NAO_AUTENTICADO


# === CADASTRO DE USUÁRIOS ===

def _agora_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def listar_usuarios(usuarios) -> List[Usuario]:
    """Lista os usuários. Documentos que não formam um usuário válido são ignorados (com log)."""
    encontrados = []
    for doc in await usuarios.listar():
        try:
            encontrados.append(Usuario.model_validate(doc))
        except ValidationError as e:
            logger.error(f"Usuário inválido ignorado ({doc.get('_id')}): {e}")
    return encontrados


async def criar_usuario(usuarios, dados: dict) -> Usuario:
    """Cria um usuário. A senha é obrigatória na criação."""
    senha = (dados.get('password') or '').strip()
    if not senha:
        raise ErroValidacao("Senha é obrigatória para novos usuários", {'password': ['Obrigatória']})

    novo = Usuario.model_validate({
        **dados,
        'password': senha,
        'createdTime': dados.get('createdTime') or _agora_iso(),
    })
    criado = await usuarios.criar(novo.para_documento())
    logger.info(f"Usuário criado: {novo.login} ({novo.papel})")
    return Usuario.model_validate(criado)


async def atualizar_usuario(usuarios, usuario_id: str, dados: dict) -> Usuario:
    """Atualização feita pelo admin. Senha em branco mantém a atual."""
    parcial = dict(dados)
    if not (parcial.get('password') or '').strip():
        parcial.pop('password', None)

    atualizado = await usuarios.atualizar(usuario_id, parcial)
    logger.info(f"Usuário atualizado: {usuario_id}")
    return Usuario.model_validate(atualizado)


async def excluir_usuario(usuarios, usuario_id: str) -> None:
    await usuarios.excluir(usuario_id)
    logger.info(f"Usuário excluído: {usuario_id}")


async def alternar_status(usuarios, usuario: Usuario) -> bool:
    """Ativa/desativa o usuário e devolve o novo valor de 'ativo'."""
    novo_status = not usuario.ativo
    await usuarios.atualizar(usuario.id, {'ativo': novo_status})
    logger.info(f"Usuário {usuario.identificacao} {'ativado' if novo_status else 'desativado'}")
    return novo_status


async def atualizar_perfil(sessao: SessaoUsuario, usuarios, nome: str,
                           nova_senha: str = '', confirmacao: str = '') -> bool:
    """
    Edição do próprio perfil (nome de exibição e, opcionalmente, senha).

    Returns:
        bool: True se a senha foi trocada; nesse caso quem chama deve
        encerrar a sessão para forçar novo login.
    """
    if sessao.usuario is None:
        raise UsuarioNaoEncontrado("Nenhum usuário logado")
    if nova_senha and nova_senha != confirmacao:
        raise ErroValidacao("As senhas não coincidem", {'confirmPassword': ['Diferente da nova senha']})

    parcial = {'userName': nome}
    if nova_senha:
        parcial['password'] = nova_senha

    await usuarios.atualizar(sessao.usuario.id, parcial)
    sessao.atualizar_usuario_em_sessao(sessao.usuario.model_copy(update={'nome': nome}))
    return bool(nova_senha)


async def inicializar_admin(usuarios, login: str, senha: str, nome: str) -> Usuario:
    """
    Reinicia o cadastro: APAGA todos os usuários e cria um único ADMIN ativo.
    """
    existentes = await usuarios.listar()
    logger.warning(f"Inicialização: excluindo {len(existentes)} usuário(s)")
    for doc in existentes:
        if doc.get('_id'):
            await usuarios.excluir(doc['_id'])

    return await criar_usuario(usuarios, {
        'username': login,
        'password': senha,
        'userName': nome,
        'userRole': Papel.ADMIN.value,
        'ativo': True,
    })
