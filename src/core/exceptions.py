"""
Exceções da Aplicação.

Taxonomia única de erros usada pelos Service Layers. Cada exceção carrega
uma mensagem legível, pronta para ser exibida ao usuário como notificação.
"""


class ErroAplicacao(Exception):
    """Base de todos os erros tratados pela aplicação."""

    mensagem_padrao = "Erro inesperado."

    def __init__(self, mensagem: str = None):
        self.mensagem = mensagem or self.mensagem_padrao
        super().__init__(self.mensagem)


class UsuarioNaoEncontrado(ErroAplicacao):
    mensagem_padrao = "Usuário não encontrado"


class CredencialInvalida(ErroAplicacao):
    mensagem_padrao = "Senha incorreta"


class ContaDesativada(ErroAplicacao):
    mensagem_padrao = "Usuário inativo. Entre em contato com o administrador."


class ErroValidacao(ErroAplicacao):
    """Campo obrigatório ausente ou mal formatado."""

    mensagem_padrao = "Erro de validação"

    def __init__(self, mensagem: str = None, erros: dict = None):
        super().__init__(mensagem)
        self.erros = erros or {}


class ErroTransporte(ErroAplicacao):
    """Falha na comunicação com o banco (rede ou serviço). A causa original fica em __cause__."""

    mensagem_padrao = "Falha de comunicação com o banco de dados"


class RegistroInvalido(ErroAplicacao):
    """Documento gravado no banco que não corresponde ao modelo esperado."""

    mensagem_padrao = "Cadastro inválido no banco de dados. Entre em contato com o administrador."
