import unittest

from src.auth import services as auth_services
from src.auth.models import Papel, Usuario
from src.auth.services import EstadoSessao, SessaoUsuario
from src.core.exceptions import (
    ContaDesativada,
    CredencialInvalida,
    ErroTransporte,
    ErroValidacao,
    RegistroInvalido,
    UsuarioNaoEncontrado,
)
from tests.fakes import ArmazemMemoria, usuario_doc

CHAVE = 'usuario_atual'


class TestSessaoUsuario(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.armazem = ArmazemMemoria(usuarios=[
            usuario_doc('ana', 'p1', doc_id='u-ana'),
            usuario_doc('admin', 'segredo', papel='ADMIN', doc_id='u-admin'),
            usuario_doc('bruno', 'p2', ativo=False, doc_id='u-bruno'),
        ])
        self.armazenamento = {}
        self.sessao = SessaoUsuario(self.armazenamento, self.armazem.usuarios, CHAVE)
        self.sessao.iniciar()

    async def test_login_inexistente(self):
        with self.assertRaises(UsuarioNaoEncontrado):
            await self.sessao.entrar('ninguem', 'qualquer')
        self.assertEqual(self.sessao.estado, EstadoSessao.NAO_AUTENTICADO)
        self.assertNotIn(CHAVE, self.armazenamento)

    async def test_senha_errada(self):
        with self.assertRaises(CredencialInvalida) as ctx:
            await self.sessao.entrar('ana', 'wrong')
        self.assertEqual(ctx.exception.mensagem, "Senha incorreta")
        self.assertFalse(self.sessao.autenticado)

    async def test_conta_desativada_mesmo_com_senha_correta(self):
        with self.assertRaises(ContaDesativada):
            await self.sessao.entrar('bruno', 'p2')
        self.assertNotIn(CHAVE, self.armazenamento)

    async def test_login_com_sucesso_persiste_sessao(self):
        usuario = await self.sessao.entrar('  ana ', ' p1 ')

        esperado = Usuario.model_validate({**usuario_doc('ana', 'p1'), '_id': 'u-ana'})
        self.assertEqual(usuario, esperado)
        self.assertTrue(self.sessao.autenticado)
        self.assertFalse(self.sessao.is_admin)
        self.assertTrue(self.sessao.is_user)
        self.assertEqual(Usuario.model_validate_json(self.armazenamento[CHAVE]), esperado)

    async def test_admin(self):
        await self.sessao.entrar('admin', 'segredo')
        self.assertTrue(self.sessao.is_admin)
        self.assertFalse(self.sessao.is_user)

    async def test_sessao_restaurada_sem_consultar_banco(self):
        await self.sessao.entrar('ana', 'p1')
        chamadas = self.armazem.usuarios.chamadas_listar

        nova = SessaoUsuario(self.armazenamento, self.armazem.usuarios, CHAVE)
        usuario = nova.iniciar()

        self.assertEqual(usuario.login, 'ana')
        self.assertTrue(nova.autenticado)
        self.assertEqual(self.armazem.usuarios.chamadas_listar, chamadas)

    async def test_sessao_corrompida_e_descartada(self):
        self.armazenamento[CHAVE] = '{isso não é json'
        sessao = SessaoUsuario(self.armazenamento, self.armazem.usuarios, CHAVE)

        self.assertIsNone(sessao.iniciar())
        self.assertFalse(sessao.autenticado)
        self.assertNotIn(CHAVE, self.armazenamento)

    async def test_sair(self):
        await self.sessao.entrar('ana', 'p1')
        self.sessao.sair()
        self.assertEqual(self.sessao.estado, EstadoSessao.NAO_AUTENTICADO)
        self.assertIsNone(self.sessao.usuario)
        self.assertNotIn(CHAVE, self.armazenamento)

    async def test_falha_de_transporte_propaga(self):
        self.armazem.usuarios.falhar_listagem = True
        with self.assertRaises(ErroTransporte):
            await self.sessao.entrar('ana', 'p1')
        self.assertFalse(self.sessao.autenticado)

    async def test_cadastro_sem_username_entra_pelo_nome(self):
        # Formato gravado pela tela de usuários: só userName
        self.armazem.usuarios._inserir({
            '_id': 'u-maria', 'userName': 'Maria', 'password': 'p', 'userRole': 'USER', 'ativo': True,
        })

        usuario = await self.sessao.entrar('Maria', 'p')

        self.assertIsNone(usuario.login)
        self.assertEqual(usuario.identificacao, 'Maria')
        self.assertTrue(self.sessao.autenticado)
        self.assertEqual(Usuario.model_validate_json(self.armazenamento[CHAVE]).id, 'u-maria')

    async def test_username_tem_prioridade_sobre_nome(self):
        self.armazem.usuarios._inserir(usuario_doc('outra', 'p9', nome='ana', doc_id='u-outra'))
        usuario = await self.sessao.entrar('ana', 'p1')
        self.assertEqual(usuario.id, 'u-ana')

    async def test_cadastro_sem_nome_de_exibicao(self):
        armazem = ArmazemMemoria(usuarios=[{'username': 'ana', 'password': 'p1', 'ativo': True}])
        sessao = SessaoUsuario({}, armazem.usuarios, CHAVE)

        usuario = await sessao.entrar('ana', 'p1')
        self.assertEqual(usuario.nome, '')
        self.assertTrue(sessao.is_user)

    async def test_cadastro_corrompido_vira_erro_tipado(self):
        armazem = ArmazemMemoria(usuarios=[
            {'username': 'ana', 'password': 'p1', 'userRole': 'ROOT', 'ativo': True},
        ])
        armazenamento = {}
        sessao = SessaoUsuario(armazenamento, armazem.usuarios, CHAVE)

        with self.assertRaises(RegistroInvalido) as ctx:
            await sessao.entrar('ana', 'p1')
        self.assertIsNotNone(ctx.exception.__cause__)
        self.assertFalse(sessao.autenticado)
        self.assertNotIn(CHAVE, armazenamento)


class TestCadastroUsuarios(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.armazem = ArmazemMemoria(usuarios=[usuario_doc('ana', 'p1', doc_id='u-ana')])
        self.usuarios = self.armazem.usuarios

    async def test_criar_exige_senha(self):
        with self.assertRaises(ErroValidacao):
            await auth_services.criar_usuario(self.usuarios, {'username': 'novo', 'userName': 'Novo', 'password': '  '})

    async def test_criar_registra_data(self):
        usuario = await auth_services.criar_usuario(self.usuarios, {
            'username': 'carla', 'userName': 'Carla', 'password': 'x', 'userRole': 'ADMIN', 'ativo': True,
        })
        self.assertIsNotNone(usuario.id)
        self.assertEqual(usuario.papel, Papel.ADMIN)
        self.assertTrue(usuario.criado_em)

    async def test_atualizar_sem_senha_mantem_a_atual(self):
        await auth_services.atualizar_usuario(self.usuarios, 'u-ana', {'userName': 'Ana Maria', 'password': ''})
        self.assertEqual(self.usuarios.docs['u-ana']['password'], 'p1')
        self.assertEqual(self.usuarios.docs['u-ana']['userName'], 'Ana Maria')

    async def test_listar_aceita_cadastro_sem_username(self):
        self.usuarios._inserir({
            '_id': 'x', 'userName': 'Maria', 'password': 'p', 'userRole': 'USER', 'ativo': True,
        })
        self.usuarios._inserir({'_id': 'quebrado', 'userName': 'Sem senha'})

        usuarios = await auth_services.listar_usuarios(self.usuarios)

        self.assertEqual([u.id for u in usuarios], ['u-ana', 'x'])
        self.assertIsNone(usuarios[1].login)
        self.assertEqual(usuarios[1].nome, 'Maria')

    async def test_alternar_status(self):
        usuario = (await auth_services.listar_usuarios(self.usuarios))[0]
        ativo = await auth_services.alternar_status(self.usuarios, usuario)
        self.assertFalse(ativo)
        self.assertFalse(self.usuarios.docs['u-ana']['ativo'])

    async def test_inicializar_admin_apaga_todos(self):
        admin = await auth_services.inicializar_admin(self.usuarios, 'root', 'r00t', 'Administrador')

        restantes = await auth_services.listar_usuarios(self.usuarios)
        self.assertEqual([u.login for u in restantes], ['root'])
        self.assertEqual(admin.papel, Papel.ADMIN)
        self.assertTrue(admin.ativo)

    async def test_perfil_senhas_diferentes(self):
        sessao = SessaoUsuario({}, self.usuarios, CHAVE)
        await sessao.entrar('ana', 'p1')
        with self.assertRaises(ErroValidacao):
            await auth_services.atualizar_perfil(sessao, self.usuarios, 'Ana', 'nova', 'outra')

    async def test_perfil_atualiza_sessao(self):
        armazenamento = {}
        sessao = SessaoUsuario(armazenamento, self.usuarios, CHAVE)
        await sessao.entrar('ana', 'p1')

        senha_alterada = await auth_services.atualizar_perfil(sessao, self.usuarios, 'Ana Paula')

        self.assertFalse(senha_alterada)
        self.assertEqual(sessao.usuario.nome, 'Ana Paula')
        self.assertEqual(Usuario.model_validate_json(armazenamento[CHAVE]).nome, 'Ana Paula')
        self.assertEqual(self.usuarios.docs['u-ana']['userName'], 'Ana Paula')


if __name__ == '__main__':
    unittest.main()
