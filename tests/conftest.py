import os

# Config falha sem SECRET_KEY; precisa existir antes de importar 'src'
os.environ.setdefault('SECRET_KEY', 'chave-de-teste')

import pytest

from config import Config
from src import create_app
from tests.fakes import ArmazemMemoria, usuario_doc


class ConfigTeste(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False


@pytest.fixture
def armazem():
    return ArmazemMemoria(
        usuarios=[
            usuario_doc('admin', 'admin123', papel='ADMIN', doc_id='u-admin'),
            usuario_doc('ana', 'p1', doc_id='u-ana'),
            usuario_doc('bruno', 'p2', ativo=False, doc_id='u-bruno'),
        ],
        salas=[{'_id': 's1', 'numero': '101', 'nome': 'Lab A', 'capacidade': 30, 'tipo': 'laboratorio', 'ativa': True}],
        disciplinas=[{'_id': 'd1', 'codigo': 'INF001', 'nome': 'Algorithms', 'carga_horaria': 60,
                      'departamento': 'Computação', 'creditos': 4, 'ativa': True}],
    )


@pytest.fixture
def app(armazem):
    return create_app(ConfigTeste, fabrica_armazem=lambda config: armazem)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username, password):
        return client.post('/login', data={'username': username, 'password': password})
    return _login


@pytest.fixture
def client_com_limite(armazem):
    class ConfigLimitada(ConfigTeste):
        RATELIMIT_ENABLED = True
        LIMITE_LOGIN = '2 per minute'

    return create_app(ConfigLimitada, fabrica_armazem=lambda config: armazem).test_client()
