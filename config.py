"""
Módulo de Configuração (Blindado)

Define a classe de configuração principal. Implementa o padrão 'Fail Fast':
se uma variável crítica estiver faltando, a aplicação nem inicia.
"""

import os
from dotenv import load_dotenv

# Carrega variáveis do arquivo .env
load_dotenv()


class Config:
    """
    Classe de configuração base da aplicação.
    """

    # === SEGURANÇA CRÍTICA (Fail Fast) ===
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError("ERRO CRÍTICO: 'SECRET_KEY' não encontrada no .env. A aplicação não pode iniciar insegura.")

    # === GOOGLE CLOUD / FIRESTORE ===
    GOOGLE_CLOUD_PROJECT = os.environ.get('GOOGLE_CLOUD_PROJECT')
    FIRESTORE_DATABASE = os.environ.get('FIRESTORE_DATABASE', '(default)')

    if not GOOGLE_CLOUD_PROJECT:
        print("AVISO: 'GOOGLE_CLOUD_PROJECT' não configurado. O SDK tentará inferir o projeto das credenciais.")

    # Nomes das coleções (mantidos compatíveis com a base existente)
    COLECAO_USUARIOS = os.environ.get('COLECAO_USUARIOS', 'users')
    COLECAO_SALAS = os.environ.get('COLECAO_SALAS', 'salas')
    COLECAO_DISCIPLINAS = os.environ.get('COLECAO_DISCIPLINAS', 'disciplinas')
    COLECAO_TURMAS = os.environ.get('COLECAO_TURMAS', 'turmas')

    # === SESSÃO ===
    # Chave sob a qual o usuário logado fica serializado no cookie de sessão
    SESSION_KEY = os.environ.get('SESSION_KEY', 'usuario_atual')

    # === FLASK ===
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1')

    # === RATE LIMIT ===
    LIMITE_LOGIN = os.environ.get('LIMITE_LOGIN', '10 per minute')
