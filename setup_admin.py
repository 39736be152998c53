"""
Script Utilitário: setup_admin.py
Inicializa o sistema: APAGA todos os usuários e cria um único administrador.

Uso:
$ python setup_admin.py
(ou defina ADMIN_LOGIN / ADMIN_SENHA / ADMIN_NOME no .env)
"""

import asyncio
import getpass
import os

from src import create_app
from src.auth.services import inicializar_admin
from src.core.database import criar_armazem_firestore

# Inicializa a aplicação para carregar as configurações
app = create_app()


async def inicializar(login, senha, nome):
    armazem = criar_armazem_firestore(app.config)
    try:
        admin = await inicializar_admin(armazem.usuarios, login, senha, nome)
    finally:
        await armazem.fechar()
    print(f"✅ SUCESSO! Sistema inicializado. Admin '{admin.login}' criado (id {admin.id}).")


if __name__ == "__main__":
    print("⚠️  ATENÇÃO: esta ação irá DELETAR TODOS os usuários.")
    if input("Digite 'SIM' para continuar: ").strip() != 'SIM':
        print("Operação cancelada.")
        raise SystemExit(1)

    login = os.environ.get('ADMIN_LOGIN') or input("Login do admin: ").strip()
    senha = os.environ.get('ADMIN_SENHA') or getpass.getpass("Senha do admin: ").strip()
    nome = os.environ.get('ADMIN_NOME') or input("Nome de exibição: ").strip() or login

    asyncio.run(inicializar(login, senha, nome))
