"""
Módulo Central de Extensões.
Evita importações circulares centralizando as instâncias das extensões.
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

# 1. Limiter (Rate Limiting) - aplicado às rotas de autenticação
limiter = Limiter(
    key_func=get_remote_address,
    # Em produção, idealmente usar Redis. Para dev/demo, memória é ok.
    storage_uri="memory://",
)

# 2. CSRF Protection
csrf = CSRFProtect()
