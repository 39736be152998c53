"""
Utilitários de formulário (WTForms) compartilhados pelos módulos.
"""

from flask_wtf import FlaskForm

from src.core.exceptions import ErroValidacao


def validar_formulario(form: FlaskForm) -> FlaskForm:
    """Valida o form submetido ou levanta ErroValidacao com os erros por campo."""
    if not form.validate_on_submit():
        raise ErroValidacao(f"Erro de Validação: {form.errors}", form.errors)
    return form
