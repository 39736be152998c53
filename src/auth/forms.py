from flask_wtf import FlaskForm
from wtforms import BooleanField, PasswordField, SelectField, StringField
from wtforms.validators import DataRequired, Length, Optional

from src.auth.models import Papel


class LoginForm(FlaskForm):
    username = StringField('Usuário', validators=[DataRequired(message="Usuário é obrigatório")])
    password = PasswordField('Senha', validators=[DataRequired(message="Senha é obrigatória")])


class UsuarioForm(FlaskForm):
    username = StringField('Login', validators=[DataRequired(), Length(min=3, max=60)])
    userName = StringField('Nome', validators=[DataRequired(), Length(max=100)])
    # Obrigatória só na criação; a regra fica no service
    password = PasswordField('Senha', validators=[Optional()])
    userRole = SelectField('Perfil', choices=[(Papel.USER.value, 'Usuário'), (Papel.ADMIN.value, 'Administrador')])
    ativo = BooleanField('Ativo')

    def para_dados(self) -> dict:
        return {
            'username': self.username.data.strip(),
            'userName': self.userName.data.strip(),
            'password': self.password.data or '',
            'userRole': self.userRole.data,
            'ativo': self.ativo.data,
        }


class PerfilForm(FlaskForm):
    userName = StringField('Nome', validators=[DataRequired(), Length(max=100)])
    newPassword = PasswordField('Nova Senha', validators=[Optional()])
    confirmPassword = PasswordField('Confirmar Senha', validators=[Optional()])
