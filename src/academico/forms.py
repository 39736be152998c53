from flask_wtf import FlaskForm
from wtforms import (
    BooleanField,
    FieldList,
    FormField,
    IntegerField,
    SelectField,
    StringField,
    TextAreaField,
)
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional, Regexp

from src.academico.models import ROTULOS_DIAS, DiaSemana

REGEX_HORA = r'^([01]\d|2[0-3]):[0-5]\d$'


class HorarioForm(FlaskForm):
    class Meta:
        csrf = False  # Tratado no form pai

    # O front gera: horarios-{index}-dia_semana
    dia_semana = SelectField('Dia', choices=[(d.value, ROTULOS_DIAS[d]) for d in DiaSemana],
                             default=DiaSemana.SEGUNDA.value)
    hora_inicio = StringField('Início', default='08:00', validators=[
        DataRequired(), Regexp(REGEX_HORA, message="Use o formato HH:MM")
    ])
    hora_fim = StringField('Fim', default='10:00', validators=[
        DataRequired(), Regexp(REGEX_HORA, message="Use o formato HH:MM")
    ])


class TurmaForm(FlaskForm):
    codigo_turma = StringField('Código da Turma', validators=[DataRequired(), Length(max=50)])
    disciplina_id = StringField('Disciplina', validators=[DataRequired()])
    professor = StringField('Professor', validators=[DataRequired(), Length(max=100)])
    semestre = SelectField('Semestre', choices=[(1, '1º Semestre'), (2, '2º Semestre')], coerce=int)
    ano = IntegerField('Ano', validators=[InputRequired(), NumberRange(min=1900, max=2999)])
    sala_id = StringField('Sala', validators=[DataRequired()])
    vagas_total = IntegerField('Total de Vagas', validators=[InputRequired(), NumberRange(min=0)])
    vagas_ocupadas = IntegerField('Vagas Ocupadas', validators=[InputRequired(), NumberRange(min=0)])
    ativa = BooleanField('Turma Ativa')
    observacoes = TextAreaField('Observações', validators=[Optional()])

    # Lista dinâmica: o front adiciona/remove linhas livremente
    horarios = FieldList(FormField(HorarioForm), min_entries=0)

    def para_rascunho(self) -> dict:
        return {
            'codigo_turma': self.codigo_turma.data.strip(),
            'disciplina_id': self.disciplina_id.data.strip(),
            'professor': self.professor.data.strip(),
            'semestre': self.semestre.data,
            'ano': self.ano.data,
            'horarios': [
                {
                    'dia_semana': h.dia_semana.data,
                    'hora_inicio': h.hora_inicio.data,
                    'hora_fim': h.hora_fim.data,
                }
                for h in self.horarios
            ],
            'sala_id': self.sala_id.data.strip(),
            'vagas_total': self.vagas_total.data,
            'vagas_ocupadas': self.vagas_ocupadas.data,
            'ativa': self.ativa.data,
            'observacoes': self.observacoes.data or None,
        }


class DisciplinaForm(FlaskForm):
    codigo = StringField('Código', validators=[DataRequired(), Length(max=20)])
    nome = StringField('Nome', validators=[DataRequired(), Length(max=150)])
    carga_horaria = IntegerField('Carga Horária', validators=[InputRequired(), NumberRange(min=0)])
    departamento = StringField('Departamento', validators=[DataRequired()])
    ementa = TextAreaField('Ementa', validators=[Optional()])
    # Códigos separados por vírgula: "INF001, INF002"
    pre_requisitos = StringField('Pré-requisitos', validators=[Optional()])
    creditos = IntegerField('Créditos', validators=[InputRequired(), NumberRange(min=0)])
    ativa = BooleanField('Disciplina Ativa')

    def para_rascunho(self) -> dict:
        pre_requisitos = [p.strip() for p in (self.pre_requisitos.data or '').split(',')]
        return {
            'codigo': self.codigo.data.strip(),
            'nome': self.nome.data.strip(),
            'carga_horaria': self.carga_horaria.data,
            'departamento': self.departamento.data.strip(),
            'ementa': self.ementa.data or None,
            'pre_requisitos': [p for p in pre_requisitos if p],
            'creditos': self.creditos.data,
            'ativa': self.ativa.data,
        }


class SalaForm(FlaskForm):
    numero = StringField('Número', validators=[DataRequired(), Length(max=20)])
    nome = StringField('Nome', validators=[DataRequired(), Length(max=100)])
    capacidade = IntegerField('Capacidade', validators=[InputRequired(), NumberRange(min=0)])
    tipo = SelectField('Tipo', choices=[
        ('sala_aula', 'Sala de Aula'),
        ('laboratorio', 'Laboratório'),
        ('auditorio', 'Auditório'),
    ])
    bloco = StringField('Bloco', validators=[Optional()])
    ativa = BooleanField('Sala Ativa')

    def para_rascunho(self) -> dict:
        return {
            'numero': self.numero.data.strip(),
            'nome': self.nome.data.strip(),
            'capacidade': self.capacidade.data,
            'tipo': self.tipo.data,
            'bloco': self.bloco.data or None,
            'ativa': self.ativa.data,
        }
