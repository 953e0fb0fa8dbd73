from peewee import AutoField, CharField, DateTimeField, Model, TextField, UUIDField

from infrastructure.peewee.session.db import db


class TaskModel(Model):
    # Secuencia de inserción: define el orden del listado
    seq = AutoField()
    id = UUIDField(unique=True)
    title = CharField(max_length=200)
    description = TextField(default="")
    status = CharField(max_length=20, index=True)
    priority = CharField(max_length=10, index=True)
    # Se guardan en UTC sin zona horaria
    created_at = DateTimeField()
    updated_at = DateTimeField()
    due_date = DateTimeField(null=True)

    class Meta:
        database = db
        table_name = "tasks"
