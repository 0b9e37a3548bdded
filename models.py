from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Modelo de usuarios (la contraseña se guarda tal cual, fuera de alcance)
class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(128), nullable=False)

    def to_dict(self):
        return {'id': self.id, 'username': self.username}

# Modelo de turnos: uno por hora, identificado por fecha + hora
class Slot(db.Model):
    __tablename__ = 'slots'

    slot_time = db.Column(db.String(16), primary_key=True)   # Ej: "2024-06-10T09:00"
    is_booked = db.Column(db.Boolean, nullable=False, default=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)

    def to_dict(self):
        return {'time': self.slot_time, 'isBooked': bool(self.is_booked)}
