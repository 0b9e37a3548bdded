import logging

from sqlalchemy.exc import IntegrityError

from errors import Conflict, Unauthorized
from models import User

logger = logging.getLogger(__name__)


# Cuentas de usuario: las contraseñas se guardan y comparan tal cual
class AccountStore:

    def __init__(self, db):
        self.db = db

    # Registro de usuario; el username es único a nivel de tabla
    def register(self, username, password):
        user = User(username=username, password=password)
        self.db.session.add(user)
        try:
            self.db.session.commit()
        except IntegrityError:
            self.db.session.rollback()
            raise Conflict('Username already exists')
        logger.info("Registered user %s (id=%s)", username, user.id)
        return user.id

    def login(self, username, password):
        user = User.query.filter_by(username=username, password=password).first()
        if user is None:
            raise Unauthorized('Invalid credentials')
        return user
