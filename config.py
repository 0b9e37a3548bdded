import os

from dotenv import load_dotenv

load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))


def _get_bool(key, default=False):
    v = os.getenv(key)
    if v is None:
        return default
    return v.lower() in ('1', 'true', 'yes', 'on')


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///' + os.path.join(basedir, 'database.sqlite'))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLITE_TIMEOUT = float(os.getenv('SQLITE_TIMEOUT', '30'))
    ENFORCE_USER_FK = _get_bool('ENFORCE_USER_FK', True)

    API_PREFIX = os.getenv('API_PREFIX', '/api')
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '3008'))

    # Ventana fija de turnos: 09:00 a 17:00 inclusive, uno por hora
    SLOT_START_HOUR = 9
    SLOT_END_HOUR = 17
