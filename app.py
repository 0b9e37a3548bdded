import logging

from flask import Blueprint, Flask, current_app, jsonify, request, send_from_directory
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from accounts import AccountStore
from catalog import SlotCatalog
from config import Config
from errors import BookingError, Internal, InvalidInput
from ledger import BookingLedger
from logging_config import setup_logging
from models import db

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__)


# Los ids se guardan como INTEGER de 64 bits con signo
MAX_USER_ID = 2 ** 63 - 1


def _services():
    return current_app.extensions['booking']


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput('Request body must be a JSON object')
    return data


def _require_str(value, missing_message):
    if value is None or value == '':
        raise InvalidInput(missing_message)
    if not isinstance(value, str):
        raise InvalidInput(f'Expected a string, got {type(value).__name__}')
    return value


def _parse_user_id(value, missing_message):
    if value is None or value == '':
        raise InvalidInput(missing_message)
    # bool es subclase de int: true no es un id
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidInput(f'User ID must be an integer, got {value!r}')
    if isinstance(value, str):
        if not (value.isascii() and value.isdigit()) or len(value) > 19:
            raise InvalidInput(f'User ID must be an integer, got {value!r}')
        value = int(value)
    if not 1 <= value <= MAX_USER_ID:
        raise InvalidInput(f'User ID out of range: {value}')
    return value


# Registro
@api.route('/register', methods=['POST'])
def register():
    data = _json_body()
    username = _require_str(data.get('username'), 'Username and password are required')
    password = _require_str(data.get('password'), 'Username and password are required')
    user_id = _services()['accounts'].register(username, password)
    return jsonify({'success': True, 'userId': user_id})


# Login
@api.route('/login', methods=['POST'])
def login():
    data = _json_body()
    username = _require_str(data.get('username'), 'Username and password are required')
    password = _require_str(data.get('password'), 'Username and password are required')
    user = _services()['accounts'].login(username, password)
    return jsonify({'success': True, 'user': user.to_dict()})


# Reservas del usuario
@api.route('/my-bookings', methods=['GET'])
def my_bookings():
    user_id = _parse_user_id(request.args.get('userId'), 'User ID required')
    slot_times = _services()['ledger'].list_bookings_for_user(user_id)
    return jsonify([{'slot_time': slot_time} for slot_time in slot_times])


# Turnos de una fecha (se crean la primera vez que se consultan)
@api.route('/slots', methods=['GET'])
def slots():
    fecha = request.args.get('date')
    if not fecha:
        raise InvalidInput('Date is required')
    catalog = _services()['catalog']
    catalog.ensure_slots_for_date(fecha)
    return jsonify([slot.to_dict() for slot in catalog.list_slots(fecha)])


# Reservar turno
@api.route('/book', methods=['POST'])
def book():
    data = _json_body()
    slot_time = _require_str(data.get('slotTime'), 'Slot time and User ID are required')
    user_id = _parse_user_id(data.get('userId'), 'Slot time and User ID are required')
    _services()['ledger'].book_slot(slot_time, user_id)
    return jsonify({'success': True, 'message': 'Slot booked successfully'})


@api.route('/health', methods=['GET'])
def health():
    return jsonify({'ok': True})


def handle_booking_error(err):
    if err.status_code >= 500:
        logger.error("%s: %s", err.kind, err.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.path, err.kind, err.message)
    return jsonify(err.to_dict()), err.status_code


def handle_storage_error(err):
    db.session.rollback()
    logger.exception("Storage failure on %s %s", request.method, request.path)
    return handle_booking_error(Internal('Storage failure'))


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def create_app(overrides=None):
    app = Flask(__name__, static_folder='public', static_url_path='')
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    setup_logging(app.config['LOG_LEVEL'])

    # Espera al lock de escritura en lugar de fallar con "database is locked"
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
        engine_options = app.config.setdefault('SQLALCHEMY_ENGINE_OPTIONS', {})
        engine_options.setdefault('connect_args', {}).setdefault('timeout', app.config['SQLITE_TIMEOUT'])

    db.init_app(app)

    app.register_blueprint(api, url_prefix=app.config['API_PREFIX'])
    app.register_error_handler(BookingError, handle_booking_error)
    app.register_error_handler(SQLAlchemyError, handle_storage_error)

    @app.after_request
    def add_cors_headers(response):
        response.headers.setdefault('Access-Control-Allow-Origin', app.config['CORS_ORIGINS'])
        response.headers.setdefault('Access-Control-Allow-Headers', 'Content-Type')
        return response

    @app.route('/')
    def index():
        return send_from_directory(app.static_folder, 'index.html')

    # Inicializar la base de datos antes de atender pedidos
    with app.app_context():
        if db.engine.dialect.name == 'sqlite' and app.config['ENFORCE_USER_FK']:
            event.listen(db.engine, 'connect', _enable_sqlite_foreign_keys)
        db.create_all()

    app.extensions['booking'] = {
        'catalog': SlotCatalog(db, app.config['SLOT_START_HOUR'], app.config['SLOT_END_HOUR']),
        'ledger': BookingLedger(db),
        'accounts': AccountStore(db),
    }
    logger.info("Database initialized")
    return app


if __name__ == '__main__':
    app = create_app()
    logger.info("Server running at http://%s:%s", app.config['HOST'], app.config['PORT'])
    app.run(host=app.config['HOST'], port=app.config['PORT'], threaded=True)
