import logging

_HANDLER_NAME = 'booking-console'


# Handler de consola en el logger raíz. Se puede llamar varias veces: solo se
# reemplaza el handler propio, los de otras herramientas (caplog, gunicorn) quedan.
def setup_logging(level='INFO'):
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)
