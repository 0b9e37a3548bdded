# Errores que llegan al borde HTTP: cada uno lleva su "kind" y el status
# con el que responde la API ({"error": mensaje, "kind": kind}).


class BookingError(Exception):
    kind = 'Internal'
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message, 'kind': self.kind}


class InvalidInput(BookingError):
    kind = 'InvalidInput'
    status_code = 400


class NotFound(BookingError):
    kind = 'NotFound'
    status_code = 404


# Se responde 400 como el servidor original ("Slot already booked")
class Conflict(BookingError):
    kind = 'Conflict'
    status_code = 400


class Unauthorized(BookingError):
    kind = 'Unauthorized'
    status_code = 401


class Internal(BookingError):
    kind = 'Internal'
    status_code = 500
