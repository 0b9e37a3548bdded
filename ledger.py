import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from errors import Conflict, InvalidInput, NotFound
from models import Slot

logger = logging.getLogger(__name__)


# Registro de reservas: único lugar que escribe is_booked / user_id.
# Un turno pasa de libre a reservado una sola vez, nunca vuelve atrás.
class BookingLedger:

    def __init__(self, db):
        self.db = db

    def get_slot(self, slot_time):
        return Slot.query.filter_by(slot_time=slot_time).first()

    def book_slot(self, slot_time, user_id):
        # UPDATE condicional: de N pedidos concurrentes solo uno modifica la fila
        stmt = (
            update(Slot.__table__)
            .where(Slot.__table__.c.slot_time == slot_time)
            .where(Slot.__table__.c.is_booked == False)  # noqa: E712
            .values(is_booked=True, user_id=user_id)
        )
        try:
            claimed = self.db.session.execute(stmt).rowcount
        except IntegrityError:
            self.db.session.rollback()
            raise InvalidInput('Unknown user')

        if claimed == 1:
            self.db.session.commit()
            logger.info("Slot %s booked by user %s", slot_time, user_id)
            return

        # No se modificó ninguna fila: o no existe o ya estaba reservado
        self.db.session.rollback()
        if self.get_slot(slot_time) is None:
            raise NotFound('Slot not found')
        logger.info("Slot %s already booked, rejected user %s", slot_time, user_id)
        raise Conflict('Slot already booked')

    def list_bookings_for_user(self, user_id):
        slots = Slot.query.filter_by(user_id=user_id).order_by(Slot.slot_time).all()
        return [slot.slot_time for slot in slots]
