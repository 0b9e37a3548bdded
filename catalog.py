import logging
from datetime import datetime

from sqlalchemy.dialects import postgresql, sqlite

from errors import Internal, InvalidInput
from models import Slot

logger = logging.getLogger(__name__)

# Solo estos motores tienen INSERT ... ON CONFLICT DO NOTHING
_INSERTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


# Catálogo de turnos: crea los turnos de una fecha la primera vez que se piden
class SlotCatalog:

    def __init__(self, db, start_hour=9, end_hour=17):
        self.db = db
        self.start_hour = start_hour
        self.end_hour = end_hour

    def slot_times_for_date(self, date_str):
        try:
            fecha = datetime.strptime(date_str or '', '%Y-%m-%d').date()
        except (TypeError, ValueError):
            raise InvalidInput(f'Invalid date: {date_str!r}, expected YYYY-MM-DD')
        # strptime acepta "2024-6-1"; solo se admite la forma canónica
        if fecha.isoformat() != date_str:
            raise InvalidInput(f'Invalid date: {date_str!r}, expected YYYY-MM-DD')

        horarios = [f"{h:02d}:00" for h in range(self.start_hour, self.end_hour + 1)]
        return [f"{date_str}T{hora}" for hora in horarios]

    def ensure_slots_for_date(self, date_str):
        slot_times = self.slot_times_for_date(date_str)
        rows = [{'slot_time': slot_time, 'is_booked': False} for slot_time in slot_times]

        dialect = self.db.session.get_bind().dialect.name
        if dialect not in _INSERTS:
            raise Internal(f'Unsupported database: {dialect}')

        # Inserta solo los que faltan; un turno reservado nunca se pisa
        stmt = _INSERTS[dialect](Slot.__table__).values(rows).on_conflict_do_nothing(
            index_elements=['slot_time']
        )
        created = self.db.session.execute(stmt).rowcount
        self.db.session.commit()

        if created > 0:
            logger.debug("Materialized %d slots for %s", created, date_str)

    def list_slots(self, date_str):
        slot_times = self.slot_times_for_date(date_str)
        return Slot.query.filter(Slot.slot_time.in_(slot_times)).order_by(Slot.slot_time).all()
