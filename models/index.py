# Every model module is imported here so that Base.metadata knows all tables
# before create_all() or an alembic autogenerate run.
from config.database import Base
from api.user.user_model import User
from api.testusers.testusers_model import Registrant
from api.events.event_reg_model import EventRegistration
from api.attendance.attendance_records_model import AttendanceRecord
from api.attendance.attendance_tokens_model import AttendanceToken
from api.attendance.attendance_settings_model import AttendanceSettings
from api.attendance.campus_locations_model import CampusLocation

models = {
    model.__tablename__: model
    for model in (
        User,
        Registrant,
        EventRegistration,
        AttendanceRecord,
        AttendanceToken,
        AttendanceSettings,
        CampusLocation,
    )
}
