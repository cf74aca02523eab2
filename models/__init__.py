from models.teacher import Teacher
from models.school_class import SchoolClass
from models.classroom import Classroom
from models.timeslot import TimeSlot
from models.schedule_item import ScheduleItem, make_item_id
from models.schedule_request import ScheduleRequest

__all__ = [
    "Teacher",
    "SchoolClass",
    "Classroom",
    "TimeSlot",
    "ScheduleItem",
    "make_item_id",
    "ScheduleRequest",
]
