"""
Schémas Pydantic pour les présences élèves et enseignants.
"""

import datetime as dt
from typing import Literal, Optional

from app.schemas.common import ApiModel, DateField, IntField, OptionalDate, OptionalInt, OptionalStr

AttendanceStatus = Literal["present", "absent", "late", "excused"]


class AttendanceCreate(ApiModel):
    student_id: IntField
    course_id: IntField
    date: DateField
    status: AttendanceStatus
    remarks: OptionalStr = None
    school_id: OptionalInt = None


class AttendanceUpdate(ApiModel):
    date: OptionalDate = None
    status: Optional[AttendanceStatus] = None
    remarks: OptionalStr = None


class AttendanceResponse(ApiModel):
    id: int
    school_id: int
    student_id: int
    course_id: int
    date: dt.date
    status: str
    remarks: Optional[str]


class TeacherAttendanceCreate(ApiModel):
    teacher_id: IntField
    date: DateField
    status: AttendanceStatus
    remarks: OptionalStr = None
    school_id: OptionalInt = None


class TeacherAttendanceUpdate(ApiModel):
    date: OptionalDate = None
    status: Optional[AttendanceStatus] = None
    remarks: OptionalStr = None


class TeacherAttendanceResponse(ApiModel):
    id: int
    school_id: int
    teacher_id: int
    date: dt.date
    status: str
    remarks: Optional[str]
