# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# schools doit précéder tout le reste : chaque table y référence school_id.

from app.models.school import School  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.program import Program, Course  # noqa: F401
from app.models.teacher import Teacher  # noqa: F401
from app.models.student import Student  # noqa: F401
from app.models.guardian import Guardian, StudentGuardian  # noqa: F401
from app.models.school_class import StudentGroup, StudentGroupEnrollment  # noqa: F401
from app.models.enrollment import Enrollment  # noqa: F401
from app.models.attendance import Attendance, TeacherAttendance  # noqa: F401
from app.models.grade import Grade  # noqa: F401
from app.models.fee import Fee, Payment  # noqa: F401
from app.models.event import Event  # noqa: F401
from app.models.room import Room  # noqa: F401
