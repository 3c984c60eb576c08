from academy.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all
from academy.app.models.user import User  # noqa: F401
from academy.app.models.student import Student  # noqa: F401
from academy.app.models.parent_link import ParentStudentLink  # noqa: F401
from academy.app.models.classroom import Classroom, Enrollment, Subject  # noqa: F401
from academy.app.models.attendance import AttendanceRecord  # noqa: F401
from academy.app.models.grade import Grade  # noqa: F401
from academy.app.models.assignment import Assignment, AssignmentSubmission  # noqa: F401
from academy.app.models.counseling import CounselingRequest  # noqa: F401
from academy.app.models.payment import Payment  # noqa: F401
from academy.app.models.announcement import Announcement  # noqa: F401
from academy.app.models.signup_request import SignupRequest  # noqa: F401
