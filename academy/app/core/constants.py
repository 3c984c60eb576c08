"""Enumerated values stored in string columns."""


class Role:
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STAFF = "STAFF"
    PARENT = "PARENT"
    STUDENT = "STUDENT"

    STAFF_ROLES = (ADMIN, TEACHER, STAFF)


class StudentStatus:
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    WITHDRAWN = "WITHDRAWN"


class ClassStatus:
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class EnrollmentStatus:
    ACTIVE = "ACTIVE"
    WITHDRAWN = "WITHDRAWN"


class AttendanceStatus:
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    EXCUSED = "EXCUSED"


class SubmissionStatus:
    NOT_SUBMITTED = "NOT_SUBMITTED"
    SUBMITTED = "SUBMITTED"
    GRADED = "GRADED"

    # Statuses that count as handed in
    TURNED_IN = (SUBMITTED, GRADED)


class CounselingStatus:
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentStatus:
    INPUT_DONE = "INPUT_DONE"
    BILLED = "BILLED"
    PAID = "PAID"
    UNPAID = "UNPAID"


class AnnouncementTarget:
    ALL = "ALL"
    PARENT = "PARENT"
    STUDENT = "STUDENT"
    STAFF = "STAFF"

    MOBILE = (ALL, PARENT, STUDENT)
