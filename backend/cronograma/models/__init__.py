from cronograma.models.activity_log import ActivityLog  # noqa: F401
from cronograma.models.career import Career  # noqa: F401
from cronograma.models.classroom import Classroom, ClassroomType  # noqa: F401
from cronograma.models.course import Course  # noqa: F401
from cronograma.models.group import StudentGroup  # noqa: F401
from cronograma.models.module import Module  # noqa: F401
from cronograma.models.schedule_event import RecurringAssignment, ScheduleEvent, Weekday  # noqa: F401
from cronograma.models.teacher import ContractType, Teacher, TeacherStatus  # noqa: F401
