from .errors import RecordError, RecordNotFound
from .request_context import AdminContext
from .view_data_service import ViewDataService
from .grid_service import GridRequest, GridService
from .csv_import_service import CsvImportService
from .institution_records import InstitutionRecords, InstitutionalOutcomeRecords
from .term_records import TermYearRecords, TermRecords
from .program_records import ProgramRecords, ProgramOutcomeRecords
from .course_records import CourseRecords, CourseSectionRecords, LearningOutcomeRecords
from .student_records import StudentRecords, EnrollmentRecords, AssessmentRecords
from .user_records import UserRecords

__all__ = [
    "RecordError",
    "RecordNotFound",
    "AdminContext",
    "ViewDataService",
    "GridRequest",
    "GridService",
    "CsvImportService",
    "InstitutionRecords",
    "InstitutionalOutcomeRecords",
    "TermYearRecords",
    "TermRecords",
    "ProgramRecords",
    "ProgramOutcomeRecords",
    "CourseRecords",
    "CourseSectionRecords",
    "LearningOutcomeRecords",
    "StudentRecords",
    "EnrollmentRecords",
    "AssessmentRecords",
    "UserRecords",
]
