# Import all models to ensure they're registered with SQLAlchemy
from gradebook.database import Base
from gradebook.models.people import Student, Teacher
from gradebook.models.school import Subject, SchoolClass, ClassStudent, TeacherSubject, TeacherClass
