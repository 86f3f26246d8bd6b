from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gradebook.database import Base

# Student model
class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    # Personal information
    full_name = Column(String(255), nullable=False)
    gender = Column(String(20), nullable=False)
    date_of_birth = Column(Date)
    place_of_birth = Column(String(255))
    nationality = Column(String(100))
    religion = Column(String(100))
    hometown = Column(String(255))
    home_address = Column(Text, nullable=False)
    gps_address = Column(String(50))

    # Admission details; the admission number is the id reports are keyed by
    admission_number = Column(String(100), unique=True, nullable=False, index=True)
    admission_date = Column(Date, nullable=False)
    academic_year = Column(String(9), nullable=False)
    class_name = Column(String(100), nullable=False)
    term = Column(String(20), nullable=False)
    previous_school = Column(String(255))
    reason_for_transfer = Column(Text)

    # Primary guardian
    guardian_name = Column(String(255), nullable=False)
    guardian_relationship = Column(String(50), nullable=False)
    guardian_phone = Column(String(50), nullable=False)
    guardian_email = Column(String(255))
    guardian_occupation = Column(String(100))
    guardian_address = Column(Text)

    # Secondary guardian
    secondary_guardian_name = Column(String(255))
    secondary_guardian_relationship = Column(String(50))
    secondary_guardian_phone = Column(String(50))
    secondary_guardian_occupation = Column(String(100))

    # Emergency contact
    emergency_contact_name = Column(String(255))
    emergency_contact_relationship = Column(String(50))
    emergency_contact_phone = Column(String(50))
    emergency_contact_alt_phone = Column(String(50))

    # Health
    blood_group = Column(String(10))
    medical_conditions = Column(Text)
    allergies = Column(Text)
    doctor_contact = Column(String(255))

    languages_spoken = Column(String(255))
    preferred_communication = Column(String(50))
    remarks = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    classes = relationship("SchoolClass", secondary="class_students", back_populates="students")

# Teacher model
class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    staff_number = Column(String(50), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(50), nullable=False)
    address = Column(Text, nullable=False)
    qualification = Column(String(100))
    experience = Column(Integer, default=0)
    specialization = Column(String(100))
    employment_date = Column(Date)
    employment_type = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    subjects = relationship("Subject", secondary="teacher_subjects", back_populates="teachers")
    classes = relationship("SchoolClass", secondary="teacher_classes", back_populates="teachers")
