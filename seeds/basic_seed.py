# seeds/basic_seed.py
"""
Seed de demo del panel de registros académicos.

CREA (o reutiliza si ya existen):
    - Usuario admin + docente
    - Institución demo con resultados institucionales
    - Año académico vigente + período
    - Programa con resultados de programa
    - Curso, sección y SLOs
    - Estudiantes, inscripciones y evaluaciones

Modo de uso:
    flask seed-demo
o bien:
    flask shell
    >>> from seeds.basic_seed import run_basic_seed
    >>> run_basic_seed()
"""

from datetime import date
from decimal import Decimal

from extensions import db
from models import (
    Assessment,
    Course,
    CourseSection,
    Enrollment,
    Institution,
    InstitutionalOutcome,
    Program,
    ProgramOutcome,
    Student,
    StudentLearningOutcome,
    Term,
    TermYear,
    User,
)

DEMO_PASSWORDS = {
    "admin@demo.com": "admin1234",
    "docente@demo.com": "docente1234",
}

DEMO_STUDENTS = (
    ("S0001", "Ana", "García", "ana.garcia@demo.com"),
    ("S0002", "Bruno", "López", "bruno.lopez@demo.com"),
    ("S0003", "Carla", "Méndez", "carla.mendez@demo.com"),
    ("S0004", "Diego", "Suárez", None),
)


def _get_or_create(model, defaults=None, **kwargs):
    instance = model.query.filter_by(**kwargs).first()
    if instance:
        return instance, False

    params = {**kwargs}
    if defaults:
        params.update(defaults)

    instance = model(**params)
    db.session.add(instance)
    db.session.flush()
    return instance, True


def _ensure_user(email, full_name):
    user, created = _get_or_create(User, email=email, defaults={"full_name": full_name})
    if created or not user.password_hash:
        user.set_password(DEMO_PASSWORDS.get(email, "changeme123"))
    return user


def run_basic_seed(echo=print):
    echo("🌱 Ejecutando seed de demo...")

    # 1. Usuarios
    admin = _ensure_user("admin@demo.com", "Admin Demo")
    docente = _ensure_user("docente@demo.com", "Docente Demo")
    audit = {"created_by_fk": admin.id, "updated_by_fk": admin.id}

    # 2. Institución + resultados institucionales
    inst, _ = _get_or_create(
        Institution,
        institution_code="MOSAIC",
        defaults={"institution_name": "Instituto Mosaic Demo", **audit},
    )
    ilo_comm, _ = _get_or_create(
        InstitutionalOutcome,
        institution_fk=inst.id,
        code="ILO1",
        defaults={"description": "Comunicación efectiva oral y escrita.", "sequence_num": 1, **audit},
    )
    ilo_math, _ = _get_or_create(
        InstitutionalOutcome,
        institution_fk=inst.id,
        code="ILO2",
        defaults={"description": "Razonamiento cuantitativo.", "sequence_num": 2, **audit},
    )

    # 3. Calendario
    year, _ = _get_or_create(
        TermYear,
        term_name="2025-2026",
        defaults={
            "start_date": date(2025, 8, 1),
            "end_date": date(2026, 7, 31),
            "is_current": True,
            **audit,
        },
    )
    if year.is_current:
        TermYear.query.filter(TermYear.id != year.id).update({"is_current": False})

    term, _ = _get_or_create(
        Term,
        term_code="FA25",
        defaults={
            "term_year_fk": year.id,
            "term_name": "Otoño 2025",
            "academic_year": "2025",
            "start_date": date(2025, 8, 25),
            "end_date": date(2025, 12, 12),
            **audit,
        },
    )

    # 4. Programa
    program, _ = _get_or_create(
        Program,
        program_code="CS-BS",
        defaults={
            "institution_fk": inst.id,
            "term_year_fk": year.id,
            "program_name": "Licenciatura en Ciencias de la Computación",
            "degree_type": "BS",
            **audit,
        },
    )
    plo_write, _ = _get_or_create(
        ProgramOutcome,
        program_fk=program.id,
        code="PLO1",
        defaults={
            "institutional_outcome_fk": ilo_comm.id,
            "description": "Documenta soluciones técnicas con claridad.",
            "sequence_num": 1,
            **audit,
        },
    )
    plo_algo, _ = _get_or_create(
        ProgramOutcome,
        program_fk=program.id,
        code="PLO2",
        defaults={
            "institutional_outcome_fk": ilo_math.id,
            "description": "Analiza la complejidad de algoritmos.",
            "sequence_num": 2,
            **audit,
        },
    )

    # 5. Curso, sección y SLOs
    course, _ = _get_or_create(
        Course,
        course_number="CS101",
        defaults={"term_fk": term.id, "course_name": "Introducción a la Programación", **audit},
    )
    section, _ = _get_or_create(
        CourseSection,
        term_fk=term.id,
        crn="10001",
        defaults={
            "course_fk": course.id,
            "instructor_fk": docente.id,
            "section_number": "01",
            "max_enrollment": 30,
            **audit,
        },
    )
    slo_report, _ = _get_or_create(
        StudentLearningOutcome,
        course_fk=course.id,
        slo_code="SLO1",
        defaults={
            "program_outcome_fk": plo_write.id,
            "slo_description": "Redacta un informe técnico de un programa propio.",
            "sequence_num": 1,
            **audit,
        },
    )
    slo_loops, _ = _get_or_create(
        StudentLearningOutcome,
        course_fk=course.id,
        slo_code="SLO2",
        defaults={
            "program_outcome_fk": plo_algo.id,
            "slo_description": "Estima el costo de bucles anidados.",
            "sequence_num": 2,
            **audit,
        },
    )

    # 6. Estudiantes, inscripciones y evaluaciones
    levels = ("exceeds", "met", "partially_met", "not_met")
    for index, (student_id, first_name, last_name, email) in enumerate(DEMO_STUDENTS):
        student, _ = _get_or_create(
            Student,
            student_id=student_id,
            defaults={"first_name": first_name, "last_name": last_name, "email": email, **audit},
        )
        enrollment, _ = _get_or_create(
            Enrollment,
            student_fk=student.id,
            course_section_fk=section.id,
            defaults={"enrollment_date": date(2025, 8, 20), **audit},
        )
        for slo in (slo_report, slo_loops):
            _get_or_create(
                Assessment,
                enrollment_fk=enrollment.id,
                student_learning_outcome_fk=slo.id,
                defaults={
                    "score_value": Decimal(95 - index * 15),
                    "achievement_level": levels[index % len(levels)],
                    "assessment_method": "Rúbrica",
                    "assessed_date": date(2025, 10, 15),
                    "is_finalized": index % 2 == 0,
                    **audit,
                },
            )

    db.session.commit()

    echo("✅ Seed de demo cargado.")
    echo("   Usuarios:")
    for email, pwd in DEMO_PASSWORDS.items():
        echo(f"     - {email} / {pwd}")
    echo(f"   Sección demo: {term.term_code} / {section.crn} ({course.course_number})")
