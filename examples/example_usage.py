"""Example: drive the service layer directly (no Flask).

Controllers stay thin; every rule lives in RosterService and the hour ledger.
"""

from tutoring_roster.container import build_container
from tutoring_roster.core.exceptions import ValidationError


def main():
    container = build_container(seed=True)
    service = container.roster_service

    student = service.add_student(
        "Med", name="Dara", grade="M.5", contact="089-000-1111", course_type="practical", total_hours=6
    )
    service.record_session(
        "Med",
        student_id=student.student_id,
        session_date="2024-03-01",
        hours_used=2,
        content="Lab safety and measurement",
        teacher="Ms. Kanya",
    )

    try:
        service.record_session(
            "Med",
            student_id=student.student_id,
            session_date="2024-03-02",
            hours_used=10,
            content="Overbooked",
            teacher="Ms. Kanya",
        )
    except ValidationError as e:
        print("rejected:", e.errors)

    for row in service.roster_rows("Med"):
        print(row.student.name, f"{row.progress:.0f}%", row.balance.value, row.session_count)
    print(service.summarize("Login"))


if __name__ == "__main__":
    main()
