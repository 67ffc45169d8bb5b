from dataclasses import dataclass, field


@dataclass
class SemesterAttendance:
    semester: int
    subjects: list = field(default_factory=list)
    total_attended: int = 0
    total_classes: int = 0
    overall_percentage: int = 0

    def __repr__(self):
        return f"<SemesterAttendance sem={self.semester} {self.overall_percentage}%>"
