from dataclasses import dataclass, field


@dataclass
class SemesterMarks:
    semester: int
    marks: list = field(default_factory=list)

    @property
    def total_internal(self):
        return sum(m.get("internalMarks") or 0 for m in self.marks)

    def __repr__(self):
        return f"<SemesterMarks sem={self.semester} subjects={len(self.marks)}>"
