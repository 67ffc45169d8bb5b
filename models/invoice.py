from dataclasses import dataclass


@dataclass
class HostelInvoiceData:
    payment_id: str
    academic_year: str
    student_name: str
    roll_number: str
    email: str
    course: str
    department: str
    room_number: str
    hostel_name: str
    payment_amount: float
    payment_date: str
    hostel_fee: float
    maintenance_fee: float = 0
    security_deposit: float = 0
    discount: float = 0
    tax: float = 0

    @property
    def subtotal(self):
        return self.hostel_fee + self.maintenance_fee + self.security_deposit

    @property
    def total(self):
        return self.subtotal - self.discount + self.tax


@dataclass
class CourseFeeInvoiceData:
    payment_id: str
    academic_year: str
    student_name: str
    roll_number: str
    email: str
    course: str
    department: str
    school: str
    payment_amount: float
    payment_date: str
    tuition_fee: float = 0
    lab_fee: float = 0
    library_fee: float = 0
    exam_fee: float = 0
    development_fee: float = 0
    other_fees: float = 0
    discount: float = 0
    late_fee: float = 0

    @property
    def breakdown(self):
        return [
            ("Tuition Fee", self.tuition_fee),
            ("Lab Fee", self.lab_fee),
            ("Library Fee", self.library_fee),
            ("Exam Fee", self.exam_fee),
            ("Development Fee", self.development_fee),
            ("Other Fees", self.other_fees),
        ]

    @property
    def subtotal(self):
        return sum(amount for _, amount in self.breakdown)

    @property
    def total(self):
        return self.subtotal - self.discount + self.late_fee
