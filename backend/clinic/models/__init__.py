from clinic.models.user import User
from clinic.models.patient import Patient
from clinic.models.doctor import Doctor
from clinic.models.drug import Drug
from clinic.models.appointment import Appointment
from clinic.models.admission import Admission

__all__ = ["User", "Patient", "Doctor", "Drug", "Appointment", "Admission"]
