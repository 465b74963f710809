from clinic.schemas.common import CamelModel


class DashboardStats(CamelModel):
    total_patients: int
    active_admissions: int
    doctors_available: int
    drug_items: int
    appointments_today: int
    low_stock_drugs: int
