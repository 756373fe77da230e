from app.schemas.common import ApiModel


class DashboardStats(ApiModel):
    """Compteurs du tableau de bord, limités à l'école de l'appelant."""
    total_students: int
    active_courses: int
    total_programs: int
    total_teachers: int
    attendance_rate: float
