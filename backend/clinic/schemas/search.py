from typing import Literal, Optional
from clinic.schemas.common import CamelModel


class SearchResult(CamelModel):
    id: int
    name: str
    type: Literal["patient", "doctor", "drug"]
    subtitle: Optional[str] = None
