from pydantic import BaseModel
from typing import Optional


class Identity(BaseModel):
    """An authenticated profile as confirmed by Supabase Auth."""
    id: str
    email: Optional[str] = None
