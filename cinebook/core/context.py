from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Theme(str, Enum):
    light = "light"
    dark = "dark"


class Language(str, Enum):
    vi = "vi"
    en = "en"


class ClientContext(BaseModel):
    """
    Per-request view of who is calling and how they want things shown.

    Passed explicitly to clients and sessions instead of living in global state.
    """
    theme: Theme = Theme.light
    language: Language = Language.vi
    auth_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)

    def auth_headers(self) -> dict[str, str]:
        if not self.auth_token:
            return {}
        return {"Authorization": f"Bearer {self.auth_token}"}
