from typing import List

from cinebook.clients.api import ApiClient
from cinebook.schemas.showtime import Cinema, CinemaHall


class CinemaClient:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_raw_cinemas(self) -> List[dict]:
        return list(self.api.get("/cinemas") or [])

    def get_cinemas(self) -> List[Cinema]:
        return [Cinema.model_validate(c) for c in self.get_raw_cinemas()]

    def get_active_cinemas(self) -> List[Cinema]:
        return [Cinema.model_validate(c) for c in self.api.get("/cinemas/active") or []]

    def get_cinema(self, cinema_id: int) -> Cinema:
        return Cinema.model_validate(self.api.get(f"/cinemas/{cinema_id}"))

    def get_cinemas_by_city(self, city: str) -> List[Cinema]:
        return [Cinema.model_validate(c) for c in self.api.get(f"/cinemas/city/{city}") or []]

    def get_cinema_halls(self, cinema_id: int) -> List[CinemaHall]:
        return [CinemaHall.model_validate(h) for h in self.api.get(f"/cinemas/{cinema_id}/halls") or []]

    def get_hall(self, hall_id: int) -> CinemaHall:
        return CinemaHall.model_validate(self.api.get(f"/cinema-halls/{hall_id}"))
