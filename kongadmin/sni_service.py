"""SNIs of the Kong Admin API."""

from __future__ import annotations

from typing import Any

from .client import PAGE_SIZE, KongClient, ListOpt
from .models import SNI
from .utils import is_empty_string


class SNIService:
    """Creates, fetches, updates, deletes and lists SNIs."""

    def __init__(self, client: KongClient) -> None:
        self.client = client

    def _call(self, method: str, endpoint: str, body: Any = None) -> Any:
        return self.client.do(self.client.new_request(method, endpoint, None, body))

    def create(self, sni: SNI | None) -> SNI:
        """Create *sni*; an SNI with an ID is created under that ID."""
        if sni is None:
            raise ValueError("cannot create a nil sni")
        endpoint, method = "/snis", "POST"
        if sni.id is not None:
            endpoint, method = f"{endpoint}/{sni.id}", "PUT"
        return SNI.from_dict(self._call(method, endpoint, sni) or {})

    def get(self, name_or_id: str | None) -> SNI:
        """Fetch an SNI by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("usernameOrID cannot be nil for Get operation")
        return SNI.from_dict(self._call("GET", f"/snis/{name_or_id}") or {})

    def update(self, sni: SNI | None) -> SNI:
        """Patch an SNI, addressed by its ID."""
        if sni is None:
            raise ValueError("cannot update a nil sni")
        if is_empty_string(sni.id):
            raise ValueError("ID cannot be nil for Update operation")
        return SNI.from_dict(self._call("PATCH", f"/snis/{sni.id}", sni) or {})

    def delete(self, name_or_id: str | None) -> None:
        """Delete an SNI by name or ID."""
        if is_empty_string(name_or_id):
            raise ValueError("usernameOrID cannot be nil for Delete operation")
        self._call("DELETE", f"/snis/{name_or_id}")

    def _page(self, endpoint: str, opt: ListOpt | None) -> tuple[list[SNI], ListOpt | None]:
        data, next_opt = self.client.list(endpoint, opt)
        return [SNI.from_dict(item) for item in data], next_opt

    def list(self, opt: ListOpt | None = None) -> tuple[list[SNI], ListOpt | None]:
        """Fetch one page of SNIs and the options for the next page."""
        return self._page("/snis", opt)

    def list_for_certificate(
        self, certificate_id: str, opt: ListOpt | None = None
    ) -> tuple[list[SNI], ListOpt | None]:
        """Fetch one page of the SNIs bound to a certificate."""
        return self._page(f"/certificates/{certificate_id}/snis", opt)

    def list_all(self) -> list[SNI]:
        """Fetch every SNI, page by page."""
        snis: list[SNI] = []
        opt: ListOpt | None = ListOpt(size=PAGE_SIZE)
        while opt is not None:
            page, opt = self.list(opt)
            snis.extend(page)
        return snis