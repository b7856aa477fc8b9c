"""
API Client for EstateHub Frontends

Handles all HTTP requests to the FastAPI backend. Admin calls take an
explicit AuthContext; the client itself never stores a token.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from config.settings import settings


class APIError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, detail: Any):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


@dataclass(frozen=True)
class AuthContext:
    """Token and admin profile returned by a successful login."""
    token: str
    admin: Dict[str, Any]

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class APIClient:
    """Client for interacting with the EstateHub API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize API client.

        Args:
            base_url: Base URL for API endpoints (default: settings.api_base_url)
            timeout: Request timeout in seconds (default: settings.api_timeout_seconds)
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self.session = requests.Session()

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        auth: Optional[AuthContext] = None,
    ) -> Any:
        """
        Make a request to the API.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            params: Query parameters; None values are dropped
            json: JSON body
            auth: Credentials for admin endpoints

        Returns:
            Decoded JSON response

        Raises:
            APIError: If the API answers with an error status
        """
        url = f"{self.base_url}{endpoint}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        response = self.session.request(
            method,
            url,
            params=params,
            json=json,
            headers=auth.headers if auth else None,
            timeout=self.timeout,
        )
        if not response.ok:
            raise APIError(response.status_code, self._error_detail(response))
        return response.json()

    @staticmethod
    def _error_detail(response: requests.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason
        if isinstance(body, dict) and "detail" in body:
            return body["detail"]
        return body

    def health_check(self) -> Dict[str, Any]:
        """
        Check API health.

        Returns:
            Health check response
        """
        return self._request("GET", "/health")

    # Public listings

    def search_properties(self, **filters: Any) -> Dict[str, Any]:
        """
        Search active listings.

        Args:
            **filters: camelCase query parameters (location, propertyType,
                minPrice, amenities, page, limit, sortBy, sortOrder, ...).
                List values are sent as repeated parameters.

        Returns:
            {"properties": [...], "total": int, "page": int, "limit": int}
        """
        return self._request("GET", "/api/properties", params=filters)

    def get_featured_properties(self, limit: int = 6) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/properties/featured", params={"limit": limit})

    def get_property(self, property_id: int) -> Dict[str, Any]:
        """
        Get a listing. Each call counts as one view.

        Raises:
            APIError: 404 if the listing is absent or inactive
        """
        return self._request("GET", f"/api/properties/{property_id}")

    def get_search_suggestions(self, query: str) -> List[Dict[str, str]]:
        return self._request("GET", "/api/search/suggestions", params={"q": query})

    def create_lead(self, lead: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit a contact form inquiry.

        Args:
            lead: name, email, phone, and optional message/propertyId/source
        """
        return self._request("POST", "/api/leads", json=lead)

    # Admin

    def login(self, username: str, password: str) -> AuthContext:
        """
        Authenticate an admin.

        Returns:
            AuthContext to pass to admin calls

        Raises:
            APIError: 401 on bad credentials, 429 when rate limited
        """
        body = self._request("POST", "/api/admin/login", json={"username": username, "password": password})
        return AuthContext(token=body["token"], admin=body["admin"])

    def verify(self, auth: AuthContext) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/verify", auth=auth)["admin"]

    def get_dashboard_stats(self, auth: AuthContext) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/stats", auth=auth)

    def list_admin_properties(self, auth: AuthContext, **filters: Any) -> Dict[str, Any]:
        """Search all listings, inactive ones included."""
        return self._request("GET", "/api/admin/properties", params=filters, auth=auth)

    def get_admin_property(self, auth: AuthContext, property_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/admin/properties/{property_id}", auth=auth)

    def create_property(self, auth: AuthContext, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/admin/properties", json=data, auth=auth)

    def update_property(self, auth: AuthContext, property_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/admin/properties/{property_id}", json=changes, auth=auth)

    def delete_property(self, auth: AuthContext, property_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/admin/properties/{property_id}", auth=auth)

    def list_leads(
        self,
        auth: AuthContext,
        page: int = 1,
        limit: int = 20,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List leads newest first.

        Args:
            auth: Admin credentials
            page: Page number
            limit: Items per page
            status: Filter by status (new, contacted, qualified, closed)

        Returns:
            {"leads": [...], "total": int, "page": int, "limit": int}
        """
        params = {"page": page, "limit": limit, "status": status}
        return self._request("GET", "/api/admin/leads", params=params, auth=auth)

    def get_lead(self, auth: AuthContext, lead_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/admin/leads/{lead_id}", auth=auth)

    def update_lead(self, auth: AuthContext, lead_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/admin/leads/{lead_id}", json=changes, auth=auth)

    def delete_lead(self, auth: AuthContext, lead_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/admin/leads/{lead_id}", auth=auth)
