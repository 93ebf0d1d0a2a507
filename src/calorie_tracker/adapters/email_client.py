"""Transactional email API client adapter."""

from dataclasses import dataclass

import httpx

from calorie_tracker.services.users import EmailClient


@dataclass
class HttpxEmailClient(EmailClient):
    """Email client for a Resend-style JSON API implemented with httpx."""

    api_url: str
    api_key: str
    sender: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_url: str, api_key: str, sender: str) -> "HttpxEmailClient":
        """Create an email client with a managed httpx session."""
        return cls(
            api_url=api_url,
            api_key=api_key,
            sender=sender,
            http_client=httpx.AsyncClient(),
        )

    async def send_email(self, to: str, subject: str, html: str) -> None:
        """Send an HTML email; raises ``httpx.HTTPStatusError`` on rejection."""
        response = await self.http_client.post(
            self.api_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={"from": self.sender, "to": [to], "subject": subject, "html": html},
            timeout=15,
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
