"""
QR Asset Client.
Fetches the QR code raster for a share link from the QR image service.
"""
import asyncio
import io
import logging
from typing import Optional
from urllib.parse import quote

import httpx
from PIL import Image, UnidentifiedImageError

from ..config import settings

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_qr_url(data: str, size: int) -> str:
    """QR service URL for `data` rendered at `size` x `size` pixels."""
    encoded = quote(data, safe=_URI_COMPONENT_SAFE)
    return (
        f"{settings.qr_service_url}?size={size}x{size}&data={encoded}"
        "&bgcolor=ffffff&color=1e293b&margin=0"
    )


class QRClient:
    """Loads QR rasters; any failure yields None so callers can draw a placeholder."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.qr_timeout_seconds

    async def fetch(self, data: str, size: int) -> Optional[Image.Image]:
        """
        Fetch and decode the QR image.

        Args:
            data: Text to encode, normally the share URL
            size: Edge length in pixels

        Returns:
            Decoded RGBA image, or None on timeout or error
        """
        if not data:
            return None

        url = build_qr_url(data, size)
        try:
            return await asyncio.wait_for(self._download(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"QR fetch timed out after {self.timeout}s")
        except httpx.HTTPError as e:
            logger.warning(f"QR fetch failed: {e}")
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"QR image could not be decoded: {e}")
        return None

    async def _download(self, url: str) -> Image.Image:
        async with httpx.AsyncClient() as client:
            response = await client.get(url)
            response.raise_for_status()
        image = Image.open(io.BytesIO(response.content))
        image.load()
        return image.convert("RGBA")


# Global QR client instance
qr_client: Optional[QRClient] = None


def get_qr_client() -> QRClient:
    """Get or create the global QR client."""
    global qr_client
    if qr_client is None:
        qr_client = QRClient()
    return qr_client
