from __future__ import annotations

import logging
import threading
from io import BytesIO
from typing import Callable, Optional

import httpx
from PIL import Image, UnidentifiedImageError

from .settings import Settings

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]


def _run_inline(fn: Callable[[], None]) -> None:
    fn()


class ImageSlot:
    """Holder of the currently displayed image; None until a load succeeds."""

    def __init__(self) -> None:
        self.image: Optional[Image.Image] = None


# PUBLIC_INTERFACE
class ImageLoader:
    """
    Fire-and-forget image fetcher.

    The download and decode happen on a background thread. The assignment to
    the slot is handed to `dispatch`, the single hop back to the main context
    (for example `loop.call_soon_threadsafe`). There is no retry and no
    cancellation; any failure leaves the slot unchanged.
    """

    def __init__(
        self,
        *,
        dispatch: Dispatch = _run_inline,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._dispatch = dispatch
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, *, dispatch: Dispatch = _run_inline) -> "ImageLoader":
        """Build a loader using the configured fetch timeout."""
        return cls(dispatch=dispatch, timeout=settings.image_fetch_timeout)

    def fetch(self, url: str) -> Optional[Image.Image]:
        """Download and decode one image. Return None on any fetch or decode failure."""
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url)
                response.raise_for_status()
            image = Image.open(BytesIO(response.content))
            image.load()
            return image
        except (httpx.HTTPError, UnidentifiedImageError, OSError) as e:
            logger.debug("image load failed", extra={"event": "image_load_failed", "url": url, "error": str(e)[:200]})
            return None

    def _load(self, url: str, slot: ImageSlot) -> None:
        image = self.fetch(url)
        if image is None:
            return

        def assign() -> None:
            slot.image = image

        self._dispatch(assign)

    # PUBLIC_INTERFACE
    def load(self, url: str, slot: ImageSlot) -> threading.Thread:
        """Start loading `url` into `slot` and return the worker thread immediately."""
        worker = threading.Thread(target=self._load, args=(url, slot), daemon=True)
        worker.start()
        return worker
