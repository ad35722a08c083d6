"""
Page rendering.

Fetches the HTML the generator works from. Two modes:

- browser: headless Chromium via Playwright, waiting for the network to go
  idle so client-rendered markup is present
- http: a plain GET via httpx, for server-rendered pages or environments
  without a browser

Every failure surfaces as NavigationError.
"""

from __future__ import annotations

import httpx
import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from cypressgen.config import RenderConfig, RenderMode
from cypressgen.exceptions import NavigationError
from cypressgen.extraction.naming import parse_source_url

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "cypressgen/1.0"
VIEWPORT = {"width": 1280, "height": 720}


class PageRenderer:
    """Renders a URL to HTML."""

    def __init__(
        self,
        config: RenderConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or RenderConfig()
        self._transport = transport
        self._log = logger.bind(component="renderer", mode=self.config.mode.value)

    async def render(self, url: str) -> str:
        """
        Return the rendered HTML of ``url``.

        Raises:
            MalformedUrlError: If ``url`` is not absolute
            NavigationError: If the page cannot be loaded
        """
        parse_source_url(url)
        self._log.info("Rendering page", url=url, timeout_ms=self.config.timeout_ms)

        if self.config.mode == RenderMode.HTTP:
            html = await self._fetch(url)
        else:
            html = await self._render_in_browser(url)

        self._log.debug("Page rendered", url=url, length=len(html))
        return html

    async def _fetch(self, url: str) -> str:
        headers = {"User-Agent": self.config.user_agent or DEFAULT_USER_AGENT}
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_ms / 1000,
                follow_redirects=True,
                headers=headers,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            raise NavigationError(url, f"HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise NavigationError(url, f"timed out after {self.config.timeout_ms} ms") from e
        except httpx.HTTPError as e:
            raise NavigationError(url, str(e) or type(e).__name__) from e

    async def _render_in_browser(self, url: str) -> str:
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=self.config.headless)
                try:
                    context = await browser.new_context(
                        user_agent=self.config.user_agent,
                        viewport=VIEWPORT,
                    )
                    page = await context.new_page()
                    response = await page.goto(
                        url,
                        wait_until="networkidle",
                        timeout=self.config.timeout_ms,
                    )
                    if response is not None and response.status >= 400:
                        raise NavigationError(url, f"HTTP {response.status}")
                    return await page.content()
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise NavigationError(url, e.message) from e


async def render(url: str, config: RenderConfig | None = None) -> str:
    """Render ``url`` with a throwaway PageRenderer."""
    return await PageRenderer(config).render(url)
