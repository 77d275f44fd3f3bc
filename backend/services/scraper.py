import asyncio
import logging
import re
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup
from playwright.async_api import async_playwright

import config
from models import CompanyData, SocialMedia

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-z]{2,}")
# Matches patterns like +1-555-555-5555 or (555) 555-5555
PHONE_RE = re.compile(r"(\+?\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{3,4})")

TECH_KEYWORDS = ["React", "Node.js", "TypeScript", "GraphQL", "Python", "AWS", "PostgreSQL", "MongoDB"]
DEFAULT_INDUSTRY = "Technology"
CONFIDENCE = 0.9

def check_url_reachability(url: str, timeout: float = 10) -> bool:
    """
    HEAD-probes the URL. Anything below 400 after redirects counts as reachable.
    Blocking (requests), so call it through asyncio.to_thread from async code.
    """
    try:
        response = requests.head(
            url,
            allow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": config.USER_AGENT},
        )
        return response.status_code < 400
    except requests.RequestException as e:
        logger.warning("Reachability check failed for %s: %s", url, e)
        return False

def _meta_content(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find("meta", attrs={"name": name}) or soup.find("meta", attrs={"property": name})
    if tag and tag.get("content"):
        return tag["content"].strip()
    return ""

def _first_href(soup: BeautifulSoup, domain: str) -> str:
    link = soup.select_one(f'a[href*="{domain}"]')
    return link["href"] if link else ""

def _first_phone(text: str) -> str:
    for candidate in PHONE_RE.findall(text):
        if len(re.sub(r"\D", "", candidate)) > 8:  # filter short numbers
            return candidate.strip()
    return ""

def extract_company_fields(html: str, body_text: str, url: str, extraction_level: int = 2) -> Dict[str, Any]:
    """
    Pulls the superficial company fields out of a loaded page.

    `html` is the rendered document, `body_text` the visible text of <body>.
    Each extraction level adds a group of fields on top of the previous one:
      1 - email, phone
      2 - description, industry (constant), social links, blank location/founded/size
      3 - tech stack keyword matches
    """
    soup = BeautifulSoup(html or "", "lxml")

    title = soup.title.get_text() if soup.title else ""
    company_name = title.split("|")[0].strip() or urlparse(url).hostname or ""

    data: Dict[str, Any] = {"company_name": company_name}

    if extraction_level >= 1:
        email_match = EMAIL_RE.search(body_text or "")
        data["email"] = email_match.group(0) if email_match else ""
        data["phone"] = _first_phone(body_text or "")

    if extraction_level >= 2:
        data["description"] = _meta_content(soup, "description") or _meta_content(soup, "og:description")
        data["industry"] = DEFAULT_INDUSTRY
        data["location"] = ""
        data["founded_year"] = ""
        data["employee_size"] = ""
        data["social_media"] = SocialMedia(
            linkedin=_first_href(soup, "linkedin.com"),
            twitter=_first_href(soup, "twitter.com"),
            facebook=_first_href(soup, "facebook.com"),
        )

    if extraction_level >= 3:
        data["tech_stack"] = [k for k in TECH_KEYWORDS if k in (body_text or "")]

    return data

def build_record(url: str, fields: Dict[str, Any]) -> CompanyData:
    return CompanyData(
        id=f"company-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}",
        company_name=fields.pop("company_name", "") or "Unknown Company",
        website_url=url,
        extracted_at=datetime.now(timezone.utc).isoformat(),
        source_url=url,
        confidence=CONFIDENCE,
        **fields,
    )

async def load_page(url: str, timeout: int) -> tuple:
    """Opens the URL in headless chromium and returns (html, body_text)."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=config.HEADLESS)
        try:
            page = await browser.new_page(user_agent=config.USER_AGENT)
            await page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            html = await page.content()
            body_text = await page.inner_text("body")
            return html, body_text
        finally:
            await browser.close()

async def scrape_company_data(url: str, extraction_level: int = 2, timeout: int = 30000) -> Optional[CompanyData]:
    """
    Loads one URL and returns its extraction record, or None on any failure.
    No retry is attempted.
    """
    try:
        logger.info("Scraping %s (level %d)", url, extraction_level)
        html, body_text = await load_page(url, timeout)
        fields = extract_company_fields(html, body_text, url, extraction_level)
        return build_record(url, fields)
    except Exception as e:
        logger.error("Error scraping %s: %s", url, e)
        return None

async def is_reachable(url: str, timeout_ms: int) -> bool:
    return await asyncio.to_thread(check_url_reachability, url, timeout_ms / 1000)
