import asyncio
import logging
import random
from typing import List

import config

logger = logging.getLogger(__name__)

# Stand-in for a real search engine / directory lookup.
DEMO_URLS = [
    "https://stripe.com",
    "https://shopify.com",
    "https://notion.so",
    "https://figma.com",
    "https://vercel.com",
    "https://supabase.com",
    "https://linear.app",
    "https://framer.com",
    "https://loom.com",
    "https://miro.com",
]

MIN_URLS = 5
MAX_URLS = 9

async def generate_urls_from_query(query: str) -> List[str]:
    """
    Returns a shuffled slice (5-9 entries) of DEMO_URLS. The query text is not used.
    """
    await asyncio.sleep(config.DISCOVERY_DELAY)

    urls = random.sample(DEMO_URLS, len(DEMO_URLS))
    urls = urls[:random.randint(MIN_URLS, MAX_URLS)]
    logger.info("Discovery for %r returned %d URLs", query, len(urls))
    return urls
