# storefront/news.py
import logging
from typing import List, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class NewsError(Exception):
    pass


def fetch_gaming_news(api_key: Optional[str], url: str, query: str = "video games",
                      timeout: float = 10, client: Optional[httpx.Client] = None) -> List[Dict[str, str]]:
    """Latest gaming headlines as ``{title, source, date, link}`` dicts."""
    if not api_key:
        raise NewsError("The news API key is not configured (set NEWSDATA_API_KEY).")

    http = client or httpx.Client(timeout=timeout)
    try:
        r = http.get(url, params={"apikey": api_key, "q": query})
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("News request failed: %s", e)
        raise NewsError("Could not fetch news (the API may be offline or the key invalid).") from e
    except ValueError as e:
        raise NewsError("The news API returned something that is not JSON.") from e
    finally:
        if client is None:
            http.close()

    results = data.get("results") if isinstance(data, dict) else None
    if results is None:
        raise NewsError("Unexpected news API response (no 'results').")

    return [
        {
            "title": item.get("title", ""),
            "source": item.get("source_name", ""),
            "date": item.get("pubDate", ""),
            "link": item.get("link", ""),
        }
        for item in results
    ]
