#!/usr/bin/env python
"""
Petit script de debug : appelle l'API question en local et affiche le JSON.

    python -m scripts.debug_fetch            # question 1379
    python -m scripts.debug_fetch 42 --base-url http://127.0.0.1:8000
"""
import argparse
import asyncio
import json
import sys
from typing import Optional

import httpx

BASE = "http://localhost:3000"
DEFAULT_QUESTION_ID = 1379


async def fetch_data(question_id: int = DEFAULT_QUESTION_ID, base_url: str = BASE,
                     transport: Optional[httpx.AsyncBaseTransport] = None) -> Optional[dict]:
    try:
        async with httpx.AsyncClient(base_url=base_url, transport=transport, timeout=10) as client:
            r = await client.get(f"/api/questions/{question_id}")
            data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        print(f"Error fetching data: {e!r}", file=sys.stderr)
        return None

    print(json.dumps(data, indent=2, ensure_ascii=False))
    return data


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Fetch a question from the local API and pretty-print it")
    parser.add_argument("question_id", nargs="?", type=int, default=DEFAULT_QUESTION_ID)
    parser.add_argument("--base-url", default=BASE)
    args = parser.parse_args(argv)

    asyncio.run(fetch_data(args.question_id, args.base_url))


if __name__ == "__main__":
    main()
