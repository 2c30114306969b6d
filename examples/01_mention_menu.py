#!/usr/bin/env python3
"""
Example 1: Mention Menu Walkthrough
===================================

VALUE PROPOSITION:
Shows the whole "@mention" flow against an in-memory editor API, so it runs
without a server: typing a query, watching snapshots arrive, and selecting
a person who cannot see the document.

WHAT YOU'LL LEARN:
- Driving the controller with update(search, active)
- Subscribing to published suggestion snapshots
- How a stale query is superseded instead of racing
- What the access warning looks like

AUDIENCE:
Developers embedding the mention menu in an editor host
"""

import asyncio
import json
import logging

import httpx

from mention_menu import (
    MentionApiClient,
    MentionMenuConfig,
    MentionMenuController,
    Notification,
)

USERS = [
    {"id": "u1", "name": "Alice", "avatarUrl": "https://example.com/alice.png"},
    {"id": "u2", "name": "Alan"},
]
DOCUMENTS = [
    {"id": "d1", "title": "Alignment Doc", "icon": "📐"},
    {"id": "d2", "title": "Allocation Plan"},
]
ACCESS = {"u2": [{"id": "u2", "name": "Alan"}]}


# =============================================================================
# SECTION 1: In-memory editor API
# =============================================================================


async def handle(request: httpx.Request) -> httpx.Response:
    """Answer suggestions.mention and documents.users like the editor would."""
    method = request.url.path.rsplit("/", 1)[-1]
    payload = json.loads(request.content)
    await asyncio.sleep(0.05)

    if method == "suggestions.mention":
        query = payload["query"].lower()
        data = {
            "users": [u for u in USERS if u["name"].lower().startswith(query)],
            "documents": [d for d in DOCUMENTS if d["title"].lower().startswith(query)],
        }
        return httpx.Response(200, json={"data": data})

    if method == "documents.users":
        return httpx.Response(200, json={"data": ACCESS.get(payload["userId"], [])})

    return httpx.Response(404, json={"error": "not_found"})


class PrintingNotifier:
    """Stands in for the host's toast system."""

    async def notify(self, notification: Notification) -> None:
        print(f"  🔔 {notification.message} ({notification.duration:.0f}s)")


# =============================================================================
# SECTION 2: Walkthrough
# =============================================================================


async def main():
    logging.basicConfig(level=logging.INFO)

    config = MentionMenuConfig(api_url="https://editor.local/api")
    http = httpx.AsyncClient(transport=httpx.MockTransport(handle))

    async with MentionApiClient(config, http_client=http) as api:
        controller = MentionMenuController(
            api, notifier=PrintingNotifier(), actor_id="u0"
        )
        controller.navigate("/doc/quarterly-review-Qr7Zx2")

        async def render():
            async for state in controller.subscribe():
                if not state.loaded:
                    print("  (menu hidden)")
                    continue
                labels = ", ".join(c.label for c in state.candidates)
                print(f"  menu for {state.search_term!r}: {labels}")

        renderer = asyncio.create_task(render())

        print("\n1. User types '@a', then quickly '@al'")
        controller.update("a", active=True)
        controller.update("al", active=True)
        state = await controller.wait()

        print("\n2. User picks Alice (no access)")
        await controller.select(state.candidates[0])

        print("\n3. User picks Alan (has access)")
        await controller.select(state.candidates[1])

        controller.update("al", active=False)
        await asyncio.sleep(0.01)
        renderer.cancel()
        await controller.close()

    print("\n✅ Done")


if __name__ == "__main__":
    asyncio.run(main())
