from versekeep.mcp.client import VersekeepClient


async def log_reading(
    client: VersekeepClient,
    chapters_read: int = 1,
    verses_read: int = 0,
) -> dict:
    return await client.post(
        "/api/progress/activity",
        json={"chaptersRead": chapters_read, "versesRead": verses_read},
    )


async def reading_progress(client: VersekeepClient) -> dict:
    """Streak, today's record and the weekly/monthly/lifetime totals in one dict."""
    streak = await client.get("/api/progress/streak")
    today = await client.get("/api/progress/today")
    stats = await client.get("/api/progress/stats")
    last_7_days = await client.get("/api/progress/last-7-days")
    if isinstance(last_7_days, dict) and last_7_days.get("error"):
        last_7_days = []

    return {
        "streak": streak,
        "today": today,
        "stats": stats,
        "last_7_days": [
            {"date": d["date"], "day": d["dayName"], "chapters": d["chaptersRead"]}
            for d in last_7_days
        ],
    }
