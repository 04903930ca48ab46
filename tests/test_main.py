from unittest.mock import AsyncMock, MagicMock

import main
from app.config import settings
from app.models import StateVenueCount


async def test_check_directory_reports_counts(monkeypatch, capsys):
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    db = MagicMock()
    db.name = "bowlingalleys_test"
    db.venues.count_documents = AsyncMock(return_value=5)
    init_db = AsyncMock()
    monkeypatch.setattr(main, "get_client", lambda: client)
    monkeypatch.setattr(main, "get_db", lambda: db)
    monkeypatch.setattr(main, "init_db", init_db)
    monkeypatch.setattr(
        main,
        "venue_counts_by_state",
        AsyncMock(
            return_value=[
                StateVenueCount(state="Colorado", abbreviation="CO", count=3),
                StateVenueCount(state="Texas", abbreviation="TX", count=1),
            ]
        ),
    )
    monkeypatch.setattr(settings, "api_base_url", "")

    listed = await main.check_directory()

    assert listed == 4
    init_db.assert_awaited_once()
    out = capsys.readouterr().out
    assert "5 stored, 4 listed in 2 states" in out
    assert "API_BASE_URL is not set" in out
