import json

import pytest

import config


@pytest.fixture(autouse=True)
def no_delays(monkeypatch):
    """Skip the demo pacing delays."""
    monkeypatch.setattr(config, "SCRAPE_DELAY_MIN", 0.0)
    monkeypatch.setattr(config, "SCRAPE_DELAY_MAX", 0.0)
    monkeypatch.setattr(config, "DISCOVERY_DELAY", 0.0)


@pytest.fixture
def parse_events():
    """Split a text/event-stream body into its JSON payloads."""
    def _parse(body: str):
        events = []
        for chunk in body.split("\n\n"):
            chunk = chunk.strip()
            if chunk.startswith("data: "):
                events.append(json.loads(chunk[len("data: "):]))
        return events
    return _parse
