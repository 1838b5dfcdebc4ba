import json

import pytest

from treat_focus.settings_store import SettingsStore


@pytest.mark.parametrize(
    "key, value",
    [
        ("dtf_duration", 1500),
        ("dtf_strict", False),
        ("dtf_shelter", {"name": "Happy Paws", "url": "https://happypaws.example"}),
        ("dtf_history", [{"at": "2026-10-18T09:30:00.000Z", "duration": 5, "success": False}]),
    ],
)
def test_round_trip_through_file(tmp_path, logger, key, value) -> None:
    path = str(tmp_path / "settings.json")
    SettingsStore(path, logger).save(key, value)

    reopened = SettingsStore(path, logger)
    reopened.refresh()

    assert reopened.load(key, None) == value


def test_missing_key_returns_fallback(store) -> None:
    assert store.load("dtf_treats", 0) == 0


def test_unparseable_value_returns_fallback(tmp_path, logger) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"dtf_treats": "{not json"}), encoding="utf-8")
    s = SettingsStore(str(path), logger)
    s.refresh()

    assert s.load("dtf_treats", 0) == 0


@pytest.mark.parametrize(
    "stored, fallback",
    [
        ("abc", 0),
        (True, 0),
        (1, False),
        ([], {}),
        ({"a": 1}, []),
    ],
)
def test_wrong_shape_returns_fallback(store, stored, fallback) -> None:
    store.save("k", stored)

    assert store.load("k", fallback) == fallback


def test_corrupt_file_gives_fallbacks(tmp_path, logger) -> None:
    path = tmp_path / "settings.json"
    path.write_text("]] not json", encoding="utf-8")
    s = SettingsStore(str(path), logger)
    s.refresh()

    assert s.load("dtf_duration", 1500) == 1500


def test_save_failure_is_ignored(tmp_path, logger) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    s = SettingsStore(str(blocker / "settings.json"), logger)

    s.save("dtf_treats", 4)

    assert s.load("dtf_treats", 0) == 4


def test_unserializable_value_is_ignored(store) -> None:
    store.save("dtf_treats", object())

    assert store.load("dtf_treats", 0) == 0
