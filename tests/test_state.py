from disaster_atlas.state import SelectionStore


def test_absent_region_reads_all():
    store = SelectionStore()
    assert store.get("europe") == "all"
    assert "europe" not in store


def test_set_then_get_and_overwrite():
    store = SelectionStore()
    store.set("europe", "Flood")
    assert store.get("europe") == "Flood"
    store.set("europe", "Storm")
    assert store.get("europe") == "Storm"
    assert store.get("asia") == "all"


def test_hyphen_and_underscore_keys_share_state():
    store = SelectionStore()
    store.set("north-america", "Storm")
    assert store.get("north_america") == "Storm"


def test_empty_value_resets_to_all():
    store = SelectionStore()
    store.set("asia", "Flood")
    store.set("asia", "")
    assert store.get("asia") == "all"
