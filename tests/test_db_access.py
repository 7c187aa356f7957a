from vibefid_server.card_utils.card import FidCard


def make_card(fid, **overrides):
    data = dict(
        fid=fid, username=f"user{fid}", display_name=f"User {fid}", rarity="Rare",
        foil="Prize", wear="Pristine", power=540, suit="hearts", rank="7",
        neynar_score=0.75, address="0xabc",
    )
    data.update(overrides)
    return FidCard(**data)


def test_create_and_fetch_card(db):
    assert db.create_card_entry(make_card(42, power_badge=True))
    row = db.get_card_by_fid(42)
    assert row["username"] == "user42"
    assert row["power_badge"] == 1
    assert row["minted_at"]


def test_duplicate_fid_is_rejected(db):
    assert db.create_card_entry(make_card(7))
    assert not db.create_card_entry(make_card(7, username="someone_else"))
    assert db.get_card_by_fid(7)["username"] == "user7"


def test_missing_card_is_none(db):
    assert db.get_card_by_fid(999) is None


def test_list_and_count_cards(db):
    for fid in (1, 2, 3):
        db.create_card_entry(make_card(fid))
    assert db.count_cards() == 3
    listed = db.list_cards(limit=2)
    assert [c["fid"] for c in listed] == [3, 2]
    assert [c["fid"] for c in db.list_cards(limit=2, offset=2)] == [1]


def test_init_db_is_idempotent(db):
    db.create_card_entry(make_card(5))
    db.init_db()
    assert db.count_cards() == 1


def test_expired_rate_limit_rows_are_purged(db):
    assert db.hit_rate_limit("mint:a", 1000, now_ms=0) == 0
    assert db.hit_rate_limit("mint:b", 1000, now_ms=500) == 0
    assert db.hit_rate_limit("mint:b", 1000, now_ms=1200) == 300

    conn = db.get_db_connection()
    keys = [r["key"] for r in conn.execute("SELECT key FROM RateLimits")]
    conn.close()
    assert keys == ["mint:b"]
