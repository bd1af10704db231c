"""Origin policy tests."""

from pointsync.realtime.origin import OriginPolicy


def test_wildcard_accepts_everything():
    policy = OriginPolicy(["*"])
    assert policy("https://anywhere.example")
    assert policy(None)
    assert repr(policy) == "OriginPolicy(*)"


def test_allow_list_is_exact_after_normalizing():
    policy = OriginPolicy(["https://Points.Example.com/"])

    assert policy("https://points.example.com")
    assert policy("HTTPS://POINTS.EXAMPLE.COM/")
    assert not policy("https://points.example.com.evil.net")
    assert not policy("http://points.example.com")


def test_missing_origin_is_a_non_browser_client():
    assert OriginPolicy(["https://points.example.com"])(None)


def test_empty_allow_list_rejects_browsers():
    policy = OriginPolicy([])
    assert not policy("https://points.example.com")
    assert policy(None)
