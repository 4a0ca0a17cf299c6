from landing_resolver.cookies import CookieStore


def test_cookies_returned_for_matching_host():
    store = CookieStore()
    store.absorb("https://a.example/login", ["sid=abc; Path=/"])
    assert store.cookies_for("https://a.example/next") == [("sid", "abc")]
    assert store.cookies_for("https://other.example/") == []


def test_host_only_cookie_not_sent_to_subdomain():
    store = CookieStore()
    store.absorb("https://a.example/", ["host=1; Path=/", "wide=2; Domain=a.example; Path=/"])
    assert store.cookies_for("https://sub.a.example/") == [("wide", "2")]
    assert sorted(store.cookies_for("https://a.example/")) == [("host", "1"), ("wide", "2")]


def test_path_must_match():
    store = CookieStore()
    store.absorb("https://a.example/account/login", ["p=1; Path=/account"])
    assert store.cookies_for("https://a.example/account/settings") == [("p", "1")]
    assert store.cookies_for("https://a.example/other") == []


def test_secure_cookie_withheld_over_http():
    store = CookieStore()
    store.absorb("https://a.example/", ["s=1; Path=/; Secure"])
    assert store.cookies_for("http://a.example/") == []
    assert store.cookies_for("https://a.example/") == [("s", "1")]


def test_expired_cookie_not_returned():
    store = CookieStore()
    store.absorb("https://a.example/", ["old=1; Path=/; Expires=Thu, 01 Jan 1970 00:00:00 GMT"])
    assert store.cookies_for("https://a.example/") == []
    assert len(store) == 0


def test_stores_are_independent():
    first = CookieStore()
    second = CookieStore()
    first.absorb("https://a.example/", ["sid=abc; Path=/"])
    assert second.cookies_for("https://a.example/") == []
