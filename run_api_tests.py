import json
import urllib.error
import urllib.parse
import urllib.request

BASE = "http://localhost:8000/api/v1"


def _send(req):
    try:
        with urllib.request.urlopen(req) as r:
            return json.loads(r.read())
    except urllib.error.HTTPError as e:
        return json.loads(e.read())


def _url(path, params=None):
    url = f"{BASE}{urllib.parse.quote(path)}"
    if params:
        url += "?" + urllib.parse.urlencode(params)
    return url


def send(method, path, body=None):
    data = json.dumps(body).encode() if body is not None else None
    req = urllib.request.Request(
        _url(path),
        data=data,
        method=method,
        headers={"Content-Type": "application/json"},
    )
    return _send(req)


def get(path, params=None):
    return _send(urllib.request.Request(_url(path, params)))


def section(title):
    print(f"\n{'='*60}")
    print(f"### {title} ###")
    print('='*60)


def label(name):
    print(f"\n--- {name} ---")


def out(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


# ── P1 Price list ──────────────────────────────────────────────
section("P1 — PRICE LIST")

label("P1-1: Storage tier reachability")
out(get("/pricing/storage/status"))

label("P1-2: Sizes")
out(get("/pricing/sizes"))

label("P1-3: Zones")
out(get("/pricing/zones"))

label("P1-4: Resolve 5x13 / مصراتة / A / 3 months (expect 3325)")
out(get("/pricing/resolve", {"size": "5x13", "zone": "مصراتة", "tier": "A", "duration": 3}))

label("P1-5: Resolve with طرابلس multiplier")
out(get("/pricing/resolve", {"size": "3x6", "zone": "مصراتة", "duration": 1, "city": "طرابلس"}))

# ── P2 Size edits ──────────────────────────────────────────────
section("P2 — SIZE EDITS")

label("P2-1: Add 7x15 at 1000")
out(send("POST", "/pricing/sizes", {"size": "7x15", "reference_price": 1000}))

label("P2-2: Add 7x15 again (expect 6002)")
out(send("POST", "/pricing/sizes", {"size": "7x15", "reference_price": 1000}))

label("P2-3: Add malformed size (expect 6001)")
out(send("POST", "/pricing/sizes", {"size": "big", "reference_price": 1000}))

label("P2-4: Remove 7x15")
out(send("DELETE", "/pricing/sizes/7x15"))

# ── P3 Multipliers ─────────────────────────────────────────────
section("P3 — MULTIPLIERS")

label("P3-1: List")
out(get("/multipliers"))

label("P3-2: Summary")
out(get("/multipliers/summary"))

label("P3-3: Set multiplier 0 (expect 6005)")
out(send("PUT", "/multipliers/طرابلس", {"multiplier": 0}))

label("P3-4: Pricing matrix overview")
out(get("/multipliers/matrix/overview"))

# ── P4 Quotes ──────────────────────────────────────────────────
section("P4 — QUOTES")

label("P4-1: Rental quote, 6 months")
out(send("POST", "/pricing/quotes", {
    "customer": {"name": "Smoke Test"},
    "billboards": [
        {"id": "BB-1", "name": "Coastal", "size": "5x13", "municipality": "مصراتة"},
        {"id": "BB-2", "name": "Airport", "size": "4x12", "municipality": "طرابلس", "price_category": "B"},
    ],
    "package_months": 6,
}))

label("P4-2: Installation quote with 10% discount")
out(send("POST", "/installation/quotes", {
    "customer": "Smoke Test",
    "items": [{"size": "3x4", "zone": "مصراتة", "quantity": 2}],
    "discount_percent": 10,
}))

label("P4-3: Installation statistics")
out(get("/installation/statistics"))

print("\n\n=== ALL TESTS COMPLETE ===\n")
