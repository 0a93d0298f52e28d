"""Home content route tests — singleton upsert, slide population, localization."""

import uuid

HOME = "/api/v1/home-content"


def varies_on_language(resp):
    return "accept-language" in {
        value.strip().lower() for value in resp.headers.get("vary", "").split(",")
    }


def _home(**overrides):
    body = {
        "heroTitle_i18n": {"vi": "Chào buổi sáng", "en": "Good morning"},
        "heroSubtitle_i18n": {"en": "Freshly roasted"},
        "signatureSection": {
            "title_i18n": {"vi": "Đặc trưng", "en": "Signature"},
            "backgroundImage": {"url": "https://cdn.example/bg.jpg"},
        },
        "counters": [{"label_i18n": {"en": "Stores"}, "value": "12"}],
    }
    body.update(overrides)
    return body


async def test_get_before_upsert_returns_404(client):
    resp = await client.get(HOME)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


async def test_upsert_then_get_returns_bundles(client):
    resp = await client.put(HOME, json=_home())
    assert resp.status_code == 200
    data = resp.json()
    assert data["pageKey"] == "home"
    assert data["heroTitle_i18n"]["en"] == "Good morning"
    assert data["signatureSection"]["backgroundImage"]["url"] == "https://cdn.example/bg.jpg"

    again = await client.get(HOME)
    assert again.json()["counters"] == [{"label_i18n": {"en": "Stores"}, "value": "12"}]


async def test_second_upsert_updates_single_document(client):
    first = (await client.put(HOME, json=_home())).json()
    second = (await client.put(HOME, json=_home(
        heroTitle_i18n={"en": "Good evening"},
    ))).json()
    assert second["id"] == first["id"]
    assert second["heroTitle_i18n"] == {"en": "Good evening"}
    assert second["heroSubtitle_i18n"] == {"en": "Freshly roasted"}


async def test_get_localizes_hero_fields(client):
    await client.put(HOME, json=_home())
    resp = await client.get(HOME, headers={"Accept-Language": "vi"})
    assert varies_on_language(resp)
    data = resp.json()
    assert data["heroTitle"] == "Chào buổi sáng"
    assert data["heroSubtitle"] == "Freshly roasted"
    assert "heroTitle_i18n" not in data


async def test_slides_populated_with_product_summary(client):
    product = (await client.post("/api/v1/products", json={
        "name_i18n": {"en": "Cold Brew Tonic"},
        "price": 65000,
        "category": "cold brew",
    })).json()

    await client.put(HOME, json=_home(heroSlides=[
        {"product": product["id"], "order": 1},
        {"product": str(uuid.uuid4()), "order": 2},
        {"title_i18n": {"en": "No product"}, "order": 3},
    ]))

    slides = (await client.get(HOME)).json()["heroSlides"]
    assert slides[0]["product"]["slug"] == "cold-brew-tonic"
    assert slides[0]["isActive"] is True
    assert slides[1]["product"] is None
    assert slides[2]["product"] is None


async def test_upsert_requires_hero_title(client):
    body = _home()
    body.pop("heroTitle_i18n")
    resp = await client.put(HOME, json=body)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_upsert_rejects_blank_signature_title(client):
    resp = await client.put(HOME, json=_home(signatureSection={"title_i18n": {"vi": " "}}))
    assert resp.status_code == 400


async def test_delete_home_content(client):
    await client.put(HOME, json=_home())
    resp = await client.delete(HOME)
    assert resp.json() == {"message": "Home content deleted"}
    assert (await client.get(HOME)).status_code == 404
